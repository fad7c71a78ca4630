from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import os
import sys
from collections import Counter

from dotenv import load_dotenv

from .blocking import LearnHelper as BlockingLearnHelper
from .client import LearnHelper
from .models import Course, Discussion, File, Homework, Notification
from .utils.file_utils import build_course_directory
from .utils.http_client import AuthenticationError, LearnError
from .utils.manifest import DownloadManifest

load_dotenv()


def _env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def _env_int(name: str) -> int | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _env_float(name: str) -> float | None:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _env_bool(name: str) -> bool:
    value = _env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List courses, notifications, files and homework on web-learning.")
    parser.add_argument("--username", default=_env_str("THU_USERNAME"), help="Login account (prompted when missing)")
    parser.add_argument("--password", default=_env_str("THU_PASSWORD"), help="Password (prompted when missing)")
    parser.add_argument("--semester", default=_env_str("SEMESTER"), help="Semester id such as 2019-2020-1 (default: current)")
    parser.add_argument("--list-semesters", action="store_true", help="List semester ids and exit")
    parser.add_argument(
        "--course-filter",
        default=_env_str("COURSE_FILTER"),
        help="Only show courses whose id, name or english name contains this keyword",
    )
    parser.add_argument("--notifications", action="store_true", help="List the notifications of every course")
    parser.add_argument("--files", action="store_true", help="List the files of every course")
    parser.add_argument("--homework", action="store_true", help="List the homework of every course")
    parser.add_argument("--discussions", action="store_true", help="List the discussion threads of every course")
    parser.add_argument("--questions", action="store_true", help="List the Q&A threads of every course")
    parser.add_argument(
        "--download",
        action="store_true",
        default=_env_bool("DOWNLOAD"),
        help="Download the files of every listed course",
    )
    parser.add_argument("--output-dir", default=_env_str("OUTPUT_DIR") or "downloads", help="Directory to store downloaded files")
    parser.add_argument("--timeout", type=float, default=_env_float("LEARN_TIMEOUT") or 10, help="Per-request timeout in seconds")
    env_retries = _env_int("LEARN_RETRIES")
    parser.add_argument(
        "--retries",
        type=int,
        default=2 if env_retries is None else env_retries,
        help="Retries for failed GET requests",
    )
    parser.add_argument("--blocking", action="store_true", help="Use the blocking API (courses only)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def resolve_credentials(args: argparse.Namespace) -> tuple[str, str]:
    username = args.username or input("Username: ").strip()
    password = args.password or getpass.getpass("Password: ").strip()
    return username, password


def filter_courses(courses: list[Course], keyword: str | None) -> list[Course]:
    if not keyword:
        return courses
    lowered = keyword.lower()
    filtered = [
        course
        for course in courses
        if lowered in course.id.lower() or lowered in course.name.lower() or lowered in course.english_name.lower()
    ]
    if not filtered:
        logging.warning("Course filter %r removed all courses.", keyword)
    return filtered


def print_semesters(semesters: list[str]) -> None:
    if not semesters:
        logging.info("No semesters available for this account.")
        return
    for index, semester in enumerate(semesters):
        logging.info("%s%s", semester, "  (current)" if index == 0 else "")


def print_courses(semester: str, courses: list[Course]) -> None:
    if not courses:
        logging.info("No courses in semester %s.", semester)
        return
    logging.info("Courses of %s", semester)
    logging.info("%-12s | %-3s | %-12s | %s", "Number", "Idx", "Teacher", "Name / Time & location")
    logging.info("%s", "-" * 80)
    for course in courses:
        logging.info(
            "%-12s | %-3s | %-12s | %s (%s)",
            course.course_number,
            course.course_index,
            course.teacher_name,
            course.name,
            course.english_name,
        )
        for time_location in course.time_location:
            logging.info("%-12s | %-3s | %-12s |   %s", "", "", "", time_location)


def print_notifications(notifications: list[Notification]) -> None:
    if not notifications:
        logging.info("    (no notifications)")
        return
    for item in notifications:
        flags = "".join(flag for flag, on in (("!", item.important), ("*", not item.read)) if on)
        logging.info("    %-2s %s  %s  [%s]", flags, item.publish_time.strftime("%Y-%m-%d %H:%M"), item.title, item.publisher)
        if item.attachment_name:
            logging.info("         attachment: %s %s", item.attachment_name, item.attachment_url or "")


def print_files(files: list[File]) -> None:
    if not files:
        logging.info("    (no files)")
        return
    for item in files:
        logging.info("    %s  %-8s %s", item.upload_time.strftime("%Y-%m-%d %H:%M"), item.size, item.filename)


def print_homework(homeworks: list[Homework]) -> None:
    if not homeworks:
        logging.info("    (no homework)")
        return
    for item in homeworks:
        if item.graded:
            status = f"graded {item.grade if item.grade is not None else '-'}"
        elif item.submitted:
            status = "submitted"
        else:
            status = "open"
        logging.info("    due %s  %-12s %s", item.deadline.strftime("%Y-%m-%d %H:%M"), status, item.title)


def print_threads(threads: list[Discussion]) -> None:
    if not threads:
        logging.info("    (no threads)")
        return
    for item in threads:
        logging.info(
            "    %s  %s  [%s, %s replies]",
            item.publish_time.strftime("%Y-%m-%d %H:%M"),
            item.title,
            item.publisher_name,
            item.reply_count,
        )


async def download_course_files(
    helper: LearnHelper,
    semester: str,
    course: Course,
    files: list[File],
    output_dir: str,
) -> None:
    course_dir = build_course_directory(output_dir, semester, course.name)
    manifest = DownloadManifest.for_directory(course_dir)
    name_counts = Counter(item.filename.lower() for item in files)
    for item in files:
        if manifest.is_downloaded(item.id):
            logging.info("Skipping %s (already downloaded)", item.filename)
            continue
        logging.info("Downloading %s ...", item.filename)
        try:
            filename = item.filename_with_id if name_counts[item.filename.lower()] > 1 else item.filename
            path = await helper.download_file(item, course_dir, filename)
        except AuthenticationError:
            raise
        except LearnError as exc:
            logging.error("File %s failed: %s", item.filename, exc)
            continue
        manifest.mark_downloaded(item.id, path)


async def show_course_details(helper: LearnHelper, args: argparse.Namespace, semester: str, course: Course) -> None:
    logging.info("== %s (%s)", course.name, course.id)
    if args.notifications:
        logging.info("  Notifications:")
        print_notifications(await helper.notification_list(course.id))
    if args.files or args.download:
        files = await helper.file_list(course.id)
        if args.files:
            logging.info("  Files:")
            print_files(files)
        if args.download:
            await download_course_files(helper, semester, course, files, args.output_dir)
    if args.homework:
        logging.info("  Homework:")
        print_homework(await helper.homework_list(course.id))
    if args.discussions:
        logging.info("  Discussions:")
        print_threads(await helper.discussion_list(course.id))
    if args.questions:
        logging.info("  Questions:")
        print_threads(await helper.question_list(course.id))


async def list_portal(helper: LearnHelper, args: argparse.Namespace) -> int:
    semesters = await helper.semester_id_list()
    if args.list_semesters:
        print_semesters(semesters)
        return 0

    semester = args.semester or (semesters[0] if semesters else None)
    if not semester:
        logging.error("No semester available; pass --semester explicitly.")
        return 1

    courses = filter_courses(await helper.course_list(semester), args.course_filter)
    print_courses(semester, courses)

    wants_details = args.notifications or args.files or args.homework or args.discussions or args.questions
    if wants_details or args.download:
        for course in courses:
            await show_course_details(helper, args, semester, course)
    return 0


async def run(args: argparse.Namespace, username: str, password: str) -> int:
    helper = await LearnHelper.login(username, password, timeout=args.timeout, max_retries=args.retries)
    try:
        status = await list_portal(helper, args)
    except BaseException:
        # keep the original error when logout fails too
        try:
            await helper.logout()
        except LearnError as exc:
            logging.error("Logout failed: %s", exc)
        raise
    await helper.logout()
    return status


def list_courses_blocking(helper: BlockingLearnHelper, args: argparse.Namespace) -> int:
    semesters = helper.semester_id_list()
    if args.list_semesters:
        print_semesters(semesters)
        return 0
    semester = args.semester or (semesters[0] if semesters else None)
    if not semester:
        logging.error("No semester available; pass --semester explicitly.")
        return 1
    print_courses(semester, filter_courses(helper.course_list(semester), args.course_filter))
    return 0


def run_blocking(args: argparse.Namespace, username: str, password: str) -> int:
    helper = BlockingLearnHelper.login(username, password, timeout=args.timeout, max_retries=args.retries)
    try:
        status = list_courses_blocking(helper, args)
    except BaseException:
        try:
            helper.logout()
        except LearnError as exc:
            logging.error("Logout failed: %s", exc)
        raise
    helper.logout()
    return status


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    username, password = resolve_credentials(args)
    if not username or not password:
        logging.error("Both username and password are required.")
        return 2

    try:
        if args.blocking:
            return run_blocking(args, username, password)
        return asyncio.run(run(args, username, password))
    except AuthenticationError as exc:
        logging.error("Authentication failed: %s", exc)
        return 2
    except LearnError as exc:
        logging.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
