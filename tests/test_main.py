import asyncio
import json
import logging

import pytest

import thu_learn_helper.client as client_module
from thu_learn_helper import main as cli
from thu_learn_helper.models import Course
from thu_learn_helper.utils import urls
from thu_learn_helper.utils.http_client import NetworkError
from thu_learn_helper.utils.manifest import MANIFEST_NAME, DownloadManifest

from tests.conftest import COURSE_ID, SEMESTER_ID, course_payload, file_payload


@pytest.fixture
def patched_client(monkeypatch, fake_client):
    monkeypatch.setattr(client_module, "HttpClient", lambda **options: fake_client)
    return fake_client


def test_filter_courses_matches_id_and_names():
    courses = [
        Course.model_validate(course_payload()),
        Course.model_validate(course_payload("2019-2020-1152", name="数据库")),
    ]

    assert [course.id for course in cli.filter_courses(courses, "1151")] == [COURSE_ID]
    assert [course.id for course in cli.filter_courses(courses, "数据库")] == ["2019-2020-1152"]
    assert cli.filter_courses(courses, None) == courses
    assert cli.filter_courses(courses, "physics") == []


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("LEARN_RETRIES", "5")
    monkeypatch.setenv("LEARN_TIMEOUT", "not-a-number")
    monkeypatch.setenv("DOWNLOAD", "Yes")
    monkeypatch.setenv("SEMESTER", "")

    assert cli._env_int("LEARN_RETRIES") == 5
    assert cli._env_int("LEARN_TIMEOUT") is None
    assert cli._env_bool("DOWNLOAD") is True
    assert cli._env_str("SEMESTER") is None


def test_parse_args_uses_environment(monkeypatch):
    monkeypatch.setenv("THU_USERNAME", "2017000000")
    monkeypatch.setenv("LEARN_RETRIES", "0")

    args = cli.parse_args(["--semester", SEMESTER_ID])

    assert args.username == "2017000000"
    assert args.retries == 0
    assert args.semester == SEMESTER_ID
    assert args.output_dir == "downloads"


def test_manifest_remembers_downloads(tmp_path):
    saved = tmp_path / "a.pdf"
    saved.write_bytes(b"pdf")

    manifest = DownloadManifest.for_directory(str(tmp_path))
    manifest.mark_downloaded("f1", str(saved))
    reloaded = DownloadManifest.for_directory(str(tmp_path))

    assert reloaded.is_downloaded("f1")
    assert not reloaded.is_downloaded("f2")
    saved.unlink()
    assert not reloaded.is_downloaded("f1")


def test_manifest_ignores_corrupt_file(tmp_path, caplog):
    (tmp_path / MANIFEST_NAME).write_text("{not json", encoding="utf-8")

    manifest = DownloadManifest.for_directory(str(tmp_path))

    assert not manifest.is_downloaded("f1")
    assert "Ignoring unreadable manifest" in caplog.text


def test_run_downloads_once(patched_client, tmp_path, caplog):
    caplog.set_level(logging.INFO)
    args = cli.parse_args(
        ["--username", "u", "--password", "p", "--files", "--homework", "--download", "--output-dir", str(tmp_path)]
    )

    assert asyncio.run(cli.run(args, "u", "p")) == 0
    assert asyncio.run(cli.run(args, "u", "p")) == 0

    course_dir = tmp_path / SEMESTER_ID / "编译原理"
    assert (course_dir / "Lecture 1.pdf").read_bytes() == b"file-content"
    assert len(patched_client.downloads) == 1
    manifest = json.loads((course_dir / MANIFEST_NAME).read_text(encoding="utf-8"))
    assert manifest["files"] == {"f1": str(course_dir / "Lecture 1.pdf")}
    assert "Skipping Lecture 1.pdf (already downloaded)" in caplog.text
    assert "graded 95" in caplog.text
    assert patched_client.posts[-1][0] == urls.LOGOUT


def test_main_lists_semesters(patched_client, caplog):
    caplog.set_level(logging.INFO)

    assert cli.main(["--username", "u", "--password", "p", "--list-semesters"]) == 0
    assert "2019-2020-1  (current)" in caplog.text
    assert "2018-2019-3" in caplog.text


def test_main_blocking_lists_courses(patched_client, caplog):
    caplog.set_level(logging.INFO)

    assert cli.main(["--username", "u", "--password", "p", "--blocking"]) == 0
    assert "Courses of 2019-2020-1" in caplog.text
    assert patched_client.closed


def test_main_reports_failed_login(patched_client):
    patched_client.post_routes[urls.LOGIN] = "wrong password"

    assert cli.main(["--username", "u", "--password", "p"]) == 2


def test_main_reports_portal_errors(patched_client):
    del patched_client.json_routes[urls.course_list(SEMESTER_ID)]

    assert cli.main(["--username", "u", "--password", "p"]) == 1
    assert patched_client.posts[-1][0] == urls.LOGOUT


def test_parse_args_reads_fractional_timeout(monkeypatch):
    monkeypatch.setenv("LEARN_TIMEOUT", "2.5")

    assert cli.parse_args([]).timeout == 2.5


def test_run_keeps_files_sharing_a_title(patched_client, tmp_path):
    patched_client.json_routes[urls.file_list(COURSE_ID)] = {
        "object": [file_payload("f1", title="Slides"), file_payload("f2", title="Slides"), file_payload("f3")]
    }
    args = cli.parse_args(["--username", "u", "--password", "p", "--download", "--output-dir", str(tmp_path)])

    assert asyncio.run(cli.run(args, "u", "p")) == 0

    course_dir = tmp_path / SEMESTER_ID / "编译原理"
    saved = sorted(path.name for path in course_dir.iterdir() if path.name != MANIFEST_NAME)
    assert saved == ["Lecture 1.pdf", "Slides (f1).pdf", "Slides (f2).pdf"]
    manifest = json.loads((course_dir / MANIFEST_NAME).read_text(encoding="utf-8"))
    assert len(set(manifest["files"].values())) == 3


def test_failed_logout_keeps_the_original_error(patched_client, caplog):
    del patched_client.json_routes[urls.course_list(SEMESTER_ID)]
    patched_client.post_routes[urls.LOGOUT] = NetworkError("logout connection reset")
    args = cli.parse_args(["--username", "u", "--password", "p"])

    with pytest.raises(NetworkError, match="404"):
        asyncio.run(cli.run(args, "u", "p"))
    assert "Logout failed: logout connection reset" in caplog.text
    assert patched_client.closed


def test_failed_blocking_logout_keeps_the_original_error(patched_client, caplog):
    del patched_client.json_routes[urls.course_list(SEMESTER_ID)]
    patched_client.post_routes[urls.LOGOUT] = NetworkError("logout connection reset")
    args = cli.parse_args(["--username", "u", "--password", "p", "--blocking"])

    with pytest.raises(NetworkError, match="404"):
        cli.run_blocking(args, "u", "p")
    assert "Logout failed: logout connection reset" in caplog.text
