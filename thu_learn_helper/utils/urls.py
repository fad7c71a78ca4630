"""Endpoint table for the web-learning portal."""

from __future__ import annotations

from typing import Callable, List

PREFIX = "https://learn.tsinghua.edu.cn"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

LOGIN = "https://id.tsinghua.edu.cn/do/off/ui/auth/login/post/bb5df85216504820be7bba2b0ae1535b/0?/login.do"
LOGOUT = f"{PREFIX}/f/j_spring_security_logout"

SEMESTER_LIST = f"{PREFIX}/b/wlxt/kc/v_wlkc_xs_xktjb_coassb/queryxnxq"

HOMEWORK_SUBMIT = f"{PREFIX}/b/wlxt/kczy/zy/student/tjzy"
REPLY_DISCUSSION = f"{PREFIX}/b/wlxt/bbs/bbs_kcdy/student/saveHf"


def auth_roam(ticket: str) -> str:
    return f"{PREFIX}/b/j_spring_security_thauth_roaming_entry?ticket={ticket}"


def course_list(semester: str) -> str:
    return f"{PREFIX}/b/wlxt/kc/v_wlkc_xs_xkb_kcb_extend/student/loadCourseBySemesterId/{semester}"


def course_time_location(course: str) -> str:
    return f"{PREFIX}/b/kc/v_wlkc_xk_sjddb/detail?id={course}"


def course_page(course: str) -> str:
    return f"{PREFIX}/f/wlxt/index/course/student/course?wlkcid={course}"


def notification_list(course: str) -> str:
    return f"{PREFIX}/b/wlxt/kcgg/wlkc_ggb/student/kcggListXs?wlkcid={course}&size=1000"


def notification_detail(notification: str, course: str) -> str:
    return f"{PREFIX}/f/wlxt/kcgg/wlkc_ggb/student/beforeViewXs?wlkcid={course}&id={notification}"


def file_list(course: str) -> str:
    return f"{PREFIX}/b/wlxt/kj/wlkc_kjxxb/student/kjxxbByWlkcidAndSizeForStudent?wlkcid={course}&size=0"


def file_download(file: str) -> str:
    return f"{PREFIX}/b/wlxt/kj/wlkc_kjxxb/student/downloadFile?sfgk=0&wjid={file}"


def homework_list_new(course: str) -> str:
    return f"{PREFIX}/b/wlxt/kczy/zy/student/index/zyListWj?wlkcid={course}&size=1000"


def homework_list_submitted(course: str) -> str:
    return f"{PREFIX}/b/wlxt/kczy/zy/student/index/zyListYjwg?wlkcid={course}&size=1000"


def homework_list_graded(course: str) -> str:
    return f"{PREFIX}/b/wlxt/kczy/zy/student/index/zyListYpg?wlkcid={course}&size=1000"


# not submitted, submitted, graded
HOMEWORK_LISTS: List[Callable[[str], str]] = [
    homework_list_new,
    homework_list_submitted,
    homework_list_graded,
]


def homework_detail(course: str, homework: str, student_homework: str) -> str:
    return (
        f"{PREFIX}/f/wlxt/kczy/zy/student/viewCj?wlkcid={course}"
        f"&zyid={homework}&xszyid={student_homework}"
    )


def homework_submit_page(course: str, student_homework: str) -> str:
    return f"{PREFIX}/f/wlxt/kczy/zy/student/tijiao?wlkcid={course}&xszyid={student_homework}"


def discussion_list(course: str) -> str:
    return f"{PREFIX}/b/wlxt/bbs/bbs_tltb/student/kctlList?wlkcid={course}&size=1000"


def discussion_page(course: str, discussion: str, board: str) -> str:
    return f"{PREFIX}/f/wlxt/bbs/bbs_tltb/student/viewTlById?wlkcid={course}&id={discussion}&tabbh=2&bqid={board}"


def question_list(course: str) -> str:
    return f"{PREFIX}/b/wlxt/bbs/bbs_tltb/student/kcdyList?wlkcid={course}&size=1000"


def delete_discussion_reply(course: str, reply: str) -> str:
    return f"{PREFIX}/b/wlxt/bbs/bbs_kcdy/student/delHfById?wlkcid={course}&id={reply}"
