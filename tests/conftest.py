import asyncio
import base64
import copy

import pytest

from thu_learn_helper.utils import urls
from thu_learn_helper.utils.http_client import NetworkError

COURSE_ID = "2019-2020-1151"
SEMESTER_ID = "2019-2020-1"

LOGIN_PAGE = (
    '<script type="text/javascript">window.location.replace('
    '"https://learn.tsinghua.edu.cn/b/j_spring_security_thauth_roaming_entry?ticket=ST-42-abcdef");</script>'
)

HOMEWORK_DETAIL_HTML = """
<div class="list calendar clearfix">
  <div class="fl">作业说明</div>
  <div class="fl right"><div class="c55"><p>Write a <b>parser</b>.</p></div></div>
</div>
<div class="list fujian clearfix">
  <div class="fl">作业附件</div>
  <div class="fl right">
    <span class="ftitle"><img src="/res/pdf.png"/><a href="/f/wlxt/kj/preview?downloadUrl=/b/wlxt/kczy/zy/student/downloadFile/abc">handout.pdf</a></span>
  </div>
</div>
<div class="list fujian clearfix">
  <div class="fl">答案附件</div>
  <div class="fl right"></div>
</div>
<div class="list fujian clearfix">
  <div class="fl">提交附件</div>
  <div class="fl right">
    <span class="ftitle"><a href="/f/wlxt/kj/preview?downloadUrl=/b/wlxt/kczy/zy/student/downloadFile/mine">mine.zip</a></span>
  </div>
</div>
<div class="list fujian clearfix">
  <div class="fl">批阅附件</div>
  <div class="fl right"></div>
</div>
"""

NOTIFICATION_DETAIL_HTML = """
<div class="list">
  <span>附件：</span>
  <a href="/b/wlxt/kcgg/wlkc_ggb/student/downloadFile?id=attach1" class="ml-10">slides.pdf</a>
</div>
"""


def b64(text):
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def course_payload(course_id=COURSE_ID, name="编译原理"):
    return {
        "wlkcid": course_id,
        "kcm": name,
        "ywkcm": "Principles and Practice of Compiler Construction",
        "jsm": "王老师",
        "jsh": "2001990001",
        "kch": "40240422",
        "kxh": 0,
    }


def notification_payload(notification_id="n1", attachment=None, read="是", important="1"):
    return {
        "wlkcid": COURSE_ID,
        "ggid": notification_id,
        "bt": "Midterm",
        "ggnr": b64("<p>Exam on Friday</p>"),
        "sfyd": read,
        "sfqd": important,
        "fbsjStr": "2019-10-01 08:00",
        "fbrxm": "王老师",
        "fjmc": attachment,
    }


def file_payload(file_id="f1", title="Lecture 1", file_type="pdf"):
    return {
        "wjid": file_id,
        "bt": title,
        "ms": None,
        "wjdx": 2048,
        "fileSize": "2K",
        "scsj": "2019-09-10 10:00",
        "isNew": 1,
        "sfqd": 0,
        "llcs": 10,
        "xzcs": 5,
        "wjlx": file_type,
    }


def homework_payload(homework_id="h1", student_homework_id="s1", **overrides):
    payload = {
        "wlkcid": COURSE_ID,
        "zyid": homework_id,
        "xszyid": student_homework_id,
        "bt": f"Homework {homework_id}",
        "kssjStr": "2019-09-01 00:00",
        "jzsjStr": "2019-09-08 23:59",
        "scsjStr": "",
        "zynrStr": None,
        "cj": None,
        "pysjStr": None,
        "jsm": "",
        "pynr": None,
    }
    payload.update(overrides)
    return payload


def discussion_payload(discussion_id="d1", **overrides):
    payload = {
        "id": discussion_id,
        "wlkcid": COURSE_ID,
        "bqid": "board1",
        "bt": "About lab 1",
        "fbrxm": "Alice",
        "fbsj": "2019-09-02 10:00:00",
        "zhhfrxm": "",
        "zhhfsj": None,
        "djs": 3,
        "hfcs": 0,
    }
    payload.update(overrides)
    return payload


class FakeHttpClient:
    """In-memory stand-in for HttpClient, keyed by URL."""

    def __init__(self, json_routes=None, text_routes=None, post_routes=None):
        self.json_routes = dict(json_routes or {})
        self.text_routes = dict(text_routes or {})
        self.post_routes = dict(post_routes or {})
        self.requests = []
        self.posts = []
        self.downloads = []
        self.closed = False
        self.timeout = 10
        self.user_agent = "test-agent"

    async def _lookup(self, routes, url):
        await asyncio.sleep(0)
        self.requests.append(url)
        if url not in routes:
            raise NetworkError(f"unexpected status 404 from {url}")
        value = routes[url]
        if isinstance(value, Exception):
            raise value
        return copy.deepcopy(value)

    async def get_json(self, url):
        return await self._lookup(self.json_routes, url)

    async def get_text(self, url):
        return await self._lookup(self.text_routes, url)

    async def post(self, url, timeout=None):
        self.posts.append((url, None, None, timeout))
        return await self._lookup(self.post_routes, url)

    async def post_form(self, url, data):
        self.posts.append((url, data, None, None))
        return await self._lookup(self.post_routes, url)

    async def post_multipart(self, url, fields, files=None, timeout=None):
        self.posts.append((url, fields, files, timeout))
        return await self._lookup(self.post_routes, url)

    async def download(self, url, dest_path):
        self.downloads.append((url, dest_path))
        with open(dest_path, "wb") as handle:
            handle.write(b"file-content")

    def cookies(self):
        return [{"name": "JSESSIONID", "value": "abc", "domain": "learn.tsinghua.edu.cn", "path": "/"}]

    async def close(self):
        self.closed = True


def portal_routes():
    """Routes of a small but complete portal: one semester with one course."""

    homework_lists = [
        {"object": {"aaData": [homework_payload("h1", "s1")]}},
        {"object": {"aaData": [homework_payload("h2", "s2", scsjStr="2019-09-07 12:00", zynrStr="done")]}},
        {
            "object": {
                "aaData": [
                    homework_payload(
                        "h3",
                        "s3",
                        scsjStr="2019-09-05 12:00",
                        cj=95,
                        pysjStr="2019-09-10 09:00",
                        jsm="助教",
                        pynr="Good",
                    )
                ]
            }
        },
    ]
    json_routes = {
        urls.SEMESTER_LIST: [SEMESTER_ID, None, "2018-2019-3"],
        urls.course_list(SEMESTER_ID): {"resultList": [course_payload()]},
        urls.course_time_location(COURSE_ID): ["第1-16周 星期一 第2节 六教6A017"],
        urls.notification_list(COURSE_ID): {
            "object": {"aaData": [notification_payload("n1", attachment="slides.pdf"), notification_payload("n2")]}
        },
        urls.file_list(COURSE_ID): {"object": [file_payload()]},
        urls.discussion_list(COURSE_ID): {"object": {"resultsList": [discussion_payload()]}},
        urls.question_list(COURSE_ID): {"object": {"resultsList": [discussion_payload("q1", bt="Deadline?")]}},
    }
    for build, payload in zip(urls.HOMEWORK_LISTS, homework_lists):
        json_routes[build(COURSE_ID)] = payload

    text_routes = {urls.notification_detail("n1", COURSE_ID): NOTIFICATION_DETAIL_HTML}
    for homework_id, student_homework_id in (("h1", "s1"), ("h2", "s2"), ("h3", "s3")):
        text_routes[urls.homework_detail(COURSE_ID, homework_id, student_homework_id)] = HOMEWORK_DETAIL_HTML

    post_routes = {
        urls.LOGIN: LOGIN_PAGE,
        urls.auth_roam("ST-42-abcdef"): "",
        urls.LOGOUT: "",
        urls.HOMEWORK_SUBMIT: {"result": "success", "msg": "ok"},
        urls.REPLY_DISCUSSION: {"result": "success", "msg": "ok"},
        urls.delete_discussion_reply(COURSE_ID, "r1"): '{"result": "success"}',
    }
    return json_routes, text_routes, post_routes


@pytest.fixture
def fake_client():
    json_routes, text_routes, post_routes = portal_routes()
    return FakeHttpClient(json_routes, text_routes, post_routes)
