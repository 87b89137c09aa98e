"""Shared fixtures: sample API payloads and an inline executor."""

import copy
from concurrent.futures import Executor, Future

import pytest

from vidscroll.core import SearchResultPage
from vidscroll.utils import Config


class ImmediateExecutor(Executor):
    """Runs submitted work inline so tests need no threads."""

    def __init__(self):
        self.submitted = []

    def submit(self, fn, *args, **kwargs):
        self.submitted.append((fn, args, kwargs))
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future


class QueuedDispatch:
    """Collects UI callbacks until the test flushes them, like Tk's after()."""

    def __init__(self):
        self.queue = []

    def __call__(self, fn):
        self.queue.append(fn)

    def flush(self):
        while self.queue:
            self.queue.pop(0)()


def make_item(index: int, high: bool = True) -> dict:
    thumbnails = {
        "default": {"url": f"https://i.example.com/vi/vid{index}/default.jpg", "width": 120, "height": 90},
    }
    if high:
        thumbnails["high"] = {"url": f"https://i.example.com/vi/vid{index}/hqdefault.jpg", "width": 480, "height": 360}
    return {
        "kind": "youtube#searchResult",
        "etag": f"etag-{index}",
        "id": {"kind": "youtube#video", "videoId": f"vid{index}"},
        "snippet": {
            "title": f"Video {index}",
            "description": f"Description of video {index}",
            "thumbnails": thumbnails,
        },
    }


def make_payload(count: int = 15, next_token: str = "ABC") -> dict:
    payload = {
        "kind": "youtube#searchListResponse",
        "etag": "page-etag",
        "regionCode": "US",
        "items": [make_item(i) for i in range(count)],
    }
    if next_token:
        payload["nextPageToken"] = next_token
    return payload


@pytest.fixture
def sample_payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def executor():
    return ImmediateExecutor()


@pytest.fixture
def dispatch():
    return QueuedDispatch()


@pytest.fixture
def config(tmp_path):
    return Config(config_file=tmp_path / "settings.json")


@pytest.fixture
def page_factory():
    def factory(count=15, next_token="ABC", query="cats"):
        return SearchResultPage.from_dict(make_payload(count, next_token), query=query)
    return factory


SAMPLE_PAYLOAD = {
    "kind": "youtube#searchListResponse",
    "etag": "q4ibjmYp1KA3RqMF4jFLl6PBwOE",
    "nextPageToken": "CAUQAA",
    "regionCode": "US",
    "pageInfo": {"totalResults": 1000000, "resultsPerPage": 2},
    "items": [
        {
            "kind": "youtube#searchResult",
            "etag": "aaa",
            "id": {"kind": "youtube#video", "videoId": "dQw4w9WgXcQ"},
            "snippet": {
                "title": "Cats being cats",
                "description": "A compilation of cats.",
                "thumbnails": {
                    "default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg", "width": 120, "height": 90},
                    "medium": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/mqdefault.jpg", "width": 320, "height": 180},
                    "high": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg", "width": 480, "height": 360},
                },
            },
        },
        {
            "kind": "youtube#searchResult",
            "etag": "bbb",
            "id": {"kind": "youtube#video", "videoId": "abc123"},
            "snippet": {
                "title": "Kitten sleeps",
                "description": "",
                "thumbnails": {
                    "default": {"url": "https://i.ytimg.com/vi/abc123/default.jpg", "width": 120, "height": 90},
                },
            },
        },
    ],
}
