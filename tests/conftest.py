import pytest

from trophy_cards.cache import MemoryCacheStore
from trophy_cards.types import Headers, Ok, Request


PROFILE = {
    "totalStargazers": 250,
    "totalCommits": 1200,
    "totalFollowers": 45,
    "totalIssues": 12,
    "totalPullRequests": 60,
    "totalRepositories": 33,
    "totalReviews": 4,
    "languageCount": 5,
}


class FakeClient:
    def __init__(self, result=None):
        self.result = result if result is not None else Ok(dict(PROFILE))
        self.calls = []

    def fetch_profile(self, username):
        self.calls.append(username)
        return self.result


class CountingStore(MemoryCacheStore):
    def __init__(self):
        super().__init__()
        self.writes = []

    def set(self, key, value):
        self.writes.append(key)
        return super().set(key, value)


def make_request(path="/", query=None, headers=None, url="http://localhost/"):
    return Request(path=path, query=query or {}, headers=Headers(headers or {}), url=url)


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def client():
    return FakeClient()

