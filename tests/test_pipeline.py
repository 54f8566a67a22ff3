import json

import pytest

from conftest import PROFILE, FakeClient, make_request

from trophy_cards.config import cache_control_header
from trophy_cards.pipeline import RequestPipeline, build_app, public_origin
from trophy_cards.themes import COLORS
from trophy_cards.types import Err, ServiceError

IMAGE = {"Sec-Fetch-Dest": "image"}
HTML = {"Accept": "text/html"}


def make_pipeline(store, client, **env):
    return RequestPipeline(store, client, environ=env)


def test_two_calls_one_upstream_fetch(store, client):
    app = build_app({}, cache=store, client=client)

    first = app(make_request(query={"username": ["octocat"]}))
    second = app(make_request(query={"username": ["octocat"]}))

    assert first.status == second.status == 200
    assert client.calls == ["octocat"]
    assert store.writes == ["v1-octocat"]
    assert json.loads(store.get("v1-octocat")) == PROFILE


def test_success_headers(store, client):
    app = build_app({}, cache=store, client=client)
    response = app(make_request(query={"username": ["octocat"]}))
    assert response.headers["Content-Type"] == "image/svg+xml"
    assert response.headers["Cache-Control"] == cache_control_header()
    assert response.body.startswith("<svg")


@pytest.mark.parametrize("path", ["/", "/api", "/api/"])
def test_root_aliases(store, client, path):
    response = make_pipeline(store, client)(make_request(path=path, query={"username": ["octocat"]}))
    assert response.status == 200


def test_favicon_is_404(store, client):
    response = build_app({}, cache=store, client=client)(make_request(path="/favicon.ico"))
    assert response.status == 404
    assert response.headers["Content-Type"] == "text/plain; charset=utf-8"
    assert response.headers["Cache-Control"] == "no-store"
    assert client.calls == []


def test_missing_username_renders_usage_page(store, client):
    request = make_request(
        headers={"X-Forwarded-Proto": "https, http", "X-Forwarded-Host": "trophy.example.com"},
    )
    response = make_pipeline(store, client)(request)
    assert response.status == 400
    assert response.content_type == "text/html; charset=utf-8"
    assert "<form" in response.body
    assert "https://trophy.example.com/" in response.body
    assert client.calls == []


def test_blank_username_is_missing(store, client):
    response = make_pipeline(store, client)(make_request(query={"username": ["   "]}))
    assert response.status == 400


def test_default_username_fallback(store, client):
    pipeline = make_pipeline(store, client, DEFAULT_USERNAME="fallback")
    assert pipeline(make_request()).status == 200
    pipeline(make_request(query={"username": ["explicit"]}))
    assert client.calls == ["fallback", "explicit"]


def test_force_default_username_overrides_param(store, client):
    pipeline = make_pipeline(store, client, DEFAULT_USERNAME="owner", FORCE_DEFAULT_USERNAME="true")
    pipeline(make_request(query={"username": ["other"]}))
    assert client.calls == ["owner"]


def test_force_without_default_uses_param(store, client):
    pipeline = make_pipeline(store, client, FORCE_DEFAULT_USERNAME="true")
    pipeline(make_request(query={"username": ["other"]}))
    assert client.calls == ["other"]


def test_unauthorized_for_image_client(store):
    client = FakeClient(Err(ServiceError.unauthorized()))
    app = build_app({}, cache=store, client=client)
    response = app(make_request(query={"username": ["octocat"]}, headers=IMAGE))
    assert response.status == 200
    assert response.headers["Content-Type"] == "image/svg+xml"
    assert response.headers["Cache-Control"] == "no-store"
    assert "401" in response.body
    assert "auth failed" in response.body
    assert store.writes == []


def test_unauthorized_for_browser(store):
    client = FakeClient(Err(ServiceError.unauthorized()))
    response = build_app({}, cache=store, client=client)(
        make_request(query={"username": ["octocat"]}, headers=HTML)
    )
    assert response.status == 401
    assert response.headers["Cache-Control"] == "no-store"


def test_not_found_debug_context(store):
    client = FakeClient(Err(ServiceError.not_found()))
    request = make_request(query={"username": ["ghost"]}, headers=HTML)

    quiet = make_pipeline(store, client)(request)
    loud = make_pipeline(store, client, DEBUG="true", GITHUB_TOKEN1="abc")(request)

    assert quiet.status == loud.status == 404
    assert "GITHUB_TOKEN1 set" not in quiet.body
    assert "GITHUB_TOKEN1 set: <code>true</code>" in loud.body


def test_unknown_theme_falls_back_to_default(store, client):
    pipeline = make_pipeline(store, client)
    unknown = pipeline(make_request(query={"username": ["octocat"], "theme": ["no-such-theme"]}))
    default = pipeline(make_request(query={"username": ["octocat"], "theme": ["default"]}))
    assert unknown.status == 200
    assert unknown.body == default.body
    assert COLORS["default"].background in unknown.body


def test_public_origin_falls_back_to_host():
    request = make_request(headers={"Host": "localhost:8000"}, url="http://ignored/")
    assert public_origin(request) == "http://localhost:8000"
    assert public_origin(make_request(url="https://svc.example/x")) == "https://svc.example"


def test_debug_token_flag_tracks_primary_token_only(store):
    client = FakeClient(Err(ServiceError.not_found()))
    pipeline = make_pipeline(store, client, DEBUG="true", GITHUB_TOKEN2="secondary")
    response = pipeline(make_request(query={"username": ["ghost"]}, headers=HTML))
    assert "GITHUB_TOKEN1 set: <code>false</code>" in response.body


def test_get_app_builds_once_under_concurrency(monkeypatch):
    import threading
    import time

    from trophy_cards import pipeline as pipeline_module

    builds = []

    def slow_build(environ):
        builds.append(environ)
        time.sleep(0.05)
        return object()

    monkeypatch.setattr(pipeline_module, "_app", None)
    monkeypatch.setattr(pipeline_module, "build_app", slow_build)

    apps = []
    threads = [threading.Thread(target=lambda: apps.append(pipeline_module.get_app())) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(builds) == 1
    assert len({id(app) for app in apps}) == 1
