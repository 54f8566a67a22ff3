import pytest

from trophy_cards.error_svg import render_error_svg
from trophy_cards.errors import DebugContext, ErrorRenderer, error_lines, usage_page
from trophy_cards.types import ClientType, ServiceError


def render(error, client_type, debug=None):
    return ErrorRenderer().render(error, client_type, "octocat", debug)


@pytest.mark.parametrize("client_type", [ClientType.IMAGE, ClientType.OTHER])
def test_image_errors_are_200_svg(client_type):
    response = render(ServiceError.unauthorized(), client_type)
    assert response.status == 200
    assert response.content_type == "image/svg+xml"
    assert response.headers["Cache-Control"] == "no-store"
    assert "401" in response.body
    assert "auth failed" in response.body
    assert "username: octocat" in response.body


@pytest.mark.parametrize("error, status", [
    (ServiceError.unauthorized(), 401),
    (ServiceError.rate_limit(), 419),
    (ServiceError.not_found(), 404),
])
def test_html_errors_keep_real_status(error, status):
    response = render(error, ClientType.HTML)
    assert response.status == status
    assert response.content_type == "text/html; charset=utf-8"
    assert response.headers["Cache-Control"] == "no-store"
    assert "<html>" in response.body


def test_svg_lines_per_cause():
    assert "rate limit exceeded" in error_lines(ServiceError.rate_limit(), "u")[1]
    assert "User not found" in error_lines(ServiceError.not_found(), "u")[1]


def test_debug_context_hidden_by_default():
    html = render(ServiceError.not_found(), ClientType.HTML).body
    svg = render(ServiceError.unauthorized(), ClientType.IMAGE).body
    assert "GITHUB_TOKEN1 set" not in html
    assert "GITHUB_TOKEN1 set" not in svg


def test_debug_context_when_enabled():
    debug = DebugContext("octocat", token_set=False)
    html = render(ServiceError.not_found(), ClientType.HTML, debug).body
    svg = render(ServiceError.unauthorized(), ClientType.IMAGE, debug).body
    assert "GITHUB_TOKEN1 set: <code>false</code>" in html
    assert "GITHUB_TOKEN1 set: false" in svg


def test_debug_context_escapes_username():
    html = DebugContext("<script>", token_set=True).to_html()
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_usage_page_has_form_and_base_url():
    page = usage_page("https://trophy.example.com/")
    body = page.render()
    assert page.status == 400
    assert "<form" in body
    assert 'action="https://trophy.example.com/"' in body
    assert "https://trophy.example.com/?username=USERNAME" in body


def test_error_svg_escapes_text():
    svg = render_error_svg("404 - Not Found", ["username: <b>&"])
    assert "&lt;b&gt;&amp;" in svg
    assert svg.startswith("<?xml")
