"""Error surfaces: HTML pages for browsers, SVG cards for image consumers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .error_svg import render_error_svg
from .render import escape_xml
from .types import ClientType, ErrorCause, Headers, Response, ServiceError

HTML_CONTENT_TYPE = "text/html; charset=utf-8"
SVG_CONTENT_TYPE = "image/svg+xml"

TOKEN_ENV = "GITHUB_TOKEN1"

PAGE = """<!DOCTYPE html>
<html><head>
<meta charset="utf-8"><title>{status} - {title}</title>
<style>
body {{ font-family: system-ui, sans-serif; background: #0d1117; color: #c9d1d9; max-width: 820px; margin: 40px auto; padding: 20px; }}
a {{ color: #58a6ff; }} code {{ background: #21262d; padding: 2px 6px; border-radius: 4px; }}
h1 {{ border-bottom: 1px solid #30363d; padding-bottom: 10px; }}
form {{ display: flex; flex-direction: column; gap: 8px; max-width: 360px; }}
</style>
</head><body>
<h1>{status} - {title}</h1>
<div>{content}</div>
</body></html>"""


@dataclass(frozen=True)
class ErrorPage:
    status: int
    title: str
    content: str = ""

    def render(self) -> str:
        return PAGE.format(status=self.status, title=escape_xml(self.title), content=self.content)


@dataclass(frozen=True)
class DebugContext:
    username: str
    token_set: bool

    def to_html(self) -> str:
        user = escape_xml(self.username)
        return (
            f"<div><strong>Debug</strong><br/>username: <code>{user}</code><br/>"
            f"{TOKEN_ENV} set: <code>{str(self.token_set).lower()}</code></div>"
            f"<div>Tips: verify the username exists at <code>https://github.com/{user}</code>. "
            f"If the token is missing or invalid, set <code>{TOKEN_ENV}</code> on your deployment and redeploy.</div>"
        )


def usage_page(base_url: str) -> ErrorPage:
    """400 page shown when no username could be resolved."""
    base = escape_xml(base_url)
    return ErrorPage(400, "Bad Request", f"""<section>
  <div>
    <h2>"username" is a required query parameter</h2>
    <p>The URL should look like</p>
    <div>
      <p id="base-show">{base}?username=USERNAME</p>
      <button id="copy">Copy Base Url</button>
      <span id="temporary-span"></span>
    </div>
    <p>where <code>USERNAME</code> is <em>your GitHub username.</em></p>
  </div>
  <div>
    <h2>You can use this form:</h2>
    <p>Enter your username and click get trophies</p>
    <form action="{base}" method="get">
      <label for="username">GitHub Username</label>
      <input type="text" name="username" id="username" placeholder="Ex. octocat" required>
      <label for="theme">Theme (Optional)</label>
      <input type="text" name="theme" id="theme" placeholder="Ex. onedark" value="default">
      <button type="submit">Get Trophies</button>
    </form>
  </div>
  <script>
    document.querySelector("#copy").addEventListener("click", () => {{
      const span = document.querySelector("#temporary-span");
      navigator.clipboard.writeText(document.querySelector("#base-show").textContent);
      span.textContent = "Copied!";
      setTimeout(() => {{ span.textContent = ""; }}, 1500);
    }});
  </script>
</section>""")


def error_page(error: ServiceError, debug: Optional[DebugContext] = None) -> ErrorPage:
    if error.cause is ErrorCause.UNAUTHORIZED:
        return ErrorPage(401, error.name, (
            f'GitHub API authorization failed. Set a valid "{TOKEN_ENV}" '
            "environment variable on your deployment."
        ))
    if error.cause is ErrorCause.RATE_LIMIT:
        return ErrorPage(419, error.name, "GitHub API rate limit exceeded. Please try again later.")
    if error.cause is ErrorCause.NOT_FOUND:
        extra = f"<br/><br/>{debug.to_html()}" if debug else ""
        return ErrorPage(404, error.name, f"Sorry, the user you are looking for was not found.{extra}")
    return ErrorPage(400, error.name, "The request could not be understood.")


def error_lines(error: ServiceError, username: str, debug: Optional[DebugContext] = None) -> List[str]:
    lines = [f"username: {username}"]
    if error.cause is ErrorCause.UNAUTHORIZED:
        lines.append(f"GitHub API auth failed. Check {TOKEN_ENV}.")
    elif error.cause is ErrorCause.RATE_LIMIT:
        lines.append("GitHub API rate limit exceeded. Try later.")
    else:
        lines.append("User not found or GitHub API error.")
    if debug:
        lines.append(f"{TOKEN_ENV} set: {str(debug.token_set).lower()}")
    return lines


class ErrorRenderer:
    """Map a ServiceError onto the representation the client can show.

    Image consumers always get a 200 SVG: most renderers replace a non-2xx
    image with a broken-image icon and no text.
    """

    def render(self, error: ServiceError, client_type: ClientType, username: str = "",
               debug: Optional[DebugContext] = None) -> Response:
        if client_type is ClientType.HTML:
            page = error_page(error, debug)
            return Response(error.code, page.render(), Headers({
                "Content-Type": HTML_CONTENT_TYPE,
                "Cache-Control": "no-store",
            }))
        body = render_error_svg(f"{error.code} - {error.name}", error_lines(error, username, debug))
        return Response(200, body, Headers({
            "Content-Type": SVG_CONTENT_TYPE,
            "Cache-Control": "no-store",
        }))

    def render_usage(self, base_url: str, cache_control: str) -> Response:
        page = usage_page(base_url)
        return Response(page.status, page.render(), Headers({
            "Content-Type": HTML_CONTENT_TYPE,
            "Cache-Control": cache_control,
        }))
