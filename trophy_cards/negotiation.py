# negotiation.py

from __future__ import annotations

from .types import ClientType, Headers


def _header(headers: Headers, name: str) -> str:
    return (headers.get(name) or "").lower()


def is_github_image_proxy(headers: Headers) -> bool:
    # camo does not send a useful Accept header
    ua = _header(headers, "User-Agent")
    return "github-camo" in ua or ("github" in ua and "image" in ua)


def classify(headers: Headers) -> ClientType:
    """Decide which representation the caller can display."""
    accept = _header(headers, "Accept")
    if _header(headers, "Sec-Fetch-Dest").strip() == "image":
        return ClientType.IMAGE
    if "image/" in accept:
        return ClientType.IMAGE
    if is_github_image_proxy(headers):
        return ClientType.IMAGE
    if "text/html" in accept:
        return ClientType.HTML
    return ClientType.OTHER
