# github_client.py

from __future__ import annotations

import json
import logging
import socket
import urllib.error
import urllib.request
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from .config import DEFAULT_API_TIMEOUT, Settings
from .types import Err, ErrorCause, Ok, ProfileData, Result, ServiceError

logger = logging.getLogger(__name__)

GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "GitHub-Profile-Trophy"

USER_INFO_QUERY = """
query userInfo($username: String!) {
  user(login: $username) {
    contributionsCollection {
      totalCommitContributions
      restrictedContributionsCount
      totalPullRequestReviewContributions
    }
    followers { totalCount }
    issues { totalCount }
    pullRequests { totalCount }
    repositories(first: 100, ownerAffiliations: OWNER, orderBy: {direction: DESC, field: STARGAZERS}) {
      totalCount
      nodes {
        stargazerCount
        languages(first: 3, orderBy: {direction: DESC, field: SIZE}) {
          nodes { name }
        }
      }
    }
  }
}
"""

# GraphQL error "type" values
_ERROR_TYPES = {
    "RATE_LIMITED": ServiceError.rate_limit,
    "NOT_FOUND": ServiceError.not_found,
}

# errors worth retrying with the next token
_ROTATE_ON = frozenset({ErrorCause.UNAUTHORIZED, ErrorCause.RATE_LIMIT})


def _default_opener(request: urllib.request.Request, timeout: float):
    return urllib.request.urlopen(request, timeout=timeout)


def summarize_user(user: Dict[str, Any]) -> ProfileData:
    """Flatten the GraphQL ``user`` node into the cached profile shape."""
    contributions = user.get("contributionsCollection") or {}
    repositories = user.get("repositories") or {}
    nodes = [n for n in repositories.get("nodes") or [] if n]
    languages = {
        lang["name"]
        for node in nodes
        for lang in (node.get("languages") or {}).get("nodes") or []
        if lang and lang.get("name")
    }
    return {
        "totalStargazers": sum(n.get("stargazerCount", 0) for n in nodes),
        "totalCommits": contributions.get("totalCommitContributions", 0)
        + contributions.get("restrictedContributionsCount", 0),
        "totalFollowers": (user.get("followers") or {}).get("totalCount", 0),
        "totalIssues": (user.get("issues") or {}).get("totalCount", 0),
        "totalPullRequests": (user.get("pullRequests") or {}).get("totalCount", 0),
        "totalRepositories": repositories.get("totalCount", 0),
        "totalReviews": contributions.get("totalPullRequestReviewContributions", 0),
        "languageCount": len(languages),
    }


class GithubApiClient:
    """GitHub GraphQL client returning ``Ok``/``Err`` instead of raising.

    Tokens are tried in order; a token that is rejected or rate limited hands
    over to the next one. With no tokens configured the call short-circuits
    to UNAUTHORIZED, which is what the API would answer anyway.
    """

    def __init__(self, tokens: Optional[Sequence[str]] = None, timeout: float = DEFAULT_API_TIMEOUT,
                 opener: Callable[..., Any] = _default_opener,
                 token_source: Optional[Callable[[], Sequence[str]]] = None):
        self._tokens = tuple(tokens or ())
        self._token_source = token_source
        self.timeout = timeout
        self._open = opener

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GithubApiClient":
        """Client that re-reads its tokens from the environment on every call."""
        settings = Settings.from_env(environ)
        return cls(timeout=settings.api_timeout,
                   token_source=lambda: Settings.from_env(environ).github_tokens)

    @property
    def tokens(self) -> tuple:
        if self._tokens or self._token_source is None:
            return self._tokens
        return tuple(self._token_source())

    def fetch_profile(self, username: str) -> Result[ProfileData]:
        tokens = self.tokens
        if not tokens:
            logger.warning("No GitHub token configured, cannot query %s", username)
            return Err(ServiceError.unauthorized())

        result: Result[ProfileData] = Err(ServiceError.not_found())
        for index, token in enumerate(tokens, start=1):
            logger.info("Fetching GitHub profile for %s (token #%d)", username, index)
            result = self._request_user_info(username, token)
            if isinstance(result, Ok) or result.error.cause not in _ROTATE_ON:
                return result
            logger.warning("Token #%d failed with %s", index, result.error.name)
        return result

    def _make_request(self, payload: Dict[str, Any], token: str) -> Dict[str, Any]:
        """Shared HTTP handler with Authentication."""
        req = urllib.request.Request(
            GRAPHQL_URL,
            data=json.dumps(payload).encode(),
            headers={
                "Authorization": f"bearer {token}",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            method="POST",
        )
        with self._open(req, self.timeout) as resp:
            return json.load(resp)

    def _request_user_info(self, username: str, token: str) -> Result[ProfileData]:
        payload = {"query": USER_INFO_QUERY, "variables": {"username": username}}
        try:
            body = self._make_request(payload, token)
        except urllib.error.HTTPError as e:
            logger.warning("GitHub API error %s %s for %s", e.code, e.reason, username)
            if e.code == 401:
                return Err(ServiceError.unauthorized())
            if e.code in (403, 429):
                return Err(ServiceError.rate_limit())
            return Err(ServiceError.not_found())
        except (urllib.error.URLError, socket.timeout, TimeoutError, ValueError) as e:
            logger.warning("GitHub API request failed for %s: %s", username, e)
            return Err(ServiceError.not_found())

        for error in body.get("errors") or []:
            factory = _ERROR_TYPES.get(error.get("type"))
            if factory:
                return Err(factory())
        user = (body.get("data") or {}).get("user")
        if not user:
            logger.warning("GitHub API returned no user for %s: %s", username, body.get("errors"))
            return Err(ServiceError.not_found())
        return Ok(summarize_user(user))
