"""Value types shared across the request pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar, Union

T = TypeVar("T")

ProfileData = Dict[str, Any]


class ErrorCause(Enum):
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    RATE_LIMIT = "rate_limit"
    NOT_FOUND = "not_found"


class ClientType(Enum):
    IMAGE = "image"
    HTML = "html"
    OTHER = "other"


@dataclass(frozen=True)
class ServiceError:
    cause: ErrorCause
    code: int
    name: str

    @classmethod
    def bad_request(cls) -> "ServiceError":
        return cls(ErrorCause.BAD_REQUEST, 400, "Bad Request")

    @classmethod
    def unauthorized(cls) -> "ServiceError":
        return cls(ErrorCause.UNAUTHORIZED, 401, "Unauthorized")

    @classmethod
    def rate_limit(cls) -> "ServiceError":
        return cls(ErrorCause.RATE_LIMIT, 419, "Rate Limit Exceeded")

    @classmethod
    def not_found(cls) -> "ServiceError":
        return cls(ErrorCause.NOT_FOUND, 404, "Not Found")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ServiceError


Result = Union[Ok[T], Err]


class Headers:
    """Case-insensitive header map that keeps the first spelling of each name."""

    def __init__(self, items: Optional[Mapping[str, str]] = None):
        self._items: Dict[str, tuple] = {}
        for name, value in (items or {}).items():
            self[name] = value

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __setitem__(self, name: str, value: str) -> None:
        key = name.lower()
        original = self._items[key][0] if key in self._items else name
        self._items[key] = (original, str(value))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self):
        return (original for original, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({dict(self.items())!r})"

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        entry = self._items.get(name.lower())
        return entry[1] if entry else default

    def items(self):
        return list(self._items.values())

    def copy(self) -> "Headers":
        return Headers(dict(self.items()))


@dataclass
class Request:
    path: str
    query: Dict[str, List[str]] = field(default_factory=dict)
    headers: Headers = field(default_factory=Headers)
    url: str = ""


@dataclass
class Response:
    status: int
    body: str
    headers: Headers = field(default_factory=Headers)

    @property
    def content_type(self) -> Optional[str]:
        return self.headers.get("Content-Type")
