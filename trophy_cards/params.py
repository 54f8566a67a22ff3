"""Query-string parsing into render parameters."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple

from . import config


@dataclass(frozen=True)
class RenderParams:
    username: Optional[str]
    row: int = config.DEFAULT_MAX_ROW
    column: int = config.DEFAULT_MAX_COLUMN
    theme: str = config.DEFAULT_THEME
    margin_width: float = config.DEFAULT_MARGIN_W
    margin_height: float = config.DEFAULT_MARGIN_H
    no_background: bool = config.DEFAULT_NO_BACKGROUND
    no_frame: bool = config.DEFAULT_NO_FRAME
    titles: Tuple[str, ...] = ()
    ranks: Tuple[str, ...] = ()

    def with_username(self, username: Optional[str]) -> "RenderParams":
        return replace(self, username=username)


class QueryParams:
    """Typed accessors over a ``parse_qs`` style multi-dict."""

    def __init__(self, query: Dict[str, List[str]]):
        self._query = query

    def get(self, name: str) -> Optional[str]:
        values = self._query.get(name)
        return values[0] if values else None

    def get_all(self, name: str) -> List[str]:
        return list(self._query.get(name, []))

    def get_string(self, name: str, default: str) -> str:
        value = self.get(name)
        return value.strip() if value and value.strip() else default

    def get_int(self, name: str, default: int) -> int:
        try:
            value = int(self.get(name) or "")
        except ValueError:
            return default
        return value if value >= 0 else default

    def get_number(self, name: str, default: float) -> float:
        try:
            value = float(self.get(name) or "")
        except ValueError:
            return default
        # reject nan / inf
        return value if value == value and abs(value) != float("inf") else default

    def get_bool(self, name: str, default: bool) -> bool:
        value = self.get(name)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "")

    def get_list(self, name: str) -> Tuple[str, ...]:
        return tuple(
            piece.strip()
            for raw in self.get_all(name)
            for piece in raw.split(",")
            if piece.strip()
        )


def parse_params(query: Dict[str, List[str]]) -> RenderParams:
    params = QueryParams(query)
    return RenderParams(
        username=(params.get("username") or "").strip() or None,
        row=params.get_int("row", config.DEFAULT_MAX_ROW),
        column=params.get_int("column", config.DEFAULT_MAX_COLUMN),
        theme=params.get_string("theme", config.DEFAULT_THEME),
        margin_width=params.get_number("margin-w", config.DEFAULT_MARGIN_W),
        margin_height=params.get_number("margin-h", config.DEFAULT_MARGIN_H),
        no_background=params.get_bool("no-bg", config.DEFAULT_NO_BACKGROUND),
        no_frame=params.get_bool("no-frame", config.DEFAULT_NO_FRAME),
        titles=params.get_list("title"),
        ranks=params.get_list("rank"),
    )
