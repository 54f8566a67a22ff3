# themes.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .config import DEFAULT_THEME


@dataclass(frozen=True)
class Theme:
    background: str
    title: str
    text: str
    icon_circle: str
    laurel: str
    next_rank_bar: str
    frame: str
    s_rank: str
    a_rank: str
    b_rank: str
    c_rank: str


COLORS: dict[str, Theme] = {
    "default": Theme("#FFF", "#000", "#666", "#FFF", "#09D", "#0366D6", "#E4E2E2",
                     "#FAD200", "#B0B0B0", "#A18D66", "#777"),
    "flat": Theme("#FFF", "#000", "#666", "#FFF", "#09D", "#0366D6", "#E4E2E2",
                  "#EB5454", "#FFC64D", "#1CBF8C", "#777"),
    "onedark": Theme("#282C34", "#E5C07B", "#E06C75", "#FFF", "#56B6C2", "#98C379", "#3E4451",
                     "#E5C07B", "#B0B0B0", "#C678DD", "#61AFEF"),
    "gruvbox": Theme("#282828", "#FABD2F", "#8EC07C", "#FFF", "#FE8019", "#B8BB26", "#3C3836",
                     "#FABD2F", "#D5C4A1", "#D3869B", "#83A598"),
    "dracula": Theme("#282A36", "#F8F8F2", "#F8F8F2", "#FFF", "#FF79C6", "#BD93F9", "#44475A",
                     "#F1FA8C", "#8BE9FD", "#FFB86C", "#6272A4"),
    "monokai": Theme("#272822", "#F92672", "#A6E22E", "#FFF", "#66D9EF", "#E6DB74", "#3E3D32",
                     "#E6DB74", "#F8F8F2", "#FD971F", "#75715E"),
    "nord": Theme("#2E3440", "#ECEFF4", "#D8DEE9", "#FFF", "#88C0D0", "#81A1C1", "#3B4252",
                  "#EBCB8B", "#E5E9F0", "#D08770", "#5E81AC"),
    "darkhub": Theme("#0D1117", "#C9D1D9", "#8B949E", "#FFF", "#58A6FF", "#238636", "#30363D",
                     "#E3B341", "#C9D1D9", "#DB6D28", "#6E7681"),
}


def get_theme(key: str, table: Mapping[str, Theme] = COLORS) -> Theme:
    """Look up a theme, falling back to the default for unknown keys."""
    return table.get(key) or table[DEFAULT_THEME]
