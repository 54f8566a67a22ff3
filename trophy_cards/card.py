# card.py

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .config import DEFAULT_PANEL_SIZE
from .params import RenderParams
from .render import escape_xml, format_number
from .themes import Theme
from .types import ProfileData

RANKS = ("SSS", "SS", "S", "AAA", "AA", "A", "B", "C")
UNKNOWN_RANK = "?"


@dataclass(frozen=True)
class TrophyKind:
    title: str
    key: str
    unit: str
    thresholds: Tuple[int, ...]  # one per entry in RANKS


TROPHIES: Tuple[TrophyKind, ...] = (
    TrophyKind("Stars", "totalStargazers", "stars", (2000, 700, 200, 100, 50, 30, 10, 1)),
    TrophyKind("Commits", "totalCommits", "commits", (4000, 2000, 1000, 500, 200, 100, 10, 1)),
    TrophyKind("Followers", "totalFollowers", "followers", (1000, 400, 200, 100, 50, 20, 10, 1)),
    TrophyKind("Issues", "totalIssues", "issues", (1000, 500, 200, 100, 50, 20, 10, 1)),
    TrophyKind("PullRequest", "totalPullRequests", "PRs", (1000, 500, 200, 100, 50, 20, 10, 1)),
    TrophyKind("Repositories", "totalRepositories", "repos", (100, 90, 80, 50, 30, 20, 10, 1)),
    TrophyKind("Reviews", "totalReviews", "reviews", (70, 57, 45, 30, 20, 8, 3, 1)),
    TrophyKind("MultiLanguage", "languageCount", "languages", (10, 8, 6, 5, 4, 3, 2, 1)),
)


@dataclass(frozen=True)
class Trophy:
    title: str
    rank: str
    value: float
    unit: str
    progress: float  # 0..1 towards the next rank

    @classmethod
    def build(cls, kind: TrophyKind, data: ProfileData) -> "Trophy":
        try:
            value = float(data.get(kind.key) or 0)
        except (TypeError, ValueError):
            value = 0.0
        rank, progress = UNKNOWN_RANK, 0.0
        for index, (name, threshold) in enumerate(zip(RANKS, kind.thresholds)):
            if value >= threshold:
                rank = name
                if index == 0:
                    progress = 1.0
                else:
                    upper = kind.thresholds[index - 1]
                    progress = (value - threshold) / (upper - threshold)
                break
        else:
            progress = value / kind.thresholds[-1] if kind.thresholds[-1] else 0.0
        return cls(kind.title, rank, value, kind.unit, max(0.0, min(1.0, progress)))

    @property
    def rank_order(self) -> int:
        return RANKS.index(self.rank) if self.rank in RANKS else len(RANKS)


def _split_filters(values: Sequence[str]) -> Tuple[set, set]:
    include = {v.casefold() for v in values if not v.startswith("-")}
    exclude = {v[1:].casefold() for v in values if v.startswith("-") and len(v) > 1}
    return include, exclude


def _matches(value: str, include: set, exclude: set) -> bool:
    key = value.casefold()
    if include and key not in include:
        return False
    return key not in exclude


def select_trophies(data: ProfileData, titles: Sequence[str] = (), ranks: Sequence[str] = ()) -> List[Trophy]:
    title_in, title_out = _split_filters(titles)
    rank_in, rank_out = _split_filters(ranks)
    trophies = [
        trophy for trophy in (Trophy.build(kind, data) for kind in TROPHIES)
        if _matches(trophy.title, title_in, title_out) and _matches(trophy.rank, rank_in, rank_out)
    ]
    trophies.sort(key=lambda t: t.rank_order)
    return trophies


class Card:
    """Trophy grid renderer."""

    def __init__(self, params: RenderParams, panel_size: int = DEFAULT_PANEL_SIZE):
        self.params = params
        self.panel_size = panel_size

    def _rank_color(self, rank: str, theme: Theme) -> str:
        if rank.startswith("S"):
            return theme.s_rank
        if rank.startswith("A"):
            return theme.a_rank
        if rank == "B":
            return theme.b_rank
        return theme.c_rank

    def _render_panel(self, trophy: Trophy, x: float, y: float, theme: Theme) -> str:
        size = self.panel_size
        bar_w = size - 30
        frame = "" if self.params.no_frame else f' stroke="{theme.frame}" stroke-width="1"'
        fill = "none" if self.params.no_background else theme.background
        return f'''<g transform="translate({x:g},{y:g})">
      <rect x="0.5" y="0.5" rx="4.5" width="{size - 1}" height="{size - 1}" fill="{fill}"{frame}/>
      <circle cx="{size / 2:g}" cy="38" r="24" fill="{theme.icon_circle}" stroke="{theme.laurel}" stroke-width="3"/>
      <text x="{size / 2:g}" y="45" text-anchor="middle" font-family="Segoe UI,Helvetica,Arial,sans-serif" font-weight="bold" font-size="18" fill="{self._rank_color(trophy.rank, theme)}">{escape_xml(trophy.rank)}</text>
      <text x="{size / 2:g}" y="{size - 32}" text-anchor="middle" font-family="Segoe UI,Helvetica,Arial,sans-serif" font-weight="bold" font-size="13" fill="{theme.title}">{escape_xml(trophy.title)}</text>
      <text x="{size / 2:g}" y="{size - 18}" text-anchor="middle" font-family="Segoe UI,Helvetica,Arial,sans-serif" font-size="10.5" fill="{theme.text}">{format_number(trophy.value)} {escape_xml(trophy.unit)}</text>
      <rect x="15" y="{size - 12}" rx="1" width="{bar_w}" height="3.5" fill="{theme.next_rank_bar}" opacity="0.3"/>
      <rect x="15" y="{size - 12}" rx="1" width="{bar_w * trophy.progress:.2f}" height="3.5" fill="{theme.next_rank_bar}"/>
    </g>'''

    def render(self, data: ProfileData, theme: Theme) -> str:
        trophies = select_trophies(data, self.params.titles, self.params.ranks)
        column = self.params.column or len(trophies) or 1
        column = max(1, min(column, len(trophies) or 1))
        if self.params.row:
            trophies = trophies[: self.params.row * column]
        rows = max(1, -(-len(trophies) // column))

        margin_w, margin_h = self.params.margin_width, self.params.margin_height
        width = self.panel_size * column + margin_w * (column - 1)
        height = self.panel_size * rows + margin_h * (rows - 1)

        panels = "\n    ".join(
            self._render_panel(
                trophy,
                (i % column) * (self.panel_size + margin_w),
                (i // column) * (self.panel_size + margin_h),
                theme,
            )
            for i, trophy in enumerate(trophies)
        )
        return f'''<svg width="{width:g}" height="{height:g}" viewBox="0 0 {width:g} {height:g}" fill="none" xmlns="http://www.w3.org/2000/svg">
    {panels}
</svg>'''
