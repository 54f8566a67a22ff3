# error_svg.py

from __future__ import annotations

from typing import Sequence

from .render import escape_xml

WIDTH = 900
LINE_HEIGHT = 22
PADDING_TOP = 44


def render_error_svg(title: str, lines: Sequence[str]) -> str:
    """Standardized error card."""
    height = max(120, PADDING_TOP + len(lines) * LINE_HEIGHT + 24)
    text = "".join(
        f'<text x="32" y="{PADDING_TOP + i * LINE_HEIGHT}" class="body">{escape_xml(line)}</text>'
        for i, line in enumerate(lines)
    )
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="{WIDTH}" height="{height}" viewBox="0 0 {WIDTH} {height}">
  <style>
    .bg {{ fill: #0d1117; }}
    .border {{ fill: none; stroke: #30363d; stroke-width: 1; }}
    .title {{ fill: #f85149; font: 700 18px "Segoe UI", Ubuntu, Sans-Serif; }}
    .body {{ fill: #c9d1d9; font: 14px ui-monospace, Menlo, Consolas, monospace; }}
  </style>
  <rect x="0" y="0" width="{WIDTH}" height="{height}" rx="10" class="bg"/>
  <rect x="0.5" y="0.5" width="{WIDTH - 1}" height="{height - 1}" rx="10" class="border"/>
  <text x="32" y="28" class="title">{escape_xml(title)}</text>
  {text}
</svg>"""
