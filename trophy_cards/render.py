# render.py

from __future__ import annotations


def escape_xml(text) -> str:
    """Sanitize text for SVG / HTML output."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def format_number(value) -> str:
    """Compact count for trophy subtitles (1.2k, 3.4M)."""
    value = float(value or 0)
    if abs(value) < 1_000:
        return str(int(value))
    scaled, suffix = value / 1_000, "k"
    # 999.95k rounds to 1000.0k, so promote before formatting
    if abs(round(scaled, 1)) >= 1_000:
        scaled, suffix = value / 1_000_000, "M"
    return f"{scaled:.1f}".rstrip("0").rstrip(".") + suffix
