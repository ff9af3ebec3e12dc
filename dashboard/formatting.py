"""
Display helpers for dashboard tables.

Registered as Jinja filters in app.py; kept free of Flask so they can be
unit tested directly.
"""

from typing import Any, Dict, Optional

from .payloads import CO_AUTHOR, FIRST_AUTHOR

DASH = "-"


def or_dash(value: Any) -> Any:
    """Return value, or "-" when it is empty."""
    if not value:
        return DASH
    return display_number(value)


def display_number(value: Any) -> Any:
    """Render integral floats without the trailing .0 (4.0 -> 4)."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_education_years(entry: Optional[Dict[str, Any]]) -> str:
    """
    Format the years column of an education row.

    Examples:
        2018 - 2022, 2023 - Present, 2019, In progress, -
    """
    if not entry:
        return DASH

    enrolled = bool(entry.get("currently_enrolled"))
    start = display_number(entry.get("start_year")) or ""
    end = display_number(entry.get("end_year")) or ""

    if start or end:
        end_label = "Present" if enrolled else end
        separator = " - " if start and (end_label or enrolled) else ""
        return f"{start}{separator}{end_label}" or DASH

    return "In progress" if enrolled else DASH


def format_gpa(entry: Dict[str, Any]) -> str:
    """Format "gpa / scale", or just the gpa when no scale is recorded."""
    gpa = entry.get("gpa")
    if not gpa:
        return DASH
    scale = entry.get("gpa_scale")
    if scale:
        return f"{display_number(gpa)} / {display_number(scale)}"
    return f"{display_number(gpa)}"


def author_role(entry: Dict[str, Any]) -> str:
    """Author role label; falls back to the first_author flag."""
    if entry.get("author_type"):
        return entry["author_type"]
    return FIRST_AUTHOR if entry.get("first_author") else CO_AUTHOR


def badge_for_result(result: Optional[str]) -> str:
    """Bootstrap badge colour for an application result."""
    label = (result or "").lower()
    if label == "admit":
        return "success"
    if label == "waitlist":
        return "warning text-dark"
    return "secondary"


def format_admit_rate(rate: Any) -> str:
    """Admit rate fraction as a percentage with one decimal (0.123 -> 12.3%)."""
    try:
        percent = float(rate) * 100
    except (TypeError, ValueError):
        percent = 0.0
    if percent != percent:  # NaN
        percent = 0.0
    return f"{percent:.1f}%"
