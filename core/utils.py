"""Assorted utility helpers."""

from brokersite.models import ApplicantPersonal
from brokersite.presets import UNKNOWN_CLIENT


def client_display_name(personal: ApplicantPersonal) -> str:
    """First and last name used to label the client's document folder."""
    name = f"{personal.first_name} {personal.last_name}".strip()
    return name or UNKNOWN_CLIENT


def format_kb(size_bytes):
    """Render a byte count as kilobytes with one decimal, e.g. ``12.5 KB``."""
    try:
        kb = float(size_bytes) / 1024
    except (TypeError, ValueError):
        kb = 0.0
    return f"{kb:.1f} KB"
