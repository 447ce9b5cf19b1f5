"""Colorimetric helpers for hex parsing and WCAG contrast."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, NamedTuple

HEX6_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)
HEX3_RE = re.compile(r"^#?([a-f\d])([a-f\d])([a-f\d])$", re.IGNORECASE)


class RGB(NamedTuple):
    """An sRGB color with 0-255 channels."""

    r: int
    g: int
    b: int


def hex_to_rgb(value: str) -> RGB | None:
    """Parse ``#rrggbb`` or ``#rgb`` (``#`` optional). None if it doesn't match."""
    match = HEX6_RE.match(value)
    if match:
        return RGB(*(int(part, 16) for part in match.groups()))
    match = HEX3_RE.match(value)
    if match:
        return RGB(*(int(part * 2, 16) for part in match.groups()))
    return None


def rgb_to_hex(rgb: RGB) -> str:
    return "#" + "".join(f"{channel:02x}" for channel in rgb)


def structured_color_to_hex(value: Any) -> str | None:
    """Convert a DTCG color value to a hex string.

    Only ``srgb`` structured values resolve; components are assumed to be in
    [0, 1]. Strings starting with ``#`` pass through unchanged. References
    and every other shape resolve to None.
    """
    if isinstance(value, str):
        return value if value.startswith("#") else None

    if not isinstance(value, Mapping):
        return None
    if value.get("colorSpace") != "srgb":
        return None

    components = value.get("components")
    if not isinstance(components, (list, tuple)) or len(components) < 3:
        return None
    channels = components[:3]
    if not all(is_number(c) for c in channels):
        return None

    # round-half-up, clamped to the byte range
    r, g, b = (min(255, max(0, int(c * 255 + 0.5))) for c in channels)
    return rgb_to_hex(RGB(r, g, b))


def resolve_color(value: Any) -> RGB | None:
    """Resolve a color source to RGB, unwrapping a token mapping first."""
    if isinstance(value, Mapping) and "$value" in value:
        value = value["$value"]
    hex_value = structured_color_to_hex(value)
    if hex_value is None:
        return None
    return hex_to_rgb(hex_value)


def srgb_to_linear(channel: float) -> float:
    """Apply the inverse sRGB transfer function to a 0-255 channel."""
    c = channel / 255
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(r: float, g: float, b: float) -> float:
    return (
        0.2126 * srgb_to_linear(r)
        + 0.7152 * srgb_to_linear(g)
        + 0.0722 * srgb_to_linear(b)
    )


def contrast_ratio(foreground: RGB, background: RGB) -> float:
    """WCAG contrast ratio between two colors, in [1, 21]."""
    l1 = relative_luminance(*foreground)
    l2 = relative_luminance(*background)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio_hex(foreground: str, background: str) -> float | None:
    fg = hex_to_rgb(foreground)
    bg = hex_to_rgb(background)
    if fg is None or bg is None:
        return None
    return contrast_ratio(fg, bg)


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
