"""Figma RGBA components to platform color literals."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple

Rgba = Tuple[float, float, float, float]


def _byte(component: float) -> int:
    clamped = min(1.0, max(0.0, float(component)))
    # Half-up rounding keeps 0.5 boundaries stable across platforms.
    return int(clamped * 255 + 0.5)


def figma_to_hex(r: float, g: float, b: float, alpha: float = 1.0) -> str:
    """``#rrggbb``, or ``#rrggbbaa`` when ``alpha`` is below 1."""
    hex_value = f"#{_byte(r):02x}{_byte(g):02x}{_byte(b):02x}"
    if alpha < 1:
        hex_value += f"{_byte(alpha):02x}"
    return hex_value


def figma_to_string_hex(r: float, g: float, b: float, alpha: float = 1.0) -> str:
    """Uppercase ``#RRGGBB[AA]`` string literal."""
    return figma_to_hex(r, g, b, alpha).upper()


def figma_to_swift_hex(r: float, g: float, b: float, alpha: float = 1.0) -> str:
    """``0xRRGGBB`` for opaque colors, ``0xRRGGBBAA`` otherwise."""
    body = f"{_byte(r):02X}{_byte(g):02X}{_byte(b):02X}"
    if alpha < 1:
        body += f"{_byte(alpha):02X}"
    return f"0x{body}"


def figma_to_kotlin_hex(r: float, g: float, b: float, alpha: float = 1.0) -> str:
    """Compose ``Color(Long)`` literal in alpha-first ``0xAARRGGBB`` order."""
    return f"0x{_byte(alpha):02X}{_byte(r):02X}{_byte(g):02X}{_byte(b):02X}"


def color_components(value: Any) -> Optional[Rgba]:
    """Extract ``(r, g, b, alpha)`` from a Figma color ``$value`` mapping."""
    if not isinstance(value, Mapping):
        return None
    components = value.get("components")
    alpha = value.get("alpha", 1)
    if not isinstance(components, Sequence) or isinstance(components, str) or len(components) < 3:
        return None
    if isinstance(alpha, bool) or not isinstance(alpha, (int, float)):
        return None
    try:
        r, g, b = (float(c) for c in components[:3])
    except (TypeError, ValueError):
        return None
    return r, g, b, float(alpha)


def resolve_color_value(token: Mapping[str, Any]) -> Optional[str]:
    """Return the CSS hex for a color token, or None when the payload is unusable.

    Translucent colors are always rebuilt from components; opaque colors prefer
    the exported ``hex`` field so Figma's own rounding is preserved.
    """
    value = token.get("$value")
    rgba = color_components(value)
    if rgba is None:
        return None
    r, g, b, alpha = rgba
    alpha = round(alpha, 4)
    if alpha < 1:
        return figma_to_hex(r, g, b, alpha)
    hex_field = value.get("hex") if isinstance(value, Mapping) else None
    if not isinstance(hex_field, str) or not hex_field:
        return None
    return hex_field.lower()


def hex_to_components(hex_value: str) -> Optional[Rgba]:
    """Parse ``#rgb``/``#rrggbb``/``#rrggbbaa`` into 0–1 components."""
    text = hex_value.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) not in (6, 8):
        return None
    try:
        channels = [int(text[i : i + 2], 16) / 255 for i in range(0, len(text), 2)]
    except ValueError:
        return None
    if len(channels) == 3:
        channels.append(1.0)
    r, g, b, a = channels
    return r, g, b, a


__all__ = [
    "color_components",
    "figma_to_hex",
    "figma_to_kotlin_hex",
    "figma_to_string_hex",
    "figma_to_swift_hex",
    "hex_to_components",
    "resolve_color_value",
]
