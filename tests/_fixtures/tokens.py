"""Helper utilities for constructing Figma variable exports in tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence


def color(hex_value: str, alias: Optional[str] = None, alpha: float = 1.0) -> Dict[str, Any]:
    """A color token as Figma exports it, optionally aliasing ``alias``."""
    text = hex_value.lstrip("#")
    components = [round(int(text[i : i + 2], 16) / 255, 6) for i in (0, 2, 4)]
    token: Dict[str, Any] = {
        "$type": "color",
        "$value": {"colorSpace": "srgb", "components": components, "alpha": alpha, "hex": f"#{text.upper()}"},
    }
    if alias:
        token["$extensions"] = {"com.figma.aliasData": {"targetVariableName": alias}}
    return token


def number(value: float, **extensions: Any) -> Dict[str, Any]:
    token: Dict[str, Any] = {"$type": "number", "$value": value}
    if extensions:
        token["$extensions"] = dict(extensions)
    return token


def typography(
    family: str = "Inter",
    size: float = 16,
    weight: Any = 400,
    line_height: float = 24,
    letter_spacing: float = 0,
) -> Dict[str, Any]:
    return {
        "$type": "typography",
        "$value": {
            "fontFamily": family,
            "fontSize": size,
            "fontWeight": weight,
            "lineHeight": line_height,
            "letterSpacing": letter_spacing,
        },
    }


def shadow(x: float, y: float, blur: float, spread: float = 0, hex_value: str = "#000000", alpha: float = 0.2):
    text = hex_value.lstrip("#")
    return {
        "$type": "shadow",
        "$value": {
            "offsetX": x,
            "offsetY": y,
            "blur": blur,
            "spread": spread,
            "color": {
                "components": [int(text[i : i + 2], 16) / 255 for i in (0, 2, 4)],
                "alpha": alpha,
                "hex": f"#{text.upper()}",
            },
        },
    }


def nest(entries: Mapping[str, Any]) -> Dict[str, Any]:
    """Build a nested document from ``"Text/Primary" -> token`` entries."""
    document: Dict[str, Any] = {}
    for path, token in entries.items():
        node = document
        segments: Sequence[str] = path.split("/")
        for segment in segments[:-1]:
            node = node.setdefault(segment, {})
        node[segments[-1]] = token
    return document


def light_export() -> Dict[str, Any]:
    return nest(
        {
            "Fill/Primary": color("#1A1A1A", "Colour/Grey/900"),
            "Text/Primary": color("#404040", "Colour/Grey/750"),
            "Text/Secondary": color("#737373", "Colour/Grey/500"),
            "Text/Static/White": color("#FFFFFF", "Colour/Grey/0"),
            "Icon/Brand": color("#2563EB", "Colour/Blue/600"),
        }
    )


def dark_export() -> Dict[str, Any]:
    return nest(
        {
            "Fill/Primary": color("#FFFFFF", "Colour/Grey/0"),
            "Text/Primary": color("#F5F5F5", "Colour/Grey/50"),
            "Text/Secondary": color("#A3A3A3", "Colour/Grey/300"),
            "Text/Static/White": color("#FFFFFF", "Colour/Grey/0"),
            "Icon/Brand": color("#60A5FA", "Colour/Blue/400"),
        }
    )


def values_export() -> Dict[str, Any]:
    return {
        "Integer": {"0": number(0), "4": number(4), "8": number(8), "16": number(16)},
        "Radius": {"sm": number(4), "lg": number(12)},
        "Motion": {"Duration": {"fast": number(0.2), "slow": number(400)}},
        "Elevation": {"1": shadow(0, 1, 2)},
    }


def typography_export() -> Dict[str, Any]:
    return {
        "typography": {
            "Body/Body-R": typography(size=16, weight="Regular", line_height=24),
            "Heading/Heading-L": typography(size=32, weight=700, line_height=40),
            "ios/Title/Title 1": typography(family="SF Pro", size=28, weight=700, line_height=34),
            "droid/body/body-M": typography(family="Roboto", size=14, weight="Medium", line_height=20),
        }
    }


def write_json(path: Path, document: Mapping[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


__all__ = [
    "color",
    "dark_export",
    "light_export",
    "nest",
    "number",
    "shadow",
    "typography",
    "typography_export",
    "values_export",
    "write_json",
]
