"""Trailing REMOVED section listing reference tokens the regeneration dropped."""

from __future__ import annotations

from typing import Callable, Dict, List

from .tokens import extract_token_names, extract_token_values

REMOVED_NOTE = "REMOVED — these tokens exist in the reference file but are no longer in Figma"

_LINE_FORMATTERS: Dict[str, Callable[[str, str], str]] = {
    "scss": lambda name, value: f"// ${name}: {value};",
    "css": lambda name, value: f"/* --{name}: {value}; */",
    "typescript": lambda name, value: f"// export const {name} = {value};",
    "swift": lambda name, value: f"// static let {name} = {value}",
    "kotlin": lambda name, value: f"// val {name} = {value}",
}


def removed_token_lines(removed: Dict[str, str], fmt: str) -> List[str]:
    if not removed:
        return []
    formatter = _LINE_FORMATTERS.get(fmt, _LINE_FORMATTERS["kotlin"])
    header = f"/* {REMOVED_NOTE} */" if fmt == "css" else f"// {REMOVED_NOTE}"
    return [header, *(formatter(name, value) for name, value in removed.items())]


def append_removed_token_comments(generated: str, reference: str, fmt: str) -> str:
    """Append commented-out declarations for reference tokens missing from ``generated``.

    Returns ``generated`` unchanged when the reference is empty or nothing was
    removed.
    """
    if not reference:
        return generated
    generated_names = extract_token_names(generated)
    removed = {
        name: value for name, value in extract_token_values(reference).items() if name not in generated_names
    }
    lines = removed_token_lines(removed, fmt)
    if not lines:
        return generated
    body = generated if generated.endswith("\n") else generated + "\n"
    return body + "\n" + "\n".join(lines) + "\n"


__all__ = ["REMOVED_NOTE", "append_removed_token_comments", "removed_token_lines"]
