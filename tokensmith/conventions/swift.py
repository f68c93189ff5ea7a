"""Swift color convention detection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from .base import ConventionDetector
from .bugs import detect_swift_bugs

_STATIC_VAR_RE = re.compile(r"static\s+var\s+\w+")
_STATIC_LET_RE = re.compile(r"static\s+let\s+\w+")
_SNAKE_RE = re.compile(r"static\s+(?:let|var)\s+[a-z]+_[a-z]")
_CAMEL_RE = re.compile(r"static\s+(?:let|var)\s+[a-z][a-zA-Z0-9]+[A-Z]")


@dataclass(frozen=True)
class SwiftConventions:
    naming_case: str = "camel"
    use_computed_var: bool = False

    @property
    def keyword(self) -> str:
        return "var" if self.use_computed_var else "let"


BEST_PRACTICE_SWIFT_CONVENTIONS = SwiftConventions()


class SwiftConventionDetector(ConventionDetector):
    """Detects ``static let`` vs ``static var`` and camel vs snake member names."""

    name = "swift"

    def defaults(self) -> SwiftConventions:
        return BEST_PRACTICE_SWIFT_CONVENTIONS

    def inspect(self, reference: str) -> SwiftConventions:
        use_computed_var = bool(_STATIC_VAR_RE.search(reference)) and not _STATIC_LET_RE.search(reference)
        snake = len(_SNAKE_RE.findall(reference))
        camel = len(_CAMEL_RE.findall(reference))
        return SwiftConventions(
            naming_case="snake" if snake > camel else "camel",
            use_computed_var=use_computed_var,
        )

    def bug_warnings(self, reference: Optional[str]) -> List[str]:
        return detect_swift_bugs(reference) if reference else []


__all__ = ["BEST_PRACTICE_SWIFT_CONVENTIONS", "SwiftConventionDetector", "SwiftConventions"]
