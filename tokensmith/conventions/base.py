"""Base class for per-language convention detectors."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class ConventionDetector(ABC):
    """Infers a convention profile for one target language from a reference file."""

    name: str = ""

    @abstractmethod
    def defaults(self) -> Any:
        """Return the fixed best-practices profile."""

    @abstractmethod
    def inspect(self, reference: str) -> Any:
        """Run the pattern checks over ``reference`` and build a profile."""

    def detect(self, reference: Optional[str] = None, best_practices: bool = True) -> Any:
        """Return the profile to emit with.

        Best-practices mode, or a missing/blank reference, always yields the
        default profile; each inspected axis falls back to its default on its own.
        """
        if best_practices or not reference or not reference.strip():
            return self.defaults()
        return self.inspect(reference)

    def bug_warnings(self, reference: Optional[str]) -> List[str]:
        """Known anti-patterns found in the reference file."""
        return []
