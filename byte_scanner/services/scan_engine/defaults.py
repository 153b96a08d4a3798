"""Process-wide separator template copied into every new session."""

from __future__ import annotations

from dataclasses import dataclass

from .separators import SeparatorSet

# space, horizontal tab, line feed, colon
DEFAULT_SEPARATORS = b" \t\n:"


@dataclass(frozen=True)
class ServiceDefaults:
    separators: bytes = DEFAULT_SEPARATORS

    def separator_set(self) -> SeparatorSet:
        """Return an independent copy of the template for a new session."""
        return SeparatorSet(self.separators)
