# src/wyd/board/matchers.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class LabelMatcher(Protocol):
    """Decides whether a job label is the one the user asked for."""

    def matches(self, label: str) -> bool: ...


@dataclass(slots=True, frozen=True)
class SubstringMatcher:
    """Case-sensitive substring containment (the default)."""

    pattern: str

    def matches(self, label: str) -> bool:
        return self.pattern in label


@dataclass(slots=True, frozen=True)
class ExactLabelMatcher:
    label: str

    def matches(self, label: str) -> bool:
        return label == self.label


def as_matcher(pattern: str | LabelMatcher) -> LabelMatcher:
    if isinstance(pattern, str):
        return SubstringMatcher(pattern)
    return pattern
