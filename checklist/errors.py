from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ChecklistError(Exception):
    """Fatal error raised while building the checklist.

    Parameters
    ----------
    code:
        Short machine readable error code.
    message:
        Human readable error message.
    """

    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code}: {self.message}"


class MissingFieldError(ChecklistError):
    """A required value (scientific name, first observation) is empty."""

    def __init__(self, message: str) -> None:
        super().__init__("missing_field", message)


class VocabularyError(ChecklistError):
    """A source value has no entry in a closed vocabulary."""

    def __init__(self, message: str) -> None:
        super().__init__("unknown_vocabulary", message)


__all__ = ["ChecklistError", "MissingFieldError", "VocabularyError"]
