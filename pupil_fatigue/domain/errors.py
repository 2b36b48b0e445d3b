"""Failures surfaced by the pipeline.

Malformed report rows never raise; they are dropped by the parser. Store
read failures degrade to empty collections inside the store implementations.
"""
from __future__ import annotations

from typing import Optional

from ..config.constants import ValidationMessages


class NoValidDataError(ValueError):
    """The report yielded zero samples; nothing was written."""

    def __init__(self, message: str = ValidationMessages.NO_VALID_DATA) -> None:
        super().__init__(message)


class StoreWriteError(RuntimeError):
    """The document store rejected a write.

    ``detail`` keeps the raw underlying error for display.
    """

    def __init__(self, message: str, detail: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.detail = detail

    def __str__(self) -> str:
        base = super().__str__()
        if self.detail is None:
            return base
        return f"{base} ({type(self.detail).__name__}: {self.detail})"
