"""Domain exceptions for conversion runs and CLI diagnostics.

Structural errors abort a single conversion run. Per-item problems are not
exceptions; they are recorded as `ItemWarning` values on the run result.
"""

from __future__ import annotations


class StructuralError(RuntimeError):
    """Raised when a conversion run cannot continue past a specific stage."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped structural error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint


class NotFoundError(StructuralError):
    """Raised when a required archive entry or input file does not exist."""


class ParseError(StructuralError):
    """Raised when a required document cannot be decoded."""
