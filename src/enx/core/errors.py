"""enx domain exceptions."""

from __future__ import annotations


class EnxError(Exception):
    """Base for enx domain errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class UnsupportedFileTypeError(EnxError):
    """Config path matches no known format. Caller configuration mistake."""


class ModuleExportError(EnxError):
    """Python config module does not export a mapping."""
