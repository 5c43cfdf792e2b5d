"""Translate storage and codec errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Optional

from folio.domain.errors import DocumentFormatError
from folio.domain.ports import UseCaseError


def map_storage_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map persistence exceptions to stable UseCaseError codes.

    Args:
        exc (Exception): Error raised by a port or the document codec.
        default_code (str): Code used when the error is not recognized.
        default_message (Optional[str]): Message used instead of ``str(exc)``.

    Returns:
        UseCaseError: Error ready to be shown by the views.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, DocumentFormatError):
        return UseCaseError("INVALID_PORTFOLIO", _compose_error_message("Not a valid portfolio file", str(exc)))
    if isinstance(exc, FileNotFoundError):
        return UseCaseError(
            "FILE_NOT_FOUND",
            _compose_error_message("File not found", exc.filename),
            meta={"path": exc.filename} if exc.filename else None,
        )
    if isinstance(exc, PermissionError):
        return UseCaseError(
            "PERMISSION_DENIED",
            _compose_error_message("Permission denied", exc.filename),
            meta={"path": exc.filename} if exc.filename else None,
        )
    if isinstance(exc, OSError):
        return UseCaseError("FILE_ERROR", _compose_error_message("File error", exc.strerror or str(exc)))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    """Compose a user-facing error message with optional hint text."""
    hint_text = (str(hint) if hint else "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_storage_error"]
