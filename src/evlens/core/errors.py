"""Structured error handling for evlens."""

import sys
from typing import Any, NoReturn

from evlens.models.error import ErrorCode, StructuredError


class EvlensError(Exception):
    """Base exception for evlens errors.

    Wraps a StructuredError for consistent error handling.
    """

    def __init__(
        self,
        code: str,
        message: str,
        remediation: str,
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            retryable=retryable,
            context=context,
        )
        super().__init__(message)

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError."""
        return self.error

    def to_structured_error(self) -> dict:
        """Convert to JSON-serializable dict for output."""
        return self.error.model_dump(mode="json", exclude_none=True)


class ConfigError(EvlensError):
    """Settings file could not be loaded or validated."""

    def __init__(self, message: str, path: str | None = None, errors: list[str] | None = None):
        context: dict[str, Any] = {}
        if path:
            context["path"] = path
        if errors:
            context["errors"] = errors
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            remediation="Fix the settings file or remove the --config option",
            retryable=False,
            context=context or None,
        )


class CatalogNotFoundError(EvlensError):
    """Catalog file not found."""

    def __init__(self, path: str):
        super().__init__(
            code=ErrorCode.CATALOG_NOT_FOUND,
            message=f"Catalog file {path} not found",
            remediation="Check the --catalog path or the 'catalog' setting",
            retryable=False,
            context={"path": path},
        )


class CatalogValidationError(EvlensError):
    """Catalog file failed validation."""

    def __init__(self, path: str, errors: list[str]):
        super().__init__(
            code=ErrorCode.CATALOG_INVALID,
            message=f"Catalog '{path}' failed validation",
            remediation="Each event needs a label, a category and a severity of info, warn or critical",
            retryable=False,
            context={"path": path, "errors": errors},
        )


class IndexFileError(EvlensError):
    """Index source file could not be read."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(
            code=ErrorCode.INDEX_FILE_ERROR,
            message=message,
            remediation="Check that the file exists, is readable and is a CSV with a header row",
            retryable=True,
            context={"path": path} if path else None,
        )


class ValidationError(EvlensError):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            remediation="Check the input parameters and try again",
            retryable=False,
            context={"field": field} if field else None,
        )


def handle_error(error: EvlensError | Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error by outputting it and exiting.

    Args:
        error: The error to handle
        exit_code: Exit code to use
    """
    from evlens.cli.output import output_error

    if isinstance(error, EvlensError):
        output_error(error.to_structured())
    else:
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="This is an unexpected error. Please report it.",
            retryable=False,
            context={"type": type(error).__name__},
        )
        output_error(structured)

    sys.exit(exit_code)
