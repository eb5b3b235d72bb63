"""Structured error model for evlens."""

from typing import Any

from pydantic import BaseModel, Field


class StructuredError(BaseModel):
    """Structured error response format.

    All errors emitted by evlens follow this schema so callers can
    handle them programmatically and act on the remediation hint.
    """

    code: str = Field(
        ...,
        pattern=r"^[A-Z][A-Z0-9_]*$",
        description="Error code (e.g., CATALOG_NOT_FOUND)",
        examples=[
            "CONFIG_ERROR",
            "CATALOG_NOT_FOUND",
            "CATALOG_INVALID",
            "INDEX_FILE_ERROR",
            "VALIDATION_ERROR",
        ],
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
    )

    remediation: str = Field(
        ...,
        description="Suggested fix or next step",
    )

    retryable: bool = Field(
        ...,
        description="Whether retry may succeed",
    )

    context: dict[str, Any] | None = Field(
        default=None,
        description="Additional context (path, field, etc.)",
    )

    model_config = {"extra": "forbid"}


class ErrorCode:
    """Standard error codes for evlens."""

    CONFIG_ERROR = "CONFIG_ERROR"
    CATALOG_NOT_FOUND = "CATALOG_NOT_FOUND"
    CATALOG_INVALID = "CATALOG_INVALID"
    INDEX_FILE_ERROR = "INDEX_FILE_ERROR"
    INVALID_FORMAT = "INVALID_FORMAT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
