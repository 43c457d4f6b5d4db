"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class DataSourceError(AppError):
    """Reading or fetching a historical draw file failed."""

    def __init__(self, source: str, cause: BaseException | str) -> None:
        super().__init__(
            code="data_source_error",
            message=f"Failed to load {source}: {cause}",
            status_code=502,
            details={"source": source, "cause": str(cause)},
        )
        self.source = source
        self.cause = cause


class GenerationExhausted(AppError):
    """Not enough eligible numbers remain to build a draw."""

    def __init__(self, message: str = "Unable to generate valid numbers with current exclusion rules", details: Any | None = None) -> None:
        super().__init__(code="generation_exhausted", message=message, status_code=422, details=details)


UnableToGenerate = GenerationExhausted
