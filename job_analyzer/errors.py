"""Error type shared by every stage of the analysis."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    FILE_READ = "FileReadError"
    VALIDATION = "ValidationError"
    EMPTY_DATASET = "EmptyDatasetError"
    PROCESSING = "ProcessingError"
    EXPORT = "ExportError"


class AnalyzerError(Exception):
    """Single error type; ``kind`` tells callers what failed."""

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause
        self.timestamp = datetime.now()

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

    def details(self) -> dict[str, Any]:
        """Return a serializable description of the error."""

        return {
            "kind": self.kind.value,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause is not None else None,
        }
