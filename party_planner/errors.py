"""
Error kinds reported by the party planner.

Service calls never raise for expected failures.  They return a
``(value, error)`` pair where ``error`` is a :class:`ServiceError`
describing what went wrong, and the caller decides what the user sees.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    TRANSPORT = "transport"  # network unreachable or non-2xx status
    PARSE = "parse"  # malformed response body
    VALIDATION = "validation"  # missing or unusable form field
    REFERENCE = "reference"  # RSVP points at an unknown guest


@dataclass
class ServiceError:
    """Describes a failed operation.

    Attributes:
        kind: The :class:`ErrorKind` of the failure.
        message: Human readable description.
        status_code: HTTP status returned by the service, if any.
    """

    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.kind.value} error ({self.status_code}): {self.message}"
        return f"{self.kind.value} error: {self.message}"
