"""
gitops_grader/errors.py

Grader errors. Manifest loading failures are terminal for the objectives
that depend on that manifest; InvalidChallengeError is terminal for the run.
All errors carry structured data for reporting.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class GraderError(Exception):
    """Base class for grader errors."""
    message: str
    error_code: str
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context
        }

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class ManifestError(GraderError):
    """A manifest could not be turned into a usable document."""
    path: str = ""
    name: str = ""

    def __init__(self, message: str, error_code: str, path: str = "", name: str = "", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.path = path
        self.name = name

    def to_dict(self) -> Dict[str, Any]:
        base = super().to_dict()
        base.update({"path": self.path, "name": self.name})
        return base


@dataclass
class ManifestNotFoundError(ManifestError):
    """Manifest path does not exist."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, error_code="NOT_FOUND", **kwargs)


@dataclass
class ManifestReadError(ManifestError):
    """Manifest exists but could not be read."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, error_code="READ_ERROR", **kwargs)


@dataclass
class ManifestParseError(ManifestError):
    """Manifest is not valid YAML."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, error_code="PARSE_ERROR", **kwargs)


@dataclass
class EmptyManifestError(ManifestError):
    """Manifest parsed to nothing usable."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, error_code="EMPTY_DOCUMENT", **kwargs)


@dataclass
class InvalidChallengeError(GraderError):
    """Challenge selector does not name a known challenge."""
    challenge: str = ""

    def __init__(self, message: str, challenge: str = "", **kwargs):
        super().__init__(message=message, error_code="INVALID_CHALLENGE", **kwargs)
        self.challenge = challenge
