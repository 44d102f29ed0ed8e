"""Grader type definitions (Pydantic models).

Defines objective results, manifest load records and the aggregate
verification outcome. All structures are JSON-serializable so a run
can be rendered for the CI log or as a machine-readable summary.
"""

from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class FailureKind(str, Enum):
    """Why an objective failed."""
    FIELD_MISSING = "field_missing"
    VALUE_MISMATCH = "value_mismatch"
    PATTERN_MISMATCH = "pattern_mismatch"
    PRECONDITION_FAILED = "precondition_failed"


class ObjectiveResult(BaseModel):
    """Outcome of a single objective check."""
    model_config = ConfigDict(frozen=True)

    objective_id: str = Field(..., description="Stable objective identifier")
    description: str = Field(..., description="What the learner has to achieve")
    passed: bool
    message: str = ""
    failure: Optional[FailureKind] = None
    section: str = Field(default="", description="Report heading the objective is listed under")
    details: List[str] = Field(default_factory=list, description="Informational sub-lines")

    @classmethod
    def ok(cls, objective_id: str, description: str, message: str, **kwargs) -> "ObjectiveResult":
        return cls(objective_id=objective_id, description=description, passed=True, message=message, **kwargs)

    @classmethod
    def fail(
        cls,
        objective_id: str,
        description: str,
        message: str,
        failure: FailureKind,
        **kwargs
    ) -> "ObjectiveResult":
        return cls(
            objective_id=objective_id,
            description=description,
            passed=False,
            message=message,
            failure=failure,
            **kwargs
        )


class ManifestLoad(BaseModel):
    """Result of loading one manifest. document is None unless ok."""
    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    ok: bool
    message: str = ""
    error_code: Optional[str] = None
    document: Optional[Dict[Any, Any]] = None


class VerificationOutcome(BaseModel):
    """Aggregate result of a verification run."""
    challenge: str
    title: str = ""
    docs_url: str = ""
    passed: bool
    results: List[ObjectiveResult] = Field(default_factory=list)
    manifests: List[ManifestLoad] = Field(default_factory=list)

    @classmethod
    def from_results(
        cls,
        challenge: str,
        results: List[ObjectiveResult],
        manifests: Optional[List[ManifestLoad]] = None,
        title: str = "",
        docs_url: str = ""
    ) -> "VerificationOutcome":
        """Build an outcome whose passed flag is the AND of every load and result."""
        manifests = manifests or []
        passed = all(m.ok for m in manifests) and all(r.passed for r in results)
        return cls(
            challenge=challenge,
            title=title,
            docs_url=docs_url,
            passed=passed,
            results=list(results),
            manifests=list(manifests)
        )

    @property
    def failed_results(self) -> List[ObjectiveResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> Dict[str, Any]:
        """Machine-readable summary without the parsed documents."""
        return {
            "challenge": self.challenge,
            "title": self.title,
            "docs_url": self.docs_url,
            "passed": self.passed,
            "manifests": [m.model_dump(exclude={"document"}) for m in self.manifests],
            "objectives": [r.model_dump(mode="json") for r in self.results],
        }
