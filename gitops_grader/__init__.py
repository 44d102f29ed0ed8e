"""GitOps Challenge Grader v1.0 - Deterministic + Explainable.

Loads learner manifests, checks them against a fixed, ordered list of
objectives per challenge and reports every result in one run.
"""

from .fields import MISSING, safe_get, parse_path, find_by_name
from .types import ObjectiveResult, VerificationOutcome, ManifestLoad, FailureKind
from .errors import (
    GraderError, ManifestError, ManifestNotFoundError, ManifestReadError,
    ManifestParseError, EmptyManifestError, InvalidChallengeError
)
from .loader import load_manifest, try_load_manifest
from .predicates import (
    matches_zero_threshold, matches_at_least_one_threshold,
    is_valid_ready_containers_query, matches_restart_query_template
)
from .challenges import ChallengeVariant, Challenge, get_challenge
from .evaluator import evaluate, evaluate_challenge
from .reporter import Reporter

__version__ = "1.0.0"

__all__ = [
    "MISSING",
    "safe_get",
    "parse_path",
    "find_by_name",
    "ObjectiveResult",
    "VerificationOutcome",
    "ManifestLoad",
    "FailureKind",
    "GraderError",
    "ManifestError",
    "ManifestNotFoundError",
    "ManifestReadError",
    "ManifestParseError",
    "EmptyManifestError",
    "InvalidChallengeError",
    "load_manifest",
    "try_load_manifest",
    "matches_zero_threshold",
    "matches_at_least_one_threshold",
    "is_valid_ready_containers_query",
    "matches_restart_query_template",
    "ChallengeVariant",
    "Challenge",
    "get_challenge",
    "evaluate",
    "evaluate_challenge",
    "Reporter",
]
