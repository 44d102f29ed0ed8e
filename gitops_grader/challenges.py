"""Challenge registry.

Each ChallengeVariant maps to one Challenge: its manifests and its
ordered objectives. Adding a challenge means adding a variant and a
registry entry.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .errors import InvalidChallengeError
from .objectives import (
    ANALYSIS_TEMPLATE,
    APPSET,
    BEGINNER_OBJECTIVES,
    INTERMEDIATE_OBJECTIVES,
    ROLLOUT,
    Objective,
)

DOCS_BASE_URL = "https://dynatrace-oss.github.io/open-ecosystem-challenges"


class ChallengeVariant(str, Enum):
    """Known challenges, keyed by the CI input value."""
    ECHOES_BEGINNER = "01-echoes-lost-in-orbit_beginner"
    ECHOES_INTERMEDIATE = "01-echoes-lost-in-orbit_intermediate"


@dataclass(frozen=True)
class ManifestSpec:
    """Where a challenge expects a manifest, relative to the workspace."""
    path: str
    name: str


@dataclass(frozen=True)
class Challenge:
    variant: ChallengeVariant
    title: str
    docs_url: str
    manifests: Dict[str, ManifestSpec] = field(default_factory=dict)
    objectives: List[Objective] = field(default_factory=list)


CHALLENGES: Dict[ChallengeVariant, Challenge] = {
    ChallengeVariant.ECHOES_BEGINNER: Challenge(
        variant=ChallengeVariant.ECHOES_BEGINNER,
        title="🚀 Adventure 01 | 🟢 Beginner (Broken Echoes)",
        docs_url=f"{DOCS_BASE_URL}/01-echoes-lost-in-orbit/beginner/#objective",
        manifests={
            APPSET: ManifestSpec(
                "adventures/01-echoes-lost-in-orbit/beginner/manifests/appset.yaml",
                "ApplicationSet",
            ),
        },
        objectives=BEGINNER_OBJECTIVES,
    ),
    ChallengeVariant.ECHOES_INTERMEDIATE: Challenge(
        variant=ChallengeVariant.ECHOES_INTERMEDIATE,
        title="🚀 Adventure 01 | 🟡 Intermediate (The Silent Canary)",
        docs_url=f"{DOCS_BASE_URL}/01-echoes-lost-in-orbit/intermediate/#objective",
        manifests={
            ROLLOUT: ManifestSpec(
                "adventures/01-echoes-lost-in-orbit/intermediate/manifests/base/rollout.yaml",
                "Rollout",
            ),
            ANALYSIS_TEMPLATE: ManifestSpec(
                "adventures/01-echoes-lost-in-orbit/intermediate/manifests/base/analysis-template.yaml",
                "AnalysisTemplate",
            ),
        },
        objectives=INTERMEDIATE_OBJECTIVES,
    ),
}


def get_challenge(name: str) -> Challenge:
    """Look up a challenge by its CI input value.

    Raises:
        InvalidChallengeError: If name is not a known challenge
    """
    try:
        variant = ChallengeVariant(name)
    except ValueError:
        raise InvalidChallengeError("Invalid challenge specified.", challenge=str(name))
    return CHALLENGES[variant]


def list_challenges() -> List[str]:
    return [v.value for v in ChallengeVariant]
