"""Challenge evaluation engine.

Loads every manifest of a challenge, then runs its objectives in
declaration order. Evaluation never stops early: a failed objective or
an unloadable manifest is recorded and the next objective still runs,
so the learner gets the complete report in one run.
"""

from pathlib import Path
from typing import Optional, Union

from .challenges import Challenge, get_challenge
from .loader import resolve_path, try_load_manifest
from .objectives import EvaluationContext
from .types import VerificationOutcome


def load_manifests(challenge: Challenge, workspace: Optional[Union[str, Path]] = None) -> EvaluationContext:
    """Load all manifests of a challenge into a fresh evaluation context."""
    ctx = EvaluationContext()
    for key, spec in challenge.manifests.items():
        load = try_load_manifest(resolve_path(spec.path, workspace), spec.name)
        ctx.loads[key] = load
        if load.ok:
            ctx.documents[key] = load.document
    return ctx


def evaluate_challenge(
    challenge: Challenge,
    workspace: Optional[Union[str, Path]] = None
) -> VerificationOutcome:
    """Evaluate a challenge against the manifests under workspace.

    Args:
        challenge: Challenge definition from the registry
        workspace: Root that manifest paths are relative to (default: cwd)

    Returns:
        VerificationOutcome; passed is the AND of every load and objective
    """
    ctx = load_manifests(challenge, workspace)

    for objective in challenge.objectives:
        ctx.results.append(objective.run(ctx))

    return VerificationOutcome.from_results(
        challenge=challenge.variant.value,
        results=ctx.results,
        manifests=list(ctx.loads.values()),
        title=challenge.title,
        docs_url=challenge.docs_url
    )


def evaluate(name: str, workspace: Optional[Union[str, Path]] = None) -> VerificationOutcome:
    """Evaluate a challenge selected by its CI input value.

    Raises:
        InvalidChallengeError: If name is not a known challenge
    """
    return evaluate_challenge(get_challenge(name), workspace)
