"""Objective checks for each challenge.

An Objective pairs a description with a check function. Checks read
manifests only through safe_get() and report every failure as a
FailureKind value on the result; they never raise for learner input.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .fields import MISSING, find_by_name, is_present, safe_get
from .predicates import (
    contains_placeholder,
    is_valid_ready_containers_query,
    matches_at_least_one_threshold,
    matches_restart_query_template,
    matches_zero_threshold,
    ready_containers_query_problems,
)
from .types import FailureKind, ManifestLoad, ObjectiveResult

SPEC_SECTION = "spec"
OBJECTIVES_SECTION = "objectives"


@dataclass
class EvaluationContext:
    """Documents loaded for a run and the results recorded so far."""
    documents: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    loads: Dict[str, ManifestLoad] = field(default_factory=dict)
    results: List[ObjectiveResult] = field(default_factory=list)

    def document(self, key: str) -> Dict[str, Any]:
        return self.documents[key]


@dataclass(frozen=True)
class Objective:
    """A single ordered check within a challenge."""
    objective_id: str
    description: str
    check: Callable[["Objective", EvaluationContext], ObjectiveResult]
    requires: Tuple[str, ...] = ()
    section: str = OBJECTIVES_SECTION

    def passed(self, message: str, **kwargs) -> ObjectiveResult:
        return ObjectiveResult.ok(
            self.objective_id, self.description, message, section=self.section, **kwargs
        )

    def failed(self, message: str, failure: FailureKind, **kwargs) -> ObjectiveResult:
        return ObjectiveResult.fail(
            self.objective_id, self.description, message, failure, section=self.section, **kwargs
        )

    def run(self, ctx: EvaluationContext) -> ObjectiveResult:
        """Run the check, or fail it if a required manifest did not load."""
        for key in self.requires:
            load = ctx.loads.get(key)
            if load is None or not load.ok:
                message = load.message if load is not None else f"Manifest '{key}' was not loaded"
                return self.failed(message, FailureKind.PRECONDITION_FAILED)
        return self.check(self, ctx)


def describe(value: Any) -> str:
    """Render a found value for a failure message."""
    if value is MISSING:
        return "<missing>"
    if value is None:
        return "<null>"
    return str(value)


# =============================================================================
# BEGINNER: ApplicationSet
# =============================================================================

APPSET = "appset"
APPSET_API_VERSION = "argoproj.io/v1alpha1"
APPSET_KIND = "ApplicationSet"
APPSET_NAMESPACE = "argocd"
APPSET_DOCS_URL = "https://argo-cd.readthedocs.io/en/stable/operator-manual/applicationset/"

SYNC_AUTOMATED = "spec.template.spec.syncPolicy.automated"


def check_appset_spec(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    appset = ctx.document(APPSET)
    problems = []
    all_missing = True

    expected_literals = (
        ("apiVersion", APPSET_API_VERSION),
        ("kind", APPSET_KIND),
        ("metadata.namespace", APPSET_NAMESPACE),
    )
    for path, expected in expected_literals:
        found = safe_get(appset, path)
        if found != expected:
            all_missing = all_missing and found is MISSING
            problems.append(f"{path}: expected '{expected}', found '{describe(found)}'")

    for path in ("metadata.name", "spec.template.spec.source", "spec.template.spec.destination"):
        if not is_present(safe_get(appset, path)):
            problems.append(f"{path}: expected a value, found nothing")

    if problems:
        return obj.failed(
            "ApplicationSet specification is invalid or incomplete. Please ensure your "
            f"ApplicationSet follows the Argo CD specification: {APPSET_DOCS_URL}",
            FailureKind.FIELD_MISSING if all_missing else FailureKind.VALUE_MISMATCH,
            details=problems
        )
    return obj.passed("ApplicationSet specification is valid")


def check_generators(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    generators = safe_get(ctx.document(APPSET), "spec.generators")
    if generators is MISSING or generators is None:
        return obj.failed("ApplicationSet has no generators configured", FailureKind.FIELD_MISSING)
    if not isinstance(generators, list) or not generators:
        return obj.failed(
            f"ApplicationSet generators must be a non-empty list. Found: {describe(generators)}",
            FailureKind.VALUE_MISMATCH
        )
    return obj.passed(f"ApplicationSet has {len(generators)} generator(s)")


def check_distinct_names(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    app_name = safe_get(ctx.document(APPSET), "spec.template.metadata.name")
    if not is_present(app_name):
        return obj.failed("Application name template is not configured", FailureKind.FIELD_MISSING)
    if not contains_placeholder(app_name):
        return obj.failed(
            f"Application names will not be distinct. Found: {describe(app_name)}",
            FailureKind.PATTERN_MISMATCH
        )
    return obj.passed("Application names are configured to be distinct")


def check_isolated_namespaces(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    namespace = safe_get(ctx.document(APPSET), "spec.template.spec.destination.namespace")
    if not is_present(namespace):
        return obj.failed("Application namespace is not configured", FailureKind.FIELD_MISSING)
    if not contains_placeholder(namespace):
        return obj.failed(
            f"Applications will not deploy to isolated namespaces. Found: {describe(namespace)}",
            FailureKind.PATTERN_MISMATCH
        )
    return obj.passed("Each Application is configured to deploy to its own isolated namespace")


def check_self_heal(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    automated = safe_get(ctx.document(APPSET), SYNC_AUTOMATED)
    if not isinstance(automated, dict):
        return obj.failed("System is not resilient to manual changes", FailureKind.FIELD_MISSING)
    self_heal = safe_get(automated, "selfHeal")
    if self_heal is not True:
        return obj.failed(
            f"System is not resilient to manual changes. Found selfHeal: {describe(self_heal)}",
            FailureKind.FIELD_MISSING if self_heal is MISSING else FailureKind.VALUE_MISMATCH
        )
    return obj.passed("System is resilient to changes from outside Git")


def check_prune(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    automated = safe_get(ctx.document(APPSET), SYNC_AUTOMATED)
    if not isinstance(automated, dict):
        return obj.failed("Automated updates are not configured", FailureKind.FIELD_MISSING)
    prune = safe_get(automated, "prune")
    if prune is not True:
        return obj.failed(
            f"Stale resources will not be removed automatically. Found prune: {describe(prune)}",
            FailureKind.FIELD_MISSING if prune is MISSING else FailureKind.VALUE_MISMATCH
        )
    return obj.passed("Updates are configured to happen automatically without leaving stale resources behind")


BEGINNER_OBJECTIVES = [
    Objective(
        "applicationset-spec",
        "ApplicationSet follows the Argo CD specification",
        check_appset_spec,
        requires=(APPSET,),
        section=SPEC_SECTION,
    ),
    Objective(
        "generators",
        "ApplicationSet generates Applications from at least one generator",
        check_generators,
        requires=(APPSET,),
        section=SPEC_SECTION,
    ),
    Objective(
        "distinct-names",
        "See two distinct Applications in the Argo CD dashboard (one per environment)",
        check_distinct_names,
        requires=(APPSET,),
    ),
    Objective(
        "isolated-namespaces",
        "Ensure each Application deploys to its own isolated namespace",
        check_isolated_namespaces,
        requires=(APPSET,),
    ),
    Objective(
        "self-heal",
        "Make the system resilient so changes from outside Git cannot break it",
        check_self_heal,
        requires=(APPSET,),
    ),
    Objective(
        "prune",
        "Confirm that updates happen automatically without leaving stale resources behind",
        check_prune,
        requires=(APPSET,),
    ),
]


# =============================================================================
# INTERMEDIATE: Rollout + AnalysisTemplate
# =============================================================================

ROLLOUT = "rollout"
ANALYSIS_TEMPLATE = "analysis_template"
EXPECTED_IMAGE = "stefanprodan/podinfo:6.9.3"
PROMETHEUS_ADDRESS = "http://prometheus-server.prometheus.svc.cluster.local"

IMAGE_PATH = "spec.template.spec.containers[0].image"
# Containers placed directly under spec.spec
LEGACY_IMAGE_PATH = "spec.spec.containers[0].image"


def check_image(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    rollout = ctx.document(ROLLOUT)
    image = safe_get(rollout, IMAGE_PATH)
    if image is MISSING:
        image = safe_get(rollout, LEGACY_IMAGE_PATH)
    if not is_present(image):
        return obj.failed("Unable to find pod info image in Rollout manifest", FailureKind.FIELD_MISSING)
    if image != EXPECTED_IMAGE:
        return obj.failed(
            f"Image and/or tag is incorrect. Found: {describe(image)}. Expected: {EXPECTED_IMAGE}",
            FailureKind.VALUE_MISMATCH
        )
    return obj.passed(f"Correct image and tag found ({EXPECTED_IMAGE})")


def _check_prometheus_metric(
    obj: Objective,
    ctx: EvaluationContext,
    metric_name: str,
    condition_ok: Callable[[Any], bool],
    condition_message: str,
    query_ok: Callable[[Any], bool],
    query_message: str,
    query_details: Optional[Callable[[Any], List[str]]] = None,
) -> ObjectiveResult:
    metrics = safe_get(ctx.document(ANALYSIS_TEMPLATE), "spec.metrics")
    metric = find_by_name(metrics, metric_name)
    if metric is MISSING:
        return obj.failed(
            f"Unable to find '{metric_name}' metric query in AnalysisTemplate",
            FailureKind.FIELD_MISSING
        )

    prometheus = safe_get(metric, "provider.prometheus")
    if not isinstance(prometheus, dict):
        return obj.failed(
            f"'{metric_name}' metric does not use Prometheus as data provider",
            FailureKind.FIELD_MISSING
        )

    address = safe_get(prometheus, "address")
    if address != PROMETHEUS_ADDRESS:
        return obj.failed(
            "The analysis template can't read Prometheus metrics in all queries. "
            f"Found: {describe(address)}. Expected: {PROMETHEUS_ADDRESS}",
            FailureKind.FIELD_MISSING if not is_present(address) else FailureKind.VALUE_MISMATCH
        )

    condition = safe_get(metric, "successCondition")
    if not condition_ok(condition):
        return obj.failed(
            f"{condition_message}. Found: {describe(condition)}",
            FailureKind.FIELD_MISSING if not is_present(condition) else FailureKind.PATTERN_MISMATCH
        )

    query = safe_get(prometheus, "query")
    if not query_ok(query):
        details = query_details(query) if query_details is not None else []
        return obj.failed(
            query_message,
            FailureKind.FIELD_MISSING if not is_present(query) else FailureKind.PATTERN_MISMATCH,
            details=details
        )

    return obj.passed(f"`{metric_name}` metric query is correctly configured")


def check_container_restarts(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    return _check_prometheus_metric(
        obj,
        ctx,
        "container-restarts",
        matches_zero_threshold,
        "The analysis template does not check for zero container restarts during rollout",
        matches_restart_query_template,
        "The PromQL query to check for container restarts has been changed",
    )


def check_ready_containers(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    return _check_prometheus_metric(
        obj,
        ctx,
        "ready-containers",
        matches_at_least_one_threshold,
        "The analysis template does not check for at least one ready container during rollout",
        is_valid_ready_containers_query,
        "The PromQL query to check for ready containers is incorrect or missing. It should check "
        "how many containers of echo-server pods are ready in the correct namespace.",
        ready_containers_query_problems,
    )


def check_canary_progression(obj: Objective, ctx: EvaluationContext) -> ObjectiveResult:
    """Progression is implied by every earlier objective and manifest passing."""
    all_loaded = all(load.ok for load in ctx.loads.values())
    if all_loaded and all(r.passed for r in ctx.results):
        return obj.passed(
            "Rollouts should be automatically progressing and completing successfully "
            "if all other objectives are met"
        )
    return obj.failed(
        "Rollouts may not be progressing automatically due to previous errors",
        FailureKind.PRECONDITION_FAILED
    )


INTERMEDIATE_OBJECTIVES = [
    Objective(
        "image",
        "Pod info version 6.9.3 deployed successfully in both staging and production environments",
        check_image,
        requires=(ROLLOUT,),
    ),
    Objective(
        "container-restarts",
        "A working `container-restarts` PromQL query in the AnalysisTemplate validates application health",
        check_container_restarts,
        requires=(ANALYSIS_TEMPLATE,),
    ),
    Objective(
        "ready-containers",
        "A working `ready-containers` PromQL query in the AnalysisTemplate validates application health",
        check_ready_containers,
        requires=(ANALYSIS_TEMPLATE,),
    ),
    Objective(
        "canary-progression",
        "Rollouts automatically progress through canary stages and complete successfully",
        check_canary_progression,
    ),
]
