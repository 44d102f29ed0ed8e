"""Predicates over learner-written condition and query strings.

Matching is textual, not semantic: conditions are compared against a
closed whitelist and queries by substring containment, both after all
whitespace is removed. Every predicate is total and returns False for
empty or non-string input.
"""

import re
from typing import Any, List

_WHITESPACE_RE = re.compile(r"\s+")

# ============== SUCCESS CONDITIONS ==============

ZERO_THRESHOLD_PATTERNS = frozenset({
    "result[0]==0",
    "result[0]<1",
    "result[0]<=0",
    "0==result[0]",
    "1>result[0]",
    "0>=result[0]",
})

AT_LEAST_ONE_THRESHOLD_PATTERNS = frozenset({
    "result[0]>=1",
    "result[0]>0",
    "1<=result[0]",
    "0<result[0]",
})

# ============== PROMQL QUERIES ==============

READY_METRIC = "kube_pod_container_status_ready"
NAMESPACE_FILTER = 'namespace="{{args.namespace}}"'
POD_FILTER = 'pod=~"echo-server-.*"'
AGGREGATION_RE = re.compile(r"^(sum|count)\(")

RESTART_QUERY_TEMPLATE = (
    'sum(increase(kube_pod_container_status_restarts_total'
    '{namespace="{{args.namespace}}",pod=~"echo-server-.*"}[1m]))'
    'orvector(0)'
)

# ============== PLACEHOLDERS ==============

PATH_BASENAME_TOKENS = ("{{path.basename}}", "{{ path.basename }}")


def normalize(text: str) -> str:
    """Remove all whitespace."""
    return _WHITESPACE_RE.sub("", text)


def matches_zero_threshold(condition: Any) -> bool:
    """True if the condition says "must be zero" in one of the accepted spellings."""
    if not condition or not isinstance(condition, str):
        return False
    return normalize(condition) in ZERO_THRESHOLD_PATTERNS


def matches_at_least_one_threshold(condition: Any) -> bool:
    """True if the condition says "at least one" in one of the accepted spellings."""
    if not condition or not isinstance(condition, str):
        return False
    return normalize(condition) in AT_LEAST_ONE_THRESHOLD_PATTERNS


def ready_containers_query_problems(query: Any) -> List[str]:
    """List the required clauses missing from a ready-containers query.

    Each clause is checked independently so callers can name every
    problem at once. An empty list means the query is valid.
    """
    if not query or not isinstance(query, str):
        return ["query is empty"]

    normalized = normalize(query)
    problems = []
    if READY_METRIC not in normalized:
        problems.append(f"missing metric {READY_METRIC}")
    if NAMESPACE_FILTER not in normalized:
        problems.append(f"missing namespace filter {NAMESPACE_FILTER}")
    if POD_FILTER not in normalized:
        problems.append(f"missing pod filter {POD_FILTER}")
    # A single value is needed, so the query must aggregate
    if not AGGREGATION_RE.match(normalized):
        problems.append("query must start with sum( or count(")
    return problems


def is_valid_ready_containers_query(query: Any) -> bool:
    return not ready_containers_query_problems(query)


def matches_restart_query_template(query: Any) -> bool:
    """True if the query still contains the provided restart query verbatim.

    Rewrites that are equivalent in PromQL but differ textually fail.
    """
    if not query or not isinstance(query, str):
        return False
    return RESTART_QUERY_TEMPLATE in normalize(query)


def contains_placeholder(value: Any, tokens=PATH_BASENAME_TOKENS) -> bool:
    """True if value is a string containing any spelling of the placeholder."""
    if not isinstance(value, str):
        return False
    return any(token in value for token in tokens)
