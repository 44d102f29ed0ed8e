"""Tests for the condition and query predicates.

Validates:
1. Whitelist acceptance of threshold conditions
2. Whitespace insensitivity
3. Each ready-containers clause is required on its own
4. Exact-substring matching of the restart query
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from gitops_grader.predicates import (
    AT_LEAST_ONE_THRESHOLD_PATTERNS,
    ZERO_THRESHOLD_PATTERNS,
    contains_placeholder,
    is_valid_ready_containers_query,
    matches_at_least_one_threshold,
    matches_restart_query_template,
    matches_zero_threshold,
    normalize,
    ready_containers_query_problems,
)


VALID_READY_QUERY = 'sum(kube_pod_container_status_ready{namespace="{{args.namespace}}", pod=~"echo-server-.*"})'
VALID_RESTART_QUERY = (
    'sum(increase(kube_pod_container_status_restarts_total{namespace="{{args.namespace}}", '
    'pod=~"echo-server-.*"}[1m])) or vector(0)'
)


def spaced(text: str) -> str:
    """Insert assorted whitespace around every operator and bracket."""
    for token in ("==", "<=", ">=", "<", ">", "[", "]"):
        text = text.replace(token, f" \t{token}\n ")
    return text


# ============== SUCCESS CONDITIONS ==============

class TestZeroThreshold:

    @pytest.mark.parametrize("condition", sorted(ZERO_THRESHOLD_PATTERNS))
    def test_accepts_every_listed_form(self, condition):
        assert matches_zero_threshold(condition) is True

    def test_accepts_spaced_equality(self):
        assert matches_zero_threshold("result[0] == 0") is True

    def test_rejects_wrong_value(self):
        assert matches_zero_threshold("result[0] == 1") is False

    @pytest.mark.parametrize("condition", ["result[0] > 0", "result[1] == 0", "len(result) == 0", "result == 0"])
    def test_rejects_other_conditions(self, condition):
        assert matches_zero_threshold(condition) is False

    @pytest.mark.parametrize("condition", [None, "", 0, ["result[0]==0"]])
    def test_non_string_input_is_false(self, condition):
        assert matches_zero_threshold(condition) is False


class TestAtLeastOneThreshold:

    @pytest.mark.parametrize("condition", sorted(AT_LEAST_ONE_THRESHOLD_PATTERNS))
    def test_accepts_every_listed_form(self, condition):
        assert matches_at_least_one_threshold(condition) is True

    def test_accepts_reversed_comparison(self):
        assert matches_at_least_one_threshold("0 < result[0]") is True

    def test_rejects_zero_check(self):
        assert matches_at_least_one_threshold("result[0] < 1") is False

    @pytest.mark.parametrize("condition", [None, "", 1])
    def test_non_string_input_is_false(self, condition):
        assert matches_at_least_one_threshold(condition) is False


class TestWhitespaceInsensitivity:

    CONDITIONS = sorted(ZERO_THRESHOLD_PATTERNS | AT_LEAST_ONE_THRESHOLD_PATTERNS) + [
        "result[0] == 1",
        "result[0] != 0",
        "result[0] >= 2",
    ]

    @pytest.mark.parametrize("condition", CONDITIONS)
    def test_zero_threshold_ignores_whitespace(self, condition):
        assert matches_zero_threshold(spaced(condition)) == matches_zero_threshold(condition)

    @pytest.mark.parametrize("condition", CONDITIONS)
    def test_at_least_one_ignores_whitespace(self, condition):
        assert matches_at_least_one_threshold(spaced(condition)) == matches_at_least_one_threshold(condition)

    def test_normalize_removes_all_whitespace(self):
        assert normalize(" a\tb\nc  d ") == "abcd"


# ============== READY CONTAINERS QUERY ==============

class TestReadyContainersQuery:

    def test_valid_sum_query(self):
        assert is_valid_ready_containers_query(VALID_READY_QUERY) is True

    def test_valid_count_query(self):
        query = 'count(kube_pod_container_status_ready{namespace="{{args.namespace}}",pod=~"echo-server-.*"} == 1)'
        assert is_valid_ready_containers_query(query) is True

    def test_leading_whitespace_is_ignored(self):
        assert is_valid_ready_containers_query("\n   " + VALID_READY_QUERY + "\n") is True

    def test_missing_metric_fails(self):
        query = VALID_READY_QUERY.replace("kube_pod_container_status_ready", "kube_pod_container_status_running")
        assert is_valid_ready_containers_query(query) is False
        assert len(ready_containers_query_problems(query)) == 1

    def test_missing_namespace_filter_fails(self):
        query = VALID_READY_QUERY.replace('namespace="{{args.namespace}}"', 'namespace="staging"')
        assert is_valid_ready_containers_query(query) is False
        assert ready_containers_query_problems(query) == [
            'missing namespace filter namespace="{{args.namespace}}"'
        ]

    def test_missing_pod_filter_fails(self):
        query = VALID_READY_QUERY.replace('pod=~"echo-server-.*"', 'pod=~"other-.*"')
        assert is_valid_ready_containers_query(query) is False
        assert len(ready_containers_query_problems(query)) == 1

    def test_missing_aggregation_fails(self):
        query = VALID_READY_QUERY[len("sum("):-1]
        assert is_valid_ready_containers_query(query) is False
        assert ready_containers_query_problems(query) == ["query must start with sum( or count("]

    def test_other_aggregation_fails(self):
        query = "avg(" + VALID_READY_QUERY[len("sum("):]
        assert is_valid_ready_containers_query(query) is False

    def test_aggregation_must_be_at_start(self):
        query = "1 * " + VALID_READY_QUERY
        assert is_valid_ready_containers_query(query) is False

    def test_problems_lists_every_missing_clause(self):
        assert len(ready_containers_query_problems("up")) == 4

    @pytest.mark.parametrize("query", [None, "", 42])
    def test_non_string_input_is_false(self, query):
        assert is_valid_ready_containers_query(query) is False


# ============== RESTART QUERY ==============

class TestRestartQueryTemplate:

    def test_exact_query_matches(self):
        assert matches_restart_query_template(VALID_RESTART_QUERY) is True

    def test_reformatted_whitespace_matches(self):
        query = VALID_RESTART_QUERY.replace("(", "(\n  ").replace(",", ",\n   ")
        assert matches_restart_query_template(query) is True

    def test_surrounding_text_is_allowed(self):
        assert matches_restart_query_template("(" + VALID_RESTART_QUERY + ") * 1") is True

    def test_reordered_labels_are_rejected(self):
        query = VALID_RESTART_QUERY.replace(
            'namespace="{{args.namespace}}", pod=~"echo-server-.*"',
            'pod=~"echo-server-.*", namespace="{{args.namespace}}"',
        )
        assert matches_restart_query_template(query) is False

    def test_missing_vector_fallback_is_rejected(self):
        assert matches_restart_query_template(VALID_RESTART_QUERY.replace(" or vector(0)", "")) is False

    def test_changed_range_is_rejected(self):
        assert matches_restart_query_template(VALID_RESTART_QUERY.replace("[1m]", "[5m]")) is False

    @pytest.mark.parametrize("query", [None, ""])
    def test_empty_input_is_false(self, query):
        assert matches_restart_query_template(query) is False


# ============== PLACEHOLDERS ==============

class TestContainsPlaceholder:

    @pytest.mark.parametrize("value", ["echo-{{path.basename}}", "{{ path.basename }}-echo"])
    def test_both_spellings_accepted(self, value):
        assert contains_placeholder(value) is True

    @pytest.mark.parametrize("value", ["echo-server", "{{path}}", "{{ path.basename}}", None, 3])
    def test_other_values_rejected(self, value):
        assert contains_placeholder(value) is False
