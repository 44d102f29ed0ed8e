"""Shared manifest fixtures.

Manifests are built as dicts and dumped with PyYAML so tests can
mutate a single field before writing the workspace.
"""

import copy
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import yaml

from gitops_grader.challenges import CHALLENGES, ChallengeVariant

BEGINNER = CHALLENGES[ChallengeVariant.ECHOES_BEGINNER]
INTERMEDIATE = CHALLENGES[ChallengeVariant.ECHOES_INTERMEDIATE]

PROMETHEUS = "http://prometheus-server.prometheus.svc.cluster.local"

RESTART_QUERY = (
    'sum(increase(kube_pod_container_status_restarts_total{namespace="{{args.namespace}}", '
    'pod=~"echo-server-.*"}[1m])) or vector(0)\n'
)
READY_QUERY = (
    'sum(kube_pod_container_status_ready{namespace="{{args.namespace}}", pod=~"echo-server-.*"})\n'
)

APPSET = {
    "apiVersion": "argoproj.io/v1alpha1",
    "kind": "ApplicationSet",
    "metadata": {"name": "echo-server", "namespace": "argocd"},
    "spec": {
        "generators": [
            {
                "git": {
                    "repoURL": "https://github.com/example/open-ecosystem-challenges.git",
                    "revision": "HEAD",
                    "directories": [
                        {"path": "adventures/01-echoes-lost-in-orbit/beginner/manifests/overlays/*"}
                    ],
                }
            }
        ],
        "template": {
            "metadata": {"name": "echo-server-{{path.basename}}"},
            "spec": {
                "project": "default",
                "source": {
                    "repoURL": "https://github.com/example/open-ecosystem-challenges.git",
                    "targetRevision": "HEAD",
                    "path": "{{path}}",
                },
                "destination": {
                    "server": "https://kubernetes.default.svc",
                    "namespace": "echo-{{path.basename}}",
                },
                "syncPolicy": {"automated": {"selfHeal": True, "prune": True}},
            },
        },
    },
}

ROLLOUT = {
    "apiVersion": "argoproj.io/v1alpha1",
    "kind": "Rollout",
    "metadata": {"name": "echo-server"},
    "spec": {
        "replicas": 2,
        "strategy": {
            "canary": {
                "steps": [{"setWeight": 50}, {"pause": {"duration": "1m"}}],
                "analysis": {"templates": [{"templateName": "echo-server-health"}]},
            }
        },
        "template": {
            "metadata": {"labels": {"app": "echo-server"}},
            "spec": {
                "containers": [
                    {"name": "echo-server", "image": "stefanprodan/podinfo:6.9.3"}
                ]
            },
        },
    },
}

ANALYSIS_TEMPLATE = {
    "apiVersion": "argoproj.io/v1alpha1",
    "kind": "AnalysisTemplate",
    "metadata": {"name": "echo-server-health"},
    "spec": {
        "args": [{"name": "namespace"}],
        "metrics": [
            {
                "name": "container-restarts",
                "interval": "1m",
                "successCondition": "result[0] == 0",
                "provider": {"prometheus": {"address": PROMETHEUS, "query": RESTART_QUERY}},
            },
            {
                "name": "ready-containers",
                "interval": "1m",
                "successCondition": "result[0] >= 1",
                "provider": {"prometheus": {"address": PROMETHEUS, "query": READY_QUERY}},
            },
        ],
    },
}


def write_manifest(root: Path, relative_path: str, document) -> Path:
    """Write a dict as YAML (or a str verbatim) under root."""
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(document, str):
        path.write_text(document, encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def appset():
    return copy.deepcopy(APPSET)


@pytest.fixture
def rollout():
    return copy.deepcopy(ROLLOUT)


@pytest.fixture
def analysis_template():
    return copy.deepcopy(ANALYSIS_TEMPLATE)


@pytest.fixture
def beginner_workspace(tmp_path):
    """Return a writer that places an ApplicationSet and returns the workspace root."""
    def _write(document):
        write_manifest(tmp_path, BEGINNER.manifests["appset"].path, document)
        return tmp_path
    return _write


@pytest.fixture
def intermediate_workspace(tmp_path):
    """Return a writer for Rollout/AnalysisTemplate; pass None to leave one out."""
    def _write(rollout_doc, template_doc):
        if rollout_doc is not None:
            write_manifest(tmp_path, INTERMEDIATE.manifests["rollout"].path, rollout_doc)
        if template_doc is not None:
            write_manifest(tmp_path, INTERMEDIATE.manifests["analysis_template"].path, template_doc)
        return tmp_path
    return _write
