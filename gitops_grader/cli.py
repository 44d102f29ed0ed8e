#!/usr/bin/env python3
"""Command-line entry point for the challenge grader.

Usage:
    python3 -m gitops_grader --challenge 01-echoes-lost-in-orbit_beginner
    INPUT_CHALLENGE=01-echoes-lost-in-orbit_intermediate python3 -m gitops_grader --workspace .
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .challenges import list_challenges
from .config import GraderSettings
from .errors import InvalidChallengeError
from .evaluator import evaluate
from .reporter import Reporter, exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitops-grader",
        description="Verify GitOps challenge manifests"
    )
    parser.add_argument(
        "--challenge",
        help=f"Challenge to verify (default: $INPUT_CHALLENGE). One of: {', '.join(list_challenges())}"
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Directory manifest paths are relative to (default: $GRADER_WORKSPACE, $GITHUB_WORKSPACE or cwd)"
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const=False,
        default=None,
        help="Disable ANSI colors"
    )
    parser.add_argument(
        "--json",
        dest="output_format",
        action="store_const",
        const="json",
        default=None,
        help="Output JSON summary"
    )
    return parser


def run(argv: Optional[List[str]] = None, stream=None) -> int:
    """Run the grader and return the process exit code."""
    args = build_parser().parse_args(argv)
    settings = GraderSettings.from_env(
        challenge=args.challenge,
        workspace=args.workspace,
        color=args.color,
        output_format=args.output_format
    )
    reporter = Reporter(stream=stream, color=settings.color)

    try:
        outcome = evaluate(settings.challenge or "", settings.workspace)
    except InvalidChallengeError as e:
        reporter.error(f"❌ {e.message}")
        return 1

    if settings.output_format == "json":
        reporter.report_json(outcome)
    else:
        reporter.report(outcome)

    return exit_code(outcome)


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
