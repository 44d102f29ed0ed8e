"""CI reporter.

Renders a VerificationOutcome as GitHub Actions workflow-command output:
plain lines for info, ::notice:: for the success message and ::error::
for every failure. The exit code is the only signal the runner needs
beyond the log.
"""

import io
import json
import sys
from typing import List, Optional, TextIO

from .objectives import OBJECTIVES_SECTION, SPEC_SECTION
from .types import VerificationOutcome

CYAN = "\u001b[38;5;6m"
BOLD = "\u001b[1m"

SUCCESS_MESSAGE = "✅ 🎉 Congratulations! You have successfully completed the challenge! 🎉"
FAILURE_MESSAGE = "❌ Challenge verification failed. Please review all errors and try again."

SECTION_HEADINGS = {
    SPEC_SECTION: "🔍 Validating specification...",
    OBJECTIVES_SECTION: "🎯 Verifying objectives...",
}


class Reporter:
    """Writes CI log lines to a stream and tracks whether a failure was signalled."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self.failed = False

    def _style(self, message: str, *codes: str) -> str:
        if not self.color:
            return message
        return "".join(codes) + message

    def _write(self, line: str) -> None:
        print(line, file=self.stream)

    def info(self, message: str) -> None:
        self._write(message)

    def notice(self, message: str) -> None:
        self._write(f"::notice::{message}")

    def error(self, message: str) -> None:
        self.failed = True
        self._write(f"::error::{message}")

    def report(self, outcome: VerificationOutcome) -> None:
        """Write the full log for a verification run."""
        if outcome.title:
            self.info(self._style(outcome.title, CYAN, BOLD))

        for load in outcome.manifests:
            self.info(f"📋 Validating {load.name} YAML format...")
            if load.ok:
                self.info(f"  ✅ {load.message}")
            else:
                self.error(f"❌ {load.message}")

        section = None
        for result in outcome.results:
            if result.section != section:
                section = result.section
                self.info(SECTION_HEADINGS.get(section, section))
                if section == OBJECTIVES_SECTION and outcome.docs_url:
                    self.info(f"  Details: {outcome.docs_url}")

            self.info(f"  - {result.description}")
            if result.passed:
                self.info(f"    ✅ {result.message}")
            else:
                self.error(f"❌ {result.message}")
                for detail in result.details:
                    self.info(f"      • {detail}")

        if outcome.passed:
            self.notice(self._style(SUCCESS_MESSAGE, CYAN))
        else:
            self.error(self._style(FAILURE_MESSAGE, CYAN))

    def report_json(self, outcome: VerificationOutcome) -> None:
        self._write(to_json(outcome))


def to_json(outcome: VerificationOutcome) -> str:
    return json.dumps(outcome.summary(), indent=2, ensure_ascii=False)


def exit_code(outcome: VerificationOutcome) -> int:
    return 0 if outcome.passed else 1


def render(outcome: VerificationOutcome, color: bool = False) -> List[str]:
    """Render the report to a list of lines instead of a stream."""
    buffer = io.StringIO()
    Reporter(stream=buffer, color=color).report(outcome)
    return buffer.getvalue().splitlines()
