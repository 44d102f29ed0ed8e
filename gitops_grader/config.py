"""Grader settings.

Sources, highest priority first: explicit arguments (CLI flags), then
environment variables, then defaults.

    INPUT_CHALLENGE     challenge selector (CI action input "challenge")
    GRADER_WORKSPACE    root the manifest paths are relative to
    GITHUB_WORKSPACE    fallback workspace root on CI runners
    NO_COLOR            any non-empty value disables ANSI colors
"""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field


class GraderSettings(BaseModel):
    """Resolved settings for a single grader run."""
    challenge: Optional[str] = Field(default=None, description="Challenge selector")
    workspace: Path = Field(default_factory=Path.cwd, description="Manifest root directory")
    color: bool = True
    output_format: str = Field(default="text", pattern="^(text|json)$")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "GraderSettings":
        """Build settings from the environment, with non-None overrides winning."""
        env = os.environ if environ is None else environ
        values: dict = {}

        challenge = env.get("INPUT_CHALLENGE", "").strip()
        if challenge:
            values["challenge"] = challenge

        workspace = env.get("GRADER_WORKSPACE", "").strip() or env.get("GITHUB_WORKSPACE", "").strip()
        if workspace:
            values["workspace"] = Path(workspace).expanduser()

        if env.get("NO_COLOR", ""):
            values["color"] = False

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)
