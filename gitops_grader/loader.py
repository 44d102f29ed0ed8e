"""Manifest loader.

Reads a manifest from disk and parses it with PyYAML. load_manifest()
raises a ManifestError subclass for each failure mode; try_load_manifest()
folds those into a ManifestLoad record so evaluation can continue.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import (
    EmptyManifestError,
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
    ManifestReadError,
)
from .types import ManifestLoad


def resolve_path(path: Union[str, Path], workspace: Optional[Union[str, Path]] = None) -> Path:
    """Resolve a manifest path against the workspace root if it is relative."""
    path = Path(path)
    if workspace is not None and not path.is_absolute():
        return Path(workspace) / path
    return path


def load_manifest(path: Union[str, Path], name: str) -> Dict[str, Any]:
    """Load and parse a single YAML manifest.

    Args:
        path: Path to the manifest file
        name: Human-readable manifest name used in messages ("Rollout")

    Returns:
        Parsed document as a mapping

    Raises:
        ManifestNotFoundError: If the file doesn't exist
        ManifestReadError: If the file can't be read
        ManifestParseError: If the file is not valid YAML
        EmptyManifestError: If the document is empty or not a mapping
    """
    path = Path(path)

    if not path.exists():
        raise ManifestNotFoundError(
            f"{name} manifest not found at: {path}", path=str(path), name=name
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(
            f"Failed to read {name} file: {e}", path=str(path), name=name
        ) from e

    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ManifestParseError(
            f"Failed to parse YAML: {e}", path=str(path), name=name
        ) from e

    # A list or scalar document has no fields to check
    if not document or not isinstance(document, dict):
        raise EmptyManifestError(
            f"{name} YAML is empty or invalid", path=str(path), name=name
        )

    return document


def try_load_manifest(path: Union[str, Path], name: str) -> ManifestLoad:
    """Load a manifest without raising for load failures.

    Returns:
        ManifestLoad with ok=True and the document, or ok=False with
        the error code and message
    """
    try:
        document = load_manifest(path, name)
    except ManifestError as e:
        return ManifestLoad(
            name=name,
            path=str(path),
            ok=False,
            message=e.message,
            error_code=e.error_code
        )

    return ManifestLoad(
        name=name,
        path=str(path),
        ok=True,
        message=f"{name} YAML is valid",
        document=document
    )
