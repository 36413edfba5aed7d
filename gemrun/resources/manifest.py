"""
Asset manifest.

The ordered set of asset identifiers a game declares up front. Every
identifier must be loaded before the first frame is drawn.

Manifests can be declared in code or read from a JSON file of the form
``{"assets": ["images/stone-block.png", ...]}``, validated against
MANIFEST_SCHEMA.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator

import jsonschema

from gemrun.core.errors import ManifestError

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA = {
    "type": "object",
    "required": ["assets"],
    "properties": {
        "assets": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
        },
    },
}


class AssetManifest:
    """
    Immutable, ordered, duplicate-free list of asset identifiers.

    Duplicates are dropped (first occurrence wins) with a warning.
    """

    def __init__(self, identifiers: Iterable[str] = ()):
        seen: dict[str, None] = {}
        for identifier in identifiers:
            if identifier in seen:
                logger.warning(f"Duplicate asset in manifest ignored: {identifier}")
                continue
            seen[identifier] = None
        self._identifiers = tuple(seen)

    @property
    def identifiers(self) -> tuple[str, ...]:
        return self._identifiers

    def __iter__(self) -> Iterator[str]:
        return iter(self._identifiers)

    def __len__(self) -> int:
        return len(self._identifiers)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._identifiers

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AssetManifest):
            return self._identifiers == other._identifiers
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._identifiers)

    def __repr__(self) -> str:
        return f"AssetManifest({len(self)} assets)"

    def extend(self, identifiers: Iterable[str]) -> AssetManifest:
        """New manifest with extra identifiers appended."""
        return AssetManifest([*self._identifiers, *identifiers])


def load_manifest(path: Path | str) -> AssetManifest:
    """
    Read and validate a JSON manifest file.

    Raises:
        ManifestError: If the file is missing, not JSON, or fails validation
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Manifest {path} is not valid JSON: {e}") from e

    try:
        jsonschema.validate(instance=data, schema=MANIFEST_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ManifestError(f"Validation error in {path}: {e.message}") from e

    manifest = AssetManifest(data["assets"])
    logger.info(f"Loaded manifest {path.name} with {len(manifest)} assets.")
    return manifest
