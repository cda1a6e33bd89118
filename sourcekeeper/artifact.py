"""Artifacts produced by source synchronisation."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence


@dataclass
class Artifact:
    """The output of a source synchronisation."""

    path: str
    url: str
    revision: str = ""
    checksum: str = ""
    last_update_time: Optional[datetime] = None

    def has_revision(self, revision: str) -> bool:
        """Tell whether the artifact carries the given revision."""
        return self.revision == revision


def _join(*elements: str) -> str:
    parts = [e for e in elements if e]
    if not parts:
        return ""
    joined = posixpath.normpath("/".join(parts))
    if joined.startswith("//"):
        joined = "/" + joined.lstrip("/")
    return joined


def artifact_dir(kind: str, namespace: str, name: str) -> str:
    """Return <kind>/<namespace>/<name> with the kind in lower case."""
    return _join(kind.lower(), namespace, name)


def artifact_path(kind: str, namespace: str, name: str, filename: str) -> str:
    """Return <kind>/<namespace>/<name>/<filename>."""
    return _join(artifact_dir(kind, namespace, name), filename)


def has_artifact_updated(
    current: Sequence[Artifact], updated: Sequence[Optional[Artifact]]
) -> bool:
    """Tell whether any current revision is missing among the updated artifacts."""
    if len(current) != len(updated):
        return True
    return not all(
        any(u is not None and u.has_revision(c.revision) for u in updated)
        for c in current
    )