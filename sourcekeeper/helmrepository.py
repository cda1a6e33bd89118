"""The HelmRepository source kind and its status transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Optional

from sourcekeeper.artifact import Artifact
from sourcekeeper.bucket import (
    SourceObject,
    SourceStatus,
    not_ready,
    progressing,
    ready,
    ready_message,
)
from sourcekeeper.objects import ObjectMeta

HELM_REPOSITORY_KIND = "HelmRepository"
# Key for indexing HelmRepository objects by their spec URL.
HELM_REPOSITORY_URL_INDEX_KEY = ".metadata.helmRepositoryURL"

# The indexation of the Helm repository failed.
INDEXATION_FAILED_REASON = "IndexationFailed"
# The indexation of the Helm repository succeeded.
INDEXATION_SUCCEEDED_REASON = "IndexationSucceed"


@dataclass
class HelmRepositorySpec:
    """Reference to a Helm repository."""

    url: str
    interval: timedelta
    secret_ref: Optional[str] = None
    pass_credentials: bool = False
    timeout: timedelta = timedelta(seconds=60)
    suspend: bool = False
    access_from: Optional[Dict[str, Any]] = None


class HelmRepositoryStatus(SourceStatus):
    """Observed state of a Helm repository."""


@dataclass
class HelmRepository(SourceObject):
    """A Helm repository source object."""

    metadata: ObjectMeta
    spec: HelmRepositorySpec
    status: HelmRepositoryStatus = field(default_factory=HelmRepositoryStatus)
    kind: str = HELM_REPOSITORY_KIND


def helm_repository_progressing(repository: HelmRepository) -> HelmRepository:
    """Return a copy with conditions reset to a single Ready=Unknown condition."""
    return progressing(repository)


def helm_repository_ready(
    repository: HelmRepository, artifact: Artifact, url: str, reason: str, message: str
) -> HelmRepository:
    """Return a copy carrying the artifact and URL, with Ready=True."""
    return ready(repository, artifact, url, reason, message)


def helm_repository_not_ready(
    repository: HelmRepository, reason: str, message: str
) -> HelmRepository:
    """Return a copy with Ready=False."""
    return not_ready(repository, reason, message)


def helm_repository_ready_message(repository: HelmRepository) -> str:
    """Return the Ready condition's message if it is True, else an empty string."""
    return ready_message(repository)