"""The GitRepository source kind and its status transitions."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

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

GIT_REPOSITORY_KIND = "GitRepository"

# The go-git Git implementation kind.
GO_GIT_IMPLEMENTATION = "go-git"
# The git2go Git implementation kind.
LIBGIT2_IMPLEMENTATION = "libgit2"

# The git clone, pull and checkout operations succeeded.
GIT_OPERATION_SUCCEED_REASON = "GitOperationSucceed"
# The git clone, pull or checkout operations failed.
GIT_OPERATION_FAILED_REASON = "GitOperationFailed"


@dataclass
class GitRepositoryRef:
    """The Git reference used for pull and checkout operations."""

    branch: str = ""
    tag: str = ""
    semver: str = ""
    commit: str = ""


@dataclass
class GitRepositoryVerification:
    """How the OpenPGP signature of a commit is verified."""

    mode: str = "head"
    secret_ref: str = ""


@dataclass
class GitRepositoryInclude:
    """Another repository mapped into this one, with a from and to path."""

    repository: str
    from_path: str = ""
    to_path: str = ""

    def target_path(self) -> str:
        """Return the path to copy to, defaulting to the included repository's name."""
        return self.to_path or self.repository


@dataclass
class GitRepositorySpec:
    """Desired state of a Git repository."""

    url: str
    interval: timedelta
    secret_ref: Optional[str] = None
    timeout: timedelta = timedelta(seconds=20)
    reference: Optional[GitRepositoryRef] = None
    verification: Optional[GitRepositoryVerification] = None
    ignore: Optional[str] = None
    suspend: bool = False
    git_implementation: str = GO_GIT_IMPLEMENTATION
    recurse_submodules: bool = False
    include: List[GitRepositoryInclude] = field(default_factory=list)
    access_from: Optional[Dict[str, Any]] = None


@dataclass
class GitRepositoryStatus(SourceStatus):
    """Observed state of a Git repository."""

    included_artifacts: List[Optional[Artifact]] = field(default_factory=list)


@dataclass
class GitRepository(SourceObject):
    """A Git repository source object."""

    metadata: ObjectMeta
    spec: GitRepositorySpec
    status: GitRepositoryStatus = field(default_factory=GitRepositoryStatus)
    kind: str = GIT_REPOSITORY_KIND


def git_repository_progressing(repository: GitRepository) -> GitRepository:
    """Return a copy with conditions reset to a single Ready=Unknown condition."""
    return progressing(repository)


def git_repository_ready(
    repository: GitRepository,
    artifact: Artifact,
    included_artifacts: Sequence[Optional[Artifact]],
    url: str,
    reason: str,
    message: str,
) -> GitRepository:
    """Return a copy carrying the artifacts and URL, with Ready=True."""
    result = ready(repository, artifact, url, reason, message)
    result.status.included_artifacts = copy.deepcopy(list(included_artifacts))
    return result


def git_repository_not_ready(
    repository: GitRepository, reason: str, message: str
) -> GitRepository:
    """Return a copy with Ready=False."""
    return not_ready(repository, reason, message)


def git_repository_ready_message(repository: GitRepository) -> str:
    """Return the Ready condition's message if it is True, else an empty string."""
    return ready_message(repository)