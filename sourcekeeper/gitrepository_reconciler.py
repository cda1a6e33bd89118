"""Reconciliation helpers for GitRepository sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

from sourcekeeper.artifact import Artifact, has_artifact_updated
from sourcekeeper.conditions import READY_CONDITION, is_condition_true
from sourcekeeper.gitrepository import GitRepository, git_repository_progressing
from sourcekeeper.objects import ObjectMeta

# Looks up a GitRepository by namespace and name; raises when it cannot.
RepositoryGetter = Callable[[str, str], GitRepository]


class DependencyNotReadyError(RuntimeError):
    """Raised when an included repository is missing or not ready."""


@dataclass(frozen=True)
class CheckoutOptions:
    """What to check out of a Git repository."""

    branch: str = ""
    tag: str = ""
    semver: str = ""
    commit: str = ""
    recurse_submodules: bool = False


class _ArtifactStorage(Protocol):
    def new_artifact_for(
        self, kind: str, metadata: ObjectMeta, revision: str, filename: str
    ) -> Artifact: ...

    def artifact_exists(self, artifact: Artifact) -> bool: ...

    def remove_all(self, artifact: Artifact) -> None: ...

    def remove_all_but_current(self, artifact: Artifact) -> None: ...

    def set_artifact_url(self, artifact: Artifact) -> None: ...

    def set_hostname(self, url: str) -> str: ...


def checkout_options(repository: GitRepository) -> CheckoutOptions:
    """Build the checkout options from the repository's spec."""
    ref = repository.spec.reference
    recurse = repository.spec.recurse_submodules
    if ref is None:
        return CheckoutOptions(recurse_submodules=recurse)
    return CheckoutOptions(
        branch=ref.branch,
        tag=ref.tag,
        semver=ref.semver,
        commit=ref.commit,
        recurse_submodules=recurse,
    )


def _dependency_name(repository: GitRepository, name: str) -> str:
    return f"{repository.metadata.namespace}/{name}"


def check_dependencies(
    repository: GitRepository, get_repository: RepositoryGetter
) -> None:
    """Raise DependencyNotReadyError unless every included repository is ready.

    get_repository is called with a namespace and a name.
    """
    namespace = repository.metadata.namespace
    for include in repository.spec.include:
        label = _dependency_name(repository, include.repository)
        try:
            dependency = get_repository(namespace, include.repository)
        except Exception as err:
            raise DependencyNotReadyError(
                f"unable to get '{label}' dependency: {err}"
            ) from err
        status = dependency.status
        if (
            not status.conditions
            or dependency.metadata.generation != status.observed_generation
        ):
            raise DependencyNotReadyError(f"dependency '{label}' is not ready")
        if not is_condition_true(status.conditions, READY_CONDITION):
            raise DependencyNotReadyError(f"dependency '{label}' is not ready")


def collect_included_artifacts(
    repository: GitRepository, get_repository: RepositoryGetter
) -> List[Optional[Artifact]]:
    """Return the current artifact of each included repository, in order."""
    namespace = repository.metadata.namespace
    artifacts: List[Optional[Artifact]] = []
    for include in repository.spec.include:
        try:
            dependency = get_repository(namespace, include.repository)
        except Exception as err:
            raise DependencyNotReadyError(str(err)) from err
        artifacts.append(dependency.artifact)
    return artifacts


class GitRepositoryReconciler:
    """Status and storage bookkeeping for GitRepository sources."""

    def __init__(self, storage: _ArtifactStorage) -> None:
        self.storage = storage

    def reset_status(self, repository: GitRepository) -> Tuple[GitRepository, bool]:
        """Return the repository, reset to progressing if needed, and whether it was reset."""
        artifact = repository.artifact
        if artifact is None or not self.storage.artifact_exists(artifact):
            repository = git_repository_progressing(repository)
            repository.status.artifact = None
            return repository, True
        if repository.metadata.generation != repository.status.observed_generation:
            return git_repository_progressing(repository), True
        return repository, False

    def gc(self, repository: GitRepository) -> None:
        """Remove stale artifacts, or all of them when the repository is being deleted."""
        if repository.metadata.is_deleting():
            self.storage.remove_all(
                self.storage.new_artifact_for(
                    repository.kind, repository.metadata, "", "*"
                )
            )
            return
        if repository.artifact is not None:
            self.storage.remove_all_but_current(repository.artifact)

    def is_up_to_date(
        self,
        repository: GitRepository,
        revision: str,
        included_artifacts: List[Optional[Artifact]],
    ) -> bool:
        """Tell whether the repository is ready with this revision and these inclusions.

        The revision has the form "<ref>/<commit hash>"; the artifact file
        is named after the hash. When up to date but the stored URL differs
        from the one storage would hand out, the URLs are refreshed in place.
        """
        commit_hash = revision.rsplit("/", 1)[-1]
        artifact = self.storage.new_artifact_for(
            repository.kind, repository.metadata, revision, f"{commit_hash}.tar.gz"
        )
        current = repository.artifact
        if not is_condition_true(repository.status.conditions, READY_CONDITION):
            return False
        if current is None or not current.has_revision(artifact.revision):
            return False
        if has_artifact_updated(
            repository.status.included_artifacts, included_artifacts
        ):
            return False
        if artifact.url != current.url:
            self.storage.set_artifact_url(current)
            repository.status.url = self.storage.set_hostname(repository.status.url)
        return True