"""Reconciliation helpers for Bucket sources."""

from __future__ import annotations

import hashlib
import os
import stat
from dataclasses import dataclass
from typing import Iterator, Mapping, Optional, Protocol, Tuple, Union

from sourcekeeper.artifact import Artifact
from sourcekeeper.bucket import Bucket, BucketProvider, bucket_progressing
from sourcekeeper.conditions import READY_CONDITION, is_condition_true
from sourcekeeper.objects import ObjectMeta


class CredentialsError(ValueError):
    """Raised when no usable bucket credentials can be assembled."""


@dataclass(frozen=True)
class StaticCredentials:
    """A fixed access key and secret key pair."""

    access_key: str
    secret_key: str


class _ArtifactStorage(Protocol):
    def new_artifact_for(
        self, kind: str, metadata: ObjectMeta, revision: str, filename: str
    ) -> Artifact: ...

    def artifact_exists(self, artifact: Artifact) -> bool: ...

    def remove_all(self, artifact: Artifact) -> None: ...

    def remove_all_but_current(self, artifact: Artifact) -> None: ...

    def set_artifact_url(self, artifact: Artifact) -> None: ...

    def set_hostname(self, url: str) -> str: ...


def _regular_files(path: str) -> Iterator[str]:
    """Yield regular files below path in lexical, depth-first order.

    Symbolic links are never followed; directories and files in one
    directory are visited interleaved, sorted by name.
    """
    mode = os.lstat(path).st_mode
    if stat.S_ISDIR(mode):
        for name in sorted(os.listdir(path)):
            yield from _regular_files(os.path.join(path, name))
    elif stat.S_ISREG(mode):
        yield path


def checksum(root: Union[str, os.PathLike]) -> str:
    """Return the SHA1 over the "<sha1>  <relative path>" lines of all files in root."""
    root = os.fspath(root)
    digest = hashlib.sha1()
    for path in _regular_files(root):
        with open(path, "rb") as handle:
            file_sum = hashlib.sha1(handle.read()).hexdigest()
        relative = os.path.relpath(path, root)
        digest.update(f"{file_sum}  {relative}\n".encode())
    return digest.hexdigest()


def _text(value: Union[bytes, str, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode()
    return value


def minio_credentials(
    bucket: Bucket,
    secret_name: str,
    secret_data: Optional[Mapping[str, Union[bytes, str]]],
) -> Optional[StaticCredentials]:
    """Work out the credentials for an S3 compatible bucket.

    Returns static credentials taken from the secret when the bucket
    references one, or None when the AWS provider is to obtain them from
    the instance's IAM role. Raises CredentialsError otherwise.
    """
    if bucket.spec.secret_ref is not None:
        data = secret_data or {}
        access_key = _text(data.get("accesskey"))
        secret_key = _text(data.get("secretkey"))
        if not access_key or not secret_key:
            raise CredentialsError(
                f"invalid '{secret_name}' secret data: "
                "required fields 'accesskey' and 'secretkey'"
            )
        return StaticCredentials(access_key=access_key, secret_key=secret_key)
    if BucketProvider(bucket.spec.provider) == BucketProvider.AWS:
        return None
    raise CredentialsError("no bucket credentials found")


class BucketReconciler:
    """Status and storage bookkeeping for Bucket sources."""

    def __init__(self, storage: _ArtifactStorage) -> None:
        self.storage = storage

    def reset_status(self, bucket: Bucket) -> Tuple[Bucket, bool]:
        """Return the bucket, reset to progressing if needed, and whether it was reset."""
        artifact = bucket.artifact
        if artifact is None or not self.storage.artifact_exists(artifact):
            bucket = bucket_progressing(bucket)
            bucket.status.artifact = None
            return bucket, True
        if bucket.metadata.generation != bucket.status.observed_generation:
            return bucket_progressing(bucket), True
        return bucket, False

    def gc(self, bucket: Bucket) -> None:
        """Remove stale artifacts, or all of them when the bucket is being deleted."""
        if bucket.metadata.is_deleting():
            self.storage.remove_all(
                self.storage.new_artifact_for(bucket.kind, bucket.metadata, "", "*")
            )
            return
        if bucket.artifact is not None:
            self.storage.remove_all_but_current(bucket.artifact)

    def is_up_to_date(self, bucket: Bucket, revision: str) -> bool:
        """Tell whether the bucket is ready with an artifact of this revision.

        When it is, but the stored artifact URL no longer matches the one
        storage would hand out, the artifact and status URLs are refreshed
        in place.
        """
        artifact = self.storage.new_artifact_for(
            bucket.kind, bucket.metadata, revision, f"{revision}.tar.gz"
        )
        current = bucket.artifact
        if not is_condition_true(bucket.status.conditions, READY_CONDITION):
            return False
        if current is None or not current.has_revision(artifact.revision):
            return False
        if artifact.url != current.url:
            self.storage.set_artifact_url(current)
            bucket.status.url = self.storage.set_hostname(bucket.status.url)
        return True