"""The Bucket source kind, plus the status transitions shared by every source kind."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Optional, TypeVar

from sourcekeeper.artifact import Artifact
from sourcekeeper.conditions import (
    PROGRESSING_REASON,
    READY_CONDITION,
    Condition,
    ConditionStatus,
    find_condition,
    set_condition,
)
from sourcekeeper.objects import ObjectMeta

BUCKET_KIND = "Bucket"

# The bucket listing and download operations succeeded.
BUCKET_OPERATION_SUCCEED_REASON = "BucketOperationSucceed"
# The bucket listing or download operations failed.
BUCKET_OPERATION_FAILED_REASON = "BucketOperationFailed"


@dataclass
class SourceStatus:
    """Observed state common to every source kind."""

    observed_generation: int = -1
    conditions: List[Condition] = field(default_factory=list)
    url: str = ""
    artifact: Optional[Artifact] = None
    last_handled_reconcile_at: str = ""


class SourceObject:
    """Accessors common to every source kind."""

    metadata: ObjectMeta
    spec: Any
    status: SourceStatus

    @property
    def artifact(self) -> Optional[Artifact]:
        """The latest artifact recorded in the status."""
        return self.status.artifact

    @property
    def interval(self) -> timedelta:
        """The interval at which the source is updated."""
        return self.spec.interval


S = TypeVar("S", bound=SourceObject)


def _mark(source: SourceObject, status: ConditionStatus, reason: str, message: str) -> None:
    condition = set_condition(
        source.status.conditions, READY_CONDITION, status, reason, message
    )
    condition.observed_generation = source.metadata.generation


def progressing(source: S) -> S:
    """Return a copy with conditions reset to a single Ready=Unknown condition."""
    source = copy.deepcopy(source)
    source.status.observed_generation = source.metadata.generation
    source.status.url = ""
    source.status.conditions = []
    _mark(source, ConditionStatus.UNKNOWN, PROGRESSING_REASON, "reconciliation in progress")
    return source


def ready(source: S, artifact: Artifact, url: str, reason: str, message: str) -> S:
    """Return a copy carrying the artifact and URL, with Ready=True."""
    source = copy.deepcopy(source)
    source.status.artifact = copy.deepcopy(artifact)
    source.status.url = url
    _mark(source, ConditionStatus.TRUE, reason, message)
    return source


def not_ready(source: S, reason: str, message: str) -> S:
    """Return a copy with Ready=False."""
    source = copy.deepcopy(source)
    _mark(source, ConditionStatus.FALSE, reason, message)
    return source


def ready_message(source: SourceObject) -> str:
    """Return the Ready condition's message if it is True, else an empty string."""
    condition = find_condition(source.status.conditions, READY_CONDITION)
    if condition is not None and condition.status == ConditionStatus.TRUE:
        return condition.message
    return ""


class BucketProvider(str, enum.Enum):
    """The storage provider a bucket lives at."""

    GENERIC = "generic"
    AWS = "aws"
    GCP = "gcp"


@dataclass
class BucketSpec:
    """Desired state of an S3 compatible bucket."""

    bucket_name: str
    endpoint: str
    interval: timedelta
    provider: BucketProvider = BucketProvider.GENERIC
    insecure: bool = False
    region: str = ""
    secret_ref: Optional[str] = None
    timeout: timedelta = timedelta(seconds=20)
    ignore: Optional[str] = None
    suspend: bool = False
    access_from: Optional[Dict[str, Any]] = None


class BucketStatus(SourceStatus):
    """Observed state of a bucket."""


@dataclass
class Bucket(SourceObject):
    """A bucket source object."""

    metadata: ObjectMeta
    spec: BucketSpec
    status: BucketStatus = field(default_factory=BucketStatus)
    kind: str = BUCKET_KIND


def bucket_progressing(bucket: Bucket) -> Bucket:
    """Return a copy with conditions reset to a single Ready=Unknown condition."""
    return progressing(bucket)


def bucket_ready(
    bucket: Bucket, artifact: Artifact, url: str, reason: str, message: str
) -> Bucket:
    """Return a copy carrying the artifact and URL, with Ready=True."""
    return ready(bucket, artifact, url, reason, message)


def bucket_not_ready(bucket: Bucket, reason: str, message: str) -> Bucket:
    """Return a copy with Ready=False."""
    return not_ready(bucket, reason, message)


def bucket_ready_message(bucket: Bucket) -> str:
    """Return the Ready condition's message if it is True, else an empty string."""
    return ready_message(bucket)