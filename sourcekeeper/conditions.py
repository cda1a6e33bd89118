"""Status conditions, condition reasons and API group identifiers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, MutableSequence, Optional, Sequence

GROUP = "source.toolkit.fluxcd.io"
VERSION = "v1beta1"
API_VERSION = f"{GROUP}/{VERSION}"

SOURCE_FINALIZER = "finalizers.fluxcd.io"

READY_CONDITION = "Ready"
PROGRESSING_REASON = "Progressing"
DEPENDENCY_NOT_READY_REASON = "DependencyNotReady"
RECONCILE_REQUEST_ANNOTATION = "reconcile.fluxcd.io/requestedAt"

# A given source has an invalid URL.
URL_INVALID_REASON = "URLInvalid"
# A storage operation failed.
STORAGE_OPERATION_FAILED_REASON = "StorageOperationFailed"
# A secret lacks the required fields or the credentials do not match.
AUTHENTICATION_FAILED_REASON = "AuthenticationFailed"
# Cryptographic provenance verification of the source failed.
VERIFICATION_FAILED_REASON = "VerificationFailed"


class ConditionStatus(str, enum.Enum):
    """The status of a condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition:
    """A single observation of an object's state."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    observed_generation: int = 0
    last_transition_time: Optional[datetime] = None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def set_condition(
    conditions: MutableSequence[Condition],
    condition_type: str,
    status: ConditionStatus | str,
    reason: str,
    message: str,
) -> Condition:
    """Add or update the condition of the given type in place and return it.

    The transition time only moves when the status actually changes.
    """
    status = ConditionStatus(status)
    existing = find_condition(conditions, condition_type)
    if existing is None:
        condition = Condition(
            type=condition_type,
            status=status,
            reason=reason,
            message=message,
            last_transition_time=_now(),
        )
        conditions.append(condition)
        return condition
    if existing.status != status:
        existing.status = status
        existing.last_transition_time = _now()
    existing.reason = reason
    existing.message = message
    return existing


def find_condition(
    conditions: Optional[Sequence[Condition]], condition_type: str
) -> Optional[Condition]:
    """Return the condition of the given type, or None."""
    return next((c for c in conditions or () if c.type == condition_type), None)


def is_condition_true(
    conditions: Optional[Sequence[Condition]], condition_type: str
) -> bool:
    """Tell whether the condition of the given type exists with status True."""
    condition = find_condition(conditions, condition_type)
    return condition is not None and condition.status == ConditionStatus.TRUE


def reconcile_annotation_value(
    annotations: Optional[Mapping[str, str]],
) -> Optional[str]:
    """Return the value of the reconcile request annotation, or None if absent."""
    if not annotations:
        return None
    return annotations.get(RECONCILE_REQUEST_ANNOTATION)