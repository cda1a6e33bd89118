from datetime import datetime, timezone

import pytest

from sourcekeeper.conditions import (
    RECONCILE_REQUEST_ANNOTATION,
    Condition,
    ConditionStatus,
    find_condition,
    is_condition_true,
    reconcile_annotation_value,
    set_condition,
)


def test_reason_strings_from_source():
    from sourcekeeper import conditions

    assert conditions.STORAGE_OPERATION_FAILED_REASON == "StorageOperationFailed"
    assert conditions.AUTHENTICATION_FAILED_REASON == "AuthenticationFailed"
    assert conditions.API_VERSION.endswith("/v1beta1")


def test_set_condition_appends_new():
    conditions = []
    cond = set_condition(conditions, "Ready", ConditionStatus.FALSE, "Why", "msg")
    assert conditions == [cond]
    assert cond.status is ConditionStatus.FALSE
    assert cond.reason == "Why"
    assert cond.message == "msg"
    assert cond.last_transition_time is not None


def test_set_condition_accepts_string_status():
    conditions = []
    cond = set_condition(conditions, "Ready", "True", "r", "m")
    assert cond.status is ConditionStatus.TRUE


def test_set_condition_invalid_status_raises():
    with pytest.raises(ValueError):
        set_condition([], "Ready", "Maybe", "r", "m")


def test_set_condition_same_status_keeps_transition_time():
    old = datetime(2000, 1, 1, tzinfo=timezone.utc)
    conditions = [Condition("Ready", ConditionStatus.TRUE, "a", "b", last_transition_time=old)]
    cond = set_condition(conditions, "Ready", ConditionStatus.TRUE, "c", "d")
    assert len(conditions) == 1
    assert cond.last_transition_time == old
    assert (cond.reason, cond.message) == ("c", "d")


def test_set_condition_status_change_moves_transition_time():
    old = datetime(2000, 1, 1, tzinfo=timezone.utc)
    conditions = [Condition("Ready", ConditionStatus.TRUE, "a", "b", last_transition_time=old)]
    cond = set_condition(conditions, "Ready", ConditionStatus.FALSE, "c", "d")
    assert len(conditions) == 1
    assert cond.status is ConditionStatus.FALSE
    assert cond.last_transition_time > old


def test_find_condition():
    a = Condition("A", ConditionStatus.TRUE)
    b = Condition("B", ConditionStatus.FALSE)
    assert find_condition([a, b], "B") is b
    assert find_condition([a, b], "C") is None
    assert find_condition(None, "A") is None


@pytest.mark.parametrize(
    "status, expected",
    [
        (ConditionStatus.TRUE, True),
        (ConditionStatus.FALSE, False),
        (ConditionStatus.UNKNOWN, False),
    ],
)
def test_is_condition_true(status, expected):
    assert is_condition_true([Condition("Ready", status)], "Ready") is expected


def test_is_condition_true_missing():
    assert is_condition_true([], "Ready") is False


def test_reconcile_annotation_value():
    assert reconcile_annotation_value({RECONCILE_REQUEST_ANNOTATION: "now"}) == "now"
    assert reconcile_annotation_value({"other": "x"}) is None
    assert reconcile_annotation_value(None) is None