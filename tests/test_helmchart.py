from datetime import timedelta

import pytest

from sourcekeeper.artifact import Artifact
from sourcekeeper.conditions import READY_CONDITION, ConditionStatus, find_condition
from sourcekeeper.helmchart import (
    CHART_PACKAGE_FAILED_REASON,
    CHART_PULL_SUCCEEDED_REASON,
    ChartSourceReference,
    HelmChart,
    HelmChartSpec,
    ReconcileStrategy,
    helm_chart_not_ready,
    helm_chart_progressing,
    helm_chart_ready,
    helm_chart_ready_message,
)
from sourcekeeper.objects import ObjectMeta

PACKAGE = Artifact(path="helmchart/default/podinfo/podinfo-1.0.0.tgz", url="u", revision="1.0.0")


def make_chart(values_files=(), values_file=""):
    return HelmChart(
        metadata=ObjectMeta(name="podinfo", namespace="default", generation=3),
        spec=HelmChartSpec(
            chart="podinfo",
            source_ref=ChartSourceReference(kind="HelmRepository", name="repo"),
            interval=timedelta(minutes=1),
            values_files=list(values_files),
            values_file=values_file,
        ),
    )


def test_spec_defaults():
    chart = make_chart()
    assert chart.spec.version == "*"
    assert chart.spec.reconcile_strategy.value == "ChartVersion"
    assert ReconcileStrategy("Revision") is ReconcileStrategy.REVISION
    assert (chart.kind, chart.status.observed_generation) == ("HelmChart", -1)
    assert (chart.interval, chart.artifact) == (timedelta(minutes=1), None)


@pytest.mark.parametrize(
    "values_files, values_file, expected",
    [
        ([], "", []),
        (["a.yaml", "b.yaml"], "", ["a.yaml", "b.yaml"]),
        (["a.yaml"], "old.yaml", ["old.yaml", "a.yaml"]),
        ([], "old.yaml", ["old.yaml"]),
    ],
)
def test_values_files_merges_deprecated_file_first(values_files, values_file, expected):
    chart = make_chart(values_files, values_file)
    assert chart.values_files() == expected
    assert chart.spec.values_files == values_files


def test_progressing_after_failure():
    chart = make_chart()
    chart.status.url = "http://localhost/old.tgz"
    failed = helm_chart_not_ready(chart, CHART_PACKAGE_FAILED_REASON, "boom")
    result = helm_chart_progressing(failed)
    [condition] = result.status.conditions
    assert condition.status == ConditionStatus.UNKNOWN
    assert condition.message == "reconciliation in progress"
    assert (result.status.url, result.status.observed_generation) == ("", 3)
    assert failed.status.url == "http://localhost/old.tgz"
    assert helm_chart_ready_message(result) == ""


def test_ready_and_not_ready():
    chart = make_chart()
    ready = helm_chart_ready(chart, PACKAGE, "u", CHART_PULL_SUCCEEDED_REASON, "pulled")
    condition = find_condition(ready.status.conditions, READY_CONDITION)
    assert (condition.reason, condition.observed_generation) == ("ChartPullSucceeded", 3)
    assert (ready.artifact, ready.status.url) == (PACKAGE, "u")
    assert helm_chart_ready_message(ready) == "pulled"
    assert chart.artifact is None

    failed = helm_chart_not_ready(ready, CHART_PACKAGE_FAILED_REASON, "failed")
    [condition] = failed.status.conditions
    assert (condition.status, condition.reason) == (ConditionStatus.FALSE, "ChartPackageFailed")
    assert helm_chart_ready_message(failed) == ""
    assert helm_chart_ready_message(ready) == "pulled"