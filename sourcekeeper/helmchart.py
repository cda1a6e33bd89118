"""The HelmChart source kind and its status transitions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Optional

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

HELM_CHART_KIND = "HelmChart"

# The pull of the Helm chart failed.
CHART_PULL_FAILED_REASON = "ChartPullFailed"
# The pull of the Helm chart succeeded.
CHART_PULL_SUCCEEDED_REASON = "ChartPullSucceeded"
# The packaging of the Helm chart failed.
CHART_PACKAGE_FAILED_REASON = "ChartPackageFailed"
# The packaging of the Helm chart succeeded.
CHART_PACKAGE_SUCCEEDED_REASON = "ChartPackageSucceeded"


class ReconcileStrategy(str, enum.Enum):
    """What enables the creation of a new chart artifact."""

    # Reconcile when the version of the Helm chart differs.
    CHART_VERSION = "ChartVersion"
    # Reconcile when the revision of the source differs.
    REVISION = "Revision"


@dataclass
class ChartSourceReference:
    """Reference to the source a chart is available at, in the same namespace."""

    kind: str
    name: str
    api_version: str = ""


@dataclass
class HelmChartSpec:
    """Desired state of a Helm chart."""

    chart: str
    source_ref: ChartSourceReference
    interval: timedelta
    version: str = "*"
    reconcile_strategy: ReconcileStrategy = ReconcileStrategy.CHART_VERSION
    values_files: List[str] = field(default_factory=list)
    values_file: str = ""
    suspend: bool = False
    access_from: Optional[Dict[str, Any]] = None


class HelmChartStatus(SourceStatus):
    """Observed state of a Helm chart."""


@dataclass
class HelmChart(SourceObject):
    """A Helm chart source object."""

    metadata: ObjectMeta
    spec: HelmChartSpec
    status: HelmChartStatus = field(default_factory=HelmChartStatus)
    kind: str = HELM_CHART_KIND

    def values_files(self) -> List[str]:
        """Return the values files, with the deprecated single file first if set."""
        prefix = [self.spec.values_file] if self.spec.values_file else []
        return prefix + list(self.spec.values_files)


def helm_chart_progressing(chart: HelmChart) -> HelmChart:
    """Return a copy with conditions reset to a single Ready=Unknown condition."""
    return progressing(chart)


def helm_chart_ready(
    chart: HelmChart, artifact: Artifact, url: str, reason: str, message: str
) -> HelmChart:
    """Return a copy carrying the artifact and URL, with Ready=True."""
    return ready(chart, artifact, url, reason, message)


def helm_chart_not_ready(chart: HelmChart, reason: str, message: str) -> HelmChart:
    """Return a copy with Ready=False."""
    return not_ready(chart, reason, message)


def helm_chart_ready_message(chart: HelmChart) -> str:
    """Return the Ready condition's message if it is True, else an empty string."""
    return ready_message(chart)