# sourcekeeper

Data model and decision logic for sources that produce versioned artifacts:
Git repositories, storage buckets, Helm repositories and Helm charts.

## What is in the package

- `sourcekeeper.conditions` – `Condition`, `ConditionStatus`, `set_condition`,
  `find_condition`, `is_condition_true`, `reconcile_annotation_value`, and the
  shared reason and finalizer constants.
- `sourcekeeper.objects` – `ObjectMeta` with finalizer helpers
  (`has_finalizer`, `add_finalizer`, `remove_finalizer`) and `is_deleting`.
- `sourcekeeper.artifact` – `Artifact`, `artifact_dir`, `artifact_path` and
  `has_artifact_updated`.
- `sourcekeeper.bucket`, `sourcekeeper.gitrepository`,
  `sourcekeeper.helmrepository`, `sourcekeeper.helmchart` – the source kinds
  (`Bucket`, `GitRepository`, `HelmRepository`, `HelmChart`) with their specs
  and statuses, plus status transitions such as `bucket_ready`,
  `git_repository_not_ready`, `helm_repository_progressing` and
  `helm_chart_ready_message`. Each transition returns an updated copy and
  leaves the object passed in untouched.
- `sourcekeeper.bucket_reconciler` – `checksum` of a directory tree,
  `minio_credentials`, and `BucketReconciler` with `reset_status`, `gc` and
  `is_up_to_date`.
- `sourcekeeper.gitrepository_reconciler` – `checkout_options`,
  `check_dependencies`, `collect_included_artifacts`, and
  `GitRepositoryReconciler` with `reset_status`, `gc` and `is_up_to_date`.

## Installation

```
pip install .
```

## Usage

Conditions:

```python
from sourcekeeper.conditions import ConditionStatus, set_condition, is_condition_true

conditions = []
set_condition(conditions, "Ready", ConditionStatus.TRUE, "Succeeded", "all good")
assert is_condition_true(conditions, "Ready")
```

Artifacts:

```python
from sourcekeeper.artifact import Artifact, artifact_path, has_artifact_updated

artifact_path("GitRepository", "default", "app", "latest.tar.gz")
# 'gitrepository/default/app/latest.tar.gz'

old = [Artifact(path="a.tar.gz", url="", revision="foo")]
new = [Artifact(path="b.tar.gz", url="", revision="bar")]
has_artifact_updated(old, new)
# True
```

Status transitions:

```python
from datetime import timedelta
from sourcekeeper.objects import ObjectMeta
from sourcekeeper.gitrepository import (
    GitRepository, GitRepositorySpec, git_repository_progressing,
)

repo = GitRepository(
    metadata=ObjectMeta(name="app", namespace="default", generation=2),
    spec=GitRepositorySpec(url="https://example.com/app.git",
                           interval=timedelta(minutes=1)),
)
repo = git_repository_progressing(repo)
repo.status.conditions[0].status   # ConditionStatus.UNKNOWN
repo.status.observed_generation    # 2
```

Checksum of a downloaded bucket directory (SHA1 over one
`"<sha1>  <relative path>"` line per regular file, in lexical order):

```python
from sourcekeeper.bucket_reconciler import checksum

revision = checksum("/tmp/bucket-contents")
```

Bucket credentials:

```python
from sourcekeeper.bucket_reconciler import minio_credentials

creds = minio_credentials(bucket, "bucket-creds",
                          {"accesskey": "placeholder", "secretkey": "secret"})
```

This returns `StaticCredentials` when the bucket has a `secret_ref`, `None`
for the `aws` provider without one (credentials come from the instance role),
and raises `CredentialsError` otherwise.

The reconciler classes take a storage object supplied by the caller, which
must provide `new_artifact_for`, `artifact_exists`, `remove_all`,
`remove_all_but_current`, `set_artifact_url` and `set_hostname`.

## What it does not do

The package holds the model and decision logic only. It does not clone Git
repositories, download bucket contents, fetch Helm indexes or charts, verify
signatures, store or archive artifacts, serve them over HTTP, or run a
control loop; there is no command to start. Those parts are left to the
caller, through the storage object and the repository lookup functions the
helpers accept.

## Tests

```
pip install .[test]
pytest
```