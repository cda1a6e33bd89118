import pytest

from sourcekeeper.artifact import (
    Artifact,
    artifact_dir,
    artifact_path,
    has_artifact_updated,
)


def _arts(*revisions):
    return [Artifact(path="", url="", revision=r) for r in revisions]


@pytest.mark.parametrize(
    "current, updated, expected",
    [
        (("foo",), ("foo",), False),
        (("foo",), ("bar",), True),
        (("foo", "bar"), ("foo", "bar"), False),
        (("foo", "bar"), ("foo", "baz"), True),
        (("foo", "bar"), ("foo",), True),
    ],
    ids=[
        "not updated single",
        "updated single",
        "not updated multiple",
        "updated multiple",
        "updated different artifact count",
    ],
)
def test_has_artifact_updated(current, updated, expected):
    assert has_artifact_updated(_arts(*current), _arts(*updated)) is expected


def test_has_artifact_updated_with_missing_updated_artifact():
    assert has_artifact_updated(_arts("foo"), [None]) is True


def test_has_artifact_updated_empty():
    assert has_artifact_updated([], []) is False


def test_has_revision():
    art = Artifact(path="p", url="u", revision="main/abc")
    assert art.has_revision("main/abc") is True
    assert art.has_revision("main/def") is False


def test_artifact_dir_lowercases_kind():
    assert artifact_dir("GitRepository", "default", "podinfo") == "gitrepository/default/podinfo"


def test_artifact_path_appends_filename():
    path = artifact_path("Bucket", "ns", "name", "rev.tar.gz")
    assert path == artifact_dir("Bucket", "ns", "name") + "/rev.tar.gz"


def test_artifact_path_skips_empty_elements():
    assert artifact_path("Bucket", "", "name", "f") == "bucket/name/f"


def test_artifact_dir_cleans_path():
    assert artifact_dir("Bucket", "ns/../other", "name") == "bucket/other/name"