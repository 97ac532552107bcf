from datetime import datetime, timezone

import pytest

from issueoperator.controller import (
    AlreadyExistsError,
    InMemoryClient,
    IssueReconciler,
    NamespacedName,
    NotFoundError,
    Request,
    Result,
)
from issueoperator.types import Issue, IssueCondition, IssueScope, IssueSpec, ObjectMeta

RESOURCE_NAME = "test-resource"
KEY = NamespacedName(namespace="default", name=RESOURCE_NAME)
FIXED = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _issue(**kwargs) -> Issue:
    return Issue(metadata=ObjectMeta(name=RESOURCE_NAME, namespace="default"), **kwargs)


@pytest.fixture
def client():
    return InMemoryClient()


def _reconciler(client):
    return IssueReconciler(client, clock=lambda: FIXED)


class RecordingClient:
    def __init__(self, inner):
        self.inner = inner
        self.calls = []

    def get(self, key):
        return self.inner.get(key)

    def update(self, issue):
        self.calls.append("update")
        self.inner.update(issue)

    def update_status(self, issue):
        self.calls.append("update_status")
        self.inner.update_status(issue)


class FailingClient(RecordingClient):
    def update(self, issue):
        raise RuntimeError("update failed")


def test_reconcile_created_resource_then_delete(client):
    client.create(_issue())
    result = _reconciler(client).reconcile(Request(KEY))
    assert result == Result()
    stored = client.get(KEY)
    client.delete(stored)
    with pytest.raises(NotFoundError):
        client.get(KEY)


def test_reconcile_missing_resource_is_ignored(client):
    assert _reconciler(client).reconcile(Request(KEY)) == Result()


def test_labels_synced_from_spec(client):
    client.create(
        _issue(
            spec=IssueSpec(
                severity="high",
                issue_type="build",
                scope=IssueScope("Component", "web", "team-ns"),
            )
        )
    )
    _reconciler(client).reconcile(Request(KEY))
    assert client.get(KEY).metadata.labels == {
        "severity": "high",
        "issueType": "build",
        "resourceType": "Component",
        "resourceName": "web",
        "resourceNamespace": "team-ns",
    }


def test_condition_state_copied_to_label(client):
    client.create(_issue(condition=IssueCondition(state="active")))
    _reconciler(client).reconcile(Request(KEY))
    stored = client.get(KEY)
    assert stored.metadata.labels == {"state": "active"}
    assert stored.condition == IssueCondition(state="active")


def test_state_label_sets_condition_and_detected_timestamp(client):
    client.create(Issue(metadata=ObjectMeta(RESOURCE_NAME, "default", {"state": "resolved"})))
    _reconciler(client).reconcile(Request(KEY))
    stored = client.get(KEY)
    assert stored.condition.state == "resolved"
    assert stored.condition.detected_timestamp == "2025-01-02T03:04:05Z"
    assert stored.metadata.labels == {"state": "resolved"}


def test_existing_detected_timestamp_kept(client):
    client.create(
        Issue(
            metadata=ObjectMeta(RESOURCE_NAME, "default", {"state": "active"}),
            condition=IssueCondition(detected_timestamp="2024-06-01T00:00:00Z"),
        )
    )
    _reconciler(client).reconcile(Request(KEY))
    stored = client.get(KEY)
    assert stored.condition.state == "active"
    assert stored.condition.detected_timestamp == "2024-06-01T00:00:00Z"


def test_second_reconcile_makes_no_writes(client):
    client.create(_issue(spec=IssueSpec(severity="low")))
    recording = RecordingClient(client)
    reconciler = _reconciler(recording)
    reconciler.reconcile(Request(KEY))
    assert recording.calls == ["update"]
    reconciler.reconcile(Request(KEY))
    assert recording.calls == ["update"]


def test_status_written_before_labels(client):
    client.create(
        Issue(
            metadata=ObjectMeta(RESOURCE_NAME, "default", {"state": "open"}),
            spec=IssueSpec(severity="high"),
        )
    )
    recording = RecordingClient(client)
    _reconciler(recording).reconcile(Request(KEY))
    assert recording.calls == ["update_status", "update"]


def test_update_failure_propagates(client):
    client.create(_issue(spec=IssueSpec(severity="high")))
    with pytest.raises(RuntimeError):
        _reconciler(FailingClient(client)).reconcile(Request(KEY))


def test_create_duplicate_raises(client):
    client.create(_issue())
    with pytest.raises(AlreadyExistsError):
        client.create(_issue())


def test_update_missing_raises(client):
    with pytest.raises(NotFoundError):
        client.update(_issue())
    with pytest.raises(NotFoundError):
        client.update_status(_issue())


def test_delete_missing_raises(client):
    with pytest.raises(NotFoundError):
        client.delete(_issue())


def test_update_keeps_stored_condition(client):
    client.create(_issue(condition=IssueCondition(state="open")))
    changed = _issue(spec=IssueSpec(title="new"), condition=IssueCondition(state="closed"))
    client.update(changed)
    stored = client.get(KEY)
    assert stored.spec.title == "new"
    assert stored.condition.state == "open"


def test_update_status_keeps_stored_labels(client):
    client.create(_issue())
    changed = Issue(
        metadata=ObjectMeta(RESOURCE_NAME, "default", {"x": "y"}),
        condition=IssueCondition(state="closed"),
    )
    client.update_status(changed)
    stored = client.get(KEY)
    assert stored.condition.state == "closed"
    assert stored.metadata.labels is None


def test_get_returns_copy(client):
    client.create(_issue())
    fetched = client.get(KEY)
    fetched.spec.title = "mutated"
    assert client.get(KEY).spec.title == ""


def test_namespaced_name_str():
    assert str(KEY) == "default/test-resource"