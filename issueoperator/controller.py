"""Reconciliation of Issue resources and an in-memory object store."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Protocol

from .types import Issue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamespacedName:
    """The namespace and name that identify an object."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True)
class Request:
    """A request to reconcile one object."""

    namespaced_name: NamespacedName


@dataclass(frozen=True)
class Result:
    """The outcome of a reconciliation."""

    requeue: bool = False
    requeue_after: float = 0.0


class NotFoundError(LookupError):
    """Raised when an object does not exist in the store."""


class AlreadyExistsError(Exception):
    """Raised when creating an object that already exists."""


class IssueClient(Protocol):
    def get(self, key: NamespacedName) -> Issue: ...

    def update(self, issue: Issue) -> None: ...

    def update_status(self, issue: Issue) -> None: ...


def _key_of(issue: Issue) -> NamespacedName:
    return NamespacedName(issue.metadata.namespace, issue.metadata.name)


class InMemoryClient:
    """Stores issues, keeping metadata/spec and status writes separate."""

    def __init__(self) -> None:
        self._objects: dict[NamespacedName, Issue] = {}

    def get(self, key: NamespacedName) -> Issue:
        try:
            return copy.deepcopy(self._objects[key])
        except KeyError:
            raise NotFoundError(f"issue {key} not found") from None

    def create(self, issue: Issue) -> None:
        key = _key_of(issue)
        if key in self._objects:
            raise AlreadyExistsError(f"issue {key} already exists")
        self._objects[key] = copy.deepcopy(issue)

    def update(self, issue: Issue) -> None:
        """Store metadata and spec; the stored condition is kept."""
        stored = self._existing(issue)
        updated = copy.deepcopy(issue)
        updated.condition = copy.deepcopy(stored.condition)
        self._objects[_key_of(issue)] = updated

    def update_status(self, issue: Issue) -> None:
        """Store the condition only; metadata and spec are kept."""
        updated = copy.deepcopy(self._existing(issue))
        updated.condition = copy.deepcopy(issue.condition)
        self._objects[_key_of(issue)] = updated

    def delete(self, issue: Issue) -> None:
        key = _key_of(issue)
        if self._objects.pop(key, None) is None:
            raise NotFoundError(f"issue {key} not found")

    def _existing(self, issue: Issue) -> Issue:
        key = _key_of(issue)
        try:
            return self._objects[key]
        except KeyError:
            raise NotFoundError(f"issue {key} not found") from None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _rfc3339(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).replace(microsecond=0).isoformat()
    return text.replace("+00:00", "Z")


class IssueReconciler:
    """Keeps an issue's labels and condition in step with its spec."""

    def __init__(self, client: IssueClient, clock: Callable[[], datetime] = _utc_now) -> None:
        self.client = client
        self.clock = clock

    def reconcile(self, request: Request) -> Result:
        try:
            issue = self.client.get(request.namespaced_name)
        except NotFoundError:
            return Result()

        if issue.metadata.labels is None:
            issue.metadata.labels = {}
        labels = issue.metadata.labels

        spec, scope, condition = issue.spec, issue.spec.scope, issue.condition
        wanted = (
            ("severity", spec.severity),
            ("issueType", spec.issue_type),
            ("resourceType", scope.resource_type),
            ("resourceName", scope.resource_name),
            ("resourceNamespace", scope.resource_namespace),
            ("state", condition.state),
        )
        needs_update = False
        for label, value in wanted:
            if value and labels.get(label) != value:
                labels[label] = value
                needs_update = True

        state_changed = False
        state_label = labels.get("state")
        if state_label is not None and condition.state != state_label:
            old_state = condition.state
            condition.state = state_label
            state_changed = True
            now = _rfc3339(self.clock())
            if old_state == "resolved" and state_label != "resolved":
                condition.resolved_timestamp = ""
            if not condition.detected_timestamp:
                condition.detected_timestamp = now

        if state_changed:
            logger.info("Updating issue state name=%s state=%s", issue.metadata.name, condition.state)
            try:
                self.client.update_status(issue)
            except Exception:
                logger.exception("Failed to update issue condition")
                raise

        if needs_update:
            logger.info("Updating issue labels name=%s", issue.metadata.name)
            try:
                self.client.update(issue)
            except Exception:
                logger.exception("Failed to update issue labels")
                raise

        return Result()