"""Resource types for the issues.konflux.dev/v1beta1 API group."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def api_version(self) -> str:
        """Return the value used in an object's ``apiVersion`` field."""
        return f"{self.group}/{self.version}" if self.group else self.version


GROUP_VERSION = GroupVersion(group="issues.konflux.dev", version="v1beta1")
ISSUE_KIND = "Issue"
ISSUE_LIST_KIND = "IssueList"
SHORT_NAMES = ("isu", "iss")


def _check_header(data: Mapping[str, Any], kind: str) -> None:
    api_version = data.get("apiVersion")
    if api_version and api_version != GROUP_VERSION.api_version():
        raise ValueError(f"unexpected apiVersion {api_version!r} for {kind}")
    found_kind = data.get("kind")
    if found_kind and found_kind != kind:
        raise ValueError(f"unexpected kind {found_kind!r}, expected {kind!r}")


@dataclass
class ObjectMeta:
    """The identifying metadata of a stored object."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        if self.namespace:
            result["namespace"] = self.namespace
        if self.labels:
            result["labels"] = dict(self.labels)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ObjectMeta:
        labels = data.get("labels")
        return cls(
            name=data.get("name", ""),
            namespace=data.get("namespace", ""),
            labels=dict(labels) if labels is not None else None,
        )


@dataclass
class IssueScope:
    """The resource an issue is about."""

    resource_type: str = ""
    resource_name: str = ""
    resource_namespace: str = ""

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "resourceType": self.resource_type,
            "resourceName": self.resource_name,
        }
        if self.resource_namespace:
            result["resourceNamespace"] = self.resource_namespace
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueScope:
        return cls(
            resource_type=data.get("resourceType", ""),
            resource_name=data.get("resourceName", ""),
            resource_namespace=data.get("resourceNamespace", ""),
        )


@dataclass
class IssueLink:
    """A titled link to a related resource."""

    title: str = ""
    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"title": self.title, "url": self.url}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueLink:
        return cls(title=data.get("title", ""), url=data.get("url", ""))


@dataclass
class IssueSpec:
    """The desired state of an issue."""

    title: str = ""
    description: str = ""
    severity: str = ""
    issue_type: str = ""
    scope: IssueScope = field(default_factory=IssueScope)
    related_issues: list[str] = field(default_factory=list)
    links: list[IssueLink] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "issueType": self.issue_type,
            "scope": self.scope.to_dict(),
        }
        if self.related_issues:
            result["relatedIssues"] = list(self.related_issues)
        if self.links:
            result["links"] = [link.to_dict() for link in self.links]
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueSpec:
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            severity=data.get("severity", ""),
            issue_type=data.get("issueType", ""),
            scope=IssueScope.from_dict(data.get("scope") or {}),
            related_issues=list(data.get("relatedIssues") or []),
            links=[IssueLink.from_dict(item) for item in data.get("links") or []],
        )


@dataclass
class IssueCondition:
    """The observed state of an issue."""

    state: str = ""
    resolved_timestamp: str = ""
    detected_timestamp: str = ""

    def to_dict(self) -> dict[str, Any]:
        pairs = (
            ("state", self.state),
            ("resolvedTimestamp", self.resolved_timestamp),
            ("detectedTimestamp", self.detected_timestamp),
        )
        return {key: value for key, value in pairs if value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueCondition:
        return cls(
            state=data.get("state", ""),
            resolved_timestamp=data.get("resolvedTimestamp", ""),
            detected_timestamp=data.get("detectedTimestamp", ""),
        )


@dataclass
class Issue:
    """An issue resource: metadata, spec and observed condition."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: IssueSpec = field(default_factory=IssueSpec)
    condition: IssueCondition = field(default_factory=IssueCondition)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": ISSUE_KIND,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "condition": self.condition.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Issue:
        _check_header(data, ISSUE_KIND)
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata") or {}),
            spec=IssueSpec.from_dict(data.get("spec") or {}),
            condition=IssueCondition.from_dict(data.get("condition") or {}),
        )


@dataclass
class IssueList:
    """A list of issues."""

    items: list[Issue] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": ISSUE_LIST_KIND,
            "metadata": {},
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IssueList:
        _check_header(data, ISSUE_LIST_KIND)
        return cls(items=[Issue.from_dict(item) for item in data.get("items") or []])