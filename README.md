# issueoperator

Issue resources and a reconciler that keeps an issue's labels and state in step
with its spec.

The package has two modules:

- `issueoperator.types` holds the resource types: `Issue`, `IssueList`,
  `IssueSpec`, `IssueScope`, `IssueLink`, `IssueCondition` and `ObjectMeta`.
  It also holds `GroupVersion` and the constant `GROUP_VERSION`, which is
  `issues.konflux.dev/v1beta1`.
- `issueoperator.controller` holds `IssueReconciler`, the in-memory store
  `InMemoryClient`, the `NamespacedName`, `Request` and `Result` values, and the
  errors `NotFoundError` and `AlreadyExistsError`.

## The Issue resource

An `Issue` has three parts:

- `metadata`: an `ObjectMeta` with a name, a namespace and labels.
- `spec`: an `IssueSpec` with a title, description, severity, issue type, a
  scope, related issues and links. The scope is an `IssueScope` with a resource
  type, name and namespace. Each link is an `IssueLink` with a title and URL.
- `condition`: an `IssueCondition` with a state and the detected and resolved
  timestamps.

Every type has `to_dict()` and a `from_dict(data)` class method. These convert
to and from plain dictionaries in the wire form, which uses camelCase keys such
as `issueType`, `resourceName` and `detectedTimestamp`. Empty optional fields
are left out. `Issue.to_dict()` and `IssueList.to_dict()` add `apiVersion` and
`kind`. `Issue.from_dict()` and `IssueList.from_dict()` raise `ValueError` when
the given `apiVersion` or `kind` does not match.

## What the reconciler does

`IssueReconciler(client, clock=...)` works with any client that has `get`,
`update` and `update_status`, such as `InMemoryClient`. The optional `clock`
returns the current `datetime`. It defaults to the current UTC time.

On every call to `reconcile(request)`:

- The `severity`, `issueType`, `resourceType`, `resourceName` and
  `resourceNamespace` labels are set from the spec. Empty spec fields are
  skipped.
- The `state` label is set from the condition's state when that state is not
  empty.
- If a `state` label exists and differs from the condition's state, the
  condition takes the label's value. Moving away from `resolved` clears the
  resolved timestamp. An empty detected timestamp is filled in with the clock's
  time in RFC 3339 form, for example `2025-01-02T03:04:05Z`. The condition is
  then written with `update_status`.
- If any label changed, the issue is written with `update`.
- An issue that no longer exists is not an error. The reconciler returns an
  empty `Result()`. Errors raised by the client's writes are logged and raised
  again.

## InMemoryClient

`InMemoryClient` keys issues by `NamespacedName(namespace, name)`.

- `get(key)` returns a copy of the stored issue.
- `create(issue)` stores a new issue.
- `update(issue)` stores metadata and spec and keeps the stored condition.
- `update_status(issue)` stores the condition only and keeps metadata and spec.
- `delete(issue)` removes the issue.

Missing issues raise `NotFoundError`. Creating an issue twice raises
`AlreadyExistsError`.

## Usage

```python
from issueoperator.controller import (
    InMemoryClient,
    IssueReconciler,
    NamespacedName,
    Request,
)
from issueoperator.types import Issue, IssueScope, IssueSpec, ObjectMeta

client = InMemoryClient()
client.create(
    Issue(
        metadata=ObjectMeta(name="build-failure", namespace="default"),
        spec=IssueSpec(
            title="Build failing",
            description="Pipeline run failed on the compile step",
            severity="major",
            issue_type="build",
            scope=IssueScope(resource_type="component", resource_name="frontend"),
        ),
    )
)

reconciler = IssueReconciler(client)
key = NamespacedName(namespace="default", name="build-failure")
reconciler.reconcile(Request(key))

print(client.get(key).metadata.labels)
# {'severity': 'major', 'issueType': 'build',
#  'resourceType': 'component', 'resourceName': 'frontend'}
```

## What this package does not do

This package is a library. It has no command to run. It does not connect to a
cluster and does not watch for changes. It has no manager, leader election,
metrics or health endpoints. The only store it provides is `InMemoryClient`,
which keeps issues in memory for the life of the process. To reconcile issues
elsewhere, pass `IssueReconciler` your own client with the same `get`, `update`
and `update_status` methods, and call `reconcile` yourself.

## Running the tests

```
pip install -e ".[test]"
pytest
```