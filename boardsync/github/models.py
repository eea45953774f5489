"""Typed response shapes for the GitHub REST and GraphQL calls.

Each response is decoded once at the client boundary with msgspec.  Every
field GitHub might omit or null is optional here, and the callers turn an
absent value into :class:`~boardsync.github.errors.GitHubResponseShapeError`.
"""

from __future__ import annotations

import typing as typ

import msgspec

DataT = typ.TypeVar("DataT")


class GraphQLError(msgspec.Struct, kw_only=True):
    """One entry of a GraphQL top-level ``errors`` list."""

    message: str = ""
    type: str | None = None
    path: list[str | int] | None = None


class GraphQLResponse(msgspec.Struct, typ.Generic[DataT], kw_only=True):
    """GraphQL response envelope; ``errors`` may accompany HTTP 200."""

    data: DataT | None = None
    errors: list[GraphQLError] | None = None


class ResourceNode(msgspec.Struct, kw_only=True):
    """REST issue or pull request body, reduced to its node id."""

    node_id: str | None = None


class NodeRef(msgspec.Struct, kw_only=True):
    """Object selected only for its ``id``."""

    id: str | None = None


class AddItemPayload(msgspec.Struct, kw_only=True):
    """``addProjectV2ItemById`` result."""

    item: NodeRef | None = None


class AddItemData(msgspec.Struct, kw_only=True):
    """``data`` of the add-item mutation."""

    add_item: AddItemPayload | None = msgspec.field(
        default=None, name="addProjectV2ItemById"
    )


class FieldOption(msgspec.Struct, kw_only=True):
    """Single-select option."""

    id: str
    name: str


class ProjectField(msgspec.Struct, kw_only=True):
    """Entry of a project's field list.

    Fields that are not single-select match no fragment in the query and
    arrive as empty objects, leaving every attribute at its default.
    """

    id: str | None = None
    name: str | None = None
    options: list[FieldOption] = msgspec.field(default_factory=list)


class ProjectFieldConnection(msgspec.Struct, kw_only=True):
    """``fields(first: N)`` connection."""

    nodes: list[ProjectField | None] | None = None


class ProjectNode(msgspec.Struct, kw_only=True):
    """Project resolved through ``node(id:)``."""

    fields: ProjectFieldConnection | None = None


class ProjectFieldsData(msgspec.Struct, kw_only=True):
    """``data`` of the field-list query."""

    node: ProjectNode | None = None


class UpdateFieldPayload(msgspec.Struct, kw_only=True):
    """``updateProjectV2ItemFieldValue`` result."""

    project_item: NodeRef | None = msgspec.field(default=None, name="projectV2Item")


class UpdateFieldData(msgspec.Struct, kw_only=True):
    """``data`` of the update-field mutation."""

    update: UpdateFieldPayload | None = msgspec.field(
        default=None, name="updateProjectV2ItemFieldValue"
    )


class StatusFieldSchema(msgspec.Struct, kw_only=True, frozen=True):
    """Board status field and its option ids keyed by label."""

    field_id: str
    options: dict[str, str]


__all__ = [
    "AddItemData",
    "AddItemPayload",
    "FieldOption",
    "GraphQLError",
    "GraphQLResponse",
    "NodeRef",
    "ProjectField",
    "ProjectFieldConnection",
    "ProjectFieldsData",
    "ProjectNode",
    "ResourceNode",
    "StatusFieldSchema",
    "UpdateFieldData",
    "UpdateFieldPayload",
]
