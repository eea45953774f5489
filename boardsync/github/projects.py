"""ProjectV2 board operations: linking items and setting their status.

Both operations go through :meth:`GitHubClient.graphql`, so a GraphQL
``errors`` list fails the call even when GitHub answered HTTP 200.
"""

from __future__ import annotations

import typing as typ

from boardsync.logging import get_logger, log_error, log_info

from .errors import GitHubResponseShapeError, StatusFieldMismatchError
from .models import AddItemData, ProjectFieldsData, StatusFieldSchema, UpdateFieldData

if typ.TYPE_CHECKING:
    from .client import GitHubClient
    from .models import ProjectField

__all__ = [
    "STATUS_FIELD_NAME",
    "ProjectItemLinker",
    "StatusFieldSynchronizer",
    "find_status_field",
]

logger = get_logger(__name__)

STATUS_FIELD_NAME = "Status"

# Boards with more fields than this are unsupported; the status field may
# then fall outside the first page and surface as missing.
_FIELD_PAGE_SIZE = 20

_ADD_ITEM_MUTATION = """
mutation($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: {projectId: $projectId, contentId: $contentId}) {
    item { id }
  }
}
"""

_PROJECT_FIELDS_QUERY = """
query($projectId: ID!, $first: Int!) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: $first) {
        nodes {
          ... on ProjectV2SingleSelectField {
            id
            name
            options { id name }
          }
        }
      }
    }
  }
}
"""

_UPDATE_FIELD_MUTATION = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
  updateProjectV2ItemFieldValue(
    input: {
      projectId: $projectId
      itemId: $itemId
      fieldId: $fieldId
      value: {singleSelectOptionId: $optionId}
    }
  ) {
    projectV2Item { id }
  }
}
"""


class ProjectItemLinker:
    """Attach issues and pull requests to a project board.

    ``addProjectV2ItemById`` returns the existing item when the content is
    already on the board, so linking is safe to repeat.
    """

    operation = "add project item"

    def __init__(self, client: GitHubClient) -> None:
        """Bind the linker to the shared GitHub client."""
        self._client = client

    async def link(self, project_id: str, content_id: str) -> str:
        """Add ``content_id`` to ``project_id`` and return the item id.

        Raises
        ------
        GitHubUpstreamError
            If the mutation fails or its result carries no item id.

        """
        data = await self._client.graphql(
            self.operation,
            _ADD_ITEM_MUTATION,
            {"projectId": project_id, "contentId": content_id},
            AddItemData,
        )
        item = data.add_item.item if data.add_item is not None else None
        if item is None or not item.id:
            log_error(logger, "No item id returned when adding %s", content_id)
            raise GitHubResponseShapeError.missing(
                self.operation, "addProjectV2ItemById.item.id"
            )
        log_info(logger, "Item %s linked to project %s", item.id, project_id)
        return item.id


def find_status_field(
    fields: typ.Iterable[ProjectField | None],
    label: str,
    *,
    field_name: str = STATUS_FIELD_NAME,
) -> tuple[str, str]:
    """Return ``(field_id, option_id)`` for ``label`` in the named field.

    The first field called ``field_name`` is used, and within it the
    first option whose name equals ``label``.

    Raises
    ------
    StatusFieldMismatchError
        If no such field or option exists.

    """
    for field in fields:
        if field is None or field.name != field_name or not field.id:
            continue
        # Reversed so the first option with a duplicated label wins.
        schema = StatusFieldSchema(
            field_id=field.id,
            options={option.name: option.id for option in reversed(field.options)},
        )
        option_id = schema.options.get(label)
        if option_id is None:
            raise StatusFieldMismatchError.option_missing(field_name, label)
        return (schema.field_id, option_id)
    raise StatusFieldMismatchError.field_missing(field_name)


class StatusFieldSynchronizer:
    """Set a project item's single-select status field by option label.

    The board's field list is fetched on every call; nothing is cached,
    so renamed or re-created options are picked up on the next delivery.
    """

    fields_operation = "fetch project fields"
    update_operation = "update item status"

    def __init__(self, client: GitHubClient) -> None:
        """Bind the synchronizer to the shared GitHub client."""
        self._client = client

    async def fetch_fields(self, project_id: str) -> list[ProjectField | None]:
        """Return the first page of the project's fields."""
        data = await self._client.graphql(
            self.fields_operation,
            _PROJECT_FIELDS_QUERY,
            {"projectId": project_id, "first": _FIELD_PAGE_SIZE},
            ProjectFieldsData,
        )
        connection = data.node.fields if data.node is not None else None
        if connection is None or connection.nodes is None:
            log_error(logger, "No fields returned for project %s", project_id)
            raise GitHubResponseShapeError.missing(
                self.fields_operation, "node.fields.nodes"
            )
        return connection.nodes

    async def set_status(self, project_id: str, item_id: str, label: str) -> None:
        """Set ``item_id``'s status field to the option named ``label``.

        Raises
        ------
        StatusFieldMismatchError
            If the board has no status field or no option named ``label``.
        GitHubUpstreamError
            If either GraphQL call fails.

        """
        fields = await self.fetch_fields(project_id)
        try:
            field_id, option_id = find_status_field(fields, label)
        except StatusFieldMismatchError as exc:
            log_error(logger, "Cannot set status on %s: %s", item_id, exc)
            raise

        await self._client.graphql(
            self.update_operation,
            _UPDATE_FIELD_MUTATION,
            {
                "projectId": project_id,
                "itemId": item_id,
                "fieldId": field_id,
                "optionId": option_id,
            },
            UpdateFieldData,
        )
        log_info(logger, "Item %s status set to %s", item_id, label)
