"""Move an issue between columns of its GitHub project board.

The issue's project items are looked up with GraphQL, the FIRST item is
taken as the board to update, the board's single-select status field is
resolved to option ids, and one mutation sets the new option.
"""

from __future__ import annotations

from dataclasses import dataclass

from . import log
from .errors import ProjectStatusError
from .gh import GhCli

DEFAULT_STATUS_FIELD = "Status"

ITEMS_QUERY = """
query($owner: String!, $name: String!, $number: Int!) {
  repository(owner: $owner, name: $name) {
    issue(number: $number) {
      id
      projectItems(first: 20) {
        nodes {
          id
          project { id title }
        }
      }
    }
  }
}
"""

FIELD_QUERY = """
query($project: ID!, $field: String!) {
  node(id: $project) {
    ... on ProjectV2 {
      field(name: $field) {
        ... on ProjectV2SingleSelectField {
          id
          name
          options { id name }
        }
      }
    }
  }
}
"""

UPDATE_MUTATION = """
mutation($project: ID!, $item: ID!, $field: ID!, $option: String!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $project
    itemId: $item
    fieldId: $field
    value: { singleSelectOptionId: $option }
  }) {
    projectV2Item { id }
  }
}
"""


@dataclass(frozen=True)
class ProjectItem:
    item_id: str
    project_id: str
    project_title: str


@dataclass(frozen=True)
class StatusField:
    field_id: str
    name: str
    options: dict[str, str]

    def option_id(self, status: str) -> tuple[str, str]:
        """Return ``(option_id, option_name)`` matched case-insensitively."""
        wanted = status.strip().lower()
        for name, option_id in self.options.items():
            if name.lower() == wanted:
                return option_id, name
        available = ", ".join(self.options) or "none"
        raise ProjectStatusError(
            f'status "{status}" not found in field "{self.name}" (available: {available})'
        )


@dataclass(frozen=True)
class StatusChange:
    number: int
    project_title: str
    status: str

    def describe(self) -> str:
        return f'Moved #{self.number} to "{self.status}" on {self.project_title}'


def split_repo(repo: str) -> tuple[str, str]:
    """Split ``owner/name``.

    Example:
        >>> split_repo("org/repo")
        ('org', 'repo')
    """
    owner, sep, name = repo.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        raise ProjectStatusError(f"repository must be in owner/name form: {repo!r}")
    return owner, name


def resolve_repo(gh: GhCli, repo: str | None) -> str:
    """Return ``repo`` or the repository gh infers from the working directory."""
    if repo:
        return repo
    payload = gh.run_json(["repo", "view", "--json", "nameWithOwner"])
    name = payload.get("nameWithOwner") if isinstance(payload, dict) else None
    if not isinstance(name, str) or not name:
        raise ProjectStatusError("could not determine the current repository; pass --repo")
    return name


def _dig(payload: object, *keys: str) -> object:
    current = payload
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_project_item(gh: GhCli, repo: str, number: int) -> ProjectItem:
    owner, name = split_repo(repo)
    data = gh.graphql(ITEMS_QUERY, {"owner": owner, "name": name, "number": number})
    issue = _dig(data, "repository", "issue")
    if not isinstance(issue, dict):
        raise ProjectStatusError(f"issue #{number} not found in {repo}")
    nodes = _dig(issue, "projectItems", "nodes")
    items = [node for node in nodes if isinstance(node, dict)] if isinstance(nodes, list) else []
    if not items:
        raise ProjectStatusError(f"issue #{number} is not on any project board")
    if len(items) > 1:
        log.warning(
            f"issue #{number} is on {len(items)} project boards; updating the first"
        )
    first = items[0]
    item_id = first.get("id")
    project_id = _dig(first, "project", "id")
    if not isinstance(item_id, str) or not isinstance(project_id, str):
        raise ProjectStatusError(f"incomplete project item for issue #{number}")
    title = _dig(first, "project", "title")
    return ProjectItem(
        item_id=item_id,
        project_id=project_id,
        project_title=title if isinstance(title, str) and title else project_id,
    )


def status_field(gh: GhCli, project: ProjectItem, field_name: str) -> StatusField:
    data = gh.graphql(FIELD_QUERY, {"project": project.project_id, "field": field_name})
    field = _dig(data, "node", "field")
    if not isinstance(field, dict) or not isinstance(field.get("id"), str):
        raise ProjectStatusError(
            f'project "{project.project_title}" has no single-select field "{field_name}"'
        )
    options: dict[str, str] = {}
    for option in field.get("options") or []:
        if not isinstance(option, dict):
            continue
        option_name = option.get("name")
        option_id = option.get("id")
        if isinstance(option_name, str) and isinstance(option_id, str):
            options[option_name] = option_id
    return StatusField(
        field_id=field["id"],
        name=str(field.get("name") or field_name),
        options=options,
    )


def set_project_status(
    gh: GhCli,
    number: int,
    status: str,
    *,
    repo: str | None = None,
    field_name: str = DEFAULT_STATUS_FIELD,
) -> StatusChange:
    """Set the status column of issue ``number`` on its first project board."""
    resolved_repo = resolve_repo(gh, repo)
    item = first_project_item(gh, resolved_repo, number)
    field = status_field(gh, item, field_name)
    option_id, option_name = field.option_id(status)
    gh.graphql(
        UPDATE_MUTATION,
        {
            "project": item.project_id,
            "item": item.item_id,
            "field": field.field_id,
            "option": option_id,
        },
    )
    return StatusChange(number=number, project_title=item.project_title, status=option_name)
