"""Pydantic models for gh issue payloads and export options."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)

IssueState = Literal["OPEN", "CLOSED"]
StateFilter = Literal["open", "closed", "all"]
STATE_FILTER_VALUES = ("open", "closed", "all")

# Exactly the fields requested from ``gh issue list --json``.
ISSUE_FIELDS = (
    "number",
    "title",
    "state",
    "labels",
    "assignees",
    "milestone",
    "createdAt",
    "updatedAt",
    "url",
    "body",
    "comments",
    "projectItems",
)


class RawLabel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class RawUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str


class RawMilestone(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None


class RawProjectStatus(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    option_id: str | None = Field(default=None, alias="optionId")


class RawProjectItem(BaseModel):
    """One board membership as reported by ``gh issue list``."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    status: RawProjectStatus | None = None


class RawIssueRecord(BaseModel):
    """Issue record in the shape emitted by ``gh issue list --json``.

    Example:
        >>> record = RawIssueRecord.model_validate(
        ...     {
        ...         "number": 1,
        ...         "title": "Bug",
        ...         "state": "OPEN",
        ...         "createdAt": "2024-01-05T10:00:00Z",
        ...         "updatedAt": "2024-01-06T10:00:00Z",
        ...         "url": "https://x/1",
        ...     }
        ... )
        >>> record.labels
        []
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    number: int
    title: str
    state: IssueState
    labels: list[RawLabel] = Field(default_factory=list)
    assignees: list[RawUser] = Field(default_factory=list)
    milestone: RawMilestone | None = None
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    url: str
    body: str | None = None
    comments: list[dict[str, Any]] | None = None
    project_items: list[RawProjectItem] | None = Field(default=None, alias="projectItems")

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("labels", "assignees", mode="before")
    @classmethod
    def normalize_lists(cls, value: object) -> object:
        if value is None:
            return []
        return value


class NormalizedIssue(BaseModel):
    """Simplified, immutable issue used by the formatters.

    ``comment_count`` is derived from ``comments`` and cannot drift from it.

    Example:
        >>> issue = NormalizedIssue(
        ...     number=7,
        ...     title="Docs",
        ...     state="CLOSED",
        ...     created_at="2024-01-05T10:00:00Z",
        ...     updated_at="2024-01-05T10:00:00Z",
        ...     url="https://x/7",
        ...     comments=({"body": "done"},),
        ... )
        >>> issue.comment_count
        1
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(gt=0)
    title: str
    state: IssueState
    labels: tuple[str, ...] = ()
    assignees: tuple[str, ...] = ()
    milestone: str | None = None
    created_at: str
    updated_at: str
    url: str
    body: str = ""
    comments: tuple[dict[str, Any], ...] = ()
    project_status: str | None = None

    @computed_field
    @property
    def comment_count(self) -> int:
        return len(self.comments)

    @classmethod
    def from_raw(cls, raw: RawIssueRecord) -> NormalizedIssue:
        """Map a gh record onto the normalized shape.

        Only the first project item is consulted for ``project_status``.
        """
        project_status = None
        if raw.project_items:
            first = raw.project_items[0]
            if first.status is not None:
                project_status = first.status.name or None
        milestone = raw.milestone.title if raw.milestone else None
        return cls(
            number=raw.number,
            title=raw.title,
            state=raw.state,
            labels=tuple(label.name for label in raw.labels),
            assignees=tuple(user.login for user in raw.assignees),
            milestone=milestone or None,
            created_at=raw.created_at,
            updated_at=raw.updated_at,
            url=raw.url,
            body=raw.body or "",
            comments=tuple(raw.comments or ()),
            project_status=project_status,
        )


class ExportOptions(BaseModel):
    """Filter options translated into ``gh issue list`` arguments.

    Example:
        >>> ExportOptions(labels="bug, ui,").label_filters()
        ['bug', 'ui']
    """

    repo: str | None = None
    state: StateFilter = "all"
    labels: str | None = None
    milestone: str | None = None
    assignee: str | None = None
    limit: int = Field(default=500, gt=0)

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, value: object) -> object:
        if value is None:
            return "all"
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("repo", "labels", "milestone", "assignee", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def label_filters(self) -> list[str]:
        if not self.labels:
            return []
        return [token.strip() for token in self.labels.split(",") if token.strip()]


class OutputFormat(str, Enum):
    """Rendering selected by ``--format``."""

    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"

    @classmethod
    def parse(cls, value: str | OutputFormat | None) -> OutputFormat:
        """Resolve a selector exactly, falling back to markdown for anything else.

        Example:
            >>> OutputFormat.parse("csv")
            <OutputFormat.MARKDOWN: 'markdown'>
            >>> OutputFormat.parse("JSON")
            <OutputFormat.MARKDOWN: 'markdown'>
        """
        if isinstance(value, OutputFormat):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.MARKDOWN


class FormatOptions(BaseModel):
    """Display switches shared by all renderers."""

    model_config = ConfigDict(frozen=True)

    titles_only: bool = False
    include_comments: bool = False
