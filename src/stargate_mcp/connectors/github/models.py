from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel

from stargate_common.errors import ArgumentConflictError


class ProjectFieldValue(BaseModel):
    """Input value for updateProjectV2ItemFieldValue; set exactly the key matching the field type."""

    text: Optional[str] = None
    number: Optional[float] = None
    date: Optional[str] = None
    singleSelectOptionId: Optional[str] = None
    iterationId: Optional[str] = None

    def to_variables(self) -> dict:
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class AttachExisting:
    content_id: str


@dataclass(frozen=True)
class CreateDraft:
    title: str
    body: str | None = None


ProjectItemRequest = Union[AttachExisting, CreateDraft]


def project_item_request(
    content_id: str | None,
    draft_title: str | None,
    draft_body: str | None = None,
) -> ProjectItemRequest:
    """Resolve the add-item arguments. An existing issue/PR id takes precedence over a draft title."""
    if content_id:
        return AttachExisting(content_id)
    if draft_title:
        return CreateDraft(draft_title, draft_body)
    raise ArgumentConflictError(
        "Either content_id (for existing issue/PR) or draft_title (for draft issue) is required"
    )


def has_status(item: dict, status: str) -> bool:
    """True when the item's single-select "Status" field is set to `status`."""
    values = ((item.get("fieldValues") or {}).get("nodes")) or []
    return any(
        (fv.get("field") or {}).get("name") == "Status" and fv.get("name") == status
        for fv in values
        if isinstance(fv, dict)
    )
