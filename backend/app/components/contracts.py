"""
Contracts for the confirmation-gated delete workflow.

The workflow depends only on these interfaces; concrete collaborators
(SQLAlchemy store, cookie notifier, request router) live elsewhere.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

DEFAULT_QUESTION_TEMPLATE = "Are you sure you want to delete {label}?"
DEFAULT_DELETED_MESSAGE_TEMPLATE = "Configuration {label} was deleted."
DEFAULT_CONFIRM_TEXT = "Delete"


@runtime_checkable
class ConfirmableDeletable(Protocol):
    """A resource kind that can be deleted through a confirmation prompt.

    ``collection_route`` names the list view the user returns to, both on
    cancel and after a confirmed delete. A kind may also define
    ``question_template`` and ``deleted_message_template`` class attributes;
    both are formatted with ``label=`` and fall back to the defaults above.
    """

    id: Any
    collection_route: str

    def label(self) -> str: ...


class ResourceStore(Protocol):
    def load(self, resource_id: Any) -> ConfirmableDeletable:
        """Return the resource or raise ResourceNotFoundError"""
        ...

    def delete(self, resource_id: Any) -> None:
        """Delete the resource or raise ResourceNotFoundError / StoreDeleteFailedError"""
        ...


class Notifier(Protocol):
    def add_message(self, text: str) -> None: ...


class Router(Protocol):
    def url_for(self, route_name: str) -> str: ...


class PromptView(BaseModel):
    question: str = Field(..., description="Confirmation question shown to the user")
    confirm_text: str = Field(default=DEFAULT_CONFIRM_TEXT, description="Label of the confirm action")
    cancel_url: str = Field(..., description="Where the cancel link points (collection list)")


class RedirectTarget(BaseModel):
    url: str
    status_code: int = 303
