"""
Confirmation-gated delete workflow.

Two steps, both driven by the UI layer:

1. ``render_prompt`` builds the yes/no view for an already loaded resource.
2. ``confirm_delete`` deletes it through the store, queues a status message
   and returns where to redirect (the same list view the cancel link uses).

Store failures are not caught here. The delete is not rolled back if a later
step fails.
"""

from __future__ import annotations

from typing import Optional

from app.components.contracts import (DEFAULT_CONFIRM_TEXT,
                                      DEFAULT_DELETED_MESSAGE_TEMPLATE,
                                      DEFAULT_QUESTION_TEMPLATE,
                                      ConfirmableDeletable, Notifier,
                                      PromptView, RedirectTarget,
                                      ResourceStore, Router)
from app.core.logging_config import LoggingConfig
from app.core.metrics import resource_deletions_total

logger = LoggingConfig.get_logger(__name__)


class ConfirmDeleteWorkflow:
    """Prompt for, and perform, the deletion of a single resource"""

    def __init__(
        self,
        store: ResourceStore,
        notifier: Notifier,
        router: Router,
        resource_type: Optional[str] = None,
    ):
        self.store = store
        self.notifier = notifier
        self.router = router
        self.resource_type = resource_type or "resource"

    def cancel_url(self, resource: ConfirmableDeletable) -> str:
        """URL of the collection list for the resource's kind"""
        return self.router.url_for(resource.collection_route)

    def render_prompt(self, resource: ConfirmableDeletable) -> PromptView:
        """
        Build the confirmation view for a loaded resource

        Args:
            resource: Resource returned by ``ResourceStore.load``

        Returns:
            PromptView with question, confirm label and cancel URL

        Raises:
            ValueError: if called without a resource
        """
        _require_resource(resource)
        label = resource.label()
        template = getattr(resource, "question_template", DEFAULT_QUESTION_TEMPLATE)

        logger.debug(
            "Rendering delete confirmation",
            extra={"resource_id": str(resource.id), "resource_label": label},
        )
        return PromptView(
            question=template.format(label=label),
            confirm_text=DEFAULT_CONFIRM_TEXT,
            cancel_url=self.cancel_url(resource),
        )

    def confirm_delete(self, resource: ConfirmableDeletable) -> RedirectTarget:
        """
        Delete the resource, queue a status message and return the redirect

        Args:
            resource: The same resource reference the prompt was built for

        Returns:
            RedirectTarget pointing at the collection list

        Raises:
            ResourceNotFoundError: the store no longer has the resource
            StoreDeleteFailedError: the store failed to delete it
        """
        _require_resource(resource)
        # Captured up front: the record may be unusable once deleted
        resource_id = resource.id
        label = resource.label()
        message_template = getattr(
            resource, "deleted_message_template", DEFAULT_DELETED_MESSAGE_TEMPLATE
        )

        try:
            self.store.delete(resource_id)
        except Exception:
            resource_deletions_total.labels(resource_type=self.resource_type, status="failed").inc()
            raise

        resource_deletions_total.labels(resource_type=self.resource_type, status="success").inc()
        logger.info(
            "Resource deleted",
            extra={
                "resource_type": self.resource_type,
                "resource_id": str(resource_id),
                "resource_label": label,
            },
        )

        self.notifier.add_message(message_template.format(label=label))
        return RedirectTarget(url=self.cancel_url(resource))


def _require_resource(resource: Optional[ConfirmableDeletable]):
    if resource is None:
        raise ValueError("A loaded resource is required; load it from the store first")
