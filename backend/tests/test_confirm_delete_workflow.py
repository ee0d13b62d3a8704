"""
Unit tests for ConfirmDeleteWorkflow
"""
from dataclasses import dataclass
from unittest.mock import Mock, call

import pytest
from prometheus_client import REGISTRY

from app.components.confirm_delete import ConfirmDeleteWorkflow
from app.components.contracts import (ConfirmableDeletable, PromptView,
                                      RedirectTarget)
from app.core.exceptions import ResourceNotFoundError, StoreDeleteFailedError


@dataclass
class InMemoryResource:
    """Minimal deletable resource"""
    id: str
    label_text: str
    collection_route: str = "widgets_list"

    def label(self) -> str:
        return self.label_text


@dataclass
class CustomMessagesResource(InMemoryResource):
    question_template: str = "Really remove {label}?"
    deleted_message_template: str = "{label} is gone."


@pytest.fixture
def store():
    return Mock()


@pytest.fixture
def notifier():
    return Mock()


@pytest.fixture
def router():
    router = Mock()
    router.url_for.side_effect = lambda name: f"/{name.replace('_list', '')}"
    return router


@pytest.fixture
def workflow(store, notifier, router):
    return ConfirmDeleteWorkflow(store=store, notifier=notifier, router=router, resource_type="widget")


class TestRenderPrompt:
    """Test cases for the confirmation prompt"""

    @pytest.mark.parametrize("label", ["Acme Gateway", "ePayco <live>", "Pasarela Número 2", "x"])
    def test_question_contains_label_verbatim(self, workflow, label):
        prompt = workflow.render_prompt(InMemoryResource(id="w1", label_text=label))

        assert label in prompt.question
        assert prompt.confirm_text == "Delete"

    def test_example_prompt(self, workflow, router):
        prompt = workflow.render_prompt(InMemoryResource(id="gw-42", label_text="Acme Gateway"))

        assert prompt == PromptView(
            question="Are you sure you want to delete Acme Gateway?",
            confirm_text="Delete",
            cancel_url="/widgets",
        )
        router.url_for.assert_called_once_with("widgets_list")

    def test_has_no_side_effects(self, workflow, store, notifier):
        workflow.render_prompt(InMemoryResource(id="w1", label_text="Widget"))

        assert store.mock_calls == []
        assert notifier.mock_calls == []

    def test_requires_a_resource(self, workflow, router):
        with pytest.raises(ValueError):
            workflow.render_prompt(None)
        router.url_for.assert_not_called()

    def test_uses_resource_question_template(self, workflow):
        prompt = workflow.render_prompt(CustomMessagesResource(id="w1", label_text="Widget"))

        assert prompt.question == "Really remove Widget?"

    def test_in_memory_resource_satisfies_contract(self):
        assert isinstance(InMemoryResource(id="w1", label_text="Widget"), ConfirmableDeletable)


class TestConfirmDelete:
    """Test cases for the confirmed delete"""

    def test_deletes_exactly_once_by_id(self, workflow, store):
        workflow.confirm_delete(InMemoryResource(id="w-7", label_text="Widget"))

        assert store.delete.call_args_list == [call("w-7")]
        store.load.assert_not_called()

    def test_emits_single_notification_with_label(self, workflow, notifier):
        workflow.confirm_delete(InMemoryResource(id="w-7", label_text="Blue Widget"))

        assert notifier.add_message.call_count == 1
        (message,), _ = notifier.add_message.call_args
        assert "Blue Widget" in message

    def test_redirect_matches_cancel_target(self, workflow):
        resource = InMemoryResource(id="w-7", label_text="Widget")

        prompt = workflow.render_prompt(resource)
        target = workflow.confirm_delete(resource)

        assert target.url == prompt.cancel_url

    def test_example_delete(self, workflow, notifier):
        target = workflow.confirm_delete(InMemoryResource(id="gw-42", label_text="Acme Gateway"))

        notifier.add_message.assert_called_once_with("Configuration Acme Gateway was deleted.")
        assert target == RedirectTarget(url="/widgets", status_code=303)

    def test_store_order_delete_before_notify(self, store, notifier, router):
        manager = Mock()
        manager.attach_mock(store, "store")
        manager.attach_mock(notifier, "notifier")
        workflow = ConfirmDeleteWorkflow(store=store, notifier=notifier, router=router)

        workflow.confirm_delete(InMemoryResource(id="w1", label_text="Widget"))

        assert [c[0] for c in manager.mock_calls] == ["store.delete", "notifier.add_message"]

    @pytest.mark.parametrize("error", [ResourceNotFoundError("w1"), StoreDeleteFailedError("w1")])
    def test_store_failures_propagate_without_notification(self, workflow, store, notifier, error):
        store.delete.side_effect = error

        with pytest.raises(type(error)):
            workflow.confirm_delete(InMemoryResource(id="w1", label_text="Widget"))

        notifier.add_message.assert_not_called()

    def test_unexpected_store_error_counts_as_failed(self, workflow, store, notifier):
        failed = {"resource_type": "widget", "status": "failed"}
        before = REGISTRY.get_sample_value("resource_deletions_total", failed) or 0.0
        store.delete.side_effect = RuntimeError("connection reset")

        with pytest.raises(RuntimeError):
            workflow.confirm_delete(InMemoryResource(id="w1", label_text="Widget"))

        assert REGISTRY.get_sample_value("resource_deletions_total", failed) == before + 1
        notifier.add_message.assert_not_called()

    def test_delete_is_not_rolled_back_when_notification_fails(self, workflow, store, notifier):
        notifier.add_message.side_effect = RuntimeError("message queue unavailable")

        with pytest.raises(RuntimeError):
            workflow.confirm_delete(InMemoryResource(id="w1", label_text="Widget"))

        store.delete.assert_called_once_with("w1")
        assert len(store.mock_calls) == 1

    def test_uses_resource_deleted_message_template(self, workflow, notifier):
        workflow.confirm_delete(CustomMessagesResource(id="w1", label_text="Widget"))

        notifier.add_message.assert_called_once_with("Widget is gone.")

    def test_requires_a_resource(self, workflow, store):
        with pytest.raises(ValueError):
            workflow.confirm_delete(None)
        store.delete.assert_not_called()
