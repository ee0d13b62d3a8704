"""
Tests for the payment gateway factory web pages (confirm-delete flow)
"""
from prometheus_client import REGISTRY

from app.core.exceptions import ResourceNotFoundError, StoreDeleteFailedError
from app.core.messages import decode_messages
from app.services.factory_service import FactoryService

HTML = {"accept": "text/html"}


def _deletions(status: str) -> float:
    value = REGISTRY.get_sample_value(
        "resource_deletions_total",
        {"resource_type": "payment_gateway_factories", "status": status},
    )
    return value or 0.0


def test_list_page_shows_factories(client, acme_factory):
    r = client.get("/factories")

    assert r.status_code == 200
    assert "Acme Gateway" in r.text
    assert "/factories/gw-42/delete" in r.text


def test_list_page_empty(client):
    r = client.get("/factories")

    assert r.status_code == 200
    assert "There are no payment gateway factories yet." in r.text


def test_confirm_page_renders_prompt(client, acme_factory):
    r = client.get("/factories/gw-42/delete")

    assert r.status_code == 200
    assert "Are you sure you want to delete Acme Gateway?" in r.text
    assert ">Delete</button>" in r.text
    assert 'href="/factories"' in r.text
    assert 'action="/factories/gw-42/delete"' in r.text


def test_confirm_page_escapes_label(client, factory_service):
    factory_service.create_factory(factory_id="xss", label="<script>alert(1)</script>")

    r = client.get("/factories/xss/delete")

    assert "<script>alert(1)</script>" not in r.text
    assert "&lt;script&gt;" in r.text


def test_confirm_page_missing_factory(client):
    r = client.get("/factories/missing/delete", headers=HTML)

    assert r.status_code == 404
    assert "Page not found" in r.text
    assert "Payment gateway factory missing not found" in r.text


def test_confirm_page_missing_factory_json(client):
    r = client.get("/factories/missing/delete")

    assert r.status_code == 404
    assert r.json()["detail"] == "Payment gateway factory missing not found"


def test_submit_deletes_and_redirects(client, acme_factory, db):
    before = _deletions("success")

    r = client.post("/factories/gw-42/delete", follow_redirects=False)

    assert r.status_code == 303
    assert r.headers["location"] == "/factories"
    assert decode_messages(r.cookies.get("flash_messages")) == ["Configuration Acme Gateway was deleted."]
    assert FactoryService(db).get_factory("gw-42") is None
    assert _deletions("success") == before + 1


def test_message_shown_once_after_redirect(client, acme_factory):
    r = client.post("/factories/gw-42/delete")

    assert r.status_code == 200
    assert r.url.path == "/factories"
    assert "Configuration Acme Gateway was deleted." in r.text

    again = client.get("/factories")
    assert "Configuration Acme Gateway was deleted." not in again.text


def test_redirect_equals_cancel_link(client, acme_factory):
    page = client.get("/factories/gw-42/delete")
    r = client.post("/factories/gw-42/delete", follow_redirects=False)

    assert f'href="{r.headers["location"]}"' in page.text


def test_submit_missing_factory(client):
    r = client.post("/factories/missing/delete", follow_redirects=False)

    assert r.status_code == 404
    assert "flash_messages" not in r.cookies


def test_submit_second_time_is_not_found(client, acme_factory):
    first = client.post("/factories/gw-42/delete", follow_redirects=False)
    second = client.post("/factories/gw-42/delete", follow_redirects=False)

    assert first.status_code == 303
    assert second.status_code == 404


def test_submit_race_surfaces_not_found(client, acme_factory, monkeypatch):
    def deleted_concurrently(self, factory_id):
        raise ResourceNotFoundError(factory_id, f"Payment gateway factory {factory_id} not found")

    monkeypatch.setattr(FactoryService, "delete", deleted_concurrently)
    before = _deletions("failed")

    r = client.post("/factories/gw-42/delete", follow_redirects=False)

    assert r.status_code == 404
    assert "flash_messages" not in r.cookies
    assert _deletions("failed") == before + 1


def test_submit_store_failure_is_server_error(client, acme_factory, monkeypatch):
    def broken_delete(self, factory_id):
        raise StoreDeleteFailedError(factory_id)

    monkeypatch.setattr(FactoryService, "delete", broken_delete)

    r = client.post("/factories/gw-42/delete", follow_redirects=False)

    assert r.status_code == 500
    assert r.json() == {
        "detail": "Failed to delete resource gw-42",
        "type": "StoreDeleteFailedError",
        "resource_id": "gw-42",
    }
    assert "flash_messages" not in r.cookies
