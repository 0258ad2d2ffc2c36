"""
Tests for adapters.django_api — thin Django views over the handlers.

Uses the pytest-django `rf` (RequestFactory) and `settings` fixtures.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from adapters.django_api import views
from adapters.django_api.wiring import build_dependencies, install_dependencies
from core.config import AppSettings
from core.http_api.dependencies import HttpApiDependencies
from core.ids import SequenceIdProvider
from core.time import FixedClock
from engines.app_store import AppStore

NOW = datetime(2026, 3, 4, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    app_store = AppStore(
        settings=AppSettings(seed_demo_data=True),
        clock=FixedClock(NOW),
        id_provider=SequenceIdProvider("id"),
    )
    install_dependencies(HttpApiDependencies(store=app_store))
    yield app_store
    install_dependencies(None)


def _json(response):
    return json.loads(response.content.decode("utf-8"))


def _post(rf, path, body):
    return rf.post(path, data=json.dumps(body), content_type="application/json")


def _item_id(store, name):
    (item,) = [i for i in store.inventory.list_items() if i.name == name]
    return item.item_id


def _dispatch_body(item_id, quantity):
    return {
        "store": "BOBA",
        "lines": [{"item_id": item_id, "quantity": quantity}],
        "customer_name": "Amani Weddings",
        "responsible_person": "Baraka",
        "use_location": "Mlimani City Hall",
        "expected_return_at": "2026-03-06T18:00:00Z",
        "authorized_by_user_id": "u1",
        "issued_by_user_id": "u3",
    }


class TestWiring:
    def test_lazy_singleton_from_settings(self, settings):
        settings.WEGESA = {"INVOICE_PREFIX": "EVT", "SEED_DEMO_DATA": "false"}
        install_dependencies(None)
        try:
            first = build_dependencies()
            assert first is build_dependencies()
            assert first.store.settings.invoice_prefix == "EVT"
            assert first.store.inventory.list_items() == []
        finally:
            install_dependencies(None)


class TestItemViews:
    def test_list_with_filters(self, rf, store):
        response = views.items_view(rf.get("/v1/items", {"store": "BOBA", "search": "honda"}))
        assert response.status_code == 200
        payload = _json(response)
        assert [i["name"] for i in payload["data"]["items"]] == ["Generators 5kVA"]

    def test_create(self, rf, store):
        response = views.items_view(_post(rf, "/v1/items", {
            "name": "Dance Floor Panels", "quantity": 40, "store": "MIKOCHENI",
        }))
        assert response.status_code == 200
        data = _json(response)["data"]
        assert data["in_stock"] == 40
        assert store.inventory.get_item(data["item_id"]).name == "Dance Floor Panels"

    def test_create_missing_field(self, rf, store):
        response = views.items_view(_post(rf, "/v1/items", {"name": "X", "store": "BOBA"}))
        assert response.status_code == 400
        assert _json(response)["error"]["message"] == "quantity is required."

    def test_invalid_json(self, rf, store):
        request = rf.post("/v1/items", data="{nope", content_type="application/json")
        response = views.items_view(request)
        assert response.status_code == 400
        assert _json(response)["error"]["code"] == "INVALID_REQUEST"

    def test_patch_and_delete(self, rf, store):
        item_id = _item_id(store, "Generators 5kVA")
        request = rf.patch(
            f"/v1/items/{item_id}",
            data=json.dumps({"quantity": 6}),
            content_type="application/json",
        )
        response = views.item_detail_view(request, item_id=item_id)
        assert response.status_code == 200
        assert _json(response)["data"]["quantity"] == 6

        response = views.item_detail_view(rf.delete(f"/v1/items/{item_id}"), item_id=item_id)
        assert _json(response)["data"] == {"deleted": item_id}

        response = views.item_detail_view(rf.delete(f"/v1/items/{item_id}"), item_id=item_id)
        assert response.status_code == 404

    def test_method_not_allowed(self, rf, store):
        response = views.items_view(rf.put("/v1/items"))
        assert response.status_code == 405
        assert _json(response)["error"]["code"] == "METHOD_NOT_ALLOWED"


class TestMovementViews:
    def test_dispatch_then_return(self, rf, store):
        item_id = _item_id(store, '15" Speakers')
        response = views.dispatch_create_view(
            _post(rf, "/v1/dispatches", _dispatch_body(item_id, 4)),
        )
        assert response.status_code == 200
        movement_id = _json(response)["data"]["movement_id"]
        assert store.inventory.get_item(item_id).in_stock == 8

        response = views.return_register_view(
            _post(rf, f"/v1/movements/{movement_id}/returns", {
                "received_by_user_id": "u3",
                "lines": [[item_id, 4]],
            }),
            movement_id=movement_id,
        )
        assert response.status_code == 200
        assert _json(response)["data"]["movement"]["status"] == "RETURNED"
        assert store.inventory.get_item(item_id).in_stock == 12

    def test_overdraft_is_409(self, rf, store):
        item_id = _item_id(store, "Generators 5kVA")
        response = views.dispatch_create_view(
            _post(rf, "/v1/dispatches", _dispatch_body(item_id, 5)),
        )
        assert response.status_code == 409
        error = _json(response)["error"]
        assert error["code"] == "INSUFFICIENT_STOCK"
        assert error["details"]["available"] == 4

    def test_bad_timestamp(self, rf, store):
        body = _dispatch_body(_item_id(store, "Generators 5kVA"), 1)
        body["expected_return_at"] = "next friday"
        response = views.dispatch_create_view(_post(rf, "/v1/dispatches", body))
        assert response.status_code == 400

    def test_movement_detail_and_list(self, rf, store):
        item_id = _item_id(store, "Plastic Chairs")
        movement_id = store.inventory.create_dispatch(
            store="BOBA",
            lines=[(item_id, 100)],
            customer_name="Amani",
            responsible_person="Baraka",
            use_location="Hall",
            expected_return_at=NOW,
            authorized_by_user_id="u1",
            issued_by_user_id="u3",
        )
        response = views.movement_detail_view(
            rf.get(f"/v1/movements/{movement_id}"), movement_id=movement_id,
        )
        assert _json(response)["data"]["lines"] == [{"item_id": item_id, "quantity": 100}]

        response = views.movements_list_view(rf.get("/v1/movements", {"status": "OUT"}))
        assert _json(response)["data"]["count"] == 1

        response = views.movement_detail_view(rf.get("/v1/movements/nope"), movement_id="nope")
        assert response.status_code == 404

    def test_return_unknown_movement(self, rf, store):
        response = views.return_register_view(
            _post(rf, "/v1/movements/nope/returns", {
                "received_by_user_id": "u3", "lines": [["x", 1]],
            }),
            movement_id="nope",
        )
        assert response.status_code == 404


class TestReportViews:
    def test_dashboard(self, rf, store):
        response = views.dashboard_stats_view(rf.get("/v1/reports/dashboard"))
        assert response.status_code == 200
        assert _json(response)["data"]["total_items"] == 596

    def test_period_report(self, rf, store):
        response = views.period_report_view(rf.get("/v1/reports/period", {"period": "week"}))
        assert response.status_code == 200
        assert _json(response)["data"]["period"] == "WEEK"

    def test_period_report_bad_period(self, rf, store):
        response = views.period_report_view(rf.get("/v1/reports/period", {"period": "decade"}))
        assert response.status_code == 400
