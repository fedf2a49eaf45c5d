"""
API tests for the budget endpoints, run against a SQLite database.
"""

from datetime import datetime, timedelta, timezone

import pytest


def _now():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _create(client, headers, **fields):
    response = client.post("/api/v1/budget", json=fields, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["budget"]


class TestCreateAndList:
    def test_requires_authentication(self, client):
        assert client.get("/api/v1/budget").status_code == 401
        assert client.post("/api/v1/budget", json={}).status_code == 401

    def test_create_applies_defaults(self, client, auth_headers):
        budget = _create(client, auth_headers)

        assert budget["item"] == "nonessential"
        assert budget["amount"] == "0"
        assert budget["event"] is None
        assert budget["tag"] is None
        assert budget["_id"]

    def test_amount_representation_is_kept(self, client, auth_headers):
        as_text = _create(client, auth_headers, item="Rent", amount="1200", date="2024-03-01T00:00:00")
        as_number = _create(client, auth_headers, item="Gas", amount=45, date="2024-03-02T00:00:00")

        assert as_text["amount"] == "1200"
        assert as_number["amount"] == 45

    @pytest.mark.parametrize("payload", [
        {"amount": "abc"},
        {"amount": 12.5},
        {"amount": None},
        {"item": None},
        {"item": "   "},
        {"date": None},
    ])
    def test_invalid_payload_rejected(self, client, auth_headers, payload):
        response = client.post("/api/v1/budget", json=payload, headers=auth_headers)

        assert response.status_code == 422

    def test_listing_sorted_by_date(self, client, auth_headers):
        _create(client, auth_headers, item="late", amount=1, date="2024-05-01T00:00:00")
        _create(client, auth_headers, item="early", amount=2, date="2024-01-01T00:00:00")
        _create(client, auth_headers, item="middle", amount=3, date="2024-03-01T00:00:00")

        response = client.get("/api/v1/budget", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["version"] == "test-version"
        assert body["items"] == 3
        assert [b["item"] for b in body["budget"]] == ["early", "middle", "late"]

    def test_listing_never_shows_other_users(self, client, register):
        _, alice = register()
        _, bob = register()
        _create(client, alice, item="alice's", amount=1)

        response = client.get("/api/v1/budget", headers=bob)

        assert response.json() == {"version": "test-version", "items": 0, "budget": []}


class TestBulkInsert:
    def test_bulk_insert_fills_defaults_and_owner(self, client, register):
        profile, headers = register()

        response = client.post(
            "/api/v1/budget/bulk",
            json={"data": [
                {"item": "A", "amount": "5", "date": "2024-02-01T00:00:00"},
                {"amount": 7, "date": "2024-02-02T00:00:00"},
            ]},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["items"] == 2
        assert [i["item"] for i in body["insertion"]] == ["A", "nonessential"]
        assert {i["user"] for i in body["insertion"]} == {profile["_id"]}

    def test_bulk_insert_rejects_bad_amount(self, client, auth_headers):
        response = client.post(
            "/api/v1/budget/bulk",
            json={"data": [{"amount": "5"}, {"amount": "five"}]},
            headers=auth_headers,
        )

        assert response.status_code == 422
        listing = client.get("/api/v1/budget", headers=auth_headers).json()
        assert listing["items"] == 0

    def test_same_date_keeps_insertion_order(self, client, auth_headers):
        client.post(
            "/api/v1/budget/bulk",
            json={"data": [
                {"item": name, "amount": 1, "date": "2024-02-01T00:00:00"} for name in ("x", "y", "z")
            ]},
            headers=auth_headers,
        )

        body = client.get("/api/v1/budget", headers=auth_headers).json()

        assert [b["item"] for b in body["budget"]] == ["x", "y", "z"]


class TestUpdateAndDelete:
    def test_update_merges_fields(self, client, auth_headers):
        created = _create(client, auth_headers, item="Phone", amount="40", tag="Bills",
                          date="2024-04-10T00:00:00")

        response = client.put(f"/api/v1/budget/{created['_id']}", json={"amount": 55}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["goal"] == f"Update Budget: {created['_id']}"
        assert body["updated"]["amount"] == 55
        assert body["updated"]["item"] == "Phone"
        assert body["updated"]["tag"] == "Bills"
        assert body["updated"]["date"] == "2024-04-10T00:00:00"

    def test_update_can_clear_nullable_field(self, client, auth_headers):
        created = _create(client, auth_headers, item="Phone", amount="40", tag="Bills")

        response = client.put(f"/api/v1/budget/{created['_id']}", json={"tag": None}, headers=auth_headers)

        assert response.json()["updated"]["tag"] is None

    def test_update_of_other_users_item_is_not_found(self, client, register):
        _, alice = register()
        _, bob = register()
        created = _create(client, alice, item="Phone", amount="40")

        response = client.put(f"/api/v1/budget/{created['_id']}", json={"amount": 1}, headers=bob)

        assert response.status_code == 404
        listing = client.get("/api/v1/budget", headers=alice).json()
        assert listing["budget"][0]["amount"] == "40"

    def test_delete_one(self, client, auth_headers):
        keep = _create(client, auth_headers, item="keep", amount=1)
        drop = _create(client, auth_headers, item="drop", amount=2)

        response = client.delete(f"/api/v1/budget/{drop['_id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == drop["_id"]
        remaining = client.get("/api/v1/budget", headers=auth_headers).json()["budget"]
        assert [b["_id"] for b in remaining] == [keep["_id"]]

    def test_delete_missing_item_is_not_found(self, client, auth_headers):
        response = client.delete("/api/v1/budget/does-not-exist", headers=auth_headers)

        assert response.status_code == 404

    def test_delete_all_only_touches_caller(self, client, register):
        _, alice = register()
        _, bob = register()
        _create(client, alice, amount=1)
        _create(client, alice, amount=2)
        _create(client, bob, amount=3)

        response = client.delete("/api/v1/budget", headers=alice)

        assert response.status_code == 200
        assert response.json()["goal"] == "Delete All Items"
        assert response.json()["deleted"] == 2
        assert client.get("/api/v1/budget", headers=alice).json()["items"] == 0
        assert client.get("/api/v1/budget", headers=bob).json()["items"] == 1


class TestReports:
    def test_monthly_total(self, client, auth_headers):
        _create(client, auth_headers, item="a", amount="12", date="2024-03-03T00:00:00")
        _create(client, auth_headers, item="b", amount=20, date="2024-03-15T00:00:00")
        _create(client, auth_headers, item="c", amount="8", date="2024-03-31T00:00:00")
        _create(client, auth_headers, item="feb", amount=100, date="2024-02-20T00:00:00")

        response = client.get("/api/v1/budget/total", params={"month": 2, "year": 2024}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["version"] == "test-version"
        assert body["items"] == 3
        assert body["total"] == 40
        assert sorted(e["item"] for e in body["expenses"]) == ["a", "b", "c"]

    def test_monthly_total_respects_num_days(self, client, auth_headers):
        _create(client, auth_headers, item="early", amount=5, date="2024-03-05T00:00:00")
        _create(client, auth_headers, item="late", amount=9, date="2024-03-20T00:00:00")

        response = client.get(
            "/api/v1/budget/total", params={"month": 2, "year": 2024, "numDays": 10}, headers=auth_headers
        )

        assert response.json()["total"] == 5

    def test_monthly_total_empty_month(self, client, auth_headers):
        response = client.get("/api/v1/budget/total", params={"month": 6, "year": 2021}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"version": "test-version", "items": 0, "expenses": [], "total": 0}

    @pytest.mark.parametrize("params", [{}, {"month": "abc"}, {"month": 12}, {"month": 1, "numDays": 0}])
    def test_monthly_total_bad_period(self, client, auth_headers, params):
        response = client.get("/api/v1/budget/total", params=params, headers=auth_headers)

        assert response.status_code == 400

    def test_upcoming(self, client, auth_headers):
        now = _now()
        for days in (9, 3, 1, 7, 5, 2, 8):
            _create(client, auth_headers, item=f"d{days}", amount=days,
                    date=(now + timedelta(days=days)).isoformat())
        _create(client, auth_headers, item="past", amount=1, date=(now - timedelta(days=1)).isoformat())

        response = client.get("/api/v1/budget/upcoming", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["items"] == 5
        assert [e["item"] for e in body["expenses"]] == ["d1", "d2", "d3", "d5", "d7"]
        assert body["total"] == 18

    def test_upcoming_number_param(self, client, auth_headers):
        now = _now()
        for days in (1, 2, 3):
            _create(client, auth_headers, item=f"d{days}", amount=1,
                    date=(now + timedelta(days=days)).isoformat())

        response = client.get("/api/v1/budget/upcoming", params={"number": 2}, headers=auth_headers)

        assert [e["item"] for e in response.json()["expenses"]] == ["d1", "d2"]

    def test_upcoming_rejects_zero(self, client, auth_headers):
        response = client.get("/api/v1/budget/upcoming", params={"number": 0}, headers=auth_headers)

        assert response.status_code == 422


class TestHealth:
    def test_health_reports_database(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "connected"}
        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers
