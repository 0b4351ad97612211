from __future__ import annotations

from app.providers.base import ProviderResult


def test_get_payout_success(client, gateway):
    r = client.get("/api/payout/po_abc")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["payout"]["id"] == "po_abc"
    assert gateway.calls_for("retrieve") == ["po_abc"]


def test_get_payout_not_found_404(client, gateway):
    gateway.retrieve_result = ProviderResult.failure(
        "INVALID_REQUEST",
        "No such payout: 'xyz'",
        code="resource_missing",
        http_status=404,
    )

    r = client.get("/api/payout/xyz")
    assert r.status_code == 404, r.text
    assert r.json() == {"success": False, "error": "Payout not found"}


def test_get_payout_other_provider_error_500(client, gateway):
    gateway.retrieve_result = ProviderResult.failure("AUTHENTICATION", "Invalid API Key provided: sk_test_****")

    r = client.get("/api/payout/po_abc")
    assert r.status_code == 500, r.text
    assert r.json() == {"success": False, "error": "Invalid API Key provided: sk_test_****"}


def test_get_payout_blank_id_400(client, gateway):
    r = client.get("/api/payout/%20%20")
    assert r.status_code == 400, r.text
    assert r.json() == {"success": False, "error": "Payout ID is required"}
    assert gateway.calls == []


def test_get_payout_empty_segment_400(client, gateway):
    r = client.get("/api/payout/")
    assert r.status_code == 400, r.text
    assert r.json()["error"] == "Payout ID is required"
    assert gateway.calls == []


def test_unknown_route_uses_error_shape(client):
    r = client.get("/api/nope")
    assert r.status_code == 404, r.text
    assert r.json()["success"] is False
