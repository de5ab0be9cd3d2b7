"""Demo data tests."""

import pytest


class TestSeedDemoData:
    def test_seed_loads_every_table(self, client, auth_headers):
        res = client.post("/api/seed-demo-data", headers=auth_headers)
        assert res.status_code == 201
        created = res.json()["created"]
        assert created["suppliers"] == 3
        assert created["deliveries"] == 4
        assert created["dispatch_items"] == 4

        assert len(client.get("/api/suppliers", headers=auth_headers).json()) == 3
        pending = client.get("/api/deliveries/pending-weighbridge", headers=auth_headers).json()
        assert [d["truck_registration"] for d in pending] == ["KCA 321D"]

    def test_seeded_readings_are_consistent(self, client, auth_headers):
        client.post("/api/seed-demo-data", headers=auth_headers)
        for reading in client.get("/api/weighbridge-readings", headers=auth_headers).json():
            assert float(reading["net_weight"]) == float(reading["gross_weight"]) - float(reading["tare_weight"])

    def test_no_in_transit_dispatch(self, client, auth_headers):
        client.post("/api/seed-demo-data", headers=auth_headers)
        statuses = {o["order_number"]: o["status"] for o in client.get("/api/dispatch-orders", headers=auth_headers).json()}
        assert statuses["DO-2025-002"] == "dispatched"

    def test_dashboard_after_seed(self, client, auth_headers):
        client.post("/api/seed-demo-data", headers=auth_headers)
        metrics = client.get("/api/dashboard/metrics", headers=auth_headers).json()
        assert metrics["pending_orders"] == 1
        assert metrics["quality_score"] == pytest.approx(200 / 3)
        assert metrics["inventory_level"] == pytest.approx(4680 / 12500 * 100)
        assert metrics["inventory_total"] == 4680

    def test_second_run_fails(self, client, auth_headers):
        assert client.post("/api/seed-demo-data", headers=auth_headers).status_code == 201
        res = client.post("/api/seed-demo-data", headers=auth_headers)
        assert res.status_code == 400
        assert res.json()["message"] == "Demo data has already been loaded"
