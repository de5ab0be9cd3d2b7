"""Production order, run material and finished batch tests."""

from millops.services.identifiers import current_year


def _order(client, headers, **overrides):
    body = {"product_type": "maize_flour_2kg", "target_quantity": 1000}
    body.update(overrides)
    return client.post("/api/production-orders", headers=headers, json=body)


def _raw_batch(client, headers):
    return client.post("/api/raw-material-batches", headers=headers, json={"quantity": "2500"}).json()


class TestProductionOrders:
    def test_create_defaults(self, client, auth_headers, test_user):
        res = _order(client, auth_headers)
        assert res.status_code == 201
        data = res.json()
        assert data["order_number"] == f"PO-{current_year()}-001"
        assert data["status"] == "scheduled"
        assert data["completed_quantity"] == 0
        assert data["progress_percent"] == 0.0
        assert data["created_by"] == test_user.id

    def test_target_must_be_positive(self, client, auth_headers):
        assert _order(client, auth_headers, target_quantity=0).status_code == 400

    def test_list_newest_first(self, client, auth_headers):
        _order(client, auth_headers, order_number="PO-2025-001")
        _order(client, auth_headers, order_number="PO-2025-002")
        res = client.get("/api/production-orders", headers=auth_headers)
        assert [o["order_number"] for o in res.json()] == ["PO-2025-002", "PO-2025-001"]


class TestProgress:
    def test_progress_leaves_status_alone(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        res = client.patch(
            f"/api/production-orders/{order['id']}/progress",
            headers=auth_headers,
            json={"completed_quantity": 850},
        )
        assert res.status_code == 200
        data = res.json()
        assert data["completed_quantity"] == 850
        assert data["progress_percent"] == 85.0
        assert data["status"] == "scheduled"

    def test_above_target_rejected(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        res = client.patch(
            f"/api/production-orders/{order['id']}/progress",
            headers=auth_headers,
            json={"completed_quantity": 1001},
        )
        assert res.status_code == 400
        assert "exceeds" in res.json()["message"]

    def test_cannot_go_backwards(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        url = f"/api/production-orders/{order['id']}/progress"
        client.patch(url, headers=auth_headers, json={"completed_quantity": 500})
        res = client.patch(url, headers=auth_headers, json={"completed_quantity": 400})
        assert res.status_code == 400

    def test_reaching_target_is_allowed(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        res = client.patch(
            f"/api/production-orders/{order['id']}/progress",
            headers=auth_headers,
            json={"completed_quantity": 1000},
        )
        assert res.json()["progress_percent"] == 100.0

    def test_missing_order_404(self, client, auth_headers):
        res = client.patch(
            "/api/production-orders/missing/progress",
            headers=auth_headers,
            json={"completed_quantity": 1},
        )
        assert res.status_code == 404


class TestProductionStatus:
    def test_start_and_complete_stamp_times(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        url = f"/api/production-orders/{order['id']}/status"

        started = client.patch(url, headers=auth_headers, json={"status": "in_progress"}).json()
        assert started["started_at"] is not None
        assert started["completed_at"] is None

        completed = client.patch(url, headers=auth_headers, json={"status": "completed"}).json()
        assert completed["status"] == "completed"
        assert completed["completed_at"] is not None

    def test_completed_is_terminal(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        url = f"/api/production-orders/{order['id']}/status"
        client.patch(url, headers=auth_headers, json={"status": "in_progress"})
        client.patch(url, headers=auth_headers, json={"status": "completed"})

        res = client.patch(url, headers=auth_headers, json={"status": "in_progress"})
        assert res.status_code == 409

    def test_cannot_complete_without_starting(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        res = client.patch(
            f"/api/production-orders/{order['id']}/status",
            headers=auth_headers,
            json={"status": "completed"},
        )
        assert res.status_code == 409

    def test_cancel_scheduled_order(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        res = client.patch(
            f"/api/production-orders/{order['id']}/status",
            headers=auth_headers,
            json={"status": "cancelled"},
        )
        assert res.status_code == 200
        assert res.json()["status"] == "cancelled"


class TestRunMaterials:
    def test_order_created_with_materials(self, client, auth_headers):
        batch = _raw_batch(client, auth_headers)
        order = _order(client, auth_headers, materials=[
            {"batch_id": batch["id"], "quantity_used": "2100"},
        ]).json()

        res = client.get(f"/api/production-orders/{order['id']}/materials", headers=auth_headers)
        assert res.status_code == 200
        materials = res.json()
        assert len(materials) == 1
        assert float(materials[0]["quantity_used"]) == 2100

    def test_bad_material_rolls_back_the_order(self, client, auth_headers):
        res = _order(client, auth_headers, materials=[{"batch_id": "ghost", "quantity_used": "10"}])
        assert res.status_code == 400
        assert client.get("/api/production-orders", headers=auth_headers).json() == []

    def test_record_material(self, client, auth_headers):
        batch = _raw_batch(client, auth_headers)
        order = _order(client, auth_headers).json()
        res = client.post(
            f"/api/production-orders/{order['id']}/materials",
            headers=auth_headers,
            json={"batch_id": batch["id"], "quantity_used": "500"},
        )
        assert res.status_code == 201
        assert res.json()["production_order_id"] == order["id"]

    def test_record_material_for_missing_order_404(self, client, auth_headers):
        batch = _raw_batch(client, auth_headers)
        res = client.post(
            "/api/production-orders/missing/materials",
            headers=auth_headers,
            json={"batch_id": batch["id"], "quantity_used": "500"},
        )
        assert res.status_code == 404


class TestFinishedProductBatches:
    def test_create_and_list(self, client, auth_headers):
        order = _order(client, auth_headers).json()
        res = client.post("/api/finished-product-batches", headers=auth_headers, json={
            "production_order_id": order["id"],
            "product_type": "maize_flour_2kg",
            "quantity": 420,
            "package_size": "2kg",
            "quality_grade": "A",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["batch_number"] == f"FP-{current_year()}-001"
        assert data["quality_status"] == "pending"

        listed = client.get("/api/finished-product-batches", headers=auth_headers).json()
        assert [b["id"] for b in listed] == [data["id"]]

    def test_unknown_order_rejected(self, client, auth_headers):
        res = client.post("/api/finished-product-batches", headers=auth_headers, json={
            "production_order_id": "ghost",
            "product_type": "maize_flour_2kg",
            "quantity": 10,
        })
        assert res.status_code == 400
