"""Truck delivery and weighbridge tests."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import OperationalError

from millops.models.delivery import TruckDelivery, WeighbridgeReading


def _move(client, headers, delivery_id, status):
    return client.patch(f"/api/deliveries/{delivery_id}/status", headers=headers, json={"status": status})


class TestDeliveryCRUD:
    def test_new_delivery_is_pending(self, client, auth_headers, test_supplier):
        res = client.post("/api/deliveries", headers=auth_headers, json={
            "supplier_id": test_supplier.id,
            "truck_registration": "KBZ 456B",
            "driver_name": "Grace Akinyi",
            "expected_quantity": "3200",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["status"] == "pending"
        assert data["actual_quantity"] is None
        assert data["delivery_date"]

    def test_required_fields(self, client, auth_headers):
        res = client.post("/api/deliveries", headers=auth_headers, json={"driver_name": "No Truck"})
        assert res.status_code == 400

    def test_negative_quantity_rejected(self, client, auth_headers):
        res = client.post("/api/deliveries", headers=auth_headers, json={
            "truck_registration": "KCA 000A",
            "driver_name": "Driver",
            "expected_quantity": "-5",
        })
        assert res.status_code == 400

    def test_unknown_supplier_is_constraint_error(self, client, auth_headers):
        res = client.post("/api/deliveries", headers=auth_headers, json={
            "supplier_id": "no-such-supplier",
            "truck_registration": "KCA 000A",
            "driver_name": "Driver",
        })
        assert res.status_code == 400
        assert "does not exist" in res.json()["message"]

    def test_list_by_delivery_date_desc(self, client, auth_headers):
        for reg, when in (
            ("KAA 001A", "2025-01-07T08:30:00Z"),
            ("KAA 003A", "2025-01-09T08:30:00Z"),
            ("KAA 002A", "2025-01-08T08:30:00Z"),
        ):
            client.post("/api/deliveries", headers=auth_headers, json={
                "truck_registration": reg,
                "driver_name": "Driver",
                "delivery_date": when,
            })

        res = client.get("/api/deliveries", headers=auth_headers)
        assert [d["truck_registration"] for d in res.json()] == ["KAA 003A", "KAA 002A", "KAA 001A"]

    def test_mixed_offsets_stored_as_utc(self, client, auth_headers):
        # 10:00 in Nairobi is 07:00Z, earlier than 08:30Z
        for reg, when in (
            ("KCB 100A", "2026-01-01T10:00:00+03:00"),
            ("KCB 200B", "2026-01-01T08:30:00Z"),
        ):
            client.post("/api/deliveries", headers=auth_headers, json={
                "truck_registration": reg,
                "driver_name": "Driver",
                "delivery_date": when,
            })

        data = client.get("/api/deliveries", headers=auth_headers).json()
        assert [d["truck_registration"] for d in data] == ["KCB 200B", "KCB 100A"]
        stored = {
            d["truck_registration"]: datetime.fromisoformat(d["delivery_date"].replace("Z", "+00:00"))
            for d in data
        }
        assert stored["KCB 100A"] == datetime(2026, 1, 1, 7, 0, tzinfo=timezone.utc)
        assert stored["KCB 200B"] == datetime(2026, 1, 1, 8, 30, tzinfo=timezone.utc)

    def test_pending_weighbridge_only_lists_pending(self, client, auth_headers, test_delivery):
        other = client.post("/api/deliveries", headers=auth_headers, json={
            "truck_registration": "KDX 789C",
            "driver_name": "David Kiprotich",
        }).json()
        _move(client, auth_headers, other["id"], "quality_check")

        res = client.get("/api/deliveries/pending-weighbridge", headers=auth_headers)
        assert res.status_code == 200
        assert [d["id"] for d in res.json()] == [test_delivery.id]

    def test_get_delivery(self, client, auth_headers, test_delivery):
        res = client.get(f"/api/deliveries/{test_delivery.id}", headers=auth_headers)
        assert res.status_code == 200
        assert res.json()["truck_registration"] == "KCA 123A"

    def test_get_missing_delivery_404(self, client, auth_headers):
        res = client.get("/api/deliveries/missing", headers=auth_headers)
        assert res.status_code == 404
        assert res.json()["message"] == "Delivery not found"


class TestDeliveryStatus:
    def test_happy_path(self, client, auth_headers, test_delivery):
        for status in ("quality_check", "approved", "in_storage"):
            res = _move(client, auth_headers, test_delivery.id, status)
            assert res.status_code == 200
            assert res.json()["status"] == status

    def test_skipping_a_step_is_illegal(self, client, auth_headers, test_delivery):
        res = _move(client, auth_headers, test_delivery.id, "in_storage")
        assert res.status_code == 409
        assert "pending" in res.json()["message"]

    def test_rejected_cannot_be_approved(self, client, auth_headers, test_delivery):
        _move(client, auth_headers, test_delivery.id, "quality_check")
        assert _move(client, auth_headers, test_delivery.id, "rejected").status_code == 200

        res = _move(client, auth_headers, test_delivery.id, "approved")
        assert res.status_code == 409
        assert res.json()["message"] == "Cannot move delivery from 'rejected' to 'approved'"

    def test_same_status_is_illegal(self, client, auth_headers, test_delivery):
        assert _move(client, auth_headers, test_delivery.id, "pending").status_code == 409

    def test_unknown_status_400(self, client, auth_headers, test_delivery):
        assert _move(client, auth_headers, test_delivery.id, "lost").status_code == 400

    def test_missing_delivery_404(self, client, auth_headers):
        assert _move(client, auth_headers, "missing", "quality_check").status_code == 404


class TestWeighbridge:
    def test_reading_computes_net_and_approves_delivery(self, client, auth_headers, test_delivery):
        res = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
        })
        assert res.status_code == 201
        data = res.json()
        assert float(data["net_weight"]) == 2500
        assert data["delivery"]["status"] == "approved"

        delivery = client.get(f"/api/deliveries/{test_delivery.id}", headers=auth_headers).json()
        assert delivery["status"] == "approved"
        assert float(delivery["actual_quantity"]) == 2500

    def test_client_net_weight_is_ignored(self, client, auth_headers, test_delivery):
        res = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "28150",
            "tare_weight": "25000",
            "net_weight": "99999",
            "operator_name": "Robert Ochieng",
        })
        assert float(res.json()["net_weight"]) == 3150

    def test_existing_actual_quantity_kept(self, client, auth_headers, db_session, test_delivery):
        test_delivery.actual_quantity = 2400
        db_session.commit()
        client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
        })
        delivery = client.get(f"/api/deliveries/{test_delivery.id}", headers=auth_headers).json()
        assert float(delivery["actual_quantity"]) == 2400

    def test_tare_above_gross_rejected_and_nothing_written(
        self, client, auth_headers, db_session, test_delivery
    ):
        res = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "20000",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
        })
        assert res.status_code == 400
        assert db_session.query(WeighbridgeReading).count() == 0
        assert db_session.get(TruckDelivery, test_delivery.id).status.value == "pending"

    def test_failed_commit_leaves_no_reading_and_no_approval(
        self, client, auth_headers, db_session, test_delivery, monkeypatch
    ):
        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", failing_commit)
        res = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
        })
        monkeypatch.undo()

        assert res.status_code == 500
        assert db_session.query(WeighbridgeReading).count() == 0
        delivery = db_session.get(TruckDelivery, test_delivery.id)
        assert delivery.status.value == "pending"
        assert delivery.actual_quantity is None

    def test_unknown_delivery_rejected(self, client, auth_headers):
        res = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": "ghost",
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
        })
        assert res.status_code == 400

    def test_forced_approval_from_rejected_is_logged(self, client, auth_headers, test_delivery, caplog):
        _move(client, auth_headers, test_delivery.id, "quality_check")
        _move(client, auth_headers, test_delivery.id, "rejected")

        with caplog.at_level(logging.WARNING, logger="millops.services.delivery_service"):
            res = client.post("/api/weighbridge-readings", headers=auth_headers, json={
                "delivery_id": test_delivery.id,
                "gross_weight": "27500",
                "tare_weight": "25000",
                "operator_name": "Robert Ochieng",
            })
        assert res.status_code == 201
        assert res.json()["delivery"]["status"] == "approved"
        assert any("forces delivery" in r.getMessage() for r in caplog.records)

    def test_reading_for_delivery(self, client, auth_headers, test_delivery):
        url = f"/api/deliveries/{test_delivery.id}/weighbridge-reading"
        assert client.get(url, headers=auth_headers).json() is None

        created = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
            "ticket_number": "WB-0001",
            "weighbridge_charges": "500",
        }).json()

        res = client.get(url, headers=auth_headers)
        assert res.status_code == 200
        assert res.json()["id"] == created["id"]
        assert res.json()["ticket_number"] == "WB-0001"

    def test_list_joined_newest_first(self, client, auth_headers, test_delivery):
        for when in ("2025-01-07T08:45:00Z", "2025-01-07T10:30:00Z"):
            client.post("/api/weighbridge-readings", headers=auth_headers, json={
                "delivery_id": test_delivery.id,
                "gross_weight": "27500",
                "tare_weight": "25000",
                "operator_name": "Robert Ochieng",
                "reading_time": when,
            })

        res = client.get("/api/weighbridge-readings", headers=auth_headers)
        data = res.json()
        assert len(data) == 2
        assert data[0]["reading_time"] > data[1]["reading_time"]
        assert data[0]["delivery"]["truck_registration"] == "KCA 123A"

    def test_get_reading(self, client, auth_headers, test_delivery):
        created = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": test_delivery.id,
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Robert Ochieng",
        }).json()
        res = client.get(f"/api/weighbridge-readings/{created['id']}", headers=auth_headers)
        assert res.status_code == 200
        assert res.json()["delivery"]["id"] == test_delivery.id

        assert client.get("/api/weighbridge-readings/missing", headers=auth_headers).status_code == 404


class TestSupplierToApprovalScenario:
    def test_supplier_delivery_weighing(self, client, auth_headers):
        supplier = client.post("/api/suppliers", headers=auth_headers, json={"name": "Maize Masters Ltd"}).json()
        delivery = client.post("/api/deliveries", headers=auth_headers, json={
            "supplier_id": supplier["id"],
            "truck_registration": "KDX 789C",
            "driver_name": "David Kiprotich",
            "expected_quantity": "2500",
        }).json()
        assert delivery["status"] == "pending"

        reading = client.post("/api/weighbridge-readings", headers=auth_headers, json={
            "delivery_id": delivery["id"],
            "gross_weight": "27500",
            "tare_weight": "25000",
            "operator_name": "Sarah Chepkemoi",
        }).json()
        assert float(reading["net_weight"]) == 2500

        delivery = client.get(f"/api/deliveries/{delivery['id']}", headers=auth_headers).json()
        assert delivery["status"] == "approved"
        pending = client.get("/api/deliveries/pending-weighbridge", headers=auth_headers).json()
        assert pending == []
