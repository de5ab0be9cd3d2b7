"""Dashboard metric tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from millops.core.workflow import CheckType, ProductionStatus, QualityStatus
from millops.models.batch import QualityCheck
from millops.models.production import FinishedProductBatch, ProductionOrder
from millops.models.warehouse import WarehouseStock
from millops.services import dashboard_service


def _checks(db, *statuses):
    for status in statuses:
        db.add(QualityCheck(check_type=CheckType.RAW_MATERIAL, status=status))
    db.commit()


class TestQualityScore:
    def test_zero_checks_scores_zero(self, db_session):
        assert dashboard_service.quality_score(db_session) == 0

    def test_share_of_passed_checks(self, db_session):
        _checks(db_session, QualityStatus.PASSED, QualityStatus.PASSED, QualityStatus.FAILED, QualityStatus.IN_REVIEW)
        assert dashboard_service.quality_score(db_session) == 50.0

    def test_repeating_fraction(self, db_session):
        _checks(db_session, QualityStatus.PASSED, QualityStatus.PASSED, QualityStatus.FAILED)
        assert dashboard_service.quality_score(db_session) == pytest.approx(66.6667, rel=1e-4)


class TestInventoryLevel:
    def test_no_capacity_declared(self, db_session):
        db_session.add(WarehouseStock(item_type="raw_maize", location="A", current_quantity=Decimal("3850")))
        db_session.commit()
        assert dashboard_service.inventory_level(db_session) == 0
        assert dashboard_service.inventory_total(db_session) == 3850

    def test_percentage_of_capacity(self, db_session):
        db_session.add_all([
            WarehouseStock(item_type="maize_flour_4kg", location="B1",
                           current_quantity=Decimal("450"), max_capacity=Decimal("1000")),
            WarehouseStock(item_type="maize_flour_2kg", location="B2",
                           current_quantity=Decimal("380"), max_capacity=Decimal("1500")),
            # no capacity: excluded from the level, included in the total
            WarehouseStock(item_type="bran", location="C", current_quantity=Decimal("100")),
        ])
        db_session.commit()
        assert dashboard_service.inventory_level(db_session) == pytest.approx(33.2)
        assert dashboard_service.inventory_total(db_session) == 930

    def test_clamped_to_100(self, db_session):
        db_session.add(WarehouseStock(item_type="raw_maize", location="A",
                                      current_quantity=Decimal("12000"), max_capacity=Decimal("10000")))
        db_session.commit()
        assert dashboard_service.inventory_level(db_session) == 100.0


class TestDailyProduction:
    def test_start_of_local_day_in_nairobi(self):
        now = datetime(2025, 1, 7, 22, 30, tzinfo=timezone.utc)  # 01:30 on Jan 8 in Nairobi
        start = dashboard_service.start_of_local_day(now, "Africa/Nairobi")
        assert start == datetime(2025, 1, 7, 21, 0, tzinfo=timezone.utc)

    def test_counts_only_today(self, db_session):
        now = datetime.now(timezone.utc)
        db_session.add_all([
            FinishedProductBatch(batch_number="FP-T-1", product_type="maize_flour_2kg", quantity=420),
            FinishedProductBatch(batch_number="FP-T-2", product_type="maize_flour_4kg", quantity=80),
            FinishedProductBatch(batch_number="FP-OLD", product_type="maize_flour_4kg", quantity=500,
                                 created_at=now - timedelta(days=2)),
        ])
        db_session.commit()
        assert dashboard_service.daily_production(db_session) == 500


class TestMetricsEndpoint:
    def test_empty_database(self, client, auth_headers):
        res = client.get("/api/dashboard/metrics", headers=auth_headers)
        assert res.status_code == 200
        assert res.json() == {
            "daily_production": 0,
            "quality_score": 0.0,
            "pending_orders": 0,
            "inventory_level": 0.0,
            "inventory_total": 0.0,
        }

    def test_pending_orders_counts_scheduled_only(self, client, auth_headers, db_session):
        db_session.add_all([
            ProductionOrder(order_number="PO-1", product_type="maize_flour_1kg", target_quantity=800),
            ProductionOrder(order_number="PO-2", product_type="maize_flour_2kg", target_quantity=1000,
                            status=ProductionStatus.IN_PROGRESS),
            ProductionOrder(order_number="PO-3", product_type="maize_flour_4kg", target_quantity=500,
                            status=ProductionStatus.SCHEDULED),
        ])
        db_session.commit()
        res = client.get("/api/dashboard/metrics", headers=auth_headers)
        assert res.json()["pending_orders"] == 2
