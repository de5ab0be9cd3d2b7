"""Warehouse stock tests."""


def _put(client, headers, **body):
    payload = {"item_type": "maize_flour_2kg", "location": "Warehouse B - Section 2", "current_quantity": "380"}
    payload.update(body)
    return client.put("/api/warehouse/stock", headers=headers, json=payload)


class TestWarehouseStock:
    def test_upsert_creates_row(self, client, auth_headers):
        res = _put(client, auth_headers, max_capacity="1500")
        assert res.status_code == 200
        data = res.json()
        assert float(data["current_quantity"]) == 380
        assert float(data["reserved_quantity"]) == 0
        assert float(data["max_capacity"]) == 1500

    def test_upsert_overwrites_same_key(self, client, auth_headers):
        first = _put(client, auth_headers, reserved_quantity="40", max_capacity="1500").json()
        second = _put(client, auth_headers, current_quantity="300").json()

        assert second["id"] == first["id"]
        assert float(second["current_quantity"]) == 300
        # omitted optional fields keep their values
        assert float(second["reserved_quantity"]) == 40
        assert float(second["max_capacity"]) == 1500
        assert len(client.get("/api/warehouse/stock", headers=auth_headers).json()) == 1

    def test_batch_is_part_of_the_key(self, client, auth_headers):
        _put(client, auth_headers)
        _put(client, auth_headers, batch_id="batch-finished-002")
        assert len(client.get("/api/warehouse/stock", headers=auth_headers).json()) == 2

    def test_list_most_recently_updated_first(self, client, auth_headers):
        _put(client, auth_headers, item_type="raw_maize", location="Warehouse A")
        _put(client, auth_headers, item_type="maize_flour_4kg")
        _put(client, auth_headers, item_type="raw_maize", location="Warehouse A", current_quantity="3850")

        items = [s["item_type"] for s in client.get("/api/warehouse/stock", headers=auth_headers).json()]
        assert items == ["raw_maize", "maize_flour_4kg"]

    def test_negative_quantity_rejected(self, client, auth_headers):
        assert _put(client, auth_headers, current_quantity="-1").status_code == 400

    def test_zero_capacity_rejected(self, client, auth_headers):
        assert _put(client, auth_headers, max_capacity="0").status_code == 400
