import pytest
from datetime import date
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from crm.core.lookups import conflict_guard


@pytest.mark.integration
@pytest.mark.crud
class TestCustomers:

    async def test_crud_customers(self, test_client, valid_customer_data):
        create_response = await test_client.post("/api/customers", json=valid_customer_data)
        assert create_response.status_code == 200
        customer_id = create_response.json()["id"]

        get_response = await test_client.get(f"/api/customers/{customer_id}")
        assert get_response.status_code == 200
        assert get_response.json()["name"] == "Jane Doe"

        update_response = await test_client.put(f"/api/customers/{customer_id}", json={
            "phone": "555-9999"
        })
        assert update_response.status_code == 200
        assert update_response.json()["phone"] == "555-9999"
        assert update_response.json()["email"] == "jane@example.com"

        list_response = await test_client.get("/api/customers")
        assert list_response.status_code == 200
        assert len(list_response.json()) == 1

        delete_response = await test_client.delete(f"/api/customers/{customer_id}")
        assert delete_response.status_code == 200
        assert delete_response.json() == {"success": True}

        get_deleted = await test_client.get(f"/api/customers/{customer_id}")
        assert get_deleted.status_code == 404

    async def test_name_required(self, test_client):
        response = await test_client.post("/api/customers", json={"name": ""})
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "name"]

    async def test_name_cannot_be_nulled(self, create_customer_factory, test_client):
        customer = await create_customer_factory()
        response = await test_client.put(f"/api/customers/{customer['id']}", json={"name": None})
        assert response.status_code == 422

    async def test_invalid_email_rejected(self, test_client):
        response = await test_client.post("/api/customers", json={"name": "X", "email": "not_an_email"})
        assert response.status_code == 422

    async def test_blank_optional_fields_stored_as_null(self, test_client):
        response = await test_client.post("/api/customers", json={"name": "X", "email": "", "city": ""})
        assert response.status_code == 200
        assert response.json()["email"] is None
        assert response.json()["city"] is None

    async def test_list_newest_first(self, create_customer_factory, test_client):
        await create_customer_factory("First")
        await create_customer_factory("Second")

        names = [c["name"] for c in (await test_client.get("/api/customers")).json()]
        assert names == ["Second", "First"]

    async def test_delete_missing_customer(self, test_client):
        response = await test_client.delete("/api/customers/12345")
        assert response.status_code == 404

    async def test_delete_does_not_cascade_to_orders(self, create_customer_factory, test_client):
        customer = await create_customer_factory("Gone Soon")
        order = await test_client.post("/api/orders", json={
            "order_number": "ORD-900001",
            "customer_id": customer["id"],
        })
        assert order.json()["customer_name"] == "Gone Soon"

        await test_client.delete(f"/api/customers/{customer['id']}")

        response = await test_client.get(f"/api/orders/{order.json()['id']}")
        assert response.status_code == 200
        assert response.json()["customer_name"] is None


@pytest.mark.integration
@pytest.mark.crud
class TestInventory:

    async def test_crud_inventory(self, test_client):
        created = await test_client.post("/api/inventory", json={
            "name": "Travel crate L",
            "category": "crates",
            "quantity": 4,
            "unit_price": 89.99,
            "sku": "CR-L",
        })
        assert created.status_code == 200
        item_id = created.json()["id"]

        updated = await test_client.put(f"/api/inventory/{item_id}", json={"quantity": 25})
        assert updated.json()["quantity"] == 25
        assert updated.json()["unit_price"] == 89.99

        deleted = await test_client.delete(f"/api/inventory/{item_id}")
        assert deleted.json() == {"success": True}
        assert (await test_client.get("/api/inventory")).json() == []

    async def test_quantity_defaults_to_zero(self, test_client):
        response = await test_client.post("/api/inventory", json={"name": "Leash"})
        assert response.json()["quantity"] == 0
        assert response.json()["unit_price"] is None

    @pytest.mark.parametrize("field", ["quantity", "unit_price"])
    async def test_negative_values_rejected(self, test_client, field):
        response = await test_client.post("/api/inventory", json={"name": "Bowl", field: -1})
        assert response.status_code == 422

    async def test_low_stock_filter(self, test_client):
        await test_client.post("/api/inventory", json={"name": "Bowl", "quantity": 3})
        await test_client.post("/api/inventory", json={"name": "Mat", "quantity": 30})

        response = await test_client.get("/api/inventory?low_stock=true")
        assert [i["name"] for i in response.json()] == ["Bowl"]


@pytest.mark.integration
@pytest.mark.crud
class TestEmployees:

    async def test_crud_employees(self, test_client):
        created = await test_client.post("/api/employees", json={
            "name": "Sam Driver",
            "email": "sam@example.com",
            "role": "driver",
        })
        assert created.status_code == 200
        assert created.json()["is_active"] is True
        employee_id = created.json()["id"]

        updated = await test_client.put(f"/api/employees/{employee_id}", json={"is_active": False})
        assert updated.json()["is_active"] is False
        assert updated.json()["role"] == "driver"

        deleted = await test_client.delete(f"/api/employees/{employee_id}")
        assert deleted.status_code == 200

    async def test_active_filter(self, test_client):
        await test_client.post("/api/employees", json={"name": "On", "is_active": True})
        await test_client.post("/api/employees", json={"name": "Off", "is_active": False})

        response = await test_client.get("/api/employees?is_active=false")
        assert [e["name"] for e in response.json()] == ["Off"]


@pytest.mark.integration
@pytest.mark.crud
class TestOrders:

    async def test_crud_orders(self, test_client, valid_order_data):
        created = await test_client.post("/api/orders", json=valid_order_data)
        assert created.status_code == 200
        order = created.json()
        assert order["status"] == "pending"
        assert order["pickup_date"] == "2026-11-20"

        updated = await test_client.put(f"/api/orders/{order['id']}", json={"status": "in_transit"})
        assert updated.status_code == 200
        assert updated.json()["status"] == "in_transit"
        assert updated.json()["total_amount"] == 420.0

        response = await test_client.get("/api/orders?status=in_transit")
        assert [o["id"] for o in response.json()] == [order["id"]]

        deleted = await test_client.delete(f"/api/orders/{order['id']}")
        assert deleted.json() == {"success": True}
        assert (await test_client.get("/api/orders")).json() == []

    async def test_status_defaults_to_pending(self, test_client):
        response = await test_client.post("/api/orders", json={"order_number": "ORD-1"})
        assert response.json()["status"] == "pending"

    async def test_order_number_required(self, test_client):
        response = await test_client.post("/api/orders", json={"status": "pending"})
        assert response.status_code == 422

    async def test_invalid_status_rejected(self, test_client):
        response = await test_client.post("/api/orders", json={"order_number": "ORD-1", "status": "lost"})
        assert response.status_code == 422

    async def test_duplicate_order_number_conflicts(self, test_client, valid_order_data):
        await test_client.post("/api/orders", json=valid_order_data)
        response = await test_client.post("/api/orders", json=valid_order_data)
        assert response.status_code == 409

    async def test_negative_total_rejected(self, test_client):
        response = await test_client.post("/api/orders", json={"order_number": "ORD-1", "total_amount": -3})
        assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.crud
class TestSchedules:

    async def _employee_and_order(self, client):
        employee = await client.post("/api/employees", json={"name": "Pat Handler"})
        order = await client.post("/api/orders", json={"order_number": "ORD-555555"})
        return employee.json(), order.json()

    async def test_crud_schedules(self, test_client):
        employee, order = await self._employee_and_order(test_client)

        created = await test_client.post("/api/schedules", json={
            "employee_id": employee["id"],
            "order_id": order["id"],
            "schedule_type": "delivery",
            "scheduled_date": "2026-11-21",
            "scheduled_time": "09:30",
        })
        assert created.status_code == 200
        schedule = created.json()
        assert schedule["employee_name"] == "Pat Handler"
        assert schedule["order_number"] == "ORD-555555"
        assert schedule["status"] == "scheduled"
        assert schedule["completed_at"] is None

        listed = (await test_client.get("/api/schedules")).json()
        assert listed[0]["employee_name"] == "Pat Handler"

        deleted = await test_client.delete(f"/api/schedules/{schedule['id']}")
        assert deleted.json() == {"success": True}

    async def test_scheduled_date_required(self, test_client):
        response = await test_client.post("/api/schedules", json={"schedule_type": "pickup"})
        assert response.status_code == 422

    async def test_completion_stamps_time(self, test_client):
        created = await test_client.post("/api/schedules", json={"scheduled_date": "2026-11-21"})
        schedule_id = created.json()["id"]

        completed = await test_client.put(f"/api/schedules/{schedule_id}", json={"status": "completed"})
        assert completed.json()["completed_at"] is not None

        reopened = await test_client.put(f"/api/schedules/{schedule_id}", json={"status": "in_progress"})
        assert reopened.json()["completed_at"] is None

    async def test_list_order(self, test_client):
        for day, time in [("2026-11-20", "10:00"), ("2026-11-21", "15:00"), ("2026-11-21", "08:00")]:
            await test_client.post("/api/schedules", json={"scheduled_date": day, "scheduled_time": time})

        listed = (await test_client.get("/api/schedules")).json()
        assert [(s["scheduled_date"], s["scheduled_time"]) for s in listed] == [
            ("2026-11-21", "08:00"),
            ("2026-11-21", "15:00"),
            ("2026-11-20", "10:00"),
        ]


@pytest.mark.integration
class TestDashboard:

    async def test_dashboard_counts(self, test_client, create_quote_factory):
        await test_client.post("/api/orders", json={"order_number": "ORD-1", "total_amount": 100})
        await test_client.post("/api/orders", json={"order_number": "ORD-2", "status": "delivered", "total_amount": 50.5})
        await test_client.post("/api/orders", json={"order_number": "ORD-3"})
        await create_quote_factory(quote_number="DPT-000001", status="sent")
        await create_quote_factory(quote_number="DPT-000002", status="draft")
        await test_client.post("/api/inventory", json={"name": "Bowl", "quantity": 2})
        await test_client.post("/api/inventory", json={"name": "Mat", "quantity": 40})
        await test_client.post("/api/employees", json={"name": "On"})
        await test_client.post("/api/employees", json={"name": "Off", "is_active": False})
        await test_client.post("/api/schedules", json={"scheduled_date": date.today().isoformat()})
        await test_client.post("/api/schedules", json={"scheduled_date": "2001-01-01", "status": "completed"})

        response = await test_client.get("/api/dashboard")
        assert response.status_code == 200
        data = response.json()
        assert data["total_revenue"] == 150.5
        assert data["pending_orders"] == 2
        assert data["active_quotes"] == 1
        assert data["low_stock_items"] == 1
        assert data["active_employees"] == 1
        assert data["todays_schedules"] == 1
        assert data["pending_schedules"] == 1
        assert data["total_orders"] == 3
        assert data["total_quotes"] == 2
        assert len(data["recent_orders"]) == 3

    async def test_empty_dashboard(self, test_client):
        data = (await test_client.get("/api/dashboard")).json()
        assert data["total_revenue"] == 0
        assert data["recent_quotes"] == []


@pytest.mark.integration
class TestService:

    async def test_root(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    async def test_health(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["dependencies"]["database"] == "connected"

    async def test_readiness(self, test_client):
        response = await test_client.get("/readiness")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    async def test_metrics(self, test_client):
        await test_client.get("/api/customers")
        response = await test_client.get("/metrics")
        assert response.status_code == 200
        assert "http_requests_total" in response.text

    async def test_cors_preflight(self, test_client):
        response = await test_client.options("/api/quotes", headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "PUT",
            "Access-Control-Request-Headers": "Content-Type",
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "PUT" in response.headers["access-control-allow-methods"]

    async def test_cors_preflight_allows_idempotency_key(self, test_client):
        response = await test_client.options("/api/orders", headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Idempotency-Key",
        })
        assert response.status_code == 200
        assert "idempotency-key" in response.headers["access-control-allow-headers"].lower()

    async def test_cors_simple_request(self, test_client):
        response = await test_client.get("/api/orders", headers={"Origin": "http://localhost:5173"})
        assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.integration
@pytest.mark.crud
class TestReferences:

    async def test_quote_with_unknown_customer(self, test_client, valid_quote_data):
        response = await test_client.post("/api/quotes", json={**valid_quote_data, "customer_id": 999})
        assert response.status_code == 422
        assert response.json()["detail"] == "customer_id: Customer with id 999 not found"

    async def test_order_update_with_unknown_customer(self, test_client, valid_order_data):
        order = (await test_client.post("/api/orders", json=valid_order_data)).json()

        response = await test_client.put(f"/api/orders/{order['id']}", json={"customer_id": 999})
        assert response.status_code == 422
        assert "customer_id" in response.json()["detail"]

        unchanged = await test_client.get(f"/api/orders/{order['id']}")
        assert unchanged.json()["customer_id"] is None

    async def test_schedule_with_unknown_employee_or_order(self, test_client):
        response = await test_client.post("/api/schedules", json={
            "employee_id": 41,
            "scheduled_date": "2026-11-21",
        })
        assert response.status_code == 422
        assert response.json()["detail"] == "employee_id: Employee with id 41 not found"

        response = await test_client.post("/api/schedules", json={
            "order_id": 42,
            "scheduled_date": "2026-11-21",
        })
        assert response.status_code == 422
        assert response.json()["detail"] == "order_id: Order with id 42 not found"
        assert (await test_client.get("/api/schedules")).json() == []

    async def test_existing_references_accepted(self, create_customer_factory, test_client, valid_quote_data):
        customer = await create_customer_factory("Known")
        response = await test_client.post("/api/quotes", json={**valid_quote_data, "customer_id": customer["id"]})
        assert response.status_code == 200
        assert response.json()["customer_name"] == "Known"


@pytest.mark.unit
class TestConflictGuard:

    async def test_foreign_key_violation_is_unprocessable(self, db_session):
        with pytest.raises(HTTPException) as exc:
            async with conflict_guard(db_session, "Order number already exists"):
                raise IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))
        assert exc.value.status_code == 422

    async def test_unique_violation_conflicts(self, db_session):
        with pytest.raises(HTTPException) as exc:
            async with conflict_guard(db_session, "Order number already exists"):
                raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: orders.order_number"))
        assert exc.value.status_code == 409
        assert exc.value.detail == "Order number already exists"
