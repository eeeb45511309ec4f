"""End-to-end tests for the HTTP endpoints."""

from datetime import date

import httpx

from components.core.init_db import get_db
from restapi.endpoints.helpers import get_today
from restapi.router import create_app
from tests.helpers.database import DatabaseTestCase


class ApiTestCase(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.app = create_app()

        async def override_get_db():
            async with self.session_factory() as session:
                yield session

        self.app.dependency_overrides[get_db] = override_get_db
        self.app.dependency_overrides[get_today] = lambda: self.today
        self.client = httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app), base_url="http://test")

    async def asyncTearDown(self):
        await self.client.aclose()
        await super().asyncTearDown()

    async def post_program(self, name="Strength", price=100):
        resp = await self.client.post("/api/programs", json={"name": name, "price": price})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    async def post_client(self, program_id, name="Alex", amount=100, due_date=15):
        resp = await self.client.post(
            "/api/clients",
            json={
                "name": name,
                "phone": "+15550001111",
                "program_id": program_id,
                "payment_amount": amount,
                "due_date": due_date,
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class HealthCheckApiTests(ApiTestCase):
    async def test_liveness(self):
        resp = await self.client.get("/health_check/")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertIn("timestamp", body)


class ProgramApiTests(ApiTestCase):
    async def test_create_list_delete(self):
        created = await self.post_program("Yoga", 80.5)
        self.assertEqual(created["price"], 80.5)

        resp = await self.client.get("/api/programs")
        self.assertEqual([p["name"] for p in resp.json()], ["Yoga"])

        resp = await self.client.delete(f"/api/programs/{created['id']}")
        self.assertEqual(resp.json(), {"deleted": 1})

    async def test_validation_error_names_field(self):
        resp = await self.client.post("/api/programs", json={"name": "Yoga", "price": -1})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["field"], "price")

    async def test_delete_referenced_program_conflicts(self):
        program = await self.post_program()
        await self.post_client(program["id"])

        resp = await self.client.delete(f"/api/programs/{program['id']}")
        self.assertEqual(resp.status_code, 409)

    async def test_delete_missing_program(self):
        resp = await self.client.delete("/api/programs/99")
        self.assertEqual(resp.status_code, 404)


class ClientApiTests(ApiTestCase):
    async def test_enroll_update_delete(self):
        program = await self.post_program("Boxing")
        client = await self.post_client(program["id"], due_date=31)
        self.assertEqual(client["due_date"], 31)

        resp = await self.client.get("/api/clients")
        self.assertEqual(resp.json()[0]["program_name"], "Boxing")

        resp = await self.client.put(f"/api/clients/{client['id']}", json={"name": "Alexis", "payment_amount": 120})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Alexis")
        self.assertEqual(resp.json()["payment_amount"], 120.0)

        resp = await self.client.get(f"/api/clients/{client['id']}")
        self.assertEqual(resp.json()["phone"], "+15550001111")

        resp = await self.client.delete(f"/api/clients/{client['id']}")
        self.assertEqual(resp.json(), {"deleted": 1, "payments_deleted": 1})
        self.assertEqual((await self.client.get("/api/payments")).json(), [])

    async def test_enroll_rejects_bad_day_and_unknown_program(self):
        program = await self.post_program()
        payload = {"name": "A", "phone": "1", "program_id": program["id"], "payment_amount": 10, "due_date": 32}

        resp = await self.client.post("/api/clients", json=payload)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["field"], "due_date")

        resp = await self.client.post("/api/clients", json={**payload, "due_date": 1, "program_id": 77})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["field"], "program_id")

    async def test_missing_client(self):
        self.assertEqual((await self.client.get("/api/clients/5")).status_code, 404)
        self.assertEqual((await self.client.put("/api/clients/5", json={"name": "x"})).status_code, 404)
        self.assertEqual((await self.client.delete("/api/clients/5")).status_code, 404)


class PaymentApiTests(ApiTestCase):
    async def test_month_end_enrollment_rolls_forward_to_anchor(self):
        program = await self.post_program()
        await self.post_client(program["id"], due_date=31)

        current = (await self.client.get("/api/payments/current-month")).json()
        self.assertEqual(len(current), 1)
        self.assertEqual(current[0]["due_date"], "2025-04-30")
        self.assertEqual(current[0]["state"], "pending")

        resp = await self.client.put(f"/api/payments/{current[0]['id']}/mark-paid")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["payment"]["status"], "paid")
        self.assertEqual(body["successor"]["due_date"], "2025-05-31")
        self.assertEqual(body["successor"]["status"], "pending")

        again = (await self.client.put(f"/api/payments/{current[0]['id']}/mark-paid")).json()
        self.assertIsNone(again["successor"])
        self.assertEqual(len((await self.client.get("/api/payments")).json()), 2)

    async def test_range_listing_and_manual_create(self):
        program = await self.post_program()
        client = await self.post_client(program["id"], due_date=5)

        resp = await self.client.post("/api/payments", json={"client_id": client["id"], "due_date": "2025-04-20", "amount": 30})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["amount"], 30.0)

        rows = (await self.client.get("/api/payments", params={"start": "2025-04-01", "end": "2025-04-30"})).json()
        self.assertEqual([r["due_date"] for r in rows], ["2025-04-05", "2025-04-20"])
        self.assertEqual([r["state"] for r in rows], ["overdue", "pending"])

        resp = await self.client.get("/api/payments", params={"start": "2025-04-30", "end": "2025-04-01"})
        self.assertEqual(resp.status_code, 400)

    async def test_mark_paid_missing_payment(self):
        resp = await self.client.put("/api/payments/123/mark-paid")
        self.assertEqual(resp.status_code, 404)

    async def test_create_for_missing_client(self):
        resp = await self.client.post("/api/payments", json={"client_id": 8})
        self.assertEqual(resp.status_code, 404)


class DashboardApiTests(ApiTestCase):
    async def test_stats(self):
        program = await self.post_program()
        await self.post_client(program["id"], name="Paid", amount=100, due_date=20)
        await self.post_client(program["id"], name="Owes", amount=50, due_date=25)
        payments = (await self.client.get("/api/payments/current-month")).json()
        paid_id = next(p["id"] for p in payments if p["client_name"] == "Paid")
        await self.client.put(f"/api/payments/{paid_id}/mark-paid")

        stats = (await self.client.get("/api/dashboard/stats")).json()

        self.assertEqual(stats["paid_count"], 1)
        self.assertEqual(stats["total_received"], 100.0)
        self.assertEqual(stats["pending_count"], 1)
        self.assertEqual(stats["total_pending"], 50.0)
        self.assertEqual(stats["total_expected"], 150.0)
        self.assertEqual(stats["period_start"], date(2025, 4, 1).isoformat())
