from __future__ import annotations

from decimal import Decimal
from unittest import mock

from fastapi.testclient import TestClient

from shared.core.auth import create_access_token, validate_current_token
from shared.core.database import get_stock_db
from shared.core.exceptions import GENERIC_INTERNAL_MESSAGE, StoreError
from shared.core.schemas import UserToken
from stock_service.app.main import app
from support import StockTestCase


class RouterTestCase(StockTestCase):
    """Runs the app against the test session with a fixed signed-in user."""

    def setUp(self) -> None:
        super().setUp()

        def override_db():
            yield self.db

        app.dependency_overrides[get_stock_db] = override_db
        app.dependency_overrides[validate_current_token] = lambda: UserToken(
            user_id="u-1", name="maria")
        self.addCleanup(app.dependency_overrides.clear)
        self.client = TestClient(app)

    def assertEnvelope(self, response, http_status: int, status: str, status_code: str):
        self.assertEqual(response.status_code, http_status, response.text)
        body = response.json()
        self.assertEqual(body["status"], status)
        self.assertEqual(body["status_code"], status_code)
        return body


class StockRouteTests(RouterTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.add_product(42, "Arroz 5kg", "FD")

    def initiate_via_api(self, quantity: str = "100", unit_price: str = "1.50"):
        return self.client.post(
            "/api/stock/",
            json={"product_id": 42, "quantity": quantity, "unit_price": unit_price},
        )

    def test_initiate_and_show(self) -> None:
        body = self.assertEnvelope(self.initiate_via_api(), 200, "Success", "100")
        self.assertEqual(body["data"]["product_id"], 42)
        self.assertEqual(Decimal(body["data"]["quantity"]), Decimal("100"))

        body = self.assertEnvelope(self.client.get("/api/stock/42"), 200, "Success", "100")
        self.assertEqual(body["data"]["description"], "Arroz 5kg")
        self.assertEqual(body["data"]["output_unit"], "FD")
        self.assertEqual(Decimal(body["data"]["unit_price"]), Decimal("1.50"))

    def test_list_stock(self) -> None:
        self.initiate_via_api()
        body = self.assertEnvelope(self.client.get("/api/stock/"), 200, "Success", "100")
        self.assertEqual([row["id"] for row in body["data"]], [42])

    def test_show_unknown_stock_is_404(self) -> None:
        body = self.assertEnvelope(self.client.get("/api/stock/999"), 404, "Failure", "201")
        self.assertEqual(body["data"], {"kind": "not_found"})
        self.assertEqual(body["message"], "Stock not found for product 999")

    def test_second_initiation_is_422(self) -> None:
        self.initiate_via_api()
        body = self.assertEnvelope(self.initiate_via_api(), 422, "Failure", "200")
        self.assertEqual(body["data"], {"kind": "semantic_error"})
        self.assertIn("already initiated", body["message"])

    def test_movement_flow(self) -> None:
        self.initiate_via_api()
        response = self.client.post("/api/stock/movements", json={
            "product_id": 42,
            "document": "  NF-8812 ",
            "quantity": "-50",
            "unit_price": "2.00",
            "freight_price": "5.00",
        })
        body = self.assertEnvelope(response, 200, "Success", "100")
        self.assertEqual(body["data"]["document"], "NF-8812")
        self.assertEqual(Decimal(body["data"]["quantity"]), Decimal("-50"))

        body = self.client.get("/api/stock/42").json()
        self.assertEqual(Decimal(body["data"]["quantity"]), Decimal("50"))
        self.assertEqual(Decimal(body["data"]["unit_price"]), Decimal("2.00"))

    def test_movement_lists_by_direction(self) -> None:
        self.initiate_via_api()
        for quantity in ("10", "-4"):
            self.client.post("/api/stock/movements", json={
                "product_id": 42, "document": "NF-1", "quantity": quantity, "unit_price": "1.00"})

        all_rows = self.client.get("/api/stock/movements").json()["data"]
        stock_in = self.client.get("/api/stock/movements/in").json()["data"]
        stock_out = self.client.get("/api/stock/movements/out", params={"product_id": 42}).json()["data"]

        self.assertEqual(len(all_rows), 2)
        self.assertEqual([Decimal(r["quantity"]) for r in stock_in], [Decimal("10")])
        self.assertEqual([Decimal(r["quantity"]) for r in stock_out], [Decimal("-4")])

    def test_movement_on_unknown_product_is_404(self) -> None:
        response = self.client.post("/api/stock/movements", json={
            "product_id": 999, "document": "NF-1", "quantity": "1", "unit_price": "1.00"})
        body = self.assertEnvelope(response, 404, "Failure", "201")
        self.assertEqual(body["message"], "Product not found")

    def test_storage_failure_is_generic_500(self) -> None:
        """Storage details are logged, never returned."""
        self.initiate_via_api()
        with mock.patch("stock_service.app.crud.stock_position_crud.update_position",
                        side_effect=StoreError("relation stock_positions is locked")):
            response = self.client.post("/api/stock/movements", json={
                "product_id": 42, "document": "NF-1", "quantity": "-1", "unit_price": "1.00"})

        body = self.assertEnvelope(response, 500, "Failure", "400")
        self.assertEqual(body["data"], {"kind": "internal_error"})
        self.assertEqual(body["message"], GENERIC_INTERNAL_MESSAGE)
        self.assertNotIn("stock_positions", response.text)
        self.assertEqual(self.client.get("/api/stock/movements").json()["data"], [])

    def test_unexpected_exception_is_generic_500(self) -> None:
        client = TestClient(app, raise_server_exceptions=False)
        with mock.patch("stock_service.app.crud.stock_crud.list_positions",
                        side_effect=RuntimeError("boom")):
            response = client.get("/api/stock/")

        body = self.assertEnvelope(response, 500, "Failure", "400")
        self.assertEqual(body["message"], GENERIC_INTERNAL_MESSAGE)
        self.assertNotIn("boom", response.text)

    def test_over_precise_quantity_is_validation_error(self) -> None:
        body = self.assertEnvelope(self.initiate_via_api(quantity="1.2345"), 422, "Failure", "200")
        self.assertEqual(body["data"], {"kind": "validation_error"})
        self.assertIn("quantity", body["message"])

    def test_missing_document_is_validation_error(self) -> None:
        self.initiate_via_api()
        response = self.client.post("/api/stock/movements", json={
            "product_id": 42, "document": "   ", "quantity": "1", "unit_price": "1.00"})
        body = self.assertEnvelope(response, 422, "Failure", "200")
        self.assertIn("document", body["message"])

    def test_limit_is_bounded(self) -> None:
        self.assertEnvelope(self.client.get("/api/stock/", params={"limit": 0}), 422, "Failure", "200")

    def test_actor_comes_from_token(self) -> None:
        self.initiate_via_api()
        body = self.assertEnvelope(self.client.get("/api/audit-log/"), 200, "Success", "100")
        entry = body["data"][0]
        self.assertEqual(entry["actor"], "maria")
        self.assertEqual(entry["table_name"], "STOCK")
        self.assertEqual(entry["operation"], "insert")


class ProductRouteTests(RouterTestCase):
    def test_create_and_read_product(self) -> None:
        response = self.client.post("/api/products/", json={"description": "Café 500g", "output_unit": "pc"})
        body = self.assertEnvelope(response, 200, "Success", "100")
        product_id = body["data"]["id"]
        self.assertEqual(body["data"]["output_unit"], "PC")

        body = self.assertEnvelope(self.client.get(f"/api/products/{product_id}"), 200, "Success", "100")
        self.assertEqual(body["data"]["description"], "Café 500g")
        listed = self.client.get("/api/products/").json()["data"]
        self.assertEqual([p["id"] for p in listed], [product_id])

    def test_unknown_product_is_404(self) -> None:
        body = self.assertEnvelope(self.client.get("/api/products/5"), 404, "Failure", "201")
        self.assertEqual(body["message"], "Product not found")


class AuthRouteTests(RouterTestCase):
    def setUp(self) -> None:
        super().setUp()
        del app.dependency_overrides[validate_current_token]

    def test_signed_token_is_accepted(self) -> None:
        token = create_access_token({"user_id": "u-9", "name": "joao"})
        response = self.client.get("/api/products/", headers={"Authorization": f"Bearer {token}"})
        self.assertEnvelope(response, 200, "Success", "100")

    def test_garbage_token_is_401(self) -> None:
        response = self.client.get("/api/stock/", headers={"Authorization": "Bearer not-a-token"})
        body = self.assertEnvelope(response, 401, "Failure", "301")
        self.assertEqual(body["data"], {"kind": "unauthorized"})

    def test_health_needs_no_token(self) -> None:
        body = self.assertEnvelope(self.client.get("/api/health"), 200, "Success", "100")
        self.assertEqual(body["data"], {"status": "healthy"})
