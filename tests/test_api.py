import pytest
from httpx import AsyncClient, ASGITransport

from meatline.api.main import app
from meatline.api.deps import get_db
from meatline.api.security import create_token, decode_token
from meatline.exceptions import AuthenticationError


@pytest.fixture
async def client(session):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def auth(user):
    return {"Authorization": f"Bearer {create_token(user)}"}


def order_body(*items, **extra):
    body = {
        "order_date": "2026-01-24T09:00:00",
        "delivery_date": "2026-01-25T09:00:00",
        "items": [{"product_id": pid, "quantity": q} for pid, q in items],
    }
    body.update(extra)
    return body


def test_token_roundtrip(distributor):
    payload = decode_token(create_token(distributor))
    assert payload["sub"] == str(distributor.id)
    assert payload["role"] == "DISTRIBUTOR"
    with pytest.raises(AuthenticationError):
        decode_token("not-a-token")


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200


class TestAuth:

    async def test_login_active_user(self, client, distributor):
        response = await client.post("/auth/login", json={"telegram_id": distributor.telegram_id})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["user"]["id"] == distributor.id
        assert decode_token(body["data"]["token"])["sub"] == str(distributor.id)

    async def test_login_pending_user(self, client, pending_user):
        response = await client.post("/auth/login", json={"telegram_id": pending_user.telegram_id})
        assert response.status_code == 401
        assert response.json()["success"] is False

    async def test_login_without_telegram_id(self, client):
        response = await client.post("/auth/login", json={})
        assert response.status_code == 400

    async def test_me_requires_token(self, client, distributor):
        response = await client.get("/auth/me")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "no_token"

        response = await client.get("/auth/me", headers=auth(distributor))
        assert response.json()["data"]["telegram_id"] == distributor.telegram_id

    async def test_pending_users_for_managers(self, client, distributor, producer, pending_user):
        response = await client.get("/auth/pending", headers=auth(distributor))
        assert response.status_code == 403

        response = await client.get("/auth/pending", headers=auth(producer))
        assert [u["id"] for u in response.json()["data"]] == [pending_user.id]

        response = await client.patch(f"/auth/approve/{pending_user.id}", headers=auth(producer))
        assert response.json()["data"]["is_active"] is True


class TestOrders:

    async def test_create_and_read(self, client, distributor, sausage):
        response = await client.post(
            "/orders", json=order_body((sausage.id, 10)), headers=auth(distributor)
        )
        assert response.status_code == 201
        order = response.json()["data"]
        assert order["status"] == "DRAFT"
        assert order["items"][0]["quantity"] == 10
        assert order["items"][0]["original_quantity"] == 10

        response = await client.get(f"/orders/{order['id']}", headers=auth(distributor))
        assert response.json()["data"]["order_number"] == order["order_number"]

    async def test_empty_items(self, client, distributor):
        response = await client.post("/orders", json=order_body(), headers=auth(distributor))
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"

    async def test_bad_body(self, client, distributor, sausage):
        response = await client.post(
            "/orders", json=order_body((sausage.id, -1)), headers=auth(distributor)
        )
        assert response.status_code == 422

    async def test_foreign_order_is_hidden(self, client, distributor, other_distributor, sausage):
        response = await client.post(
            "/orders", json=order_body((sausage.id, 1)), headers=auth(distributor)
        )
        order_id = response.json()["data"]["id"]

        response = await client.get(f"/orders/{order_id}", headers=auth(other_distributor))
        assert response.status_code == 404
        response = await client.get("/orders", headers=auth(other_distributor))
        assert response.json()["data"] == []

    async def test_status_change_and_adjustment(self, client, distributor, producer, sausage, sardelka):
        response = await client.post(
            "/orders", json=order_body((sausage.id, 10), (sardelka.id, 20)),
            headers=auth(distributor),
        )
        order = response.json()["data"]

        response = await client.patch(
            f"/orders/{order['id']}/status", json={"status": "CONFIRMED"}, headers=auth(distributor)
        )
        assert response.status_code == 403

        response = await client.patch(
            f"/orders/{order['id']}/status", json={"status": "CONFIRMED"}, headers=auth(producer)
        )
        assert response.json()["data"]["status"] == "CONFIRMED"

        item_id = order["items"][0]["id"]
        response = await client.patch(
            f"/orders/{order['id']}/items/{item_id}",
            json={"adjusted_quantity": 8, "adjustment_reason": "Go'sht yetishmadi"},
            headers=auth(producer),
        )
        assert response.status_code == 200
        assert response.json()["data"]["effective_quantity"] == 8

        response = await client.get("/production/summary?date=2026-01-24", headers=auth(producer))
        rows = {row["product_code"]: row for row in response.json()["data"]["summary"]}
        assert rows["KOLBASA-001"]["total_quantity"] == 8
        assert rows["KOLBASA-002"]["total_quantity"] == 20

        response = await client.get("/notifications", headers=auth(distributor))
        assert len(response.json()["data"]) == 2

    async def test_delete_only_draft(self, client, distributor, producer, sausage):
        response = await client.post(
            "/orders", json=order_body((sausage.id, 1)), headers=auth(distributor)
        )
        order_id = response.json()["data"]["id"]
        await client.patch(f"/orders/{order_id}/status", json={"status": "SUBMITTED"}, headers=auth(producer))

        response = await client.delete(f"/orders/{order_id}", headers=auth(distributor))
        assert response.status_code == 400


class TestProducts:

    async def test_admin_only_writes(self, client, admin, producer, sausage):
        body = {"code": "KOLBASA-010", "name": "Servelat"}
        response = await client.post("/products", json=body, headers=auth(producer))
        assert response.status_code == 403

        response = await client.post("/products", json=body, headers=auth(admin))
        assert response.status_code == 201

        response = await client.post(
            "/products", json={"code": "KOLBASA-001", "name": "Dublikat"}, headers=auth(admin)
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "product_code_exists"

    async def test_summary_requires_date(self, client, producer):
        response = await client.get("/production/summary", headers=auth(producer))
        assert response.status_code == 400
        response = await client.get("/production/summary?date=24.01.2026", headers=auth(producer))
        assert response.status_code == 400
