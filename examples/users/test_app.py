"""Tests for the users example — group routes, validation, CRUD."""

from switchyard.testing import TestClient

ADA = {"name": "Ada", "nick": "countess"}


class TestCreate:
    """POST /users — validated at the route tier."""

    async def test_create(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json=ADA)
            assert response.status == 201
            assert response.json() == {"id": 1, **ADA}

    async def test_ids_increase(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json=ADA)
            response = await client.post("/users", json={"name": "Grace", "nick": "amazing"})
            assert response.json()["id"] == 2

    async def test_invalid_body(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json=["Ada"])
            assert response.status == 400
            assert response.json() == {"message": "invalid user data"}

    async def test_invalid_name(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json={"name": "Ada 2", "nick": "x"})
            assert response.status == 400
            assert response.json() == {"message": "invalid user name"}

    async def test_invalid_nick(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.post("/users", json={"name": "Ada", "nick": "c0untess"})
            assert response.status == 400
            assert response.json() == {"message": "invalid user nickname"}

    async def test_rejected_user_not_stored(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json={"name": "!", "nick": "x"})
            response = await client.get("/users")
            assert response.json() == []


class TestRead:
    async def test_list_paginates(self, example_app) -> None:
        async with TestClient(example_app) as client:
            for name in ("Ada", "Grace", "Barbara"):
                await client.post("/users", json={"name": name, "nick": "n"})

            response = await client.get("/users?page=1&pageSize=2")
            assert response.status == 200
            assert [u["name"] for u in response.json()] == ["Barbara"]

    async def test_get_one(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json=ADA)
            response = await client.get("/users/1")
            assert response.json() == {"id": 1, **ADA}

    async def test_get_missing(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users/99")
            assert response.status == 404
            assert response.json() == {"message": "user was not found"}

    async def test_non_numeric_id_not_routed(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/users/abc")
            assert response.status == 404
            assert response.body_bytes == b""


class TestUpdate:
    async def test_update(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json=ADA)
            response = await client.put("/users/1", json={"name": "Ada", "nick": "enchantress"})
            assert response.status == 200
            assert response.json() == {"id": 1, "name": "Ada", "nick": "enchantress"}

    async def test_update_validated(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json=ADA)
            response = await client.put("/users/1", json={"name": "", "nick": "x"})
            assert response.status == 400
            assert response.json() == {"message": "invalid user name"}

    async def test_update_missing(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.put("/users/5", json=ADA)
            assert response.status == 404


class TestDelete:
    async def test_delete(self, example_app) -> None:
        async with TestClient(example_app) as client:
            await client.post("/users", json=ADA)
            response = await client.delete("/users/1")
            assert response.status == 204
            assert response.body_bytes == b""

            response = await client.get("/users/1")
            assert response.status == 404

    async def test_delete_missing(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.delete("/users/1")
            assert response.status == 404
