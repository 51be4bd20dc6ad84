"""
Todo API - Label Endpoint Tests
=================================
"""

import pytest

from todo_api.schemas import TEXT_MAX_LENGTH, CreateLabel


class TestLabelEndpoints:

    @pytest.mark.asyncio
    async def test_create_label(self, test_client):
        response = await test_client.post("/labels", json={"name": "urgent"})

        assert response.status_code == 201
        assert response.json() == {"id": 1, "name": "urgent"}

    @pytest.mark.asyncio
    async def test_empty_name_is_422(self, test_client):
        response = await test_client.post("/labels", json={"name": ""})

        assert response.status_code == 422
        assert response.json()["details"]["violations"][0]["field"] == "name"

    @pytest.mark.asyncio
    async def test_accepts_max_length_name(self, test_client):
        response = await test_client.post("/labels", json={"name": "x" * TEXT_MAX_LENGTH})

        assert response.status_code == 201
        assert response.json()["name"] == "x" * TEXT_MAX_LENGTH

    @pytest.mark.asyncio
    async def test_too_long_name_is_422(self, test_client):
        response = await test_client.post("/labels", json={"name": "x" * (TEXT_MAX_LENGTH + 1)})

        assert response.status_code == 422
        violation = response.json()["details"]["violations"][0]
        assert violation["field"] == "name"
        assert violation["constraint"] == "string_too_long"
        assert (await test_client.get("/labels")).json() == []

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, test_client):
        response = await test_client.post("/labels", json={"title": "urgent"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_all_labels(self, test_client, repositories):
        await repositories.labels.create(CreateLabel(name="home"))
        await repositories.labels.create(CreateLabel(name="work"))

        response = await test_client.get("/labels")

        assert response.status_code == 200
        assert response.json() == [{"id": 1, "name": "home"}, {"id": 2, "name": "work"}]

    @pytest.mark.asyncio
    async def test_delete_label(self, test_client, repositories):
        await repositories.labels.create(CreateLabel(name="temp"))

        response = await test_client.delete("/labels/1")

        assert response.status_code == 204
        assert response.content == b""
        assert (await test_client.get("/labels")).json() == []

    @pytest.mark.asyncio
    async def test_delete_unknown_label_is_404(self, test_client):
        response = await test_client.delete("/labels/5")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_labels_and_todos_have_separate_ids(self, test_client):
        await test_client.post("/todos", json={"text": "a todo"})

        response = await test_client.post("/labels", json={"name": "a label"})

        assert response.json()["id"] == 1
