"""Tests for the HTTP routes."""


class TestPlantRoutes:
    def test_list_plants(self, client):
        response = client.get("/plants")

        assert response.status_code == 200
        body = response.json()
        assert [p["id"] for p in body] == ["1", "2", "3", "4", "5"]
        assert body[0]["plantedDate"].startswith("2023-04-15T00:00:00")

    def test_create_plant(self, client):
        """New plants are appended with status growing."""
        response = client.post(
            "/plants",
            json={
                "name": "Kale",
                "location": "herb-garden",
                "plantedDate": "2024-03-01T00:00:00Z",
                "notes": "",
            },
        )

        assert response.status_code == 201
        plant = response.json()
        assert plant["status"] == "growing"
        assert plant["name"] == "Kale"
        assert client.get(f"/plants/{plant['id']}").json() == plant
        assert client.get("/plants").json()[-1]["id"] == plant["id"]

    def test_create_plant_validation(self, client):
        response = client.post(
            "/plants",
            json={"name": "", "location": "moon", "plantedDate": "2024-03-01"},
        )

        assert response.status_code == 422

    def test_get_missing_plant(self, client):
        assert client.get("/plants/99").status_code == 404

    def test_patch_plant(self, client):
        response = client.patch("/plants/1", json={"status": "harvested"})

        assert response.status_code == 200
        plant = response.json()
        assert plant["status"] == "harvested"
        assert plant["name"] == "Tomato"
        assert plant["variety"] == "Roma"

    def test_patch_missing_plant(self, client):
        assert client.patch("/plants/99", json={"notes": "x"}).status_code == 404

    def test_delete_and_undo_plant(self, client):
        """Undo puts the plant back at its old position, once."""
        response = client.delete("/plants/3")

        assert response.status_code == 200
        deletion = response.json()
        assert deletion["record_id"] == "3"
        assert deletion["index"] == 2
        assert client.get("/plants/3").status_code == 404

        undo = client.post(f"/plants/undo/{deletion['deletion_id']}")
        assert undo.status_code == 200
        assert undo.json()["restored"] is True
        assert [p["id"] for p in client.get("/plants").json()] == ["1", "2", "3", "4", "5"]

        again = client.post(f"/plants/undo/{deletion['deletion_id']}")
        assert again.json()["restored"] is False
        assert len(client.get("/plants").json()) == 5

    def test_delete_missing_plant(self, client):
        assert client.delete("/plants/99").status_code == 404

    def test_undo_unknown_deletion(self, client):
        assert client.post("/plants/undo/plant-1-unknown").status_code == 404

    def test_undo_with_other_store_token(self, client):
        """An activity deletion id cannot be undone through /plants."""
        deletion = client.delete("/activities/1").json()

        response = client.post(f"/plants/undo/{deletion['deletion_id']}")

        assert response.status_code == 404

    def test_plant_activities(self, client):
        response = client.get("/plants/3/activities")

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == ["4", "5"]
        assert all(a["plantName"] == "Cucumber" for a in response.json())


class TestActivityRoutes:
    def test_list_activities_with_plant_names(self, client):
        body = client.get("/activities").json()

        assert len(body) == 7
        assert body[0]["plantName"] == "Tomato"
        assert body[0]["type"] == "watering"

    def test_dangling_plant_shows_unknown(self, client):
        """Activities of a deleted plant render as Unknown Plant."""
        client.delete("/plants/4")

        activity = client.get("/activities/3").json()

        assert activity["plant"] == "4"
        assert activity["plantName"] == "Unknown Plant"

    def test_create_activity(self, client):
        response = client.post(
            "/activities",
            json={"type": "fertilizing", "plant": "2", "date": "2024-06-10T00:00:00Z"},
        )

        assert response.status_code == 201
        activity = response.json()
        assert activity["plantName"] == "Basil"
        assert activity["notes"] is None

    def test_create_activity_bad_type(self, client):
        response = client.post(
            "/activities",
            json={"type": "dancing", "plant": "2", "date": "2024-06-10T00:00:00Z"},
        )

        assert response.status_code == 422

    def test_patch_activity(self, client):
        response = client.patch("/activities/2", json={"notes": "Two rows"})

        assert response.status_code == 200
        assert response.json()["notes"] == "Two rows"
        assert response.json()["type"] == "planting"

    def test_delete_and_undo_activity(self, client):
        deletion = client.delete("/activities/5").json()
        assert len(client.get("/activities").json()) == 6

        undo = client.post(f"/activities/undo/{deletion['deletion_id']}")

        assert undo.json()["restored"] is True
        assert client.get("/activities").json()[4]["id"] == "5"


class TestSettingsRoutes:
    def test_get_settings(self, client):
        body = client.get("/settings").json()

        assert body["gardenName"] == "My Garden"
        assert body["temperatureUnit"] == "F"

    def test_patch_settings(self, client):
        response = client.patch("/settings", json={"temperatureUnit": "C"})

        assert response.status_code == 200
        assert response.json()["temperatureUnit"] == "C"
        assert client.get("/settings").json()["temperatureUnit"] == "C"

    def test_patch_settings_invalid(self, client):
        assert client.patch("/settings", json={"temperatureUnit": "K"}).status_code == 422


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


class TestConcurrentRequests:
    """Mutations arriving together must leave memory and disk in step."""

    def test_handlers_are_coroutines(self):
        """Every handler runs on the event loop, never on the thread pool."""
        import inspect

        from runtime.api.garden_routes import router

        for route in router.routes:
            assert inspect.iscoroutinefunction(route.endpoint), route.path

    def test_concurrent_creates_and_deletes(self, context, storage):
        import asyncio
        import json

        import httpx

        from conftest import PLANTS_KEY
        from runtime.api.server import create_app
        from runtime.store.local_storage import LocalStorage

        app = create_app(context)
        payload = {
            "name": "Radish",
            "location": "vegetable-bed",
            "plantedDate": "2024-04-01T00:00:00Z",
        }

        async def fire():
            transport = httpx.ASGITransport(app=app)
            async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
                requests = [client.post("/plants", json=payload) for _ in range(100)]
                requests += [client.delete(f"/plants/{i}") for i in range(1, 6)]
                return await asyncio.gather(*requests)

        responses = asyncio.run(fire())

        assert all(r.status_code in (200, 201) for r in responses)
        assert len(context.plant_store) == 100

        on_disk = json.loads(storage._item_path(PLANTS_KEY).read_text(encoding="utf-8"))
        assert [p["id"] for p in on_disk["plants"]] == [p.id for p in context.plant_store.records]

        reloaded = LocalStorage(data_dir=str(storage._data_dir)).get_item(PLANTS_KEY)
        assert json.loads(reloaded) == on_disk
        assert not list((storage._data_dir / "storage").glob("*.tmp"))
