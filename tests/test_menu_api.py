"""Menu API tests — catalog CRUD, admin guard, MENU_UPDATE broadcast."""

import uuid

import pytest

from fastfood.auth.jwt import Identity, Role
from fastfood.services.image_store import ImageUploadError, get_image_store


@pytest.fixture()
def listener(registry, make_connection):
    """A customer connected over WebSocket."""
    conn = make_connection("listener")
    registry.register(Identity("listener", Role.USER), conn)
    return conn


# ═══════════════════════════════════════════════════════════
# Items
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_item_broadcasts_menu_update(client, admin_headers, listener):
    r = await client.post(
        "/api/menu",
        json={"name": "Tacos Poulet", "price": 7.5, "category": "tacos"},
        headers=admin_headers,
    )
    assert r.status_code == 201
    item = r.json()
    assert item["name"] == "Tacos Poulet"
    assert item["option_types"] == []
    assert listener.frames() == [{"type": "MENU_UPDATE"}]


@pytest.mark.asyncio
async def test_create_item_requires_admin(client, user_headers, listener):
    r = await client.post(
        "/api/menu",
        json={"name": "Tacos", "price": 7.5, "category": "tacos"},
        headers=user_headers,
    )
    assert r.status_code == 403
    assert listener.sent == []


@pytest.mark.asyncio
async def test_create_item_requires_auth(client):
    r = await client.post("/api/menu", json={"name": "Tacos", "price": 7.5, "category": "tacos"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_negative_price_rejected(client, admin_headers):
    r = await client.post(
        "/api/menu",
        json={"name": "Free money", "price": -1, "category": "tacos"},
        headers=admin_headers,
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_list_and_filter_items(client, admin_headers):
    for name, category in [("Reine", "pizzas"), ("Margarita", "pizzas"), ("Frites", "sides")]:
        await client.post(
            "/api/menu",
            json={"name": name, "price": 5, "category": category},
            headers=admin_headers,
        )

    assert len((await client.get("/api/menu")).json()) == 3

    pizzas = (await client.get("/api/menu", params={"category": "PIZZAS"})).json()
    assert sorted(i["name"] for i in pizzas) == ["Margarita", "Reine"]


@pytest.mark.asyncio
async def test_get_item(client, menu_item):
    r = await client.get(f"/api/menu/{menu_item['id']}")
    assert r.status_code == 200
    assert r.json()["removable_ingredients"] == ["Oignons", "Cornichons"]


@pytest.mark.asyncio
async def test_get_missing_item(client):
    r = await client.get(f"/api/menu/{uuid.uuid4()}")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_item_partial(client, admin_headers, menu_item, listener):
    r = await client.put(
        f"/api/menu/{menu_item['id']}", json={"price": 8.5}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["price"] == 8.5
    assert r.json()["name"] == menu_item["name"]
    assert listener.frames() == [{"type": "MENU_UPDATE"}]


@pytest.mark.asyncio
async def test_delete_item(client, admin_headers, menu_item, listener):
    r = await client.delete(f"/api/menu/{menu_item['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert (await client.get(f"/api/menu/{menu_item['id']}")).status_code == 404
    assert listener.frames() == [{"type": "MENU_UPDATE"}]

    r = await client.delete(f"/api/menu/{menu_item['id']}", headers=admin_headers)
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Categories
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_category_crud(client, admin_headers, listener):
    r = await client.post(
        "/api/menu/categories",
        json={"name": "Burgers", "type": "burgers", "font_color": "#FFC300"},
        headers=admin_headers,
    )
    assert r.status_code == 201
    category = r.json()

    r = await client.put(
        f"/api/menu/categories/{category['id']}",
        json={"background_color": "#000000"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["background_color"] == "#000000"
    assert r.json()["font_color"] == "#FFC300"

    listed = (await client.get("/api/menu/categories")).json()
    assert [c["type"] for c in listed] == ["burgers"]

    r = await client.delete(f"/api/menu/categories/{category['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert (await client.get("/api/menu/categories")).json() == []

    assert len(listener.frames()) == 3


@pytest.mark.asyncio
async def test_duplicate_category_type(client, admin_headers):
    body = {"name": "Pizzas", "type": "pizzas"}
    assert (await client.post("/api/menu/categories", json=body, headers=admin_headers)).status_code == 201
    r = await client.post("/api/menu/categories", json=body, headers=admin_headers)
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_update_missing_category(client, admin_headers):
    r = await client.put(
        f"/api/menu/categories/{uuid.uuid4()}", json={"name": "X"}, headers=admin_headers
    )
    assert r.status_code == 404


class FakeImageStore:
    def __init__(self, fail=False):
        self.fail = fail
        self.uploads = []

    async def upload(self, content, content_type, folder):
        if self.fail:
            raise ImageUploadError("cloud is down")
        self.uploads.append((content, content_type, folder))
        return f"https://images.example.com/{folder}/bg.png"


@pytest.mark.asyncio
async def test_category_background_upload(app, client, admin_headers, listener):
    store = FakeImageStore()
    app.dependency_overrides[get_image_store] = lambda: store

    category = (await client.post(
        "/api/menu/categories",
        json={"name": "Desserts", "type": "desserts"},
        headers=admin_headers,
    )).json()

    r = await client.put(
        f"/api/menu/categories/{category['id']}/background-image",
        files={"image": ("bg.png", b"\x89PNG fake", "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["background_image_url"] == (
        "https://images.example.com/fast-food-app-categories/bg.png"
    )
    assert store.uploads == [(b"\x89PNG fake", "image/png", "fast-food-app-categories")]
    assert len(listener.frames()) == 2


@pytest.mark.asyncio
async def test_category_background_upload_failure(app, client, admin_headers):
    app.dependency_overrides[get_image_store] = lambda: FakeImageStore(fail=True)
    category = (await client.post(
        "/api/menu/categories",
        json={"name": "Desserts", "type": "desserts"},
        headers=admin_headers,
    )).json()

    r = await client.put(
        f"/api/menu/categories/{category['id']}/background-image",
        files={"image": ("bg.png", b"data", "image/png")},
        headers=admin_headers,
    )
    assert r.status_code == 502


# ═══════════════════════════════════════════════════════════
# Options
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_options(client, admin_headers):
    for name, type_, price in [
        ("Ketchup", "sauceOptions", 0),
        ("Samouraï", "sauceOptions", 0.5),
        ("Fanta", "drinkOptions", 0),
    ]:
        r = await client.post(
            "/api/menu/options",
            json={"name": name, "type": type_, "price": price},
            headers=admin_headers,
        )
        assert r.status_code == 201

    assert len((await client.get("/api/menu/options")).json()) == 3
    sauces = (await client.get("/api/menu/options/sauceOptions")).json()
    assert sorted(o["name"] for o in sauces) == ["Ketchup", "Samouraï"]
    types = (await client.get("/api/menu/options/types")).json()
    assert sorted(types) == ["drinkOptions", "sauceOptions"]


@pytest.mark.asyncio
async def test_update_and_delete_option(client, admin_headers):
    option = (await client.post(
        "/api/menu/options",
        json={"name": "BBQ", "type": "sauceOptions"},
        headers=admin_headers,
    )).json()

    r = await client.put(
        f"/api/menu/options/{option['id']}", json={"price": 0.5}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["price"] == 0.5
    assert r.json()["type"] == "sauceOptions"

    assert (await client.delete(f"/api/menu/options/{option['id']}", headers=admin_headers)).status_code == 200
    assert (await client.delete(f"/api/menu/options/{option['id']}", headers=admin_headers)).status_code == 404
