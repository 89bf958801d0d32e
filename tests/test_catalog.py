"""HTTP tests for the bestiary and gear tables."""

import pytest


# ── creatures ───────────────────────────────────────────────


def test_create_and_fetch_creature(client):
    response = client.post("/api/creatures", json={
        "name": "Kraken", "type": "Beast", "strength": "22", "hp_total": "", "habitat": "  Deep sea  ",
    })
    assert response.status_code == 201
    creature = response.json()["data"]
    assert creature["name"] == "Kraken"
    assert creature["strength"] == 22
    assert creature["hp_total"] is None
    assert creature["habitat"] == "Deep sea"

    fetched = client.get("/api/creatures", params={"id": creature["id"]}).json()["data"]
    assert fetched == creature


def test_post_with_id_replaces_every_field(client):
    creature = client.post("/api/creatures", json={"name": "Wyvern", "diet": "Goats", "size": "Large"}).json()["data"]

    response = client.post("/api/creatures", json={"id": creature["id"], "name": "Wyvern", "size": "Huge"})

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["size"] == "Huge"
    assert updated["diet"] is None


def test_patch_creature_is_partial(client):
    creature = client.post("/api/creatures", json={"name": "Wyvern", "diet": "Goats"}).json()["data"]

    updated = client.patch("/api/creatures", json={"id": creature["id"], "size": "Large"}).json()["data"]

    assert updated["size"] == "Large"
    assert updated["diet"] == "Goats"


def test_creature_names_are_unique(client):
    client.post("/api/creatures", json={"name": "Kraken"})
    assert client.post("/api/creatures", json={"name": "kraken"}).status_code == 409


def test_search_creatures(client):
    for name in ("Sea Serpent", "Kraken", "Sand Serpent", "100% Rat"):
        client.post("/api/creatures", json={"name": name})

    found = client.get("/api/creatures", params={"q": "serp"}).json()["data"]
    assert [c["name"] for c in found] == ["Sand Serpent", "Sea Serpent"]

    assert [c["name"] for c in client.get("/api/creatures", params={"q": "%"}).json()["data"]] == ["100% Rat"]
    assert len(client.get("/api/creatures").json()["data"]) == 4


def test_delete_creature(client):
    creature = client.post("/api/creatures", json={"name": "Imp"}).json()["data"]

    assert client.delete("/api/creatures", params={"id": creature["id"]}).json() == {"ok": True, "deleted": True}
    assert client.get("/api/creatures", params={"id": creature["id"]}).status_code == 404
    assert client.delete("/api/creatures", params={"id": creature["id"]}).status_code == 404


def test_creature_validation(client):
    assert client.post("/api/creatures", json={"name": " "}).status_code == 400
    assert client.get("/api/creatures", params={"id": "abc"}).status_code == 400
    assert client.patch("/api/creatures", json={"id": 404, "size": "Tiny"}).status_code == 404


# ── items and armors ────────────────────────────────────────


@pytest.mark.parametrize("path", ["/api/items", "/api/armors"])
def test_gear_create_and_list(client, path):
    first = client.post(path, json={"name": "Rope"})
    assert first.status_code == 201
    second = client.post(path, json={"name": "Lantern"})

    rows = client.get(path).json()["rows"]

    assert [row["name"] for row in rows] == ["Lantern", "Rope"]
    assert rows[0]["id"] == second.json()["row"]["id"]


@pytest.mark.parametrize("path", ["/api/items", "/api/armors"])
def test_gear_delete_reports_count(client, path):
    row = client.post(path, json={"name": "Rope"}).json()["row"]

    assert client.delete(path, params={"id": row["id"]}).json() == {"ok": True, "deleted": 1}
    assert client.delete(path, params={"id": row["id"]}).json() == {"ok": True, "deleted": 0}
    assert client.delete(path).status_code == 400


def test_item_patch(client):
    row = client.post("/api/items", json={"name": "Potion"}).json()["row"]

    body = client.patch("/api/items", json={
        "id": row["id"], "cost_credits": "25", "weight": "0.5", "category": "Consumable",
    }).json()

    assert body["updated"] == 1
    assert body["row"]["cost_credits"] == 25
    assert body["row"]["weight"] == 0.5
    assert body["row"]["name"] == "Potion"


def test_armor_patch(client):
    row = client.post("/api/armors", json={"name": "Chain Shirt"}).json()["row"]

    body = client.patch("/api/armors", json={"id": row["id"], "soak": 3, "area_covered": "Torso"}).json()

    assert body["row"]["soak"] == 3
    assert body["row"]["area_covered"] == "Torso"


def test_gear_patch_with_nothing_to_change(client):
    row = client.post("/api/items", json={"name": "Stone"}).json()["row"]

    body = client.patch("/api/items", json={"id": row["id"]}).json()

    assert body == {"ok": True, "updated": 0, "row": row}


def test_gear_patch_missing_row_is_404(client):
    assert client.patch("/api/armors", json={"id": 999, "soak": 1}).status_code == 404


def test_gear_writes_need_a_session(anon_client):
    assert anon_client.post("/api/items", json={"name": "Rope"}).status_code == 401
    assert anon_client.get("/api/armors").json() == {"ok": True, "rows": []}
