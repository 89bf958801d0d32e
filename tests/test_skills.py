"""Tests for skills, magic builds and special-ability sheets."""

import json

from worldbuilder.services.skill_service import summarize_containers


def create_skill(client, **fields):
    response = client.post("/api/skills", json=fields)
    assert response.status_code == 201, response.text
    return response.json()["item"]


def patch_skill(client, skill_id, **patch):
    response = client.patch("/api/skills", json={"id": skill_id, "patch": patch})
    assert response.status_code == 200, response.text
    return response.json()["item"]


# ── skills ──────────────────────────────────────────────────


def test_create_skill_defaults(client):
    skill = create_skill(client)

    assert skill["name"] == "(unnamed)"
    assert skill["type"] == "standard"
    assert skill["tier"] == 1
    assert skill["primary_attribute"] == "STR"
    assert skill["secondary_attribute"] == "NA"
    assert skill["definition"] == ""
    assert skill["created_by"] == {"username": "loremaster"}


def test_create_skill_sanitizes_enums(client):
    skill = create_skill(
        client, name="Weaving", type="SPELL", tier="2", primary_attribute="int", secondary_attribute="luck",
    )

    assert skill["type"] == "spell"
    assert skill["tier"] == 2
    assert skill["primary_attribute"] == "INT"
    assert skill["secondary_attribute"] == "NA"


def test_unknown_type_and_bad_tier_fall_back(client):
    skill = create_skill(client, name="Oddity", type="cooking", tier=1.5)
    assert skill["type"] == "standard"
    assert skill["tier"] is None

    assert create_skill(client, name="Too High", tier=7)["tier"] is None


def test_list_skills_newest_first(client):
    first = create_skill(client, name="First")
    second = create_skill(client, name="Second")

    response = client.get("/api/skills")

    assert response.status_code == 200
    assert [s["id"] for s in response.json()["items"]] == [second["id"], first["id"]]


def test_patch_only_touches_sent_fields(client):
    skill = create_skill(client, name="Archery", definition="Bows", primary_attribute="DEX")

    item = patch_skill(client, skill["id"], tier=3)

    assert item["tier"] == 3
    assert item["name"] == "Archery"
    assert item["definition"] == "Bows"
    assert item["primary_attribute"] == "DEX"


def test_patch_parents_dedupes_and_drops_self(client):
    root = create_skill(client, name="Root")
    other = create_skill(client, name="Other")
    child = create_skill(client, name="Child")

    item = patch_skill(
        client, child["id"], parent_id=str(root["id"]), parent2_id=root["id"], parent3_id=child["id"],
    )
    assert (item["parent_id"], item["parent2_id"], item["parent3_id"]) == (root["id"], None, None)

    item = patch_skill(client, child["id"], parent_id="", parent2_id=other["id"], parent3_id=root["id"])
    assert (item["parent_id"], item["parent2_id"], item["parent3_id"]) == (other["id"], root["id"], None)


def test_empty_patch_returns_null_item(client):
    skill = create_skill(client, name="Idle")

    response = client.patch("/api/skills", json={"id": skill["id"], "patch": {}})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "item": None}


def test_patch_missing_skill_is_404(client):
    response = client.patch("/api/skills", json={"id": 999, "patch": {"name": "Ghost"}})
    assert response.status_code == 404


def test_delete_skill(client):
    skill = create_skill(client, name="Gone")

    assert client.delete("/api/skills", params={"id": skill["id"]}).json() == {"ok": True, "deleted": True}
    assert client.delete("/api/skills", params={"id": skill["id"]}).json() == {"ok": True, "deleted": False}
    assert client.delete("/api/skills", params={"id": "x"}).status_code == 400


def test_deleting_parent_clears_reference(client):
    parent = create_skill(client, name="Parent")
    child = create_skill(client, name="Child")
    patch_skill(client, child["id"], parent_id=parent["id"])

    client.delete("/api/skills", params={"id": parent["id"]})

    items = client.get("/api/skills").json()["items"]
    assert [(s["name"], s["parent_id"]) for s in items] == [("Child", None)]


# ── container summaries ─────────────────────────────────────


def test_summarize_containers_rollups():
    tree = [{
        "container": "Target",
        "range": "Touch",
        "shape": "Cone",
        "addons": {"shape_increments": 2},
        "duration": "1 round",
        "multi_target": 1,
        "effects": [{"name": "Burn", "count": 2}, {"name": "Slow"}],
        "children": [{"container": "Area", "range": "Touch", "duration": "1 minute"}],
    }]

    rollups = summarize_containers(json.dumps(tree))

    assert rollups["range_text"] == "Touch"
    assert rollups["shape_text"] == "Cone"
    assert rollups["duration_text"] == "1 round, 1 minute"
    assert rollups["effects_text"] == "Burn ×2; Slow"
    assert rollups["container_breakdown"] == "1 Target\n1.1 Area"
    assert rollups["addons_text"] == (
        "Shape=Cone(+2); Range=Touch; Duration=1 round; MultiTarget=+1\n"
        "Range=Touch; Duration=1 minute"
    )


def test_summarize_containers_bad_input_is_all_none():
    for raw in ("not json", "{}", "[]", ""):
        assert set(summarize_containers(raw).values()) == {None}


# ── magic builds ────────────────────────────────────────────


def test_magic_build_upsert(client):
    skill = create_skill(client, name="Fireball", type="spell")
    tree = [{"container": "Target", "range": "30 ft", "effects": [{"name": "Fire", "count": 3}]}]

    first = client.post("/api/magic-builds", json={
        "skill_id": skill["id"], "containers_json": json.dumps(tree), "mana_cost": "4.5",
    }).json()["item"]
    assert first["skill_name"] == "Fireball"
    assert first["tradition"] == "spellcraft"
    assert first["mastery_level"] == "Apprentice"
    assert first["mana_cost"] == 4.5
    assert first["casting_time"] == 0.0
    assert first["range_text"] == "30 ft"
    assert first["effects_text"] == "Fire ×3"

    second = client.post("/api/magic-builds", json={
        "skill_id": skill["id"], "tradition": "runic", "containers_json": "[]", "mana_cost": "",
    }).json()["item"]
    assert second["id"] == first["id"]
    assert second["tradition"] == "runic"
    assert second["mana_cost"] == 0.0
    assert second["range_text"] is None

    fetched = client.get("/api/magic-builds", params={"skill_id": skill["id"]}).json()["item"]
    assert fetched["tradition"] == "runic"


def test_magic_build_errors(client):
    assert client.get("/api/magic-builds").status_code == 400
    assert client.get("/api/magic-builds", params={"skill_id": 1}).status_code == 404
    assert client.post("/api/magic-builds", json={"skill_id": 999}).status_code == 404
    assert client.post("/api/magic-builds", json={}).status_code == 400


# ── special abilities ───────────────────────────────────────


def test_special_ability_sheet_roundtrip(client):
    skill = create_skill(client, name="Darkvision", type="special ability")

    snapshot = client.get("/api/special-abilities", params={"skill_id": skill["id"]}).json()["item"]
    assert snapshot["skill_name"] == "Darkvision"
    assert snapshot["skill_type"] == "special ability"
    assert snapshot["scaling"] is None and snapshot["requirements"] is None

    item = client.post("/api/special-abilities", json={
        "scaling": {"skill_id": skill["id"], "scaling_details": "+10 ft per stage"},
        "requirements": {"stage1_tag": "Dim", "stage1_points": "2", "final_tag": "True sight"},
    }).json()["item"]
    assert item["scaling"]["ability_type"] == "Utility"
    assert item["scaling"]["scaling_method"] == "Point-Based"
    assert item["scaling"]["scaling_details"] == "+10 ft per stage"
    assert item["requirements"]["stage1_tag"] == "Dim"
    assert item["requirements"]["final_tag"] == "True sight"

    item = client.post("/api/special-abilities", json={
        "scaling": {"skill_id": skill["id"], "ability_type": "Passive"},
        "requirements": {"skill_id": skill["id"]},
    }).json()["item"]
    assert item["scaling"]["ability_type"] == "Passive"
    assert item["scaling"]["scaling_details"] == ""
    assert item["requirements"]["stage1_tag"] is None


def test_special_ability_requires_skill_id(client):
    response = client.post("/api/special-abilities", json={"scaling": {}, "requirements": {}})
    assert response.status_code == 400
    assert response.json()["error"] == "skill_id required (int)"


def test_skill_writes_need_a_session(anon_client):
    assert anon_client.post("/api/skills", json={"name": "x"}).status_code == 401
    assert anon_client.post("/api/magic-builds", json={"skill_id": 1}).status_code == 401
    assert anon_client.get("/api/skills").json() == {"ok": True, "items": []}
