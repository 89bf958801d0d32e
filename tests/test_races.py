"""HTTP tests for /api/races."""

from worldbuilder.models.race import RacialBonusSkill


def create_race(client, name="Elf"):
    response = client.post("/api/races", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_skill(client, name, **fields):
    response = client.post("/api/skills", json={"name": name, **fields})
    assert response.status_code == 201, response.text
    return response.json()["item"]


# ── create / rename / delete ────────────────────────────────


def test_create_race_starts_empty(client):
    race = create_race(client, "  Dwarf ")

    assert race["name"] == "Dwarf"
    assert race["definition"] is None
    assert race["attributes"] is None
    assert race["bonus_skills"] == []
    assert race["special_abilities"] == []


def test_race_names_are_unique_case_insensitively(client):
    create_race(client, "Elf")

    response = client.post("/api/races", json={"name": "ELF"})

    assert response.status_code == 409
    assert response.json()["error"] == "Race 'ELF' already exists."


def test_rename_via_put_and_patch(client):
    race = create_race(client, "Elf")

    renamed = client.put("/api/races", json={"id": race["id"], "rename_to": "High Elf"}).json()["data"]
    assert renamed["name"] == "High Elf"

    patched = client.patch("/api/races", json={"id": race["id"], "name": "Wood Elf"}).json()["data"]
    assert patched["name"] == "Wood Elf"


def test_rename_to_taken_name_conflicts(client):
    create_race(client, "Elf")
    orc = create_race(client, "Orc")

    response = client.patch("/api/races", json={"id": orc["id"], "name": "elf"})

    assert response.status_code == 409


def test_delete_race_by_body_or_query(client, db):
    elf = create_race(client, "Elf")
    orc = create_race(client, "Orc")
    skill = create_skill(client, "Archery")
    client.put("/api/races", json={
        "id": elf["id"], "section": "bonus_skills", "items": [{"skill_id": skill["id"], "points": 2}],
    })

    response = client.request("DELETE", "/api/races", json={"id": elf["id"]})
    assert response.status_code == 200
    assert response.json() == {"ok": True, "deleted": True}
    assert db.query(RacialBonusSkill).count() == 0

    assert client.delete("/api/races", params={"id": orc["id"]}).json()["deleted"] is True
    assert client.get("/api/races").json()["data"] == []


def test_delete_missing_race_is_404(client):
    assert client.delete("/api/races", params={"id": 999}).status_code == 404


# ── reads ───────────────────────────────────────────────────


def test_list_lite_by_id_and_by_name(client):
    create_race(client, "Orc")
    elf = create_race(client, "Elf")

    lite = client.get("/api/races", params={"lite": "1"}).json()["data"]
    assert lite == [{"id": elf["id"], "name": "Elf"}, {"id": lite[1]["id"], "name": "Orc"}]

    by_id = client.get("/api/races", params={"id": elf["id"]}).json()["data"]
    assert by_id["name"] == "Elf"

    by_name = client.get("/api/races", params={"name": "Elf"}).json()["data"]
    assert by_name["id"] == elf["id"]

    assert client.get("/api/races", params={"id": 999}).status_code == 404
    assert client.get("/api/races", params={"id": "abc"}).status_code == 400


def test_candidates_split_bonus_and_special_skills(client):
    create_skill(client, "Swordplay", tier=1)
    create_skill(client, "Smithing", tier=2)
    create_skill(client, "Darkvision", type="Special Ability")

    skills = client.get("/api/races", params={"candidates": "skills"}).json()["data"]
    specials = client.get("/api/races", params={"candidates": "specials"}).json()["data"]

    assert [s["name"] for s in skills] == ["Swordplay"]
    assert [s["name"] for s in specials] == ["Darkvision"]


# ── sections ────────────────────────────────────────────────


def test_definition_upsert_overwrites(client):
    race = create_race(client)

    first = client.put("/api/races", json={
        "id": race["id"], "section": "definition",
        "payload": {"racial_quirk": "Sings at dawn", "cultural_mindset": "Patient"},
    }).json()["data"]
    assert first["definition"]["racial_quirk"] == "Sings at dawn"

    second = client.put("/api/races", json={
        "id": race["id"], "section": "definition", "payload": {"racial_quirk": "Hums at dusk"},
    }).json()["data"]
    assert second["definition"]["id"] == first["definition"]["id"]
    assert second["definition"]["racial_quirk"] == "Hums at dusk"
    assert second["definition"]["cultural_mindset"] is None


def test_attributes_upsert_normalizes_numbers(client):
    race = create_race(client)

    data = client.put("/api/races", json={
        "id": race["id"], "section": "attributes",
        "payload": {"size": "Medium", "strength_max": "18", "dexterity_max": "", "base_movement": 30},
    }).json()["data"]

    attributes = data["attributes"]
    assert attributes["size"] == "Medium"
    assert attributes["strength_max"] == 18
    assert attributes["dexterity_max"] is None
    assert attributes["base_movement"] == 30


def test_bonus_skills_replace_in_order(client):
    race = create_race(client)
    first = create_skill(client, "Archery")
    second = create_skill(client, "Tracking")

    data = client.put("/api/races", json={
        "id": race["id"], "section": "bonus_skills",
        "items": [{"skill_id": second["id"], "points": 3}, {"skill_id": first["id"], "points": -4}],
    }).json()["data"]
    assert [(s["skill_name"], s["points"], s["slot_idx"]) for s in data["bonus_skills"]] == [
        ("Tracking", 3, 0),
        ("Archery", 0, 1),
    ]

    data = client.put("/api/races", json={
        "id": race["id"], "section": "bonus_skills", "items": [{"skill_id": first["id"]}],
    }).json()["data"]
    assert [(s["skill_id"], s["points"], s["slot_idx"]) for s in data["bonus_skills"]] == [(first["id"], 0, 0)]


def test_unknown_skill_rolls_back_whole_replacement(client):
    race = create_race(client)
    skill = create_skill(client, "Archery")
    client.put("/api/races", json={
        "id": race["id"], "section": "bonus_skills", "items": [{"skill_id": skill["id"], "points": 1}],
    })

    response = client.put("/api/races", json={
        "id": race["id"], "section": "bonus_skills",
        "items": [{"skill_id": skill["id"], "points": 5}, {"skill_id": 9999, "points": 1}],
    })

    assert response.status_code == 404
    data = client.get("/api/races", params={"id": race["id"]}).json()["data"]
    assert [(s["skill_id"], s["points"]) for s in data["bonus_skills"]] == [(skill["id"], 1)]


def test_special_abilities_section(client):
    race = create_race(client)
    ability = create_skill(client, "Darkvision", type="special ability")

    data = client.put("/api/races", json={
        "id": race["id"], "section": "special_abilities", "items": [{"skill_id": ability["id"], "points": 1}],
    }).json()["data"]

    assert [s["skill_name"] for s in data["special_abilities"]] == ["Darkvision"]
    assert data["bonus_skills"] == []


def test_unsupported_put_is_400(client):
    race = create_race(client)

    response = client.put("/api/races", json={"id": race["id"], "section": "lineage"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Unsupported PUT")


def test_section_for_missing_race_is_404(client):
    response = client.put("/api/races", json={"id": 999, "section": "definition", "payload": {}})
    assert response.status_code == 404


def test_race_writes_need_a_session(anon_client):
    assert anon_client.post("/api/races", json={"name": "Elf"}).status_code == 401
    assert anon_client.delete("/api/races", params={"id": 1}).status_code == 401
