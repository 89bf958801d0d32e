"""HTTP tests for /api/world/eras and /api/settings."""

from conftest import create_world, era_op, world_op


def make_era(client, name="Age of Sail"):
    world = create_world(client)
    data = world_op(client, "createEra", worldId=world["id"], name=name).json()["data"]
    return world, data["eras"][0]


def ok_data(response, status=200):
    assert response.status_code == status, response.text
    body = response.json()
    assert body["ok"] is True
    return body["data"]


# ── detail view ─────────────────────────────────────────────


def test_fresh_era_detail_has_every_collection(client):
    _, era = make_era(client)

    detail = ok_data(client.get("/api/world/eras", params={"id": era["id"]}))

    assert detail["name"] == "Age of Sail"
    assert detail["ongoing"] is False
    for key in (
        "governments", "trade_routes", "economic_conditions", "catalysts",
        "races", "creatures", "languages", "deities", "factions",
    ):
        assert detail[key] == []


def test_detail_requires_id(anon_client):
    response = anon_client.get("/api/world/eras")
    assert response.status_code == 400
    assert response.json()["error"] == "Era ID is required"


def test_detail_for_missing_era_is_404(anon_client):
    assert anon_client.get("/api/world/eras", params={"id": 404}).status_code == 404


# ── extended fields ─────────────────────────────────────────


def test_put_updates_extended_fields(client):
    _, era = make_era(client)

    detail = ok_data(client.put("/api/world/eras", json={
        "id": era["id"],
        "short_summary": "Ships everywhere",
        "ongoing": "true",
        "start_month": "3",
        "travel_safety": 4,
        "magic_tide": "ebbing",
        "order_index": 99,
        "world_id": 12345,
    }))

    assert detail["short_summary"] == "Ships everywhere"
    assert detail["ongoing"] is True
    assert detail["start_month"] == 3
    assert detail["travel_safety"] == 4
    assert detail["magic_tide"] == "ebbing"
    assert detail["order_index"] == 0
    assert detail["world_id"] == era["world_id"]
    assert detail["name"] == "Age of Sail"


def test_put_with_nothing_to_update_is_400(client):
    _, era = make_era(client)

    response = client.put("/api/world/eras", json={"id": era["id"], "bogus": 1})

    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields to update"


def test_put_missing_era_is_404(client):
    assert client.put("/api/world/eras", json={"id": 999, "icon": "anchor"}).status_code == 404


def test_put_without_session_is_401(anon_client):
    assert anon_client.put("/api/world/eras", json={"id": 1, "icon": "anchor"}).status_code == 401


# ── governments, regions, currencies ────────────────────────


def test_government_ordering(client):
    _, era = make_era(client)
    for name in ("Crown", "Guilds", "Temple"):
        detail = ok_data(era_op(client, "createGovernment", eraId=era["id"], name=name, gov_type="monarchy"))

    assert [(g["name"], g["order_index"]) for g in detail["governments"]] == [
        ("Crown", 0), ("Guilds", 1), ("Temple", 2),
    ]
    temple = detail["governments"][2]

    detail = ok_data(era_op(client, "moveGovernment", id=temple["id"], dir=-1))
    assert [g["name"] for g in detail["governments"]] == ["Crown", "Temple", "Guilds"]

    crown = detail["governments"][0]
    detail = ok_data(era_op(client, "deleteGovernment", id=crown["id"]))
    assert [(g["name"], g["order_index"]) for g in detail["governments"]] == [("Temple", 0), ("Guilds", 1)]


def test_update_government_is_partial(client):
    _, era = make_era(client)
    detail = ok_data(era_op(
        client, "createGovernment", eraId=era["id"], name="Crown", current_ruler="Queen Mab",
    ))
    gov_id = detail["governments"][0]["id"]

    detail = ok_data(era_op(client, "updateGovernment", id=gov_id, stability_status="shaky"))

    government = detail["governments"][0]
    assert government["current_ruler"] == "Queen Mab"
    assert government["stability_status"] == "shaky"


def test_regions_and_currencies_nest_and_reorder(client):
    _, era = make_era(client)
    detail = ok_data(era_op(client, "createGovernment", eraId=era["id"], name="Crown"))
    gov_id = detail["governments"][0]["id"]

    ok_data(era_op(client, "createRegion", governmentId=gov_id, name="North", kind="province"))
    detail = ok_data(era_op(client, "createRegion", governmentId=gov_id, name="South"))
    north, south = detail["governments"][0]["regions"]
    assert (north["order_index"], south["order_index"]) == (0, 1)

    ok_data(era_op(client, "createCurrency", regionId=south["id"], coin_name="Sun", value_in_credits=1))
    detail = ok_data(era_op(client, "createCurrency", regionId=south["id"], coin_name="Moon", value_in_credits="x"))
    sun, moon = detail["governments"][0]["regions"][1]["currencies"]
    assert (sun["value_in_credits"], moon["value_in_credits"]) == (1.0, None)

    detail = ok_data(era_op(client, "moveCurrency", id=moon["id"], dir=-1))
    currencies = detail["governments"][0]["regions"][1]["currencies"]
    assert [(c["coin_name"], c["order_index"]) for c in currencies] == [("Moon", 0), ("Sun", 1)]

    detail = ok_data(era_op(client, "updateCurrency", id=sun["id"], value_in_credits="0.25"))
    assert detail["governments"][0]["regions"][1]["currencies"][1]["value_in_credits"] == 0.25

    detail = ok_data(era_op(client, "moveRegion", id=south["id"], dir=-1))
    assert [r["name"] for r in detail["governments"][0]["regions"]] == ["South", "North"]

    detail = ok_data(era_op(client, "deleteRegion", id=south["id"]))
    regions = detail["governments"][0]["regions"]
    assert [(r["name"], r["order_index"]) for r in regions] == [("North", 0)]
    assert regions[0]["currencies"] == []


def test_delete_currency_renumbers(client):
    _, era = make_era(client)
    detail = ok_data(era_op(client, "createGovernment", eraId=era["id"], name="Crown"))
    gov_id = detail["governments"][0]["id"]
    detail = ok_data(era_op(client, "createRegion", governmentId=gov_id, name="Only"))
    region_id = detail["governments"][0]["regions"][0]["id"]
    for coin in ("A", "B", "C"):
        detail = ok_data(era_op(client, "createCurrency", regionId=region_id, coin_name=coin))
    b_id = detail["governments"][0]["regions"][0]["currencies"][1]["id"]

    detail = ok_data(era_op(client, "deleteCurrency", id=b_id))

    currencies = detail["governments"][0]["regions"][0]["currencies"]
    assert [(c["coin_name"], c["order_index"]) for c in currencies] == [("A", 0), ("C", 1)]


def test_region_under_missing_government_is_404(client):
    assert era_op(client, "createRegion", governmentId=999, name="Nowhere").status_code == 404


# ── trade routes, economy, catalysts ────────────────────────


def test_trade_route_create_then_update(client):
    _, era = make_era(client)

    detail = ok_data(era_op(client, "saveTradeRoute", eraId=era["id"], name="Spice Road", start_point="Port"))
    route = detail["trade_routes"][0]
    assert route["status"] == "active"

    detail = ok_data(era_op(
        client, "saveTradeRoute", eraId=era["id"], id=route["id"], name="Spice Road", status="closed",
    ))
    assert len(detail["trade_routes"]) == 1
    assert detail["trade_routes"][0]["status"] == "closed"

    detail = ok_data(era_op(client, "deleteTradeRoute", id=route["id"]))
    assert detail["trade_routes"] == []


def test_economic_condition_save_and_delete(client):
    _, era = make_era(client)

    detail = ok_data(era_op(
        client, "saveEconomicCondition", eraId=era["id"], condition_type="Famine", affected_regions="North",
    ))
    condition = detail["economic_conditions"][0]
    assert (condition["condition_type"], condition["affected_regions"]) == ("Famine", "North")

    detail = ok_data(era_op(client, "deleteEconomicCondition", id=condition["id"]))
    assert detail["economic_conditions"] == []


def test_catalysts_sorted_by_start_date(client):
    _, era = make_era(client)
    era_op(client, "saveCatalyst", eraId=era["id"], title="Late", catalyst_type="war", start_date_year=300)
    era_op(client, "saveCatalyst", eraId=era["id"], title="Early", catalyst_type="plague", start_date_year=100)
    detail = ok_data(era_op(
        client, "saveCatalyst", eraId=era["id"], title="Middle", catalyst_type="omen",
        start_date_year=100, start_date_month=6, player_visible="false",
    ))

    assert [c["title"] for c in detail["catalysts"]] == ["Early", "Middle", "Late"]
    middle = detail["catalysts"][1]
    assert middle["player_visible"] is False
    assert detail["catalysts"][0]["player_visible"] is True


def test_updating_flat_record_from_another_era_is_404(client):
    world, era = make_era(client)
    other = world_op(client, "createEra", worldId=world["id"], name="Other").json()["data"]["eras"][1]
    detail = ok_data(era_op(client, "saveTradeRoute", eraId=era["id"], name="Road"))
    route_id = detail["trade_routes"][0]["id"]

    response = era_op(client, "saveTradeRoute", eraId=other["id"], id=route_id, name="Stolen")

    assert response.status_code == 404


def test_deleting_era_removes_its_details(client):
    world, era = make_era(client)
    era_op(client, "saveTradeRoute", eraId=era["id"], name="Road")
    era_op(client, "createGovernment", eraId=era["id"], name="Crown")

    world_op(client, "deleteEra", id=era["id"])

    assert client.get("/api/world/eras", params={"id": era["id"]}).status_code == 404


# ── catalog ─────────────────────────────────────────────────


def test_catalog_races_creatures_and_names(client):
    _, era = make_era(client)
    race = ok_data(client.post("/api/races", json={"name": "Elf"}), 201)
    creature = ok_data(client.post("/api/creatures", json={"name": "Kraken"}), 201)

    era_op(client, "addCatalogEntry", eraId=era["id"], kind="race", refId=race["id"], notes="coastal")
    era_op(client, "addCatalogEntry", eraId=era["id"], kind="creature", refId=creature["id"])
    era_op(client, "addCatalogEntry", eraId=era["id"], kind="language", name="Tidespeak")
    era_op(client, "addCatalogEntry", eraId=era["id"], kind="Deity", name="The Drowned One")
    detail = ok_data(era_op(client, "addCatalogEntry", eraId=era["id"], kind="faction", name="Wreckers"))

    assert [(r["race_name"], r["notes"]) for r in detail["races"]] == [("Elf", "coastal")]
    assert [c["creature_name"] for c in detail["creatures"]] == ["Kraken"]
    assert [entry["name"] for entry in detail["languages"]] == ["Tidespeak"]
    assert [entry["name"] for entry in detail["deities"]] == ["The Drowned One"]
    assert [entry["name"] for entry in detail["factions"]] == ["Wreckers"]

    detail = ok_data(era_op(client, "removeCatalogEntry", eraId=era["id"], kind="race", refId=race["id"]))
    assert detail["races"] == []
    detail = ok_data(era_op(client, "removeCatalogEntry", eraId=era["id"], kind="language", name="Tidespeak"))
    assert detail["languages"] == []


def test_duplicate_catalog_entry_conflicts(client):
    _, era = make_era(client)
    era_op(client, "addCatalogEntry", eraId=era["id"], kind="faction", name="Wreckers")

    response = era_op(client, "addCatalogEntry", eraId=era["id"], kind="faction", name="Wreckers")

    assert response.status_code == 409


def test_catalog_errors(client):
    _, era = make_era(client)

    assert era_op(client, "addCatalogEntry", eraId=era["id"], kind="weather", name="Rain").status_code == 400
    assert era_op(client, "addCatalogEntry", eraId=era["id"], kind="race").status_code == 400
    assert era_op(client, "addCatalogEntry", eraId=era["id"], kind="race", refId=999).status_code == 404
    assert era_op(client, "removeCatalogEntry", eraId=era["id"], kind="deity", name="Nobody").status_code == 404


# ── dispatch errors ─────────────────────────────────────────


def test_era_ops_reject_unknown_and_missing(client):
    assert era_op(client, "raiseKraken").json() == {"ok": False, "error": "Unknown op: raiseKraken"}
    assert client.post("/api/world/eras", json={}).json()["error"] == "Missing op"


def test_era_ops_need_a_session(anon_client):
    response = era_op(anon_client, "createGovernment", eraId=1, name="Crown")
    assert response.status_code == 401


# ── settings lookup ─────────────────────────────────────────


def test_settings_lookup_with_names(client):
    world, era = make_era(client)
    world_op(client, "createSetting", worldId=world["id"], eraId=era["id"], name="Harbor")
    data = world_op(client, "createSetting", worldId=world["id"], name="Wilds").json()["data"]
    harbor, wilds = data["settings"]

    one = ok_data(client.get("/api/settings", params={"id": harbor["id"]}))
    assert (one["name"], one["era_name"], one["world_name"]) == ("Harbor", "Age of Sail", "Aldoria")

    by_era = ok_data(client.get("/api/settings", params={"eraId": era["id"]}))
    assert [s["name"] for s in by_era] == ["Harbor"]

    by_world = ok_data(client.get("/api/settings", params={"worldId": world["id"]}))
    assert [(s["name"], s["era_name"]) for s in by_world] == [("Harbor", "Age of Sail"), ("Wilds", None)]
    assert wilds["era_id"] is None


def test_missing_setting_is_404(anon_client):
    response = anon_client.get("/api/settings", params={"id": 77})
    assert response.status_code == 404
    assert response.json() == {"ok": False, "error": "Setting not found"}


def test_create_update_delete_setting(client):
    world, era = make_era(client)

    created = ok_data(client.post("/api/settings", json={
        "op": "create", "worldId": world["id"], "eraId": era["id"], "name": "Harbor", "startYear": "12",
    }), status=201)
    assert (created["name"], created["era_name"], created["world_name"]) == ("Harbor", "Age of Sail", "Aldoria")
    assert created["start_year"] == 12

    updated = ok_data(client.post("/api/settings", json={
        "op": "update", "id": created["id"], "eraId": None, "description": "Salt and tar",
    }))
    assert updated["era_id"] is None
    assert updated["era_name"] is None
    assert updated["description"] == "Salt and tar"
    assert updated["name"] == "Harbor"

    assert client.delete("/api/settings", params={"id": created["id"]}).json() == {"ok": True}
    assert client.get("/api/settings", params={"id": created["id"]}).status_code == 404
    assert client.delete("/api/settings", params={"id": created["id"]}).status_code == 404


def test_setting_write_errors(client):
    world, _ = make_era(client)

    response = client.post("/api/settings", json={"op": "rename", "id": 1})
    assert response.json() == {"ok": False, "error": "Invalid operation"}
    assert client.post("/api/settings", json={"op": "create", "worldId": world["id"]}).status_code == 400
    assert client.post("/api/settings", json={"op": "update", "id": 404, "name": "Gone"}).status_code == 404
    assert client.delete("/api/settings").json() == {"ok": False, "error": "Missing setting ID"}


def test_setting_writes_need_a_session(anon_client):
    assert anon_client.post("/api/settings", json={"op": "create", "worldId": 1, "name": "x"}).status_code == 401
    assert anon_client.delete("/api/settings", params={"id": 1}).status_code == 401
