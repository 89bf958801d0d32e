"""Tests for the sibling order maintainer, driven through the world service."""

import pytest

from worldbuilder.errors import NotFoundError
from worldbuilder.models.world import Era
from worldbuilder.services.ordering import SiblingOrder
from worldbuilder.services.world_service import WorldService


def indices(db, world_id):
    return [row.order_index for row in SiblingOrder(db, Era.world_id).members(world_id)]


def names_in_order(db, world_id):
    rows = db.query(Era.name).filter(Era.world_id == world_id).order_by(Era.order_index, Era.id).all()
    return [row.name for row in rows]


def make_world(db, *era_names):
    service = WorldService(db)
    world_id = service.create_world("Ordering World")
    for name in era_names:
        service.create_era(world_id, name)
    return service, world_id


# ── append ──────────────────────────────────────────────────


def test_next_index_empty_group_is_zero(db):
    _, world_id = make_world(db)
    assert SiblingOrder(db, Era.world_id).next_index(world_id) == 0


def test_append_is_dense(db):
    _, world_id = make_world(db, "A", "B", "C")
    assert indices(db, world_id) == [0, 1, 2]
    assert names_in_order(db, world_id) == ["A", "B", "C"]


# ── move ────────────────────────────────────────────────────


def test_move_swaps_with_neighbour(db):
    service, world_id = make_world(db, "A", "B", "C")
    c_id = db.query(Era.id).filter(Era.name == "C").scalar()

    service.move_era(c_id, -1)

    assert names_in_order(db, world_id) == ["A", "C", "B"]
    assert indices(db, world_id) == [0, 1, 2]


def test_move_first_earlier_is_noop(db):
    _, world_id = make_world(db, "A", "B")
    a_id = db.query(Era.id).filter(Era.name == "A").scalar()

    moved = SiblingOrder(db, Era.world_id).move(a_id, -1)

    assert moved is False
    assert names_in_order(db, world_id) == ["A", "B"]


def test_move_last_later_is_noop(db):
    _, world_id = make_world(db, "A", "B")
    b_id = db.query(Era.id).filter(Era.name == "B").scalar()

    assert SiblingOrder(db, Era.world_id).move(b_id, 1) is False
    assert indices(db, world_id) == [0, 1]


def test_move_only_touches_the_members_own_group(db):
    _, first = make_world(db, "A", "B")
    service = WorldService(db)
    second = service.create_world("Second World")
    service.create_era(second, "X")
    x_id = db.query(Era.id).filter(Era.name == "X").scalar()

    assert SiblingOrder(db, Era.world_id).move(x_id, 1) is False
    assert names_in_order(db, first) == ["A", "B"]


def test_move_missing_member_is_404(db):
    with pytest.raises(NotFoundError):
        SiblingOrder(db, Era.world_id).move(12345, -1)


# ── remove ──────────────────────────────────────────────────


def test_delete_renumbers_remaining(db):
    service, world_id = make_world(db, "A", "B", "C", "D")
    b_id = db.query(Era.id).filter(Era.name == "B").scalar()

    service.delete_era(b_id)

    assert names_in_order(db, world_id) == ["A", "C", "D"]
    assert indices(db, world_id) == [0, 1, 2]


def test_renumber_closes_gaps(db):
    _, world_id = make_world(db, "A", "B", "C")
    db.query(Era).filter(Era.name == "B").update({Era.order_index: 7}, synchronize_session=False)
    db.query(Era).filter(Era.name == "C").update({Era.order_index: 12}, synchronize_session=False)
    db.commit()

    assert SiblingOrder(db, Era.world_id).renumber(world_id) == 3
    db.commit()

    assert indices(db, world_id) == [0, 1, 2]


def test_density_after_mixed_operations(db):
    service, world_id = make_world(db, "A", "B", "C", "D", "E")
    ids = {row.name: row.id for row in db.query(Era.id, Era.name).all()}

    service.move_era(ids["E"], -1)
    service.delete_era(ids["A"])
    service.move_era(ids["B"], 1)
    service.create_era(world_id, "F")
    service.delete_era(ids["D"])

    assert sorted(indices(db, world_id)) == list(range(4))
    assert names_in_order(db, world_id) == ["C", "B", "E", "F"]
