from __future__ import annotations

from collections.abc import Callable

import pytest

from tabulous.hand import draw_in_hand, find_or_create_hand
from tabulous.mesh import find_anchor
from tabulous.models import Anchor, GameData, Mesh
from tabulous.utils import NotFoundError


@pytest.fixture()
def game(make_game: Callable[..., GameData]) -> GameData:
    return make_game(
        meshes=[
            {"id": "A", "texture": "", "shape": "card"},
            {
                "id": "B",
                "texture": "",
                "shape": "board",
                "anchorable": {
                    "anchors": [
                        {"id": "discard", "snappedIds": ["C"]},
                        {"id": "reserve", "snappedIds": ["F"]},
                        {"id": "single", "snappedIds": ["G"]},
                        {"id": "empty", "snappedIds": []},
                    ]
                },
            },
            {"id": "C", "texture": "", "shape": "card", "stackable": {"stackIds": ["A", "E", "D"]}},
            {"id": "D", "texture": "", "shape": "card", "flippable": {"isFlipped": True}},
            {"id": "E", "texture": "", "shape": "card", "flippable": {"isFlipped": True}},
            {"id": "F", "texture": "", "shape": "card", "stackable": {"stackIds": []}},
            {"id": "G", "texture": "", "shape": "token"},
        ],
        hands=[{"playerId": "p2", "meshes": []}],
    )


def _ids(meshes: list[Mesh]) -> list[str]:
    return [m.id for m in meshes]


def _anchor(game: GameData, anchor_id: str) -> Anchor:
    return find_anchor(anchor_id, game.meshes)


def test_find_or_create_hand_returns_existing_hand(game: GameData) -> None:
    hand = find_or_create_hand(game, "p2")
    assert hand is game.hands[0]
    assert len(game.hands) == 1


def test_find_or_create_hand_creates_missing_hand(game: GameData) -> None:
    hand = find_or_create_hand(game, "p1")
    assert hand.player_id == "p1"
    assert hand.meshes == []
    assert game.hands[-1] is hand
    assert find_or_create_hand(game, "p1") is hand
    assert len(game.hands) == 2


def test_draw_in_hand_draws_top_mesh(game: GameData) -> None:
    draw_in_hand(game, player_id="p1", from_anchor="discard")

    hand = find_or_create_hand(game, "p1")
    assert _ids(hand.meshes) == ["D"]
    assert "D" not in _ids(game.meshes)
    assert game.meshes[2].stackable.stack_ids == ["A", "E"]
    assert _anchor(game, "discard").snapped_ids == ["C"]


def test_draw_in_hand_merges_props_on_every_drawn_mesh(game: GameData) -> None:
    props = {"x": 1, "flippable": {"isFlipped": False}}
    draw_in_hand(game, player_id="p2", from_anchor="discard", count=2, props=props)

    hand = game.hands[0]
    assert _ids(hand.meshes) == ["D", "E"]
    for mesh in hand.meshes:
        assert mesh.x == 1
        assert mesh.flippable == {"isFlipped": False}
    assert _ids(game.meshes) == ["A", "B", "C", "F", "G"]


def test_draw_in_hand_accumulates_successive_draws(game: GameData) -> None:
    draw_in_hand(game, player_id="p1", from_anchor="discard")
    draw_in_hand(game, player_id="p1", from_anchor="discard")

    assert [h.player_id for h in game.hands] == ["p2", "p1"]
    assert _ids(game.hands[1].meshes) == ["D", "E"]


def test_draw_in_hand_drains_stack_down_to_its_base(game: GameData) -> None:
    draw_in_hand(game, player_id="p1", from_anchor="discard", count=10)

    hand = find_or_create_hand(game, "p1")
    assert _ids(hand.meshes) == ["D", "E", "A", "C"]
    assert _anchor(game, "discard").snapped_ids == []
    assert _ids(game.meshes) == ["B", "F", "G"]


def test_draw_in_hand_stops_after_drawing_an_exhausted_base(game: GameData) -> None:
    draw_in_hand(game, player_id="p1", from_anchor="reserve", count=3)

    hand = find_or_create_hand(game, "p1")
    assert _ids(hand.meshes) == ["F"]
    assert _anchor(game, "reserve").snapped_ids == []
    assert _anchor(game, "single").snapped_ids == ["G"]
    assert _ids(game.meshes) == ["A", "B", "C", "D", "E", "G"]


def test_draw_in_hand_draws_lone_unstackable_mesh(game: GameData) -> None:
    draw_in_hand(game, player_id="p1", from_anchor="single", count=2)

    assert _ids(find_or_create_hand(game, "p1").meshes) == ["G"]
    assert _anchor(game, "single").snapped_ids == []


def test_draw_in_hand_clears_anchor_once_stack_is_empty(game: GameData) -> None:
    draw_in_hand(game, player_id="p1", from_anchor="discard", count=3)

    # The base stays on the table, but no longer occupies the anchor.
    assert _ids(find_or_create_hand(game, "p1").meshes) == ["D", "E", "A"]
    assert _anchor(game, "discard").snapped_ids == []
    assert "C" in _ids(game.meshes)


def test_draw_in_hand_on_unknown_anchor(game: GameData) -> None:
    with pytest.raises(NotFoundError, match="No anchor with id unknown"):
        draw_in_hand(game, player_id="p1", from_anchor="unknown")


def test_draw_in_hand_keeps_earlier_draws_on_unknown_stacked_mesh(game: GameData) -> None:
    game.meshes[2].stackable.stack_ids = ["A", "gone", "D"]

    with pytest.raises(NotFoundError, match="No mesh with id gone"):
        draw_in_hand(game, player_id="p1", from_anchor="discard", count=3)

    assert _ids(find_or_create_hand(game, "p1").meshes) == ["D"]
    assert game.meshes[2].stackable.stack_ids == ["A"]
    assert _anchor(game, "discard").snapped_ids == ["C"]


def test_draw_in_hand_on_empty_anchor(game: GameData) -> None:
    with pytest.raises(NotFoundError, match="Anchor empty has no snapped mesh"):
        draw_in_hand(game, player_id="p1", from_anchor="empty")
    assert len(game.meshes) == 7
