"""Klondike solitaire: one 52-card deck dealt into seven columns."""
from __future__ import annotations

from tabulous.camera import build_camera_position
from tabulous.mesh import find_anchor, pop, snap_to
from tabulous.models import Anchor, Anchorable, Detailable, GameData, GameSetup, Mesh, Slot, Stackable
from tabulous.utils import merge_props


SUITS = ("hearts", "spades", "diamonds", "clubs")
CARDS_PER_SUIT = 13
COLUMNS = 7

CARD_SIZE = {"width": 3, "height": 0.01, "depth": 4.25}
COLUMN_SPACING = 3.5
CARD_ANCHOR_SPACING = 1

metadata = {
    "locales": {"fr": {"title": "Solitaire"}, "en": {"title": "Klondike"}},
    "minTime": 15,
    "minAge": 7,
    "minSeats": 1,
    "maxSeats": 1,
    "tableSpec": {"texture": "#325532ff"},
    "colors": {"base": "#afe619", "primary": "#8367c7", "secondary": "#73778c"},
}


def _board() -> Mesh:
    anchors = [
        Anchor(id="reserve", x=-10.5, z=8.5, **CARD_SIZE),
        Anchor(id="discard", x=-7, z=8.5, flip=False, **CARD_SIZE),
    ]
    for column, suit in enumerate(SUITS):
        anchors.append(Anchor(id=f"goal-{suit}", x=COLUMN_SPACING * column, z=8.5, kinds=[suit], **CARD_SIZE))
    for column in range(COLUMNS):
        anchors.append(Anchor(id=f"column-{column + 1}", x=-10.5 + COLUMN_SPACING * column, z=3, **CARD_SIZE))
    return Mesh(
        id="board",
        shape="card",
        texture="board.ktx2",
        width=25,
        depth=22,
        anchorable=Anchorable(anchors=anchors),
    )


def _cards() -> list[Mesh]:
    meshes: list[Mesh] = []
    for suit in SUITS:
        for index in range(1, CARDS_PER_SUIT + 1):
            id = f"{suit}-{index}"
            meshes.append(
                Mesh(
                    id=id,
                    shape="card",
                    texture=f"{id}.ktx2",
                    detailable=Detailable(front_image=f"{id}.svg"),
                    anchorable=Anchorable(
                        anchors=[
                            Anchor(id=f"{id}-bottom", z=CARD_ANCHOR_SPACING, **CARD_SIZE),
                            Anchor(id=f"{id}-top", z=-CARD_ANCHOR_SPACING, **CARD_SIZE),
                        ]
                    ),
                    movable={"kind": suit},
                    stackable=Stackable(priority=1),
                    flippable={},
                    rotable={},
                    **CARD_SIZE,
                )
            )
    return meshes


def build() -> GameSetup:
    cards = _cards()
    return GameSetup(
        meshes=[_board(), *cards],
        bags={"cards": [card.id for card in cards]},
        slots=[Slot(bag_id="cards", anchor_id="reserve", flippable={"isFlipped": True})],
    )


def add_player(game: GameData, player_id: str) -> GameData:
    """Give the player a camera and deal the columns: column N holds N cards, only the last one face up."""

    game.cameras.append(build_camera_position(player_id=player_id, target=(0, 0, -2), elevation=30))

    reserve = find_anchor("reserve", game.meshes, False)
    reserve_id = reserve.snapped_ids[0] if reserve and reserve.snapped_ids else "reserve-not-found"

    for column in range(COLUMNS):
        thread = pop(reserve_id, column + 1, game.meshes)
        for parent, child in zip(thread, thread[1:]):
            snap_to(f"{parent.id}-bottom", child, thread)
        merge_props(thread[-1], {"flippable": {"isFlipped": False}})
        snap_to(f"column-{column + 1}", thread[0], game.meshes)
    return game
