from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TableModel(BaseModel):
    """Base for every piece of game data.

    - Field names are snake_case in Python and camelCase on the wire (`stackIds`, `snappedIds`...).
    - Unknown fields are kept as opaque payload: the engine copies and merges them, never reads them.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
        validate_assignment=True,
    )

    def to_json_data(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Anchor(TableModel):
    id: str
    snapped_ids: list[str] = Field(default_factory=list)
    # None means a capacity of 1.
    max: int | None = None
    kinds: list[str] | None = None
    priority: float | None = None


class Anchorable(TableModel):
    anchors: list[Anchor] = Field(default_factory=list)


class Stackable(TableModel):
    # Top of the stack is the last id. The base mesh is never listed.
    stack_ids: list[str] | None = None


class Quantifiable(TableModel):
    quantity: int = 1


class Detailable(TableModel):
    front_image: str | None = None
    back_image: str | None = None


class Mesh(TableModel):
    id: str
    texture: str | None = None
    file: str | None = None
    detailable: Detailable | None = None
    anchorable: Anchorable | None = None
    stackable: Stackable | None = None
    quantifiable: Quantifiable | None = None


class Hand(TableModel):
    player_id: str
    meshes: list[Mesh] = Field(default_factory=list)


class Slot(TableModel):
    """Placement rule consumed once while building a game.

    Any extra field (coordinates, flippable state...) is merged onto every mesh drawn for this slot.
    """

    bag_id: str
    count: int | None = Field(default=None, ge=0)
    anchor_id: str | None = None


class GameSetup(TableModel):
    """What a descriptor's `build()` returns."""

    meshes: list[Mesh] = Field(default_factory=list)
    bags: dict[str, list[str]] | None = None
    slots: list[Slot] | None = None


class CameraPosition(TableModel):
    hash: str = ""
    player_id: str
    index: int = 0
    target: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    alpha: float
    beta: float
    elevation: float


class PlayerPreference(TableModel):
    player_id: str


class GameData(TableModel):
    id: str
    # Unset means a lobby without game meshes.
    kind: str | None = None
    created: int | None = None

    # For reproducibility/debugging of the initial layout.
    seed: int | None = None

    available_seats: int | None = None
    player_ids: list[str] = Field(default_factory=list)

    meshes: list[Mesh] = Field(default_factory=list)
    hands: list[Hand] = Field(default_factory=list)
    cameras: list[CameraPosition] = Field(default_factory=list)
    preferences: list[PlayerPreference] = Field(default_factory=list)
