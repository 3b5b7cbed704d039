"""Graph primitives over a flat list of meshes.

Stacks and anchors only hold ids: every relation is resolved by searching the mesh list.
Lookups raise `NotFoundError` by default; pass `throw_on_miss=False` to get a sentinel
(None, False or an empty list) instead.
"""
from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from tabulous.models import Anchor, Mesh
from tabulous.utils import NotFoundError, merge_props


def find_mesh(id: str | None, meshes: Sequence[Mesh] | None, throw_on_miss: bool = True) -> Mesh | None:
    mesh = next((m for m in meshes or [] if m.id == id), None)
    if mesh is None and throw_on_miss:
        raise NotFoundError(f"No mesh with id {id}")
    return mesh


def _find_mesh_and_anchor(
    anchor_id: str,
    meshes: Sequence[Mesh],
    throw_on_miss: bool = True,
) -> tuple[Mesh, Anchor] | None:
    for mesh in meshes:
        for anchor in mesh.anchorable.anchors if mesh.anchorable else []:
            if anchor.id == anchor_id:
                return mesh, anchor
    if throw_on_miss:
        raise NotFoundError(f"No anchor with id {anchor_id}")
    return None


def find_anchor(path: str, meshes: Sequence[Mesh] | None, throw_on_miss: bool = True) -> Anchor | None:
    """Find an anchor from a path of anchor ids separated with '.'.

    Each step after the first only searches the meshes snapped on the previous anchor, so
    `"column-1.top"` reads as "anchor `top` of whatever sits on `column-1`".
    """

    meshes = list(meshes or [])
    candidates = meshes
    anchor: Anchor | None = None
    for leg in path.split("."):
        match = _find_mesh_and_anchor(leg, candidates, throw_on_miss)
        if match is None:
            return None
        _, anchor = match
        snapped_ids = set(anchor.snapped_ids)
        candidates = [m for m in meshes if m.id in snapped_ids]
    return anchor


def capacity(anchor: Anchor) -> int:
    return 1 if anchor.max is None else anchor.max


def _can_stack(base: Mesh | None, mesh: Mesh | None) -> bool:
    return bool(base is not None and base.stackable is not None and mesh is not None and mesh.stackable is not None)


def pop_mesh(stack: Mesh, meshes: Sequence[Mesh], throw_on_miss: bool = True) -> Mesh | None:
    """Pop the top mesh of a stack.

    Returns None once the stack is exhausted: the base itself is never returned here.
    """

    stack_ids = stack.stackable.stack_ids if stack.stackable else None
    if stack_ids is None and throw_on_miss:
        raise NotFoundError(f"Mesh {stack.id} is not stackable")
    if stack_ids:
        return find_mesh(stack_ids.pop(), meshes, throw_on_miss)
    return None


def stack_meshes(meshes: Sequence[Mesh]) -> None:
    """Stack all provided meshes, in order: the first one becomes the base.

    Stacking is additive: ids are appended to any existing stack.
    """

    if len(meshes) <= 1:
        return
    base, *others = meshes
    merge_props(base, {"stackable": {"stack_ids": [m.id for m in others]}})


def snap_to(anchor_id: str, mesh: Mesh | None, meshes: Sequence[Mesh], throw_on_miss: bool = True) -> bool:
    """Snap a mesh onto an anchor.

    When the anchor is full, tries to stack the mesh onto the one already snapped.
    Returns False, leaving everything untouched, when they can't be stacked.
    """

    anchor = find_anchor(anchor_id, meshes, throw_on_miss)
    if anchor is None or mesh is None:
        if throw_on_miss:
            raise NotFoundError(f"No mesh to snap on anchor {anchor_id}")
        return False

    if len(anchor.snapped_ids) >= capacity(anchor):
        snapped = find_mesh(anchor.snapped_ids[0], meshes, throw_on_miss) if anchor.snapped_ids else None
        if not _can_stack(snapped, mesh):
            return False
        stack_meshes([snapped, mesh])
    else:
        anchor.snapped_ids.append(mesh.id)
    return True


def unsnap(anchor_id: str, meshes: Sequence[Mesh], throw_on_miss: bool = True) -> Mesh | None:
    anchor = find_anchor(anchor_id, meshes, throw_on_miss)
    if anchor is None or not anchor.snapped_ids:
        if throw_on_miss:
            raise NotFoundError(f"Anchor {anchor_id} has no snapped mesh")
        return None
    snapped_id = anchor.snapped_ids.pop(0)
    return find_mesh(snapped_id, meshes, throw_on_miss)


def pop(stack_id: str, count: int, meshes: Sequence[Mesh], throw_on_miss: bool = True) -> list[Mesh]:
    """Pop up to `count` meshes from a stack, last stacked first.

    Once the stack is exhausted the base mesh itself comes out, as the last item.
    """

    drawn: list[Mesh] = []
    stack = find_mesh(stack_id, meshes, throw_on_miss)
    if stack is None:
        return drawn
    for _ in range(count):
        mesh = pop_mesh(stack, meshes, throw_on_miss)
        if mesh is None:
            if stack.stackable is not None and stack.stackable.stack_ids == []:
                drawn.append(stack)
            break
        drawn.append(mesh)
    return drawn


def decrement(mesh: Mesh | None, throw_on_miss: bool = True) -> Mesh | None:
    """Split one item off a quantifiable mesh.

    The split mesh keeps its id and loses one unit; the returned copy gets a new id and a quantity of 1.
    """

    if mesh is not None and mesh.quantifiable is not None and mesh.quantifiable.quantity > 1:
        clone = mesh.model_copy(deep=True)
        clone.id = f"{mesh.id}-{uuid4()}"
        clone.quantifiable.quantity = 1
        mesh.quantifiable.quantity -= 1
        return clone
    if throw_on_miss:
        raise NotFoundError(f"Mesh {mesh.id if mesh else None} is not quantifiable or has a quantity of 1")
    return None
