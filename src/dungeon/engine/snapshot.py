"""Externalize and restore the part of a game a bookmark needs.

A snapshot is a plain dict of JSON-friendly values: location, score,
turns, display modes, the flag store, and the ids of held objects.
"""

from .behaviors import sync_flags
from .context import Context
from .state import CARRIED


def snapshot(ctx: Context) -> dict:
    state = ctx.state
    return {
        "location": state.current_room,
        "score": state.score,
        "turns": state.turns,
        "brief": state.brief,
        "superbrief": state.superbrief,
        "flags": dict(state.flags),
        "held": sorted(ctx.held()),
    }


def restore(ctx: Context, data: dict) -> None:
    """Apply a snapshot to the current state.

    Unknown room and object ids are ignored. Objects held now but not in
    the snapshot go back to where the world file first put them. State that
    follows from the flags, such as the hidden trap door and caved-in rooms,
    is rebuilt. Any pending question and scheduled event is dropped.
    """
    state = ctx.state
    location = data.get("location")
    if location in ctx.world.rooms:
        state.current_room = location
        state.visited_rooms.add(location)

    state.score = int(data.get("score", state.score))
    state.turns = int(data.get("turns", state.turns))
    state.brief = bool(data.get("brief", False))
    state.superbrief = bool(data.get("superbrief", False))
    state.flags = {str(k): bool(v) for k, v in data.get("flags", {}).items()}
    sync_flags(ctx)

    held = {obj_id for obj_id in data.get("held", []) if obj_id in ctx.world.objects}
    for obj_id in ctx.held():
        if obj_id not in held:
            ctx.move(obj_id, ctx.world.objects[obj_id].location)
    for obj_id in held:
        ctx.move(obj_id, CARRIED)
        state.hidden_objects.discard(obj_id)

    state.pending = None
    state.events.clear()
    state.fighting.clear()
    state.last_verb = state.last_direct = state.last_indirect = None
