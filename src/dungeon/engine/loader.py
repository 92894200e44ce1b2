"""Load dungeon.toml into a World object.

The file has a [start] table naming the first room, a [flags] table of
initial flag values, and arrays of [[rooms]] (each with [[rooms.exits]])
and [[objects]]. Behavior names are checked against the registries in
behaviors.py so a typo fails at startup rather than mid-game.
"""

import tomllib
from pathlib import Path

from .behaviors import EXIT_CHECKS, OBJECT_BEHAVIORS, ROOM_ENTRIES, ROOM_LOOKS
from .vocabulary import direction, normalize_word
from .world import OBJECT_FLAGS, Exit, Obj, Room, World


class WorldError(ValueError):
    """The world file is malformed or refers to something that doesn't exist."""


def _parse_exit(room_id: str, data: dict) -> Exit:
    word = str(data.get("direction", ""))
    canonical = direction(normalize_word(word))
    if canonical is None:
        raise WorldError(f"room {room_id}: unknown direction {word!r}")
    return Exit(
        direction=canonical,
        to=data.get("to"),
        flag=data.get("flag"),
        message=data.get("message"),
        before=data.get("before"),
        on_blocked=data.get("on_blocked"),
    )


def _parse_room(data: dict) -> Room:
    room = Room(
        id=data["id"],
        name=data["name"],
        description=data.get("description", "").strip(),
        is_lit=data.get("lit", False),
        visit_score=data.get("visit_score", 0),
        look=data.get("look"),
        on_enter=data.get("on_enter"),
        forced={normalize_word(k): v for k, v in data.get("forced", {}).items()},
    )
    for exit_data in data.get("exits", []):
        exit = _parse_exit(room.id, exit_data)
        room.exits[exit.direction] = exit
    return room


def _parse_object(data: dict) -> Obj:
    flags = frozenset(data.get("flags", []))
    unknown = flags - OBJECT_FLAGS
    if unknown:
        raise WorldError(f"object {data['id']}: unknown flags {sorted(unknown)}")
    return Obj(
        id=data["id"],
        name=data["name"],
        description=data.get("description", "").strip(),
        initial=data.get("initial", "").strip(),
        synonyms=tuple(data.get("synonyms", ())),
        location=data.get("location"),
        flags=flags,
        size=data.get("size", 5),
        capacity=data.get("capacity", 0),
        find_score=data.get("find_score", 0),
        trophy_score=data.get("trophy_score", 0),
        light=data.get("light", 0),
        strength=data.get("strength", 0),
        behavior=data.get("behavior"),
        text=data.get("text", "").strip(),
        death=data.get("death", "").strip(),
        kill_flag=data.get("kill_flag"),
    )


def _check(world: World) -> None:
    """Cross-reference checks that need the whole world loaded."""
    if world.start_room not in world.rooms:
        raise WorldError(f"start room {world.start_room!r} does not exist")

    for room in world.rooms.values():
        if room.look is not None and room.look not in ROOM_LOOKS:
            raise WorldError(f"room {room.id}: unknown look {room.look!r}")
        if room.on_enter is not None and room.on_enter not in ROOM_ENTRIES:
            raise WorldError(f"room {room.id}: unknown on_enter {room.on_enter!r}")
        for obj_id in room.forced.values():
            if obj_id not in world.objects:
                raise WorldError(f"room {room.id}: forced match to unknown object {obj_id!r}")
        for exit in room.exits.values():
            if exit.to is not None and exit.to not in world.rooms:
                raise WorldError(f"room {room.id}: exit {exit.direction} to unknown room {exit.to!r}")
            for check in (exit.before, exit.on_blocked):
                if check is not None and check not in EXIT_CHECKS:
                    raise WorldError(f"room {room.id}: unknown exit check {check!r}")

    for obj in world.objects.values():
        if obj.behavior is not None and obj.behavior not in OBJECT_BEHAVIORS:
            raise WorldError(f"object {obj.id}: unknown behavior {obj.behavior!r}")
        loc = obj.location
        if loc is not None and loc not in world.rooms and loc not in world.objects:
            raise WorldError(f"object {obj.id}: unknown location {loc!r}")


def load_world(data_path: Path) -> World:
    """Parse dungeon.toml and return a checked World."""
    try:
        with open(data_path, "rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise WorldError(f"{data_path}: {e}") from e

    world = World(
        start_room=data.get("start", {}).get("room", ""),
        max_score=data.get("start", {}).get("max_score", 350),
        flags={str(k): bool(v) for k, v in data.get("flags", {}).items()},
    )
    try:
        for room_data in data.get("rooms", []):
            room = _parse_room(room_data)
            world.rooms[room.id] = room
        for obj_data in data.get("objects", []):
            obj = _parse_object(obj_data)
            world.objects[obj.id] = obj
    except KeyError as e:
        raise WorldError(f"{data_path}: missing required key {e}") from e

    _check(world)
    return world
