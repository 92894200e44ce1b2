"""Immutable data structures for the dungeon world.

These are loaded once from dungeon.toml at startup and shared across all
players. Everything that changes during play lives in GameState.
"""

from dataclasses import dataclass, field

# Object flags used by the engine
TAKE = "take"
CONTAINER = "container"
TRANSPARENT = "transparent"
OPEN = "open"
HIDDEN = "hidden"
NO_DESCRIBE = "no_describe"
WEAPON = "weapon"
VILLAIN = "villain"
FOOD = "food"
DRINKABLE = "drinkable"
READABLE = "readable"
SACRED = "sacred"
BURNABLE = "burnable"
FUEL = "fuel"
GLOWS = "glows"

OBJECT_FLAGS = frozenset({
    TAKE, CONTAINER, TRANSPARENT, OPEN, HIDDEN, NO_DESCRIBE, WEAPON, VILLAIN,
    FOOD, DRINKABLE, READABLE, SACRED, BURNABLE, FUEL, GLOWS,
})


@dataclass(frozen=True)
class Exit:
    """One direction out of a room.

    ``to`` of None means the way is always blocked with ``message``.
    When ``flag`` is set the exit is only open while that flag is true.
    ``before`` and ``on_blocked`` name callbacks in behaviors.
    """

    direction: str
    to: str | None = None
    flag: str | None = None
    message: str | None = None
    before: str | None = None
    on_blocked: str | None = None


@dataclass
class Room:
    """A location in the dungeon."""

    id: str
    name: str
    description: str = ""
    is_lit: bool = False
    visit_score: int = 0
    exits: dict[str, Exit] = field(default_factory=dict)
    look: str | None = None
    on_enter: str | None = None
    forced: dict[str, str] = field(default_factory=dict)


@dataclass
class Obj:
    """An object in the dungeon."""

    id: str
    name: str
    description: str = ""
    initial: str = ""
    synonyms: tuple[str, ...] = ()
    location: str | None = None
    flags: frozenset[str] = frozenset()
    size: int = 5
    capacity: int = 0
    find_score: int = 0
    trophy_score: int = 0
    light: int = 0
    strength: int = 0
    behavior: str | None = None
    text: str = ""
    death: str = ""
    kill_flag: str | None = None

    def has(self, flag: str) -> bool:
        return flag in self.flags


@dataclass
class World:
    """The complete immutable game world, loaded from dungeon.toml."""

    rooms: dict[str, Room] = field(default_factory=dict)
    objects: dict[str, Obj] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)
    start_room: str = ""
    max_score: int = 350

    def neighbors(self, room_id: str) -> set[str]:
        """Rooms one exit away, ignoring whether the exit is open."""
        room = self.rooms.get(room_id)
        if room is None:
            return set()
        return {e.to for e in room.exits.values() if e.to and e.to != room_id}
