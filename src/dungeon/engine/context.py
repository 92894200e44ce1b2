"""The explicit context every engine component works against.

A Context bundles the shared immutable World, one player's GameState,
the output sink text is written to, and the random source demons draw
from. Nothing in the engine reaches for module-level game state.
"""

import random
from dataclasses import dataclass, field
from typing import Protocol

from .state import CARRIED, GameState, ScheduledEvent
from .world import TRANSPARENT, Obj, Room, World


class Output(Protocol):
    def write(self, text: str) -> object: ...


class Bookmarks(Protocol):
    """Where the in-game SAVE and RESTORE commands keep their snapshot."""

    def save_bookmark(self, data: dict) -> None: ...

    def load_bookmark(self) -> dict | None: ...


@dataclass
class Context:
    world: World
    state: GameState
    output: Output
    rng: random.Random = field(default_factory=random.Random)
    bookmarks: Bookmarks | None = None

    def say(self, text: str) -> None:
        """Write one line of player-visible text."""
        self.output.write(text + "\n")

    # -- Rooms -------------------------------------------------------------

    @property
    def here(self) -> Room:
        return self.world.rooms[self.state.current_room]

    def is_lit(self) -> bool:
        """Check if the current room has light, from the room or any source."""
        if self.here.is_lit:
            return True
        sources = self.held() + self.room_objects()
        return any(self.is_burning(obj_id) for obj_id in sources)

    # -- Objects -----------------------------------------------------------

    def obj(self, obj_id: str | None) -> Obj | None:
        if obj_id is None:
            return None
        return self.world.objects.get(obj_id)

    def name(self, obj_id: str) -> str:
        obj = self.obj(obj_id)
        return obj.name if obj else obj_id.lower()

    def location(self, obj_id: str) -> str | None:
        return self.state.object_locations.get(obj_id)

    def is_held(self, obj_id: str | None) -> bool:
        return obj_id is not None and self.location(obj_id) == CARRIED

    def held(self) -> list[str]:
        return [o for o, loc in self.state.object_locations.items() if loc == CARRIED]

    def contents(self, holder_id: str) -> list[str]:
        return [o for o, loc in self.state.object_locations.items() if loc == holder_id]

    def room_objects(self, room_id: str | None = None) -> list[str]:
        """Objects lying directly in a room (the current one by default)."""
        room_id = room_id or self.state.current_room
        return self.contents(room_id)

    def room_of(self, obj_id: str) -> str | None:
        """The room an object is ultimately in, following holders."""
        loc = self.location(obj_id)
        for _ in range(len(self.world.objects)):
            if loc is None:
                return None
            if loc == CARRIED:
                return self.state.current_room
            if loc in self.world.rooms:
                return loc
            loc = self.location(loc)
        return None

    def is_visible(self, obj_id: str) -> bool:
        return obj_id not in self.state.hidden_objects

    def is_open(self, obj_id: str) -> bool:
        """Whether an object's contents can be seen."""
        obj = self.obj(obj_id)
        if obj is None:
            return False
        return obj_id in self.state.open_objects or obj.has(TRANSPARENT)

    def is_burning(self, obj_id: str) -> bool:
        return self.state.light_levels.get(obj_id, 0) > 0

    def is_here(self, obj_id: str) -> bool:
        """Held, or somewhere in the current room."""
        return self.room_of(obj_id) == self.state.current_room

    def move(self, obj_id: str, location: str | None) -> None:
        self.state.object_locations[obj_id] = location

    def remove(self, obj_id: str) -> None:
        """Take an object out of the world."""
        self.state.object_locations[obj_id] = None
        self.state.fighting.discard(obj_id)

    def load(self) -> int:
        """Total size of everything the player holds."""
        return sum(self.world.objects[o].size for o in self.held())

    # -- Flags, score, time ------------------------------------------------

    def flag(self, name: str) -> bool:
        return self.state.flags.get(name, False)

    def set_flag(self, name: str, value: bool = True) -> None:
        self.state.flags[name] = value

    def award(self, points: int) -> None:
        self.state.score += points

    def schedule(self, delay: int, action: str, *args) -> ScheduledEvent:
        """Register a named callback to fire ``delay`` turns from now."""
        self.state.event_seq += 1
        event = ScheduledEvent(
            trigger=self.state.turns + delay,
            seq=self.state.event_seq,
            action=action,
            args=tuple(args),
        )
        self.state.events.append(event)
        return event

    def end_game(self) -> None:
        self.state.running = False
