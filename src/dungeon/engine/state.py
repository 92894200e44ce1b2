"""Mutable per-player game state.

All values are strings/ints/bools/sets/dicts, with no World references
and no callables, so this can be safely pickled for per-player
persistence. Scheduled events name their callback instead of holding it.
"""

from dataclasses import dataclass, field

from .world import HIDDEN, OPEN, World

# Object location for things the player is holding
CARRIED = "*carried*"

# Key object ids
LAMP = "LAMP"
SWORD = "SWORD"
MATCH = "MATCH"
CANDLES = "CANDL"
FUSE = "FUSE"
BRICK = "BRICK"
TROLL = "TROLL"
THIEF = "THIEF"
GNOME = "GNOME"
TROPHY_CASE = "TCASE"
RUG = "RUG"
TRAP_DOOR = "DOOR"

# Rooms with hard-wired clock behavior
MAINT_ROOM = "MAINT"
WINDY_CAVE = "CAVE2"
SAFE_ROOM = "SAFE"
WIDE_LEDGE = "LEDG4"

LAMP_BUDGET = 100
MAX_LOAD = 100
MAX_STRENGTH = 100


@dataclass
class ScheduledEvent:
    """A one-shot callback that fires once ``turns`` reaches ``trigger``."""

    trigger: int
    seq: int
    action: str
    args: tuple = ()


@dataclass
class PendingQuestion:
    """A command suspended by a "Which X?" question."""

    verb: str
    words: list[str]
    candidates: list[str]
    word: str


@dataclass
class GameState:
    """All mutable per-player state. Holds only primitive types."""

    current_room: str = ""

    # obj_id → room id, CARRIED, a holding object's id, or None (gone)
    object_locations: dict[str, str | None] = field(default_factory=dict)
    open_objects: set[str] = field(default_factory=set)
    hidden_objects: set[str] = field(default_factory=set)
    touched_objects: set[str] = field(default_factory=set)
    light_levels: dict[str, int] = field(default_factory=dict)

    visited_rooms: set[str] = field(default_factory=set)
    munged_rooms: dict[str, str] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)

    turns: int = 0
    score: int = 0
    strength: int = MAX_STRENGTH
    staggered: bool = False
    brief: bool = False
    superbrief: bool = False
    running: bool = True

    lamp_budget: int = LAMP_BUDGET
    maint_leak_at: int = 0
    sword_glow: int = 0  # 0=none, 1=faint, 2=bright

    # Combat: villain id → remaining hit points, and who is engaged
    villain_strength: dict[str, int] = field(default_factory=dict)
    fighting: set[str] = field(default_factory=set)

    events: list[ScheduledEvent] = field(default_factory=list)
    event_seq: int = 0

    # Cleared by any input that does not answer it with a single match
    pending: PendingQuestion | None = None

    # Overwritten by every dispatch
    last_verb: str | None = None
    last_direct: str | None = None
    last_indirect: str | None = None

    @property
    def is_finished(self) -> bool:
        return not self.running


def new_game_state(world: World, lamp_budget: int = LAMP_BUDGET) -> GameState:
    """Create a fresh game state with objects in their starting positions."""
    state = GameState(current_room=world.start_room, lamp_budget=lamp_budget)
    state.flags = dict(world.flags)

    for obj_id, obj in world.objects.items():
        state.object_locations[obj_id] = obj.location
        if obj.has(OPEN):
            state.open_objects.add(obj_id)
        if obj.has(HIDDEN):
            state.hidden_objects.add(obj_id)
        if obj.light:
            state.light_levels[obj_id] = obj.light
        if obj.strength:
            state.villain_strength[obj_id] = obj.strength

    state.visited_rooms.add(world.start_room)
    return state
