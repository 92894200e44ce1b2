"""Tests for the Game facade and snapshots."""

import io
import pickle

from dungeon.engine import behaviors
from dungeon.engine.game import Game
from dungeon.engine.state import CARRIED, LAMP, SWORD, GameState, PendingQuestion


class MemoryBookmarks:
    """Keeps the in-game bookmark in memory."""

    def __init__(self):
        self.data = None

    def save_bookmark(self, data: dict) -> None:
        self.data = data

    def load_bookmark(self) -> dict | None:
        return self.data


def test_empty_input_is_not_a_turn(game: Game, output: io.StringIO):
    game.execute("   ")
    assert output.getvalue() == "Huh?\n"
    assert game.state.turns == 0


def test_empty_input_drops_the_question(game: Game):
    game.state.pending = PendingQuestion("TAKE", ["take", "weapon"], ["KNIFE", "SWORD"], "weapon")
    game.execute("")
    assert game.state.pending is None


def test_each_command_is_a_turn(game: Game):
    game.execute("look")
    game.execute("frobozz")
    assert game.state.turns == 2


def test_finished_game_ignores_input(game: Game, output: io.StringIO):
    game.execute("quit")
    assert not game.running
    written = output.getvalue()
    game.execute("look")
    assert output.getvalue() == written
    assert game.state.turns == 1


def test_views_for_front_ends(game: Game):
    assert "open field west of a big white house" in game.describe_room()
    assert game.visible_objects() == ["There is a small mailbox here."]
    assert game.exits() == ["north", "south"]
    assert game.inventory() == []


def test_views_do_not_touch_the_sink(game: Game, output: io.StringIO):
    game.describe_room()
    game.visible_objects()
    assert output.getvalue() == ""


def test_snapshot_contents(game: Game):
    game.ctx.move(LAMP, CARRIED)
    game.ctx.move(SWORD, CARRIED)
    game.execute("brief")
    data = game.snapshot()
    assert data["location"] == "WHOUS"
    assert data["turns"] == 1
    assert data["score"] == 0
    assert data["brief"] is True
    assert data["superbrief"] is False
    assert data["held"] == ["LAMP", "SWORD"]
    assert data["flags"]["kitchen_window"] is False


def test_restore_applies_a_snapshot(game: Game, output: io.StringIO):
    data = {
        "location": "KITCH",
        "score": 42,
        "turns": 17,
        "brief": True,
        "superbrief": False,
        "flags": {"kitchen_window": True},
        "held": ["LAMP"],
    }
    game.ctx.move("KNIFE", CARRIED)
    game.state.pending = PendingQuestion("TAKE", ["take", "weapon"], ["KNIFE", "SWORD"], "weapon")
    game.ctx.schedule(3, "volgnome")

    game.restore(data)

    assert game.state.current_room == "KITCH"
    assert game.state.score == 42
    assert game.state.turns == 17
    assert game.state.brief
    assert game.ctx.flag("kitchen_window")
    assert game.ctx.is_held(LAMP)
    assert game.ctx.location("KNIFE") == "ATTIC"
    assert game.state.pending is None
    assert game.state.events == []
    assert "kitchen of the white house" in output.getvalue()


def test_restore_ignores_unknown_ids(game: Game):
    game.restore({"location": "NOWHERE", "held": ["GHOST", "LAMP"]})
    assert game.state.current_room == "WHOUS"
    assert game.ctx.held() == ["LAMP"]


def test_snapshot_round_trip(world):
    first = Game(world, io.StringIO())
    first.ctx.move(LAMP, CARRIED)
    for command in ("n", "e", "open window", "brief"):
        first.execute(command)
    second = Game(world, io.StringIO())
    second.restore(first.snapshot())
    assert second.snapshot() == first.snapshot()


def test_save_and_restore_commands(world):
    output = io.StringIO()
    game = Game(world, output, bookmarks=MemoryBookmarks())
    game.execute("n")
    assert "Saved." in _run(game, output, "save")
    game.execute("w")
    game.execute("s")
    text = _run(game, output, "restore")
    assert "Restored." in text
    assert "north side of a white house" in text
    assert game.state.current_room == "NHOUS"
    assert game.state.turns == 2


def _run(game: Game, output: io.StringIO, command: str) -> str:
    start = len(output.getvalue())
    game.execute(command)
    return output.getvalue()[start:]


def test_state_pickles(game: Game):
    game.execute("open mailbox")
    game.ctx.schedule(2, "volgnome")
    state = pickle.loads(pickle.dumps(game.state))
    assert isinstance(state, GameState)
    assert "MAILB" in state.open_objects
    assert state.events[0].action == "volgnome"


def test_resume_from_saved_state(world):
    first = Game(world, io.StringIO())
    first.execute("open mailbox")
    first.execute("take leaflet")
    resumed = Game(world, io.StringIO(), state=first.state)
    assert resumed.inventory() == ["leaflet"]


def test_restore_hides_the_trap_door_again(world):
    output = io.StringIO()
    game = Game(world, output, bookmarks=MemoryBookmarks())
    game.state.current_room = "LROOM"
    game.execute("save")
    game.execute("move rug")
    assert "DOOR" not in game.state.hidden_objects
    game.execute("restore")
    assert not game.ctx.flag("rug_moved")
    assert "DOOR" in game.state.hidden_objects
    assert "reluctantly opens" not in _run(game, output, "open trap door")
    assert not game.ctx.flag("trap_door")


def test_restore_rebuilds_caved_in_rooms(game: Game):
    game.state.munged_rooms["LOBBY"] = behaviors.DEBRIS
    game.restore({"flags": {"munged_LEDG4": True}})
    assert "LOBBY" not in game.state.munged_rooms
    assert game.state.munged_rooms == {"LEDG4": behaviors.MUNGE_MESSAGES["LEDG4"]}
