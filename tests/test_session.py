"""Tests for the session layer."""

from sqlmodel import Session, select

from dungeon.config import Config
from dungeon.engine.world import World
from dungeon.models import Player, SavedGame
from dungeon.session import DungeonSession, get_or_create_player


def test_get_or_create_player(db_session: Session):
    """A new fingerprint creates a player; a known one returns it."""
    player = get_or_create_player(db_session, "new-fingerprint")
    assert player.id is not None
    again = get_or_create_player(db_session, "new-fingerprint")
    assert again.id == player.id
    players = db_session.exec(select(Player)).all()
    assert len(players) == 1


def test_new_game(db_session: Session, test_player: Player, world: World):
    """A player without a save starts at the beginning."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    assert session.saved_game is None
    assert session.state.current_room == "WHOUS"
    assert session.state.turns == 0


def test_process_command_returns_output(db_session: Session, test_player: Player, world: World):
    """Each command's text comes back on its own."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    first = session.process_command("open mailbox")
    assert first == "Opening the small mailbox reveals a leaflet."
    second = session.process_command("take leaflet")
    assert second == "Taken."


def test_save_and_reload(db_session: Session, test_player: Player, world: World):
    """State written by save() comes back on the next load."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    session.process_command("open mailbox")
    session.process_command("take leaflet")
    session.process_command("n")
    session.save()

    saved = db_session.exec(select(SavedGame)).one()
    assert saved.room == "NHOUS"
    assert saved.turns == 3
    assert not saved.is_finished

    reloaded = DungeonSession.load_or_create(db_session, test_player, world)
    assert reloaded.state.current_room == "NHOUS"
    assert reloaded.get_inventory() == ["leaflet"]


def test_bookmark_is_persisted(db_session: Session, test_player: Player, world: World):
    """The in-game SAVE survives a reload and RESTORE reads it."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    session.process_command("n")
    assert session.process_command("save") == "Saved."
    session.save()
    assert db_session.exec(select(SavedGame)).one().bookmark["location"] == "NHOUS"

    reloaded = DungeonSession.load_or_create(db_session, test_player, world)
    reloaded.process_command("w")
    assert reloaded.state.current_room == "WHOUS"
    assert "Restored." in reloaded.process_command("restore")
    assert reloaded.state.current_room == "NHOUS"


def test_finished_game_starts_over(db_session: Session, test_player: Player, world: World):
    """A save from a finished game is replaced by a new game."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    session.process_command("n")
    session.process_command("quit")
    session.save()
    assert db_session.exec(select(SavedGame)).one().is_finished

    fresh = DungeonSession.load_or_create(db_session, test_player, world)
    assert fresh.state.current_room == "WHOUS"
    assert fresh.state.running
    assert db_session.exec(select(SavedGame)).first() is None


def test_reset(db_session: Session, test_player: Player, world: World):
    """reset() discards the save and the bookmark."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    session.process_command("n")
    session.process_command("save")
    session.save()
    session.reset()
    assert session.state.current_room == "WHOUS"
    assert session.load_bookmark() is None
    assert db_session.exec(select(SavedGame)).first() is None


def test_lamp_budget_from_config(db_session: Session, test_player: Player, world: World):
    """A configured lamp budget seeds new games."""
    config = Config(lamp_budget=7)
    session = DungeonSession.load_or_create(db_session, test_player, world, config)
    assert session.state.lamp_budget == 7


def test_views(db_session: Session, test_player: Player, world: World):
    """The page helpers describe the current room without a turn."""
    session = DungeonSession.load_or_create(db_session, test_player, world)
    assert "west of a big white house" in session.get_room_description()
    assert session.get_exits() == ["north", "south"]
    assert session.get_visible_objects() == ["There is a small mailbox here."]
    assert session.state.turns == 0
