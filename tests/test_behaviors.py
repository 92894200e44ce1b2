"""Tests for object behaviors, room callbacks and scheduled events."""

from dungeon.engine import behaviors
from dungeon.engine.context import Context
from dungeon.engine.state import (
    BRICK,
    CARRIED,
    FUSE,
    GNOME,
    LAMP,
    MATCH,
    SAFE_ROOM,
    TROLL,
    WIDE_LEDGE,
)


def _wired_brick(ctx: Context) -> None:
    """A brick in the dam lobby with the fuse stuck in it and a match in hand."""
    ctx.state.current_room = "LOBBY"
    ctx.move(BRICK, "LOBBY")
    ctx.move(FUSE, BRICK)
    ctx.move(MATCH, CARRIED)


def test_match_burns_out(run, ctx: Context):
    ctx.move(MATCH, CARRIED)
    assert "The match is now lit." in run("light match")
    assert "burned out" not in run("wait", "wait", "wait", "wait")
    assert "The match has burned out." in run("wait")
    assert not ctx.is_burning(MATCH)


def test_fuse_needs_a_flame(run, ctx: Context):
    _wired_brick(ctx)
    assert "What do you want to burn the shiny wire with?" in run("burn wire")
    assert not ctx.is_burning(FUSE)


def test_explosion_in_the_same_room_is_fatal(run, ctx: Context, game):
    _wired_brick(ctx)
    run("light match")
    assert "The fuse is lit." in run("burn wire with match")
    output = run("wait")
    assert behaviors.BOOM not in output
    assert game.running
    output = run("wait")
    assert behaviors.BOOM in output
    assert not game.running
    assert "Time passes" not in run("wait")


def test_explosion_elsewhere_collapses_the_room(run, ctx: Context, game):
    _wired_brick(ctx)
    run("light match", "burn wire with match", "n")
    assert "There is an explosion nearby." in run("wait")
    assert ctx.location(BRICK) is None
    assert ctx.location(FUSE) is None
    assert game.running

    assert "ominous rumbling" not in run("wait", "wait", "wait", "wait")
    assert "ominous rumbling" in run("wait")
    assert ctx.state.munged_rooms["LOBBY"] == behaviors.DEBRIS
    assert behaviors.DEBRIS in run("s")
    assert ctx.state.current_room == "MAINT"


def test_loose_fuse_fizzles(run, ctx: Context, game):
    ctx.move(FUSE, CARRIED)
    ctx.move(MATCH, CARRIED)
    run("light match", "burn wire with match", "wait")
    assert "The wire rapidly burns into nothingness." in run("wait")
    assert ctx.location(FUSE) is None
    assert game.running


def test_burning_the_brick_directly(run, ctx: Context, game):
    _wired_brick(ctx)
    run("light match")
    assert "blow you to smithereens" in run("burn brick with match")
    assert not game.running


def test_collapse_on_top_of_you(ctx: Context, game):
    ctx.state.current_room = SAFE_ROOM
    behaviors.safe_mung(ctx, SAFE_ROOM)
    assert "turning you into a pancake" in ctx.output.getvalue()
    assert not game.running


def test_safe_collapse_takes_the_ledge_later(ctx: Context):
    ctx.state.current_room = "LOBBY"
    behaviors.safe_mung(ctx, SAFE_ROOM)
    assert ctx.flag("safe_flag")
    assert SAFE_ROOM in ctx.state.munged_rooms
    assert [e.action for e in ctx.state.events] == ["ledge_mung"]
    behaviors.ledge_mung(ctx)
    assert "The ledge collapses" in ctx.output.getvalue()
    assert WIDE_LEDGE in ctx.state.munged_rooms


def test_gnome_blocks_the_way(run, ctx: Context):
    ctx.state.current_room = "LEDG2"
    assert "sheer rock wall" in run("n")
    ctx.move(GNOME, "LEDG2")
    assert "The gnome blocks your way." in run("n")


def test_gnome_accepts_a_treasure(run, ctx: Context):
    ctx.state.current_room = "LEDG2"
    ctx.move(GNOME, "LEDG2")
    ctx.move("ZORKM", CARRIED)
    assert "Thank you very much for the priceless zorkmid." in run("give coin to gnome")
    assert ctx.flag("gnome_door")
    assert ctx.location("ZORKM") is None
    run("n")
    assert ctx.state.current_room == "VLBOT"


def test_gnome_crunches_junk(run, ctx: Context):
    ctx.state.current_room = "LEDG2"
    ctx.move(GNOME, "LEDG2")
    ctx.move("KNIFE", CARRIED)
    assert "That wasn't quite what I had in mind" in run("give knife to gnome")
    assert not ctx.flag("gnome_door")
    assert ctx.location("KNIFE") is None


def test_troll_blocks_passages(run, ctx: Context):
    ctx.state.current_room = "MTROL"
    ctx.move(LAMP, CARRIED)
    ctx.state.light_levels[LAMP] = 1
    assert "The troll fends you off" in run("e")
    ctx.remove(TROLL)
    run("e")
    assert ctx.state.current_room == "PASS1"


def test_living_room_description_tracks_rug_and_door(run, ctx: Context):
    ctx.state.current_room = "LROOM"
    assert "large oriental rug" in run("look")
    run("move rug")
    assert "closed trap-door at your feet" in run("look")
    run("open trap door")
    assert "rug lying beside an open trap-door" in run("look")


def test_thief_takes_gifts(run, ctx: Context):
    ctx.state.current_room = "TREAS"
    ctx.move(LAMP, CARRIED)
    ctx.state.light_levels[LAMP] = 1
    ctx.move("KNIFE", CARRIED)
    assert "places the nasty knife in his bag" in run("give knife to thief")
    assert ctx.location("KNIFE") == "TREAS"
