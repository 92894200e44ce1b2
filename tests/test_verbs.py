"""Tests for the verb table."""

from dungeon.engine.actions import ACTIONS, ORPHAN_ACTIONS
from dungeon.engine.verbs import INVENTORY, ROOM, VERBS


def test_synonyms_share_a_spec():
    assert VERBS.lookup("TAKE") is VERBS.lookup("GET")
    assert VERBS.lookup("ATTAC") is VERBS.lookup("KILL")
    assert VERBS.lookup("I") is VERBS.lookup("INVEN")
    assert VERBS.lookup("FROBO") is None


def test_every_syntax_has_a_handler():
    for spec in VERBS.specs.values():
        for syntax in spec.syntaxes:
            assert syntax.action in ACTIONS, f"{syntax.action} has no handler"


def test_orphan_table_is_a_subset_of_actions():
    assert set(ORPHAN_ACTIONS) <= set(ACTIONS)
    assert "TAKE" in ORPHAN_ACTIONS
    assert "PUT" not in ORPHAN_ACTIONS


def test_slot2_prepositions():
    assert VERBS.lookup("PUT").slot2_preps == {"IN"}
    assert VERBS.lookup("ATTAC").slot2_preps == {"WITH"}
    assert VERBS.lookup("LOOK").slot2_preps == frozenset()


def test_fill_with_flips_into_put():
    syntax = VERBS.lookup("FILL").syntaxes[0]
    assert syntax.action == "PUT"
    assert syntax.is_flip
    assert syntax.slot2.prep == "WITH"


def test_slot_scopes():
    drop = VERBS.lookup("DROP").syntaxes[0]
    assert drop.slot1.scope == INVENTORY
    take = VERBS.lookup("TAKE").syntaxes[0]
    assert take.slot1.scope == ROOM
    assert take.slot1.no_take


def test_look_at_and_look_in():
    actions = {s.slot1.prep: s.action for s in VERBS.lookup("LOOK").syntaxes}
    assert actions == {None: "LOOK", "AT": "EXAMINE", "IN": "LOOK-IN"}


def test_by_action():
    assert VERBS.by_action("INVENTORY").words == ("inventory", "i")
