"""Static verb table: verb word -> action id and syntax alternatives.

A syntax describes up to two object slots. A slot may require an object
from the player's inventory (INVENTORY), from anywhere reachable in the
room (ROOM), or no object at all (NONE), and may require a preposition.
"""

from dataclasses import dataclass, field

from .vocabulary import normalize_word

NONE = "none"
INVENTORY = "inventory"
ROOM = "room"


@dataclass(frozen=True)
class SlotSpec:
    """One object position of a syntax."""

    scope: str = NONE
    prep: str | None = None
    no_take: bool = False

    @property
    def is_empty(self) -> bool:
        return self.scope == NONE and self.prep is None


@dataclass(frozen=True)
class Syntax:
    """One grammar alternative of a verb."""

    action: str
    slot1: SlotSpec = SlotSpec()
    slot2: SlotSpec = SlotSpec()
    is_driver: bool = False
    is_flip: bool = False


@dataclass(frozen=True)
class VerbSpec:
    """An action id and its ordered syntax alternatives."""

    action: str
    syntaxes: tuple[Syntax, ...] = ()
    words: tuple[str, ...] = ()

    @property
    def slot2_preps(self) -> frozenset[str]:
        return frozenset(s.slot2.prep for s in self.syntaxes if s.slot2.prep)


@dataclass
class VerbTable:
    """Lookup from normalized verb word to VerbSpec. Built once."""

    specs: dict[str, VerbSpec] = field(default_factory=dict)
    actions: dict[str, VerbSpec] = field(default_factory=dict)

    def add(self, spec: VerbSpec) -> None:
        for word in spec.words:
            self.specs[normalize_word(word)] = spec
        self.actions.setdefault(spec.action, spec)

    def lookup(self, word: str) -> VerbSpec | None:
        return self.specs.get(word)

    def by_action(self, action: str) -> VerbSpec | None:
        return self.actions.get(action)


# Slot shorthands
_HELD = SlotSpec(INVENTORY)
_HERE = SlotSpec(ROOM)
_HERE_NO_TAKE = SlotSpec(ROOM, no_take=True)


def _verb(action: str, words: tuple[str, ...], *syntaxes: Syntax) -> VerbSpec:
    return VerbSpec(action=action, syntaxes=syntaxes or (Syntax(action),), words=words)


def _one(action: str, slot: SlotSpec = _HERE) -> Syntax:
    return Syntax(action, slot1=slot, is_driver=True)


def _build() -> VerbTable:
    table = VerbTable()
    for spec in (
        _verb(
            "LOOK",
            ("look", "l"),
            Syntax("LOOK"),
            Syntax("EXAMINE", slot1=SlotSpec(ROOM, prep="AT", no_take=True)),
            Syntax("LOOK-IN", slot1=SlotSpec(ROOM, prep="IN", no_take=True)),
        ),
        _verb("EXAMINE", ("examine", "describe", "x"), _one("EXAMINE", _HERE_NO_TAKE)),
        _verb("TAKE", ("take", "get", "pick", "carry"), _one("TAKE", _HERE_NO_TAKE)),
        _verb("DROP", ("drop", "release", "discard"), _one("DROP", _HELD)),
        _verb("INVENTORY", ("inventory", "i")),
        _verb("OPEN", ("open", "unlock"), _one("OPEN", _HERE_NO_TAKE)),
        _verb("CLOSE", ("close", "shut", "lock"), _one("CLOSE", _HERE_NO_TAKE)),
        _verb("READ", ("read", "peruse"), _one("READ")),
        _verb("EAT", ("eat", "devour", "consume"), _one("EAT")),
        _verb("DRINK", ("drink", "swallow", "imbibe"), _one("DRINK", _HERE_NO_TAKE)),
        _verb(
            "THROW",
            ("throw", "toss", "hurl"),
            Syntax("THROW", slot1=_HELD, slot2=SlotSpec(ROOM, prep="AT", no_take=True)),
            _one("THROW", _HELD),
        ),
        _verb("WAVE", ("wave", "shake", "brandish"), _one("WAVE")),
        _verb(
            "ATTACK",
            ("attack", "kill", "fight", "hit", "stab", "slay"),
            Syntax("ATTACK", slot1=_HERE_NO_TAKE, slot2=SlotSpec(INVENTORY, prep="WITH")),
            _one("ATTACK", _HERE_NO_TAKE),
        ),
        _verb("MOVE", ("move", "push", "slide", "shove"), _one("MOVE", _HERE_NO_TAKE)),
        _verb("LIFT", ("lift", "raise"), _one("LIFT", _HERE_NO_TAKE)),
        _verb(
            "PUT",
            ("put", "insert", "place", "stuff"),
            Syntax("PUT", slot1=_HELD, slot2=SlotSpec(ROOM, prep="IN", no_take=True)),
            _one("PUT", _HELD),
        ),
        _verb(
            "FILL",
            ("fill",),
            Syntax(
                "PUT",
                slot1=_HERE,
                slot2=SlotSpec(ROOM, prep="WITH", no_take=True),
                is_flip=True,
            ),
            _one("FILL"),
        ),
        _verb(
            "GIVE",
            ("give", "feed", "hand", "offer"),
            Syntax("GIVE", slot1=_HELD, slot2=SlotSpec(ROOM, prep="TO", no_take=True)),
            _one("GIVE", _HELD),
        ),
        _verb(
            "BURN",
            ("burn", "ignite", "incinerate"),
            Syntax("BURN", slot1=_HERE_NO_TAKE, slot2=SlotSpec(INVENTORY, prep="WITH")),
            _one("BURN", _HERE_NO_TAKE),
        ),
        _verb(
            "LIGHT",
            ("light",),
            Syntax("BURN", slot1=_HERE_NO_TAKE, slot2=SlotSpec(INVENTORY, prep="WITH")),
            _one("TURN-ON"),
        ),
        _verb(
            "TURN",
            ("turn", "switch"),
            Syntax("TURN-ON", slot1=SlotSpec(ROOM, prep="ON")),
            Syntax("TURN-OFF", slot1=SlotSpec(ROOM, prep="OFF")),
            _one("TURN", _HERE_NO_TAKE),
        ),
        _verb("TURN-OFF", ("extinguish", "douse", "blow"), _one("TURN-OFF")),
        _verb(
            "TIE",
            ("tie", "fasten", "knot"),
            Syntax("TIE", slot1=_HERE, slot2=SlotSpec(ROOM, prep="TO", no_take=True)),
            _one("TIE"),
        ),
        _verb(
            "BREAK",
            ("break", "smash", "mung", "destroy"),
            Syntax("BREAK", slot1=_HERE_NO_TAKE, slot2=SlotSpec(INVENTORY, prep="WITH")),
            _one("BREAK", _HERE_NO_TAKE),
        ),
        _verb("BRIEF", ("brief",)),
        _verb("UNBRIEF", ("unbrief", "verbose")),
        _verb("SUPERBRIEF", ("superbrief",)),
        _verb("UNSUPERBRIEF", ("unsuperbrief",)),
        _verb("QUIT", ("quit", "q")),
        _verb("SCORE", ("score",)),
        _verb("INFO", ("info", "help")),
        _verb("DIAGNOSE", ("diagnose",)),
        _verb("SAVE", ("save",)),
        _verb("RESTORE", ("restore",)),
        _verb("WAIT", ("wait", "z")),
        _verb("WALK", ("walk", "go", "run")),
    ):
        table.add(spec)
    return table


VERBS = _build()
