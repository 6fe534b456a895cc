import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Union, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .symbols import SymbolTable


class TypedIdKind(Enum):
    """Asset categories a typed identifier can reference.

    The value of each member is the prefix the module system uses for ids
    of that category, e.g. ``TypedIdKind.TROOP`` renders ``trp.player`` as
    ``trp_player``.
    """

    ANIMATION = "anim"
    FACTION = "fac"
    INFO_PAGE = "id"
    ITEM = "itm"
    MAP_ICON = "icon"
    GAME_MENU = "menu"
    MESH = "mesh"
    MISSION_TEMPLATE = "mst"
    PARTICLE_SYSTEM = "psys"
    PARTY = "p"
    PARTY_TEMPLATE = "pt"
    POSTFX = "pfx"
    PRESENTATION = "prsnt"
    QUEST = "qst"
    SCENE_PROP = "spr"
    SCENE = "scn"
    SCRIPT = "script"
    SKILL = "skl"
    SOUND = "snd"
    STRING = "str"
    TABLEAU_MATERIAL = "tableau"
    TROOP = "trp"

    @property
    def prefix(self) -> str:
        return self.value

    @property
    def terminal(self) -> str:
        """Name of the grammar terminal matching ids of this kind."""
        return f"{self.name}_ID"


# --- Statement Parameters ---


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class Register:
    code: int

    @property
    def key(self) -> str:
        return f"reg{self.code}"


@dataclass(frozen=True)
class StringRegister:
    code: int


@dataclass(frozen=True)
class PositionRegister:
    code: int


@dataclass(frozen=True)
class LocalVariable:
    name: str

    def render(self) -> str:
        return f":{self.name}"


@dataclass(frozen=True)
class GlobalVariable:
    name: str

    def render(self) -> str:
        return f"${self.name}"


@dataclass(frozen=True)
class AutoPrefixedGlobalVariable:
    name: str

    def render(self) -> str:
        return f"$g_{self.name}"


@dataclass(frozen=True)
class TypedId:
    kind: TypedIdKind
    name: str

    def render(self) -> str:
        return f"{self.kind.prefix}_{self.name}"


@dataclass(frozen=True)
class Number:
    value: int


StatementParameter = Union[
    Identifier,
    Register,
    StringRegister,
    PositionRegister,
    LocalVariable,
    GlobalVariable,
    AutoPrefixedGlobalVariable,
    TypedId,
    Number,
]


# --- Script ---


@dataclass(frozen=True)
class Statement:
    operation: str
    parameters: Tuple[StatementParameter, ...]
    symbols: "SymbolTable" = field(compare=False, repr=False)


@dataclass(frozen=True)
class Script:
    name: str
    statements: Tuple[Statement, ...]
    symbols: "SymbolTable" = field(compare=False, repr=False)


# --- Dialect ---

_PREFIX_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# `g.` is taken by auto-prefixed globals. `reg.`, `str.` and `pos.` are free
# for typed ids since registers only ever continue with a digit.
RESERVED_PREFIXES = frozenset({"g"})


@dataclass(frozen=True)
class ScriptDialect:
    """Source spelling of the typed identifier prefixes.

    The prefix table is validated and frozen into a read-only mapping on
    construction.
    """

    id_prefixes: Mapping[TypedIdKind, str] = field(
        default_factory=lambda: {kind: kind.prefix for kind in TypedIdKind}
    )

    def __post_init__(self):
        unknown = [key for key in self.id_prefixes if not isinstance(key, TypedIdKind)]
        if unknown:
            raise ConfigurationError(
                f"Dialect has unknown kinds: {', '.join(map(repr, unknown))}"
            )
        missing = [kind.name for kind in TypedIdKind if kind not in self.id_prefixes]
        if missing:
            raise ConfigurationError(
                f"Dialect is missing prefixes for: {', '.join(missing)}"
            )
        seen: Dict[str, TypedIdKind] = {}
        for kind, prefix in self.id_prefixes.items():
            if not isinstance(prefix, str) or not _PREFIX_RE.fullmatch(prefix):
                raise ConfigurationError(
                    f"Prefix {prefix!r} for {kind.name} is not an identifier."
                )
            if prefix in RESERVED_PREFIXES:
                raise ConfigurationError(f"Prefix '{prefix}' is reserved.")
            if prefix in seen:
                raise ConfigurationError(
                    f"Prefix '{prefix}' is shared by {seen[prefix].name} and {kind.name}."
                )
            seen[prefix] = kind
        object.__setattr__(self, "id_prefixes", MappingProxyType(dict(self.id_prefixes)))

    @classmethod
    def default(cls) -> "ScriptDialect":
        return cls()

    @classmethod
    def with_prefixes(
        cls, overrides: Mapping[TypedIdKind, str], base: Optional["ScriptDialect"] = None
    ) -> "ScriptDialect":
        prefixes = dict((base or cls.default()).id_prefixes)
        prefixes.update(overrides)
        return cls(id_prefixes=prefixes)
