from typing import Callable, Dict

from lark import Token, Tree
from lark.visitors import Interpreter

from .exceptions import SourceError, SourceLocation
from .models import (
    AutoPrefixedGlobalVariable,
    GlobalVariable,
    Identifier,
    LocalVariable,
    Number,
    PositionRegister,
    Register,
    Script,
    Statement,
    StatementParameter,
    StringRegister,
    TypedId,
    TypedIdKind,
)
from .symbols import SymbolTable

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
REGISTER_MAX = 255

TYPED_ID_TERMINALS: Dict[str, TypedIdKind] = {
    "ANIMATION_ID": TypedIdKind.ANIMATION,
    "FACTION_ID": TypedIdKind.FACTION,
    "INFO_PAGE_ID": TypedIdKind.INFO_PAGE,
    "ITEM_ID": TypedIdKind.ITEM,
    "MAP_ICON_ID": TypedIdKind.MAP_ICON,
    "GAME_MENU_ID": TypedIdKind.GAME_MENU,
    "MESH_ID": TypedIdKind.MESH,
    "MISSION_TEMPLATE_ID": TypedIdKind.MISSION_TEMPLATE,
    "PARTICLE_SYSTEM_ID": TypedIdKind.PARTICLE_SYSTEM,
    "PARTY_ID": TypedIdKind.PARTY,
    "PARTY_TEMPLATE_ID": TypedIdKind.PARTY_TEMPLATE,
    "POSTFX_ID": TypedIdKind.POSTFX,
    "PRESENTATION_ID": TypedIdKind.PRESENTATION,
    "QUEST_ID": TypedIdKind.QUEST,
    "SCENE_PROP_ID": TypedIdKind.SCENE_PROP,
    "SCENE_ID": TypedIdKind.SCENE,
    "SCRIPT_ID": TypedIdKind.SCRIPT,
    "SKILL_ID": TypedIdKind.SKILL,
    "SOUND_ID": TypedIdKind.SOUND,
    "STRING_ID": TypedIdKind.STRING,
    "TABLEAU_MATERIAL_ID": TypedIdKind.TABLEAU_MATERIAL,
    "TROOP_ID": TypedIdKind.TROOP,
}


def _location(token: Token) -> SourceLocation:
    return SourceLocation(token.line, token.column)


def _after_prefix(token: Token) -> str:
    # Every prefixed form is `<prefix><sep><body>` with a one character
    # separator (`.`, `:` or `$`) and no separator inside the prefix.
    text = str(token)
    if text[0] in ":$":
        return text[1:]
    return text.partition(".")[2]


class ScriptBuilder(Interpreter):
    """Turns the parse tree of one source file into a `Script`."""

    def __init__(self, name: str, symbols: SymbolTable):
        self.name = name
        self.symbols = symbols
        self._token_handlers: Dict[str, Callable[[Token], StatementParameter]] = {
            "NUMBER": self._number,
            "REGISTER": self._register,
            "STRING_REGISTER": self._string_register,
            "POSITION_REGISTER": self._position_register,
            "LOCAL_VAR": self._local_var,
            "GLOBAL_VAR": self._global_var,
            "PREFIXED_GLOBAL_VAR": self._prefixed_global_var,
            "IDENTIFIER": self._identifier,
        }

    # --- Structure ---

    def start(self, tree: Tree) -> Script:
        statements = tuple(self.visit(child) for child in tree.children)
        return Script(self.name, statements, self.symbols)

    def statement(self, tree: Tree) -> Statement:
        operation, *params = tree.children
        parameters = tuple(self.visit(param) for param in params)
        return Statement(str(operation), parameters, self.symbols)

    def parameter(self, tree: Tree) -> StatementParameter:
        (node,) = tree.children
        if isinstance(node, Tree):
            return self.visit(node)
        return self._token_handlers[node.type](node)

    def typed_id(self, tree: Tree) -> TypedId:
        (token,) = tree.children
        # A terminal missing here means the grammar and this table drifted.
        kind = TYPED_ID_TERMINALS[token.type]
        return TypedId(kind, _after_prefix(token))

    # --- Parameter Tokens ---

    def _number(self, token: Token) -> Number:
        value = int(str(token))
        if not INT64_MIN <= value <= INT64_MAX:
            raise SourceError(_location(token), "Invalid parameter number.")
        return Number(value)

    def _register_code(self, token: Token, description: str) -> int:
        code = int(_after_prefix(token))
        if code > REGISTER_MAX:
            raise SourceError(_location(token), description)
        return code

    def _register(self, token: Token) -> Register:
        return Register(self._register_code(token, "Invalid register."))

    def _string_register(self, token: Token) -> StringRegister:
        return StringRegister(self._register_code(token, "Invalid string register."))

    def _position_register(self, token: Token) -> PositionRegister:
        return PositionRegister(
            self._register_code(token, "Invalid position register.")
        )

    def _local_var(self, token: Token) -> LocalVariable:
        return LocalVariable(_after_prefix(token))

    def _global_var(self, token: Token) -> GlobalVariable:
        return GlobalVariable(_after_prefix(token))

    def _prefixed_global_var(self, token: Token) -> AutoPrefixedGlobalVariable:
        return AutoPrefixedGlobalVariable(_after_prefix(token))

    def _identifier(self, token: Token) -> Identifier:
        return Identifier(str(token))
