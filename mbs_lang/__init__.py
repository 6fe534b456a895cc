from .exceptions import (
    MbsError,
    ConfigurationError,
    GrammarError,
    LoadError,
    SourceError,
    SourceLocation,
)
from .models import (
    TypedIdKind,
    Identifier,
    Register,
    StringRegister,
    PositionRegister,
    LocalVariable,
    GlobalVariable,
    AutoPrefixedGlobalVariable,
    TypedId,
    Number,
    StatementParameter,
    Statement,
    Script,
    ScriptDialect,
)
from .grammar import MBS_GRAMMAR, build_grammar
from .symbols import SymbolTable, UNRESOLVED
from .builder import ScriptBuilder
from .parser import get_parser, load_source, parse_file, parse_source, parse_tree
from .projection import Projection, ModsysProjection

__version__ = "0.1.0"

__all__ = [
    "MbsError",
    "ConfigurationError",
    "GrammarError",
    "LoadError",
    "SourceError",
    "SourceLocation",
    "TypedIdKind",
    "Identifier",
    "Register",
    "StringRegister",
    "PositionRegister",
    "LocalVariable",
    "GlobalVariable",
    "AutoPrefixedGlobalVariable",
    "TypedId",
    "Number",
    "StatementParameter",
    "Statement",
    "Script",
    "ScriptDialect",
    "MBS_GRAMMAR",
    "build_grammar",
    "SymbolTable",
    "UNRESOLVED",
    "ScriptBuilder",
    "get_parser",
    "load_source",
    "parse_file",
    "parse_source",
    "parse_tree",
    "Projection",
    "ModsysProjection",
]
