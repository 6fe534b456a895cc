import logging
import os
from functools import lru_cache
from typing import Optional

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

from .builder import ScriptBuilder
from .exceptions import GrammarError, LoadError
from .grammar import build_grammar
from .models import Script, ScriptDialect
from .symbols import SymbolTable

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


@lru_cache(maxsize=8)
def _compile(grammar: str) -> Lark:
    return Lark(grammar, parser="lalr")


def get_parser(dialect: Optional[ScriptDialect] = None) -> Lark:
    """Return the cached parser for a dialect (the default one if omitted)."""
    return _compile(build_grammar(dialect or ScriptDialect.default()))


def _known(value) -> Optional[int]:
    return value if isinstance(value, int) and value > 0 else None


def parse_tree(source: str, dialect: Optional[ScriptDialect] = None) -> Tree:
    try:
        return get_parser(dialect).parse(source)
    except UnexpectedInput as e:
        error = GrammarError(
            str(e), _known(getattr(e, "line", None)), _known(getattr(e, "column", None))
        )
        logger.error("%s", error)
        raise error from e


def load_source(path: str) -> str:
    encoding = os.environ.get("MBS_SOURCE_ENCODING", DEFAULT_ENCODING)
    try:
        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        raise LoadError() from e


def parse_source(
    source: str,
    name: str,
    symbols: SymbolTable,
    dialect: Optional[ScriptDialect] = None,
) -> Script:
    """Parse script text into a `Script` bound to ``symbols``.

    Raises `GrammarError` for text outside the grammar and `SourceError` for
    tokens with invalid values. Nothing is returned for a partially valid
    source.
    """
    tree = parse_tree(source, dialect)
    script = ScriptBuilder(name, symbols).visit(tree)
    logger.debug("Parsed %d statements for %s", len(script.statements), name)
    return script


def parse_file(
    path: str,
    name: str,
    symbols: SymbolTable,
    dialect: Optional[ScriptDialect] = None,
) -> Script:
    """Read ``path`` in full and parse it, see `parse_source`."""
    return parse_source(load_source(path), name, symbols, dialect)
