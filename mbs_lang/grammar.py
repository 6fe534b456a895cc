import re

from .models import ScriptDialect, TypedIdKind

_GRAMMAR_TEMPLATE = r"""
    start: statement*

    statement: IDENTIFIER parameter* ";"

    parameter: NUMBER
             | REGISTER
             | STRING_REGISTER
             | POSITION_REGISTER
             | LOCAL_VAR
             | GLOBAL_VAR
             | PREFIXED_GLOBAL_VAR
             | typed_id
             | IDENTIFIER

    typed_id: {typed_id_alternatives}

    // Numeric forms must not run into an identifier: `reg.5x` is an error.
    NUMBER.3: /-?[0-9]+(?![A-Za-z0-9_])/
    REGISTER.3: /reg\.[0-9]+(?![A-Za-z0-9_])/
    STRING_REGISTER.3: /str\.[0-9]+(?![A-Za-z0-9_])/
    POSITION_REGISTER.3: /pos\.[0-9]+(?![A-Za-z0-9_])/

    LOCAL_VAR.2: /:[A-Za-z_][A-Za-z0-9_]*/
    GLOBAL_VAR.2: /\$[A-Za-z_][A-Za-z0-9_]*/
    PREFIXED_GLOBAL_VAR.2: /g\.[A-Za-z_][A-Za-z0-9_]*/

{typed_id_terminals}

    IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/

    COMMENT: /\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""


def build_grammar(dialect: ScriptDialect) -> str:
    """Render the grammar with one terminal per typed identifier kind."""
    terminals = []
    for kind in TypedIdKind:
        prefix = re.escape(dialect.id_prefixes[kind])
        terminals.append(
            f"    {kind.terminal}.2: /{prefix}\\.[A-Za-z_][A-Za-z0-9_]*/"
        )
    alternatives = "\n            | ".join(kind.terminal for kind in TypedIdKind)
    return _GRAMMAR_TEMPLATE.format(
        typed_id_alternatives=alternatives,
        typed_id_terminals="\n".join(terminals),
    )


MBS_GRAMMAR = build_grammar(ScriptDialect.default())
