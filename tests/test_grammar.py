import unittest

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

import mbs_lang


class GrammarTests(unittest.TestCase):
    def setUp(self):
        self.parser = Lark(mbs_lang.MBS_GRAMMAR, parser="lalr")

    def _param_tokens(self, source: str) -> list:
        tree = self.parser.parse(source)
        (statement,) = tree.children
        tokens = []
        for param in statement.children[1:]:
            (node,) = param.children
            tokens.append(node.children[0] if isinstance(node, Tree) else node)
        return tokens

    def _types(self, source: str) -> list:
        return [t.type for t in self._param_tokens(source)]

    def test_numeric_and_register_shapes(self) -> None:
        self.assertEqual(
            self._types("op 3 -3 reg.3 str.3 pos.3;"),
            ["NUMBER", "NUMBER", "REGISTER", "STRING_REGISTER", "POSITION_REGISTER"],
        )

    def test_variable_shapes(self) -> None:
        self.assertEqual(
            self._types("op :foo $foo g.foo foo;"),
            ["LOCAL_VAR", "GLOBAL_VAR", "PREFIXED_GLOBAL_VAR", "IDENTIFIER"],
        )

    def test_string_id_and_string_register_disambiguate_after_dot(self) -> None:
        self.assertEqual(
            self._types("op str.5 str.hello str._x;"),
            ["STRING_REGISTER", "STRING_ID", "STRING_ID"],
        )

    def test_prefix_lookalike_identifiers_stay_identifiers(self) -> None:
        self.assertEqual(
            self._types("op faction_set_slot pt_x regular str_store posh gx;"),
            ["IDENTIFIER"] * 6,
        )

    def test_party_and_party_template_prefixes(self) -> None:
        self.assertEqual(
            self._types("op p.main_party pt.looters psys.fire;"),
            ["PARTY_ID", "PARTY_TEMPLATE_ID", "PARTICLE_SYSTEM_ID"],
        )

    def test_every_typed_id_terminal_is_reachable(self) -> None:
        for kind in mbs_lang.TypedIdKind:
            with self.subTest(kind=kind):
                self.assertEqual(self._types(f"op {kind.prefix}.thing;"), [kind.terminal])

    def test_comments_are_skipped_across_lines_and_separators(self) -> None:
        tree = self.parser.parse("a 1; /* b 2;\n c 3; */ d /* mid */ 4;")
        self.assertEqual(len(tree.children), 2)

    def test_tokens_carry_positions(self) -> None:
        tokens = self._param_tokens("\n  op  reg.7;")
        self.assertIsInstance(tokens[0], Token)
        self.assertEqual((tokens[0].line, tokens[0].column), (2, 7))

    def test_register_followed_by_letters_is_rejected(self) -> None:
        with self.assertRaises(UnexpectedInput):
            self.parser.parse("op reg.5x;")

    def test_missing_terminator_is_rejected(self) -> None:
        with self.assertRaises(UnexpectedInput):
            self.parser.parse("assign g.x 1")

    def test_unterminated_comment_is_rejected(self) -> None:
        with self.assertRaises(UnexpectedInput):
            self.parser.parse("assign g.x 1; /* never closed")

    def test_statement_cannot_start_with_parameter(self) -> None:
        with self.assertRaises(UnexpectedInput):
            self.parser.parse("3 assign;")


class GrammarDialectTests(unittest.TestCase):
    def test_remapped_prefix_changes_accepted_spelling(self) -> None:
        dialect = mbs_lang.ScriptDialect.with_prefixes(
            {mbs_lang.TypedIdKind.FACTION: "faction"}
        )
        parser = Lark(mbs_lang.build_grammar(dialect), parser="lalr")
        statement = parser.parse("op faction.kingdom_1;").children[0]
        token = statement.children[1].children[0].children[0]
        self.assertEqual(token.type, "FACTION_ID")
        with self.assertRaises(UnexpectedInput):
            parser.parse("op fac.kingdom_1;")

    def test_missing_kind_is_rejected(self) -> None:
        prefixes = {kind: kind.prefix for kind in mbs_lang.TypedIdKind}
        del prefixes[mbs_lang.TypedIdKind.TROOP]
        with self.assertRaises(mbs_lang.ConfigurationError):
            mbs_lang.ScriptDialect(id_prefixes=prefixes)

    def test_duplicate_prefix_is_rejected(self) -> None:
        with self.assertRaises(mbs_lang.ConfigurationError):
            mbs_lang.ScriptDialect.with_prefixes({mbs_lang.TypedIdKind.ITEM: "trp"})

    def test_reserved_and_malformed_prefixes_are_rejected(self) -> None:
        for prefix in ("g", "fa.c", "1st", ""):
            with self.subTest(prefix=prefix):
                with self.assertRaises(mbs_lang.ConfigurationError):
                    mbs_lang.ScriptDialect.with_prefixes(
                        {mbs_lang.TypedIdKind.QUEST: prefix}
                    )

    def test_non_string_prefix_is_rejected(self) -> None:
        for prefix in (5, None, b"qst"):
            with self.subTest(prefix=prefix):
                with self.assertRaises(mbs_lang.ConfigurationError):
                    mbs_lang.ScriptDialect.with_prefixes(
                        {mbs_lang.TypedIdKind.QUEST: prefix}  # type: ignore[dict-item]
                    )

    def test_unknown_kind_is_rejected(self) -> None:
        with self.assertRaises(mbs_lang.ConfigurationError):
            mbs_lang.ScriptDialect.with_prefixes({"junk": "zz"})  # type: ignore[dict-item]

    def test_dialect_cannot_be_changed_after_construction(self) -> None:
        dialect = mbs_lang.ScriptDialect.default()
        with self.assertRaises(TypeError):
            dialect.id_prefixes[mbs_lang.TypedIdKind.ITEM] = "trp"  # type: ignore[index]
        with self.assertRaises(AttributeError):
            dialect.id_prefixes = {}  # type: ignore[misc]
        self.assertEqual(dialect.id_prefixes[mbs_lang.TypedIdKind.ITEM], "itm")

    def test_caller_mapping_is_copied(self) -> None:
        prefixes = {kind: kind.prefix for kind in mbs_lang.TypedIdKind}
        dialect = mbs_lang.ScriptDialect(id_prefixes=prefixes)
        prefixes[mbs_lang.TypedIdKind.ITEM] = "trp"
        self.assertEqual(dialect.id_prefixes[mbs_lang.TypedIdKind.ITEM], "itm")


if __name__ == "__main__":
    unittest.main(verbosity=2)
