# ============================================================================
# SOURCE REWRITER TESTS
# ============================================================================
# STATUS: Tests - Generated initialization code rewriting
# PURPOSE: Verify balanced-paren insertion, cleanups, idempotence and
#          unbalanced-input handling
# CREATED: 18 OCT 2026
# ============================================================================
"""
Source Rewriter Tests

Run with:
    pytest tests/test_rewriter.py -v
"""

import logging

import pytest

from core.config import RewriteDefaults
from scaffolding.rewriter import SourceRewriter, find_matching_close, rewrite


DEFAULTS = RewriteDefaults()
ADVISORY = DEFAULTS.advisory_comment
CONNECTION = "host=localhost port=5433 dbname=pgvector_test user=testuser password=testpass"

GENERATED = (
    '"""Connection pool for PgvectorTest."""\n'
    "from psycopg_pool import ConnectionPool\n"
    "\n"
    f"{ADVISORY}\n"
    f'pool = ConnectionPool("{CONNECTION}", open=False)\n'
)


def _rewriter(**kwargs):
    kwargs.setdefault("defaults", DEFAULTS)
    return SourceRewriter(**kwargs)


# ============================================================================
# BALANCED-PAREN SCAN
# ============================================================================

class TestFindMatchingClose:
    def test_flat(self):
        text = "f(a, b) + g()"
        assert find_matching_close(text, 1) == 6

    def test_nested(self):
        text = "f(g(h(1)), (2, 3))x"
        assert find_matching_close(text, 1) == len(text) - 2

    def test_parens_inside_strings_ignored(self):
        text = "f(\"a)b\", 'c(d')"
        assert find_matching_close(text, 1) == len(text) - 1

    def test_parens_inside_triple_quoted_string_ignored(self):
        text = 'f("""host=x\n)dbname=y""")'
        assert find_matching_close(text, 1) == len(text) - 1

    def test_single_quote_triple_string_holds_other_quotes(self):
        text = "f('''it's \"(\"\n''', 1)"
        assert find_matching_close(text, 1) == len(text) - 1

    def test_unterminated_triple_quoted_string(self):
        assert find_matching_close('f("""open\n)', 1) is None

    def test_escaped_quote_inside_string(self):
        text = 'f("a\\")", b)'
        assert find_matching_close(text, 1) == len(text) - 1

    def test_parens_inside_comment_ignored(self):
        text = "f(a,  # see (note\n  b)"
        assert find_matching_close(text, 1) == len(text) - 1

    def test_unbalanced_returns_none(self):
        assert find_matching_close("f(a, g(b)", 1) is None

    def test_requires_open_paren(self):
        with pytest.raises(ValueError):
            find_matching_close("f(a)", 0)


# ============================================================================
# AUGMENTATION
# ============================================================================

class TestAugmentation:
    def test_disabled_returns_input_unchanged(self):
        assert _rewriter(connection_string=CONNECTION).rewrite(GENERATED, False) == GENERATED

    def test_simple_call_only_gains_fragment(self):
        text = 'header = 1\npool = ConnectionPool("dbname=shop")\nfooter = 2\n'

        result = _rewriter().rewrite(text, True)

        assert result == 'header = 1\npool = ConnectionPool("dbname=shop", configure=register_vector)\nfooter = 2\n'

    def test_nested_arguments(self):
        text = 'pool = ConnectionPool(conninfo(host("db")), kwargs=dict(autocommit=True))\nprint(pool)\n'

        result = _rewriter().rewrite(text, True)

        assert result == (
            'pool = ConnectionPool(conninfo(host("db")), kwargs=dict(autocommit=True)'
            ', configure=register_vector)\nprint(pool)\n'
        )

    def test_multiline_call(self):
        text = (
            "pool = ConnectionPool(\n"
            '    "dbname=shop",\n'
            "    min_size=1,\n"
            ")\n"
        )

        result = _rewriter().rewrite(text, True)

        assert result.endswith("    min_size=1,\n, configure=register_vector)\n")

    def test_only_first_marker_augmented(self):
        text = 'a = ConnectionPool("x")\nb = ConnectionPool("y")\n'

        result = _rewriter().rewrite(text, True)

        assert result == 'a = ConnectionPool("x", configure=register_vector)\nb = ConnectionPool("y")\n'

    def test_marker_absent_is_tolerated(self):
        text = 'conn = psycopg.connect("dbname=shop")\n'
        assert _rewriter().rewrite(text, True) == text

    def test_existing_token_not_duplicated(self):
        text = 'pool = ConnectionPool("dbname=shop", configure=register_vector)\n'
        assert _rewriter().rewrite(text, True) == text

    def test_idempotent(self):
        rewriter = _rewriter(connection_string=CONNECTION)
        once = rewriter.rewrite(GENERATED, True)
        assert rewriter.rewrite(once, True) == once
        assert once.count("configure=register_vector") == 1

    def test_triple_quoted_argument_spanning_lines(self):
        text = 'pool = ConnectionPool("""host=x\n)dbname=y""")\n'

        result = _rewriter().rewrite(text, True)

        assert result == 'pool = ConnectionPool("""host=x\n)dbname=y""", configure=register_vector)\n'

    def test_module_level_rewrite(self):
        text = 'pool = ConnectionPool("dbname=shop")\n'
        assert rewrite(text, False) == text
        assert "configure=register_vector)" in rewrite(text, True)


# ============================================================================
# CLEANUPS
# ============================================================================

class TestCleanups:
    def test_full_rewrite(self):
        result = _rewriter(connection_string=CONNECTION).rewrite(GENERATED, True)

        assert result == (
            '"""Connection pool for PgvectorTest."""\n'
            "from psycopg_pool import ConnectionPool\n"
            "\n"
            'pool = ConnectionPool(os.environ["DATABASE_URL"], open=False, configure=register_vector)\n'
        )

    def test_advisory_comment_removed_with_crlf(self):
        text = f'{ADVISORY}\r\npool = ConnectionPool("x")\r\n'

        result = _rewriter().rewrite(text, True)

        assert ADVISORY not in result
        assert result == 'pool = ConnectionPool("x", configure=register_vector)\r\n'

    def test_single_quoted_connection_string(self):
        text = f"pool = ConnectionPool('{CONNECTION}')\n"

        result = _rewriter(connection_string=CONNECTION).rewrite(text, True)

        assert CONNECTION not in result
        assert 'ConnectionPool(os.environ["DATABASE_URL"], configure=register_vector)' in result

    def test_cleanups_apply_without_marker(self):
        text = f'{ADVISORY}\nconn = psycopg.connect("{CONNECTION}")\n'

        result = _rewriter(connection_string=CONNECTION).rewrite(text, True)

        assert result == 'conn = psycopg.connect(os.environ["DATABASE_URL"])\n'

    def test_cleanups_noop_when_targets_absent(self):
        text = 'pool = ConnectionPool(settings.DSN)\n'
        result = _rewriter(connection_string=CONNECTION).rewrite(text, True)
        assert result == 'pool = ConnectionPool(settings.DSN, configure=register_vector)\n'

    def test_connection_string_inside_indirection_replaced_once(self):
        rewriter = _rewriter(connection_string="DATABASE_URL")
        text = 'pool = ConnectionPool("DATABASE_URL")\n'

        once = rewriter.rewrite(text, True)

        assert once == 'pool = ConnectionPool(os.environ["DATABASE_URL"], configure=register_vector)\n'
        assert rewriter.rewrite(once, True) == once

    def test_custom_env_var(self):
        defaults = RewriteDefaults(connection_env_var="SHOP_DSN")
        text = f'pool = ConnectionPool("{CONNECTION}")\n'

        result = SourceRewriter(CONNECTION, defaults).rewrite(text, True)

        assert 'os.environ["SHOP_DSN"]' in result


# ============================================================================
# IMPORTS
# ============================================================================

class TestEnsureImports:
    def test_imports_added_after_last_import(self):
        result = _rewriter(connection_string=CONNECTION, ensure_imports=True).rewrite(GENERATED, True)

        assert result == (
            '"""Connection pool for PgvectorTest."""\n'
            "from psycopg_pool import ConnectionPool\n"
            "from pgvector.psycopg import register_vector\n"
            "import os\n"
            "\n"
            'pool = ConnectionPool(os.environ["DATABASE_URL"], open=False, configure=register_vector)\n'
        )

    def test_existing_imports_kept_single(self):
        text = (
            "import os\n"
            "from pgvector.psycopg import register_vector\n"
            "from psycopg_pool import ConnectionPool\n"
            f'pool = ConnectionPool("{CONNECTION}")\n'
        )

        result = _rewriter(connection_string=CONNECTION, ensure_imports=True).rewrite(text, True)

        assert result.count("import os\n") == 1
        assert result.count("from pgvector.psycopg import register_vector") == 1

    def test_parenthesized_import_block(self):
        text = (
            "from psycopg_pool import (\n"
            "    ConnectionPool,\n"
            ")\n"
            'pool = ConnectionPool("dbname=shop")\n'
        )

        result = _rewriter(ensure_imports=True).rewrite(text, True)

        assert result.startswith(
            "from psycopg_pool import (\n"
            "    ConnectionPool,\n"
            ")\n"
            "from pgvector.psycopg import register_vector\n"
        )

    def test_no_imports_prepends(self):
        text = 'pool = ConnectionPool("dbname=shop")\n'
        result = _rewriter(ensure_imports=True).rewrite(text, True)
        assert result.startswith("from pgvector.psycopg import register_vector\npool = ")

    def test_idempotent_with_imports(self):
        rewriter = _rewriter(connection_string=CONNECTION, ensure_imports=True)
        once = rewriter.rewrite(GENERATED, True)
        assert rewriter.rewrite(once, True) == once


# ============================================================================
# MALFORMED INPUT
# ============================================================================

class TestUnbalanced:
    def test_unbalanced_call_left_unmodified(self, caplog):
        text = f'{ADVISORY}\npool = ConnectionPool("{CONNECTION}", kwargs=dict(a=1)\n'

        with caplog.at_level(logging.WARNING):
            result = _rewriter(connection_string=CONNECTION).rewrite(text, True)

        assert result == text
        assert "Unbalanced parentheses" in caplog.text
        assert caplog.records[-1].extra["component"] == "rewriter"

    def test_unbalanced_is_stable(self):
        text = 'pool = ConnectionPool("x"\n'
        rewriter = _rewriter()
        assert rewriter.rewrite(rewriter.rewrite(text, True), True) == text
