# ============================================================================
# SOURCE REWRITER
# ============================================================================
# STATUS: Scaffolding - Post-processing of generated initialization code
# PURPOSE: Add configure=register_vector to the generated ConnectionPool(...)
#          call and strip the inlined connection string
# CREATED: 18 OCT 2026
# EXPORTS: SourceRewriter, find_matching_close, rewrite
# DEPENDENCIES: re
# ============================================================================
"""
Source Rewriter

Patches the initialization module the host's code generator emits when the
model has pgvector columns. Given

    # WARNING: To protect potentially sensitive information ...
    pool = ConnectionPool("host=localhost dbname=shop", kwargs={"autocommit": True})

it produces

    pool = ConnectionPool(os.environ["DATABASE_URL"], kwargs={"autocommit": True}, configure=register_vector)

The edit point is found by counting parentheses from the call's opening
delimiter; string literals and comments are skipped while counting. A naive
search for the first ")" would stop inside nested arguments.

Guarantees:
- has_specialized_types=False returns the text unchanged
- Rewriting already rewritten text changes nothing
- Unbalanced input is logged and returned unchanged
"""

import re
from typing import Optional, Tuple

from core.config import RewriteDefaults, get_defaults
from core.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.REWRITER)

_IMPORT_LINE = re.compile(r"^(?:import|from)[ \t]+\S[^\r\n]*", re.MULTILINE)


def find_matching_close(text: str, open_index: int) -> Optional[int]:
    """
    Index of the ")" matching the "(" at open_index.

    Args:
        text: Source text
        open_index: Position of an opening parenthesis

    Returns:
        Index of the matching close, or None if the text ends first
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != "(":
        raise ValueError(f"No opening parenthesis at index {open_index}")

    depth = 0
    quote: Optional[str] = None
    i = open_index
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if len(quote) == 3:
                # Triple-quoted strings span lines and end only on the same triple
                if text.startswith(quote, i):
                    quote = None
                    i += 3
                    continue
            elif ch == quote or ch == "\n":
                quote = None
        elif ch in ("'", '"'):
            if text.startswith(ch * 3, i):
                quote = ch * 3
                i += 3
                continue
            quote = ch
        elif ch == "#":
            newline = text.find("\n", i)
            if newline == -1:
                return None
            i = newline
            continue
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


class SourceRewriter:
    """
    Rewrites generated initialization code for pgvector support.

    Args:
        connection_string: Connection string the scaffolding run used; its
            quoted literal is replaced by an environment lookup
        defaults: Marker, fragment and replacement texts
        ensure_imports: Also add the imports the edits reference
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        defaults: Optional[RewriteDefaults] = None,
        ensure_imports: bool = False,
    ):
        self.connection_string = connection_string
        self.defaults = defaults or get_defaults().rewrite
        self.ensure_imports = ensure_imports

    def rewrite(self, generated_text: str, has_specialized_types: bool) -> str:
        """
        Rewrite generated_text when the model has pgvector types.

        Returns:
            The rewritten text, or generated_text itself when there is
            nothing to do or the call's parentheses do not balance
        """
        if not has_specialized_types:
            return generated_text

        text = self._remove_advisory_comment(generated_text)
        text, replaced_connection = self._replace_connection_string(text)

        augmented = self._augment(text)
        if augmented is None:
            return generated_text
        text, added_fragment = augmented

        if self.ensure_imports:
            if added_fragment:
                text = self._ensure_import(text, self.defaults.augmentation_import)
            if replaced_connection:
                text = self._ensure_import(text, self.defaults.connection_import)

        return text

    # =========================================================================
    # TEXTUAL CLEANUPS
    # =========================================================================

    def _remove_advisory_comment(self, text: str) -> str:
        comment = self.defaults.advisory_comment
        text = text.replace(comment + "\r\n", "")
        text = text.replace(comment + "\n", "")
        return text.replace(comment, "")

    def _replace_connection_string(self, text: str) -> Tuple[str, bool]:
        if not self.connection_string:
            return text, False

        conn = self.connection_string
        indirection = self.defaults.connection_indirection
        literals = re.compile(
            "|".join(re.escape(lit) for lit in dict.fromkeys((f'"{conn}"', f"'{conn}'", repr(conn))))
        )
        replaced = False
        # Existing indirections are never rewritten again
        pieces = text.split(indirection)
        for n, piece in enumerate(pieces):
            new_piece, count = literals.subn(lambda _: indirection, piece)
            if count:
                pieces[n] = new_piece
                replaced = True
        return indirection.join(pieces), replaced

    # =========================================================================
    # STRUCTURAL EDIT
    # =========================================================================

    def _augment(self, text: str) -> Optional[Tuple[str, bool]]:
        """
        Insert the fragment before the marker call's closing parenthesis.

        Returns:
            (text, inserted) or None when the parentheses do not balance
        """
        marker_index = text.find(self.defaults.marker)
        if marker_index < 0:
            logger.debug(f"Marker {self.defaults.marker!r} not found; nothing to augment")
            return text, False

        if self.defaults.augmentation_token in text:
            return text, False

        open_index = text.find("(", marker_index)
        close_index = find_matching_close(text, open_index) if open_index >= 0 else None
        if close_index is None:
            logger.warning(
                f"Unbalanced parentheses after {self.defaults.marker!r} at offset "
                f"{marker_index}; generated code left unmodified"
            )
            return None

        fragment = self.defaults.augmentation_fragment
        return text[:close_index] + fragment + text[close_index:], True

    @staticmethod
    def _ensure_import(text: str, import_line: str) -> str:
        """Add import_line after the last top-level import unless present."""
        if re.search(rf"^{re.escape(import_line)}[ \t]*\r?$", text, re.MULTILINE):
            return text

        newline = "\r\n" if "\r\n" in text else "\n"
        insert_at = None
        for match in _IMPORT_LINE.finditer(text):
            end = match.end()
            open_paren = text.find("(", match.start(), end)
            if open_paren != -1:
                close = find_matching_close(text, open_paren)
                if close is not None:
                    line_end = re.compile(r"\r?\n").search(text, close)
                    end = line_end.start() if line_end else len(text)
            insert_at = end

        if insert_at is None:
            return f"{import_line}{newline}{text}"
        return f"{text[:insert_at]}{newline}{import_line}{text[insert_at:]}"


def rewrite(generated_text: str, has_specialized_types: bool) -> str:
    """Rewrite with default settings and no connection string replacement."""
    return SourceRewriter().rewrite(generated_text, has_specialized_types)


__all__ = ["SourceRewriter", "find_matching_close", "rewrite"]
