"""
Regex literal classification for JavaScript-like text.

A `/` is ambiguous in JavaScript: it opens a regular expression literal or
it is the division operator. The slash opens a regex when the previous
significant token is one of `= ( [ { , : ; | & !`, the keyword `return`, or
when nothing precedes it. Whitespace and comments between that token and the
slash are skipped.

Skipping comments backwards is an approximation: a line is searched for a
`//` opener with a small quote-aware scan that does not know about regex
literals on that same line.
"""

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

REGEX_PRECEDING_CHARS = frozenset("=([{,:;|&!")
REGEX_PRECEDING_KEYWORDS = frozenset({"return"})

QUOTE_CHARS = "'\"`"


class ClassificationKind(Enum):
    DIVISION = "division"
    REGEX_LITERAL = "regex_literal"


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one slash.

    For a regex literal, `end` is one past the closing slash, or the scan
    bound when the literal is unterminated (`terminated` is then False).
    A division has no span and `end` stays None.
    """
    kind: ClassificationKind
    start: int
    end: int | None = None
    terminated: bool = True

    @property
    def is_regex(self) -> bool:
        return self.kind is ClassificationKind.REGEX_LITERAL

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "start": self.start,
            "end": self.end,
            "terminated": self.terminated,
        }


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def shebang_end(buffer: str) -> int | None:
    """End offset of a leading `#!` line, or None without one"""
    if not buffer.startswith("#!"):
        return None
    newline = buffer.find("\n")
    return len(buffer) if newline == -1 else newline


def line_comment_start(buffer: str, line_start: int, line_end: int) -> int | None:
    """Offset of the `//` (or shebang) comment that ends this line, if any"""
    if line_start == 0 and buffer.startswith("#!"):
        return 0

    i = line_start
    quote = None
    while i < line_end:
        ch = buffer[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in QUOTE_CHARS:
            quote = ch
        elif ch == "/" and i + 1 < line_end:
            nxt = buffer[i + 1]
            if nxt == "/":
                return i
            if nxt == "*":
                close = buffer.find("*/", i + 2, line_end)
                if close == -1:
                    # block comment runs past the end of this line
                    return None
                i = close + 2
                continue
        i += 1
    return None


def previous_significant(buffer: str, pos: int) -> int:
    """Index of the last char before `pos` that is not whitespace or comment.

    Returns -1 when only whitespace and comments precede `pos`.
    """
    i = pos
    while i > 0:
        ch = buffer[i - 1]
        if ch == "\n":
            i -= 1
            line_start = buffer.rfind("\n", 0, i) + 1
            comment = line_comment_start(buffer, line_start, i)
            if comment is not None:
                i = comment
            continue
        if ch.isspace():
            i -= 1
            continue
        if ch == "/" and i >= 2 and buffer[i - 2] == "*":
            opener = buffer.rfind("/*", 0, i - 2)
            if opener != -1:
                i = opener
                continue
        return i - 1
    return -1


def preceding_opens_regex(buffer: str, index: int) -> bool:
    """Whether the significant char at `index` lets a following `/` open a regex"""
    if index < 0:
        return True

    ch = buffer[index]
    if ch in REGEX_PRECEDING_CHARS:
        return True
    if not is_word_char(ch):
        return False

    word_start = index
    while word_start > 0 and is_word_char(buffer[word_start - 1]):
        word_start -= 1
    return buffer[word_start:index + 1] in REGEX_PRECEDING_KEYWORDS


def scan_regex_body(buffer: str, pos: int, limit: int) -> tuple[int, bool]:
    """Scan from just after the opening slash to the closing one.

    Returns (end, terminated). `end` is one past the closing slash, or
    `limit` if no unescaped slash outside a character class occurs first.
    """
    in_class = False
    class_start = -1
    i = pos
    while i < limit:
        ch = buffer[i]
        if ch == "\\":
            i += 2
            continue
        if in_class:
            # `]` right after `[` or `[^` is a literal member of the class
            if ch == "]" and i != class_start:
                in_class = False
        elif ch == "[":
            in_class = True
            class_start = i + 1
            if class_start < limit and buffer[class_start] == "^":
                class_start += 1
        elif ch == "/":
            return i + 1, True
        i += 1
    return limit, False


def classify(buffer: str, slash_pos: int, limit: int | None = None) -> Classification:
    """Decide whether the slash at `slash_pos` opens a regex literal.

    `limit` bounds the forward scan of the literal body (defaults to the end
    of the buffer). The buffer is never modified and no state survives the
    call, so callers re-run it on later regions as text arrives.
    """
    size = len(buffer)
    division = Classification(ClassificationKind.DIVISION, slash_pos)

    if not 0 <= slash_pos < size or buffer[slash_pos] != "/":
        return division
    if slash_pos + 1 < size and buffer[slash_pos + 1] in "/*":
        # comment opener
        return division

    header_end = shebang_end(buffer)
    if header_end is not None and slash_pos < header_end:
        return division

    if not preceding_opens_regex(buffer, previous_significant(buffer, slash_pos)):
        return division

    if limit is None or limit > size:
        limit = size
    limit = max(limit, slash_pos + 1)

    end, terminated = scan_regex_body(buffer, slash_pos + 1, limit)
    if not terminated:
        logger.debug("Unterminated regex literal at %d, clamped to %d", slash_pos, end)
    return Classification(ClassificationKind.REGEX_LITERAL, slash_pos, end, terminated)
