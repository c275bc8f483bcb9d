"""
Tokenizer: flat token stream over JavaScript/JSON-like text.

Only the distinctions needed for bracket matching are made:
- brackets: { } [ ] ( )
- strings: '...', "...", `...` (backslash escapes honoured)
- comments: // ..., /* ... */, a leading #! line
- regex literals: decided per slash by `classify`
- everything else: OTHER (identifier/number runs, single punctuation chars)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List

from quickgen.core.regex_literal import QUOTE_CHARS, classify, shebang_end


class TokenKind(Enum):
    BRACE_OPEN = "brace_open"
    BRACE_CLOSE = "brace_close"
    BRACKET_OPEN = "bracket_open"
    BRACKET_CLOSE = "bracket_close"
    PAREN_OPEN = "paren_open"
    PAREN_CLOSE = "paren_close"
    STRING = "string"
    COMMENT = "comment"
    REGEX = "regex"
    OTHER = "other"


BRACKET_KINDS = {
    "{": TokenKind.BRACE_OPEN,
    "}": TokenKind.BRACE_CLOSE,
    "[": TokenKind.BRACKET_OPEN,
    "]": TokenKind.BRACKET_CLOSE,
    "(": TokenKind.PAREN_OPEN,
    ")": TokenKind.PAREN_CLOSE,
}

# closer -> opener
MATCHING_OPENER = {
    TokenKind.BRACE_CLOSE: TokenKind.BRACE_OPEN,
    TokenKind.BRACKET_CLOSE: TokenKind.BRACKET_OPEN,
    TokenKind.PAREN_CLOSE: TokenKind.PAREN_OPEN,
}
OPENER_KINDS = frozenset(MATCHING_OPENER.values())
CLOSER_KINDS = frozenset(MATCHING_OPENER)

WORD_RE = re.compile(r'[\w$]+')
SPACE_RE = re.compile(r'\s+')


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    start: int
    end: int

    def text(self, buffer: str) -> str:
        return buffer[self.start:self.end]

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "start": self.start, "end": self.end}


def scan_string(buffer: str, pos: int, end: int) -> int:
    """End offset of the string literal opening at `pos` (clamped to `end`)"""
    quote = buffer[pos]
    i = pos + 1
    while i < end:
        ch = buffer[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return end


def tokenize(buffer: str, start: int = 0, end: int | None = None) -> List[Token]:
    """Split `buffer[start:end]` into tokens.

    Constructs left open at `end` (strings, block comments, regex literals)
    are clamped to `end`. Slashes are classified against the whole buffer, so
    context before `start` still counts.
    """
    if end is None or end > len(buffer):
        end = len(buffer)

    tokens = []
    i = start

    header_end = shebang_end(buffer)
    if header_end is not None and i < header_end:
        stop = min(header_end, end)
        tokens.append(Token(TokenKind.COMMENT, i, stop))
        i = stop

    while i < end:
        ch = buffer[i]

        match = SPACE_RE.match(buffer, i, end)
        if match:
            i = match.end()
            continue

        if ch in BRACKET_KINDS:
            tokens.append(Token(BRACKET_KINDS[ch], i, i + 1))
            i += 1
            continue

        if ch in QUOTE_CHARS:
            stop = scan_string(buffer, i, end)
            tokens.append(Token(TokenKind.STRING, i, stop))
            i = stop
            continue

        if ch == "/":
            nxt = buffer[i + 1] if i + 1 < end else ""
            if nxt == "/":
                newline = buffer.find("\n", i, end)
                stop = end if newline == -1 else newline
                tokens.append(Token(TokenKind.COMMENT, i, stop))
            elif nxt == "*":
                close = buffer.find("*/", i + 2, end)
                stop = end if close == -1 else close + 2
                tokens.append(Token(TokenKind.COMMENT, i, stop))
            else:
                result = classify(buffer, i, end)
                if result.is_regex:
                    stop = result.end
                    tokens.append(Token(TokenKind.REGEX, i, stop))
                else:
                    stop = i + 1
                    tokens.append(Token(TokenKind.OTHER, i, stop))
            i = stop
            continue

        match = WORD_RE.match(buffer, i, end)
        stop = match.end() if match else i + 1
        tokens.append(Token(TokenKind.OTHER, i, stop))
        i = stop

    return tokens


def regex_spans(buffer: str, start: int = 0, end: int | None = None) -> list[tuple[int, int]]:
    """Spans of regex literals in a region, for marking them string-like"""
    return [
        (token.start, token.end)
        for token in tokenize(buffer, start, end)
        if token.kind is TokenKind.REGEX
    ]
