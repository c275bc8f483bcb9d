"""Backward bracket matching over the token stream."""

import logging
from typing import List

from quickgen.core.errors import UnbalancedExpression
from quickgen.core.tokenizer import (
    CLOSER_KINDS,
    MATCHING_OPENER,
    OPENER_KINDS,
    Token,
    TokenKind,
    tokenize,
)

logger = logging.getLogger(__name__)

VALUE_CLOSERS = frozenset({TokenKind.BRACE_CLOSE, TokenKind.BRACKET_CLOSE})


def match_backward(tokens: List[Token], index: int) -> int:
    """Index of the opener matching the closing token at `index`.

    Strings, comments and regex literals are single tokens, so brackets
    inside them never take part in matching.
    """
    closer = tokens[index]
    if closer.kind not in CLOSER_KINDS:
        raise UnbalancedExpression("Token is not a closing bracket", position=closer.start)

    stack = [closer.kind]
    for i in range(index - 1, -1, -1):
        token = tokens[i]
        if token.kind in CLOSER_KINDS:
            stack.append(token.kind)
        elif token.kind in OPENER_KINDS:
            expected = MATCHING_OPENER[stack.pop()]
            if token.kind is not expected:
                raise UnbalancedExpression(
                    f"Mismatched '{token.kind.value}' while looking for '{expected.value}'",
                    position=token.start,
                )
            if not stack:
                return i

    raise UnbalancedExpression("No matching opener before buffer start", position=closer.start)


def matching_openers(tokens: List[Token]) -> dict[int, int]:
    """Opener index for every closer that `match_backward` would resolve.

    One forward pass. A closer with no opener, or with the wrong kind of
    opener on top of the stack, clears the stack: no span crossing it is
    well nested.
    """
    matches = {}
    stack = []
    for i, token in enumerate(tokens):
        if token.kind in OPENER_KINDS:
            stack.append(i)
        elif token.kind in CLOSER_KINDS:
            if stack and tokens[stack[-1]].kind is MATCHING_OPENER[token.kind]:
                matches[i] = stack.pop()
            else:
                stack.clear()
    return matches


def extract_enclosing_value(buffer: str, cursor: int) -> tuple[int, int]:
    """Span of the object/array literal that ends just before `cursor`.

    Returns (start, end) with `end == cursor` and `start` at the matching
    `{` or `[`. Raises UnbalancedExpression when the text before the cursor
    does not end in a closing brace/bracket or has no matching opener.
    """
    if not 0 < cursor <= len(buffer):
        raise UnbalancedExpression("Cursor is outside the buffer", position=cursor)

    tokens = tokenize(buffer, 0, cursor)
    if not tokens or tokens[-1].end != cursor or tokens[-1].kind not in VALUE_CLOSERS:
        raise UnbalancedExpression("Cursor is not just after a closing '}' or ']'", position=cursor)

    opener = match_backward(tokens, len(tokens) - 1)
    start = tokens[opener].start
    logger.debug("Enclosing value spans %d..%d", start, cursor)
    return start, cursor
