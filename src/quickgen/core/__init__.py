"""Core scanning components."""

from quickgen.core.errors import ArgumentError, ConfigError, InputError, QuickgenError, UnbalancedExpression
from quickgen.core.regex_literal import Classification, ClassificationKind, classify
from quickgen.core.tokenizer import Token, TokenKind, regex_spans, tokenize
from quickgen.core.balanced import extract_enclosing_value, match_backward
from quickgen.core.json_source import JsonCandidate, find_json_value, first_json, parse_value

__all__ = [
    "QuickgenError",
    "UnbalancedExpression",
    "ConfigError",
    "ArgumentError",
    "InputError",
    "Classification",
    "ClassificationKind",
    "classify",
    "Token",
    "TokenKind",
    "tokenize",
    "regex_spans",
    "match_backward",
    "extract_enclosing_value",
    "JsonCandidate",
    "find_json_value",
    "first_json",
    "parse_value",
]
