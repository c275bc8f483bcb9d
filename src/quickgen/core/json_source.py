"""
JSON discovery: find a sample value to feed the type generator.

Looks backward from a cursor for the nearest object/array literal that
parses, either as strict JSON or as a JavaScript-style literal
(unquoted keys, single quotes), which YAML flow syntax accepts.
Other input sources (clipboard history and the like) are tried in order
with `first_json`.

Relaxed literals are loaded with `LiteralLoader`, which only resolves JSON
scalars (numbers, true/false, null); everything else plain stays a string
and object keys are always strings.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

import yaml

from quickgen.core.balanced import VALUE_CLOSERS, matching_openers
from quickgen.core.tokenizer import tokenize

logger = logging.getLogger(__name__)

STR_TAG = "tag:yaml.org,2002:str"

# Unquoted keys a JavaScript object literal allows
PLAIN_KEY_RE = re.compile(r'^(?:[A-Za-z_$][\w$]*|-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)$')


class LiteralLoader(yaml.SafeLoader):
    """SafeLoader that resolves only JSON-compatible scalars"""


LiteralLoader.yaml_implicit_resolvers = {}
LiteralLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool", re.compile(r'^(?:true|false)$'), list("tf"))
LiteralLoader.add_implicit_resolver(
    "tag:yaml.org,2002:null", re.compile(r'^(?:null|)$'), ["n", ""])
LiteralLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int", re.compile(r'^-?(?:0|[1-9]\d*)$'), list("-0123456789"))
LiteralLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r'^-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$'),
    list("-.0123456789"))


@dataclass
class JsonCandidate:
    """A parsed value and where it came from (start/end are None off-buffer)"""
    start: int | None
    end: int | None
    text: str
    value: Any

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.value, indent=indent, ensure_ascii=False, default=str)

    def to_dict(self) -> dict:
        return {
            "found": True,
            "start": self.start,
            "end": self.end,
            "value": json.loads(self.to_json()),
        }


def check_literal_node(node: yaml.Node) -> None:
    """Reject node trees that are code blocks rather than object literals.

    Plain scalar keys are retagged as strings, as JavaScript keys are.
    """
    if isinstance(node, yaml.SequenceNode):
        for item in node.value:
            check_literal_node(item)
    elif isinstance(node, yaml.MappingNode):
        for key, value in node.value:
            if not isinstance(key, yaml.ScalarNode):
                raise ValueError("Object keys must be names, strings or numbers")
            if key.style is None:
                if not PLAIN_KEY_RE.match(key.value):
                    raise ValueError(f"Not a property name: {key.value!r}")
                key.tag = STR_TAG
            if isinstance(value, yaml.ScalarNode) and value.style is None and value.value == "":
                raise ValueError(f"Key {key.value!r} has no value")
            check_literal_node(value)


def load_literal(text: str) -> Any:
    """Load a JavaScript-style literal through LiteralLoader"""
    loader = LiteralLoader(text)
    try:
        node = loader.get_single_node()
        if node is None:
            raise ValueError("Empty literal")
        check_literal_node(node)
        return loader.construct_document(node)
    finally:
        loader.dispose()


def parse_value(text: str) -> dict | list:
    """Parse an object or array from JSON, or from a relaxed JS literal"""
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        try:
            value = load_literal(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Not a JSON or JavaScript literal: {e}") from e

    if not isinstance(value, (dict, list)):
        raise ValueError(f"Expected an object or array, got {type(value).__name__}")
    return value


def find_json_value(buffer: str, cursor: int | None = None) -> JsonCandidate | None:
    """Nearest parseable object/array ending at or before `cursor`"""
    if cursor is None or cursor > len(buffer):
        cursor = len(buffer)

    tokens = tokenize(buffer, 0, cursor)
    openers = matching_openers(tokens)
    for index in range(len(tokens) - 1, -1, -1):
        token = tokens[index]
        if token.kind not in VALUE_CLOSERS:
            continue
        if index not in openers:
            logger.debug("Skipping unbalanced closer at %d", token.start)
            continue

        start, end = tokens[openers[index]].start, token.end
        text = buffer[start:end]
        try:
            value = parse_value(text)
        except ValueError as e:
            logger.debug("Span %d..%d is not a value: %s", start, end, e)
            continue
        return JsonCandidate(start, end, text, value)

    return None


def first_json(candidates: Iterable[str]) -> JsonCandidate | None:
    """First candidate string that parses as an object or array"""
    for text in candidates:
        text = text.strip()
        if not text:
            continue
        try:
            value = parse_value(text)
        except ValueError as e:
            logger.debug("Candidate rejected: %s", e)
            continue
        return JsonCandidate(None, None, text, value)
    return None
