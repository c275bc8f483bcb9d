"""
Command-line assembly for the external type generator (quicktype).

The tool reads samples from stdin (buffer, region) or from a path/URL given
as the last positional argument (file, directory, URL). This module only
builds the argument vector; running it is left to the caller.
"""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List
from urllib.parse import urlparse

from quickgen.core.errors import ArgumentError

SOURCE_LANGUAGES = ["json", "schema", "graphql", "typescript", "postman"]

TARGET_LANGUAGES = [
    "typescript", "javascript", "flow", "typescript-zod", "typescript-effect-schema",
    "javascript-prop-types", "python", "go", "rust", "java", "kotlin", "swift",
    "csharp", "cpp", "objective-c", "dart", "elm", "haskell", "ruby", "crystal",
    "php", "pike", "scala3", "elixir", "schema",
]


class SourceKind(Enum):
    BUFFER = "buffer"
    REGION = "region"
    FILE = "file"
    URL = "url"
    DIRECTORY = "directory"


STDIN_SOURCES = frozenset({SourceKind.BUFFER, SourceKind.REGION})


@dataclass
class GenerateRequest:
    """One run of the generator: where samples come from and what to emit"""
    source_kind: SourceKind
    source: str | None = None
    source_language: str = "json"
    target_language: str = "typescript"
    top_level: str = "Root"
    flags: List[str] = field(default_factory=list)
    renderer_options: dict[str, Any] = field(default_factory=dict)

    @property
    def reads_stdin(self) -> bool:
        return self.source_kind in STDIN_SOURCES


def request_from_config(config: dict, source_kind: SourceKind | str,
                        source: str | None = None, **overrides) -> GenerateRequest:
    """Build a request from project config values, with explicit overrides"""
    if isinstance(source_kind, str):
        try:
            source_kind = SourceKind(source_kind)
        except ValueError:
            raise ArgumentError(
                f"Unknown source kind '{source_kind}'",
                detail=[k.value for k in SourceKind],
            ) from None

    flags = config.get("flags") or []
    options = config.get("renderer_options") or {}
    if not isinstance(flags, list):
        raise ArgumentError("'flags' must be a list", detail=flags)
    if not isinstance(options, dict):
        raise ArgumentError("'renderer_options' must be a mapping", detail=options)

    values = {
        "source_language": config.get("source_language", "json"),
        "target_language": config.get("target_language", "typescript"),
        "top_level": config.get("top_level", "Root"),
        "flags": list(flags),
        "renderer_options": dict(options),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return GenerateRequest(source_kind=source_kind, source=source, **values)


def validate_request(request: GenerateRequest) -> None:
    """Raise ArgumentError if the request cannot become a command line"""
    if request.source_language not in SOURCE_LANGUAGES:
        raise ArgumentError(
            f"Unknown source language '{request.source_language}'",
            detail=SOURCE_LANGUAGES,
        )
    if request.target_language not in TARGET_LANGUAGES:
        raise ArgumentError(
            f"Unknown target language '{request.target_language}'",
            detail=TARGET_LANGUAGES,
        )
    if not isinstance(request.top_level, str) or not request.top_level:
        raise ArgumentError("Top-level type name must not be empty")

    if request.reads_stdin:
        if request.source:
            raise ArgumentError(f"'{request.source_kind.value}' input is read from stdin, not a path")
    elif not isinstance(request.source, str):
        raise ArgumentError(f"Source must be a string, got {type(request.source).__name__}")
    elif not request.source:
        raise ArgumentError(f"'{request.source_kind.value}' input needs a source")
    elif request.source_kind is SourceKind.URL:
        parsed = urlparse(request.source)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ArgumentError(f"Not an http(s) URL: {request.source}")

    for flag in request.flags:
        if not isinstance(flag, str) or not flag.startswith("--"):
            raise ArgumentError(f"Flag must start with '--': {flag}")


def build_arguments(request: GenerateRequest, executable: str = "quicktype") -> List[str]:
    """Argument vector for one generator run"""
    validate_request(request)

    args = [
        executable,
        "--src-lang", request.source_language,
        "--lang", request.target_language,
        "--top-level", request.top_level,
    ]
    args.extend(request.flags)

    for name, value in request.renderer_options.items():
        if not isinstance(name, str):
            raise ArgumentError(f"Renderer option name must be a string: {name!r}")
        if value is None or value is False:
            continue
        option = name if name.startswith("--") else f"--{name}"
        if value is True:
            args.append(option)
        else:
            args.extend([option, str(value)])

    if not request.reads_stdin:
        args.append(request.source)
    return args


def format_command(arguments: List[str]) -> str:
    """Shell-quoted command line, for display"""
    return shlex.join(arguments)
