"""Generator command assembly."""

from quickgen.command.arguments import (
    GenerateRequest,
    SourceKind,
    build_arguments,
    format_command,
    request_from_config,
)

__all__ = [
    "GenerateRequest",
    "SourceKind",
    "build_arguments",
    "format_command",
    "request_from_config",
]
