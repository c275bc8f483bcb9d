#!/usr/bin/env python3
"""
quickgen CLI: inspect buffers and assemble generator commands.

Subcommands:
- classify: regex-or-division decision for one slash
- tokens:   token stream of a file region
- extract:  nearest JSON/JS object or array before a cursor
- command:  generator command line from project config + overrides
- init:     write .quickgen/config.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from quickgen.command.arguments import (
    SOURCE_LANGUAGES,
    TARGET_LANGUAGES,
    SourceKind,
    build_arguments,
    format_command,
    request_from_config,
)
from quickgen.config.project import ProjectConfig
from quickgen.core.errors import InputError, QuickgenError
from quickgen.core.json_source import find_json_value
from quickgen.core.regex_literal import classify
from quickgen.core.tokenizer import tokenize


def read_buffer(path: str) -> str:
    try:
        if path == "-":
            return sys.stdin.read()
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"{path} is not UTF-8 text", position=e.start) from e
    except OSError as e:
        raise InputError(f"Cannot read {path}: {e.strerror or e}") from e


def cmd_classify(args) -> dict:
    buffer = read_buffer(args.file)
    return classify(buffer, args.offset, args.limit).to_dict()


def cmd_tokens(args) -> dict:
    buffer = read_buffer(args.file)
    tokens = tokenize(buffer, args.start, args.end)
    return {"tokens": [token.to_dict() for token in tokens]}


def cmd_extract(args) -> dict:
    buffer = read_buffer(args.file)
    candidate = find_json_value(buffer, args.cursor)
    if candidate is None:
        return {"found": False}
    return candidate.to_dict()


def cmd_command(args) -> dict:
    project = ProjectConfig(Path(args.project_dir))
    config = project.load()
    request = request_from_config(
        config,
        args.source_kind,
        args.source,
        source_language=args.src_lang,
        target_language=args.lang,
        top_level=args.top_level,
        flags=args.flag or None,
    )
    arguments = build_arguments(request, config.get("executable", "quicktype"))
    return {
        "arguments": arguments,
        "command": format_command(arguments),
        "stdin": request.reads_stdin,
    }


def cmd_init(args) -> dict:
    project = ProjectConfig(Path(args.project_dir))
    config = project.init(
        target_language=args.lang,
        source_language=args.src_lang,
        top_level=args.top_level,
    )
    return {"config_file": str(project.config_file), "config": config}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quickgen", description='quickgen - type generator front end')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='subcommand', required=True)

    p = sub.add_parser('classify', help='Classify the slash at OFFSET')
    p.add_argument('file', help="Source file ('-' for stdin)")
    p.add_argument('offset', type=int)
    p.add_argument('--limit', type=int, default=None, help='Upper bound for the literal scan')
    p.set_defaults(func=cmd_classify)

    p = sub.add_parser('tokens', help='Print the token stream')
    p.add_argument('file', help="Source file ('-' for stdin)")
    p.add_argument('--start', type=int, default=0)
    p.add_argument('--end', type=int, default=None)
    p.set_defaults(func=cmd_tokens)

    p = sub.add_parser('extract', help='Find the nearest JSON value before CURSOR')
    p.add_argument('file', help="Source file ('-' for stdin)")
    p.add_argument('--cursor', type=int, default=None, help='Defaults to end of file')
    p.set_defaults(func=cmd_extract)

    p = sub.add_parser('command', help='Assemble the generator command line')
    p.add_argument('--source-kind', required=True, choices=[k.value for k in SourceKind])
    p.add_argument('--source', default=None, help='File, directory or URL')
    p.add_argument('--lang', choices=TARGET_LANGUAGES, default=None)
    p.add_argument('--src-lang', choices=SOURCE_LANGUAGES, default=None)
    p.add_argument('--top-level', default=None)
    p.add_argument('--flag', action='append', help='Extra generator flag, e.g. --flag=--no-enums (repeatable)')
    p.add_argument('--project-dir', default='.')
    p.set_defaults(func=cmd_command)

    p = sub.add_parser('init', help='Write project config')
    p.add_argument('--lang', choices=TARGET_LANGUAGES, default='typescript')
    p.add_argument('--src-lang', choices=SOURCE_LANGUAGES, default='json')
    p.add_argument('--top-level', default=None)
    p.add_argument('--project-dir', default='.')
    p.set_defaults(func=cmd_init)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = args.func(args)
    except QuickgenError as e:
        print(json.dumps(e.to_dict(), indent=2, ensure_ascii=False), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
