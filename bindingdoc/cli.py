"""CLI entrypoints for bindingdoc commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .docstrings import parse_docstring, parse_native_doc
from .logging import configure_logging
from .orchestrator import Orchestrator
from .serialization import to_dict
from .stores import ModelStore, ModelStoreError
from .typemap import map_type


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bindingdoc",
        description="Link and synthesize documentation for native/managed hybrid codebases.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Cross-reference and synthesize a parsed document model.",
    )
    _add_verbose_option(resolve_parser, suppress_default=True)
    resolve_parser.add_argument("model", help="Path to a JSON document model.")
    resolve_parser.add_argument(
        "-o",
        "--output",
        help="Where to write the resolved model (defaults to stdout).",
    )
    resolve_parser.add_argument(
        "-c",
        "--config",
        default=".",
        help="Path to .bindingdoc.yml or its directory (defaults to current directory).",
    )

    parse_doc_parser = subparsers.add_parser(
        "parse-doc",
        help="Parse a docstring or native doc comment into structured JSON.",
    )
    _add_verbose_option(parse_doc_parser, suppress_default=True)
    parse_doc_parser.add_argument(
        "--native",
        action="store_true",
        help="Use the markdown-header grammar of native doc comments.",
    )
    parse_doc_parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="File holding the doc text, or '-' for stdin (default).",
    )

    map_type_parser = subparsers.add_parser(
        "map-type",
        help="Convert native type expressions into managed type hints.",
    )
    _add_verbose_option(map_type_parser, suppress_default=True)
    map_type_parser.add_argument("expressions", nargs="+", help="Native type expressions.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for bindingdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "resolve":
        _run_resolve(parser, args)
    elif args.command == "parse-doc":
        _run_parse_doc(parser, args)
    elif args.command == "map-type":
        for expression in args.expressions:
            print(map_type(expression))
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_resolve(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = load_config(Path(args.config))
        model = ModelStore(Path(args.model)).load()
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ModelStoreError) as exc:
        parser.exit(1, f"bindingdoc resolve failed: {exc}\nRun with --verbose for more details.\n")

    resolved = Orchestrator(config).run(
        model.native_modules, model.managed_modules, metadata=model.metadata
    )

    if args.output:
        output = ModelStore(Path(args.output)).save(resolved)
        print(
            f"Resolved {len(resolved.cross_refs)} cross-reference(s); "
            f"model written to {_relativize(output)}"
        )
    else:
        print(json.dumps(to_dict(resolved), indent=2))


def _run_parse_doc(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        try:
            text = Path(args.file).read_text(encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"{exc}\n")
    parsed = parse_native_doc(text) if args.native else parse_docstring(text)
    print(json.dumps(to_dict(parsed), indent=2))


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
