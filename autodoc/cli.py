"""CLI entrypoints for autodoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import AutodocError
from .logging import configure_logging
from .orchestrator import Orchestrator


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


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autodoc",
        description="Render doc-comment markers in source files into indexed markdown.",
    )
    _add_verbose_option(parser)
    parser.add_argument("--log-file", type=Path, help="Also write log records to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Document source directories and write index pages.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    build_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    build_parser.add_argument(
        "--source",
        dest="sources",
        action="append",
        help="Source directory relative to the project root (repeatable, defaults to config or root).",
    )
    build_parser.add_argument("--config", type=Path, help="Path to an .autodoc.yml file.")
    build_parser.add_argument("--title", help="Title used for the root index page.")
    build_parser.add_argument("--output", help="Output directory relative to the project root.")
    build_parser.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        help="Source file extension to document (repeatable, defaults to .js).",
    )
    build_parser.add_argument("--workers", type=_positive_int, help="Parallel file workers.")
    build_parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Skip files that fail to read or write instead of aborting.",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Print the markdown for a single source file.",
    )
    _add_verbose_option(render_parser, suppress_default=True)
    render_parser.add_argument("file", help="Source file to document.")
    render_parser.add_argument("--title", help="Document title (defaults to the file name).")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for autodoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "build":
        orchestrator = Orchestrator(keep_going=bool(args.keep_going))
        overrides = {
            "title": args.title,
            "output": args.output,
            "sources": args.sources,
            "extensions": args.extensions,
            "workers": args.workers,
        }
        try:
            outcome = orchestrator.run_build(
                args.path, config_path=args.config, overrides=overrides
            )
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except (AutodocError, OSError) as exc:
            parser.exit(1, f"autodoc build failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Documentation index written to {_relativize(outcome.index_path)}")
        if outcome.failed:
            print(f"{len(outcome.failed)} file(s) skipped after errors")
    elif args.command == "render":
        orchestrator = Orchestrator()
        try:
            markdown = orchestrator.render_file(args.file, title=args.title)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (AutodocError, OSError) as exc:
            parser.exit(1, f"autodoc render failed: {exc}\n")
        if markdown is None:
            parser.exit(1, f"No documentation found in {args.file}\n")
        _write_stdout(markdown + "\n")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _write_stdout(text: str) -> None:
    # Undecodable source bytes travel as surrogates and are written back as-is.
    sys.stdout.flush()
    sys.stdout.buffer.write(text.encode("utf-8", "surrogateescape"))
    sys.stdout.buffer.flush()


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
