"""Command line interface for the baumeister generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .answers import AnswerSource, InteractiveAnswerSource, Prompter, ReplayAnswerSource, RichPrompter
from .config import CONFIG_FILENAME, load_stored_answers, save_config
from .context import build_context
from .errors import BaumeisterError, ConfigurationError
from .install import install_dependencies
from .manifest import resolve_manifest
from .scaffold import ProjectScaffolder
from .template import TemplateRenderer

LOGGER = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_ABORTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="baumeister",
        description="Scaffold a front-end project based on a few questions",
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Directory the project is generated in",
    )
    parser.add_argument(
        "--replay",
        "--yo-rc",
        dest="replay",
        action="store_true",
        help="Read the answers of a previous run from the configuration file and skip prompting",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"Configuration file to replay and update (default: DIRECTORY/{CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not install the project's dependencies after generating it",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing files instead of failing",
    )
    parser.add_argument("--templates", type=Path, help="Use templates from this directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every file operation")
    return parser


def _answer_source(args: argparse.Namespace, config_path: Path, prompter: Prompter | None) -> AnswerSource:
    if args.replay:
        return ReplayAnswerSource(config_path)
    try:
        stored = load_stored_answers(config_path)
    except ConfigurationError as exc:
        LOGGER.warning("ignoring remembered answers: %s", exc)
        stored = {}
    return InteractiveAnswerSource(
        prompter or RichPrompter(),
        stored=stored,
        directory=args.directory.resolve(),
    )


def _generate(args: argparse.Namespace, prompter: Prompter | None) -> int:
    target = args.directory
    config_path = args.config or target / CONFIG_FILENAME

    source = _answer_source(args, config_path, prompter)
    try:
        raw = source.read()
    except (KeyboardInterrupt, EOFError):
        print("\nAborted, no files were written.", file=sys.stderr)
        return EXIT_ABORTED

    context = build_context(raw)
    manifest = resolve_manifest(context)
    LOGGER.info("resolved %d file actions for %s", len(manifest), context.name)

    scaffolder = ProjectScaffolder(TemplateRenderer(), args.templates)
    scaffolder.write(manifest, context, target, force=args.force)
    save_config(context, config_path)

    if args.skip_install:
        LOGGER.info("skipping dependency installation")
    else:
        install_dependencies(target)

    print(f"Project {context.title} created at {target.resolve()}")
    return 0


def main(argv: Sequence[str] | None = None, *, prompter: Prompter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _generate(args, prompter)
    except (BaumeisterError, FileExistsError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
