"""
CLI entrypoint for the prompt composer.

This script performs the following steps:
- loads .env (if present) and configs/app.yaml
- configures logging with a per-session tag
- loads the taxonomy (falling back to the built-in one if configured)
- runs one subcommand against a fresh in-memory session:
  terms, compose, import or the interactive shell
- prints the composed prompt text
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from application import PromptSession, format_term, run_shell
from domain.taxonomy import Term
from infrastructure.config import LOG_LEVELS, AppConfig, load_app_config, load_taxonomy
from infrastructure.constants import APP_CONFIG_FILE, ENV_FILE
from infrastructure.io import ensure_exists, read_text
from infrastructure.observability import configure_logging, make_session_tag, set_log_context

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Compose weighted image-generation prompts from a term taxonomy")
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to app.yaml (default: {APP_CONFIG_FILE} if it exists)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=str(ENV_FILE),
        help="Path to .env file (default: .env, skipped if missing)",
    )
    p.add_argument("--console-level", type=str, default=None, choices=LOG_LEVELS, help="Console log level")
    p.add_argument("--log-file", type=str, default=None, help="Write a rotating DEBUG log to this file")

    sub = p.add_subparsers(dest="command", required=True)

    terms = sub.add_parser("terms", help="List taxonomy terms")
    terms.add_argument("--filter", type=str, default="", help="Only terms whose text or category contains this")

    compose = sub.add_parser("compose", help="Build a prompt from picks, groups and weights")
    compose.add_argument("--pick", action="append", default=[], metavar="TERM", help="Select a term (repeatable)")
    compose.add_argument(
        "--group", action="append", nargs="+", default=[], metavar="TERM", help="Group selected terms (repeatable)"
    )
    compose.add_argument(
        "--ungroup", action="append", nargs="+", default=[], metavar="TERM", help="Ungroup terms (repeatable)"
    )
    compose.add_argument(
        "--weight",
        action="append",
        nargs=2,
        default=[],
        metavar=("TERM", "VALUE"),
        help="Weight the item containing TERM (repeatable)",
    )
    compose.add_argument("--show-labels", action="store_true", help="Also print the display-text layout")

    imp = sub.add_parser("import", help="Normalize prompt text through the taxonomy")
    imp.add_argument("text", nargs="?", default=None, help="Prompt text, e.g. '(masterpiece, best quality:1.2)'")
    imp.add_argument("--file", type=str, default=None, help="Read the prompt text from a file instead")

    sub.add_parser("shell", help="Interactive composition shell")

    return p.parse_args(argv)


def _load_config(args: argparse.Namespace) -> AppConfig:
    if args.config is not None:
        config_path = Path(args.config)
        ensure_exists(config_path, "app.yaml")
    else:
        config_path = APP_CONFIG_FILE if APP_CONFIG_FILE.exists() else None

    cfg = load_app_config(config_path)
    overrides = {}
    if args.console_level:
        overrides["console_level"] = args.console_level
    if args.log_file:
        overrides["log_file"] = Path(args.log_file)
    return cfg.model_copy(update=overrides) if overrides else cfg


def _resolve_all(session: PromptSession, refs: list[str]) -> list[Term]:
    terms: list[Term] = []
    for ref in refs:
        term = session.resolve(ref)
        if term is None:
            raise SystemExit(f"Unknown term: {ref}")
        terms.append(term)
    return terms


def _parse_weight(raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise SystemExit(f"Invalid weight: {raw}") from None


def _run_compose(session: PromptSession, args: argparse.Namespace) -> None:
    for term in _resolve_all(session, args.pick):
        session.pick(term)
    for refs in args.group:
        if not session.group(_resolve_all(session, refs)):
            raise SystemExit(f"--group needs at least two picked terms: {refs}")
    for refs in args.ungroup:
        session.ungroup(_resolve_all(session, refs))
    for ref, raw in args.weight:
        (term,) = _resolve_all(session, [ref])
        if not session.set_weight(term, _parse_weight(raw)):
            raise SystemExit(f"--weight term is not picked: {ref}")

    print(session.prompt_text)
    if args.show_labels:
        print(session.display_text)


def _run_import(session: PromptSession, args: argparse.Namespace) -> None:
    if args.file is not None:
        path = Path(args.file)
        ensure_exists(path, "prompt file")
        text = read_text(path)
    elif args.text is not None:
        text = args.text
    else:
        text = sys.stdin.read()

    report = session.import_text(text)
    print(session.prompt_text)
    for token in report.unresolved:
        print(f"ignored: {token}", file=sys.stderr)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    cfg = _load_config(args)

    session_id = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{args.command}"
    configure_logging(
        log_file=cfg.log_file,
        console_level=cfg.console_log_level,
        file_level=cfg.file_log_level,
    )
    set_log_context(session_id_full=session_id)
    logger.info("Starting session: session_id=%s (session_tag=%s)", session_id, make_session_tag(session_id))

    taxonomy = load_taxonomy(cfg)
    session = PromptSession(taxonomy)

    if args.command == "terms":
        for term in taxonomy.all_terms():
            haystack = f"{'/'.join(term.category)} {term.display_text} {term.output_text}"
            if args.filter in haystack:
                print(format_term(term))
    elif args.command == "compose":
        _run_compose(session, args)
    elif args.command == "import":
        _run_import(session, args)
    elif args.command == "shell":
        run_shell(session)


if __name__ == "__main__":
    main()
