"""Interactive command loop driving a PromptSession."""

import logging
import shlex
from collections.abc import Callable

from application.constants import SHELL_HELP, SHELL_PROMPT
from application.session import PromptSession
from domain.taxonomy import Term

logger = logging.getLogger(__name__)


class ShellError(ValueError):
    """User-facing error for a malformed shell command."""


def _terms(session: PromptSession, refs: list[str]) -> list[Term]:
    terms: list[Term] = []
    for ref in refs:
        term = session.resolve(ref)
        if term is None:
            raise ShellError(f"Unknown term: {ref}")
        terms.append(term)
    return terms


def _weight(raw: str) -> float:
    try:
        return float(raw)
    except ValueError as e:
        raise ShellError(f"Invalid weight: {raw}") from e


def execute(session: PromptSession, line: str) -> str | None:
    """
    Run one shell command against the session.

    Returns the text to print, or None when the shell should exit.

    Raises:
        ShellError: If the command or its arguments are invalid
    """
    head, _, rest = line.strip().partition(" ")
    cmd = head.lower()
    if not cmd:
        return ""
    if cmd == "import":
        # prompt text is taken verbatim; it may contain quotes and apostrophes
        report = session.import_text(rest)
        lines = [session.prompt_text]
        if report.unresolved:
            lines.append(f"ignored: {', '.join(report.unresolved)}")
        return "\n".join(lines)

    try:
        args = shlex.split(rest)
    except ValueError as e:
        raise ShellError(str(e)) from e

    if cmd in ("quit", "exit"):
        return None
    if cmd == "help":
        return SHELL_HELP
    if cmd == "show":
        return f"{session.prompt_text}\n{session.display_text}"
    if cmd == "clear":
        session.clear()
        return ""
    if cmd == "terms":
        needle = " ".join(args)
        return "\n".join(format_term(t) for t in session.taxonomy.all_terms() if _matches(t, needle))
    if cmd in ("pick", "unpick", "toggle"):
        if not args:
            raise ShellError(f"Usage: {cmd} TERM [TERM ...]")
        for term in _terms(session, args):
            getattr(session, cmd)(term)
        return session.prompt_text
    if cmd == "group":
        if len(args) < 2:
            raise ShellError("Usage: group TERM TERM [TERM ...]")
        if not session.group(_terms(session, args)):
            raise ShellError("group needs at least two selected terms")
        return session.prompt_text
    if cmd == "ungroup":
        if not args:
            raise ShellError("Usage: ungroup TERM [TERM ...]")
        session.ungroup(_terms(session, args))
        return session.prompt_text
    if cmd == "weight":
        if len(args) != 2:
            raise ShellError("Usage: weight TERM VALUE")
        (term,) = _terms(session, args[:1])
        if not session.set_weight(term, _weight(args[1])):
            raise ShellError(f"Not selected: {term.output_text}")
        return session.prompt_text
    if cmd == "unweight":
        if len(args) != 1:
            raise ShellError("Usage: unweight TERM")
        (term,) = _terms(session, args)
        if not session.set_weight(term, None):
            raise ShellError(f"Not selected: {term.output_text}")
        return session.prompt_text

    raise ShellError(f"Unknown command: {cmd} (try 'help')")


def _matches(term: Term, needle: str) -> bool:
    if not needle:
        return True
    return needle in term.output_text or needle in term.display_text or needle in "/".join(term.category)


def format_term(term: Term) -> str:
    return f"{term.id:>10}  {'/'.join(term.category)}  {term.display_text} -> {term.output_text}"


def run_shell(
    session: PromptSession,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """Read commands until quit or end of input."""
    write(SHELL_HELP)
    while True:
        try:
            line = read(SHELL_PROMPT)
        except EOFError:
            break
        try:
            out = execute(session, line)
        except ShellError as e:
            logger.debug("Rejected command %r: %s", line, e)
            write(f"error: {e}")
            continue
        if out is None:
            break
        if out:
            write(out)
