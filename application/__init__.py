"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the user actions of a prompt composition session.
"""

from application.session import ImportReport, PromptSession
from application.shell import ShellError, execute, format_term, run_shell

__all__ = [
    # Session use cases
    "PromptSession",
    "ImportReport",
    # Interactive shell
    "run_shell",
    "execute",
    "format_term",
    "ShellError",
]
