"""
Observability: structured logging and context management.

Provides:
- Contextual logging with session tag and current action
- Log rotation and file management
"""

from infrastructure.observability.logging import (
    clear_action_context,
    configure_logging,
    get_log_context,
    make_session_tag,
    set_log_context,
)

__all__ = [
    "configure_logging",
    "set_log_context",
    "get_log_context",
    "clear_action_context",
    "make_session_tag",
]
