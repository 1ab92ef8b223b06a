"""Change formatting.

Submodules:
    formatter -- ChangeFormatter: record -> localized lines, entity expansion.
    messages  -- Per-locale templates for the four change operations.
"""

from change_tracker.formatter.formatter import ChangeFormatter
from change_tracker.formatter.messages import MESSAGES, Messages, messages_for

__all__ = ["MESSAGES", "ChangeFormatter", "Messages", "messages_for"]
