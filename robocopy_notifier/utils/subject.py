"""
Subject extraction for pre-formatted notification text.

The Robocopy job script renders the whole email as text and embeds the
subject as a header-style line, e.g.::

    Subject: Robocopy Failure Notification

    Source: D:\\data
    ...
"""
from __future__ import annotations
from typing import Optional


SUBJECT_PREFIX = "Subject:"
DEFAULT_SUBJECT = "Robocopy Notification"


def extract_subject(text: str) -> Optional[str]:
    """
    Find the first line starting with "Subject:" and return the rest of it.

    The prefix match is case-sensitive and must start at column 0. Only the
    first matching line is used.

    Args:
        text: Email content, lines separated by "\\n" (a trailing "\\r" is
            stripped along with other whitespace).

    Returns:
        The stripped remainder of the matching line, or None if no line matches.
    """
    for line in text.split("\n"):
        if line.startswith(SUBJECT_PREFIX):
            return line[len(SUBJECT_PREFIX):].strip()
    return None


def derive_subject(text: str, default: str = DEFAULT_SUBJECT) -> str:
    subject = extract_subject(text)
    if subject is None:
        return default
    return subject
