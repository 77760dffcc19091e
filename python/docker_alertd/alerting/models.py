"""
Alert payload shared by every notifier.

An Alert is built once by the monitor and handed to the dispatcher. It is
frozen, so notifiers running in parallel can share one instance.
"""

from __future__ import annotations

import html
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType

# Subjects list at most this many addendums before the ellipsis.
MAX_SUBJECT_ADDENDUMS = 3
SUBJECT_ELLIPSIS = "..."


def compose_subject(prefix: str, addendums: Sequence[str]) -> str:
    """
    Build a subject line from a prefix and the alert's addendums.

    Each of the first three addendums is followed by a single space. If
    there were more than three, "..." is appended after the third.

    Args:
        prefix: Subject prefix from the email settings.
        addendums: Ordered addendums of the alert.

    Returns:
        The composed subject, e.g. "ALERT: a b c ..." for four addendums.
    """
    subject = f"{prefix}: "
    for addendum in addendums[:MAX_SUBJECT_ADDENDUMS]:
        subject += f"{addendum} "
    if len(addendums) > MAX_SUBJECT_ADDENDUMS:
        subject += SUBJECT_ELLIPSIS
    return subject


@dataclass(frozen=True)
class Alert:
    """
    One notification event.

    Attributes:
        message: Primary body text.
        subject_addendums: Short strings appended to subject lines, in order.
        details: Ordered key/value metadata rendered after the message.
        timestamp: When the alert was raised.
    """

    message: str
    subject_addendums: tuple[str, ...] = ()
    details: Mapping[str, str] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "subject_addendums", tuple(self.subject_addendums))
        object.__setattr__(self, "details", MappingProxyType(dict(self.details)))

    def subject(self, prefix: str) -> str:
        """Subject line for this alert under the given prefix."""
        return compose_subject(prefix, self.subject_addendums)

    def dump(self) -> str:
        """Plain-text rendering: the message, then one "key: value" line per detail."""
        lines = [self.message]
        lines.extend(f"{key}: {value}" for key, value in self.details.items())
        return "\n".join(lines)

    def dump_email(self) -> str:
        """HTML rendering for email bodies. All values are escaped."""
        body = "<br>\n".join(html.escape(line) for line in self.message.splitlines())

        rows = "".join(
            f"<tr><td><strong>{html.escape(key)}</strong></td>"
            f"<td>{html.escape(str(value))}</td></tr>"
            for key, value in self.details.items()
        )
        table = f"<table>{rows}</table>" if rows else ""

        return (
            "<!DOCTYPE html>\n"
            '<html>\n<head><meta charset="utf-8"></head>\n'
            '<body style="font-family: Arial, sans-serif;">\n'
            f"<p>{body}</p>\n"
            f"{table}\n"
            f'<p style="color: #6c757d; font-size: 12px;">'
            f"Raised at {self.timestamp.isoformat()}</p>\n"
            "</body>\n</html>"
        )
