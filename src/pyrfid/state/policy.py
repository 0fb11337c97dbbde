"""Snapshot acceptance policy.

REST responses carry no request identifier and may complete out of
order. Every fetch therefore takes a ticket from its cell when the
request is issued; a response is applied only if no response for a
later-issued request has been applied already.
"""

from __future__ import annotations


def should_accept_snapshot(*, applied_ticket: int | None, incoming_ticket: int) -> bool:
    """Decide whether a completed fetch may replace the cell value."""
    if applied_ticket is None:
        return True
    return incoming_ticket > applied_ticket
