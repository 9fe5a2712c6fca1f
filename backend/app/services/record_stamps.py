"""Record Stamps — clock and id source for newly written ticket records.

Invariants:
    - Timestamps are timezone-aware UTC
    - Ticket ids are unique per call (uuid4 hex), never reused after retirement
"""

import uuid
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_ticket_id() -> str:
    return uuid.uuid4().hex
