"""Interrupted Sequences — surfacing a multi-step operation that failed midway.

Invariants:
    - The completed step is always logged at ERROR with ticket and caller
    - The returned InternalError carries an opaque message; details stay in logs
    - Nothing here retries or repairs: recovery belongs to the surrounding system
"""

import logging

from app.core.errors import ErrorContext, InternalError

logger = logging.getLogger(__name__)


def interrupted(
    operation: str, step: str, ticket_id: str, username: str, exc: Exception,
) -> InternalError:
    """Log the partial state and build the error the engine should raise."""
    logger.error(
        "%s interrupted at step '%s': %s", operation, step, exc,
        exc_info=exc,
        extra={
            "operation": operation, "step": step,
            "ticket_id": ticket_id, "username": username,
        },
    )
    return InternalError(
        f"Failed to complete {operation}; it may be partially applied",
        ErrorContext(
            username=username, ticket_id=ticket_id,
            operation=operation, step=step,
        ),
    )
