"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Tickets reference owners by username, not by foreign key (the ledger and
      the store are independent collaborators)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from app.models.account import Account  # noqa: F401
from app.models.ticket import Ticket  # noqa: F401
