"""Infrastructure Layer — database sessions, SQL store/ledger, logging setup.

Invariants:
    - Infrastructure implements core protocols; it never decides business rules
    - SQLAlchemy errors are mapped to DatabaseError at the session boundary
"""
