"""Services Layer — lineage resolver, resale/purchase/edit engines, catalog and accounts.

Invariants:
    - Engines talk to storage only through core/repository_protocols
    - Each engine method runs its steps in a fixed order and never commits on its own

Design Decisions:
    - One engine per operation for locality (resale, purchase, edit)
"""
