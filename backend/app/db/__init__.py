"""Database Package — declarative Base shared by models and migrations.

Invariants:
    - Nothing here opens connections; engines live in infrastructure/database.py
"""
