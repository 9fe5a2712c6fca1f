"""Ticket Exchange Application Package — peer-to-peer ticket resale marketplace.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
