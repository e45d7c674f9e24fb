"""Services Layer — repository implementations over the async ORM session.

Invariants:
    - Services own commits and rollbacks; routes never call session methods
"""
