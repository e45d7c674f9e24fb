"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models imported here so Base.metadata is complete before create_all / alembic
"""

from restaurant_api.models.restaurant import Restaurant  # noqa: F401
