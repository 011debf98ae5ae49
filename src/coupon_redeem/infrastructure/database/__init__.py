"""Database infrastructure module."""

from coupon_redeem.infrastructure.database.session import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_session_factory,
)

__all__ = [
    "get_async_engine",
    "get_session_factory",
    "get_async_db",
    "dispose_engine",
]
