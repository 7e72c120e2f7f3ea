"""Shared helpers for SQLAlchemy repositories."""

from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.exceptions import InvalidArgument


class SqlAlchemyRepository:
    """Base class holding the unit-of-work session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    @staticmethod
    def _check_id(value: int, name: str = "id") -> int:
        """Reject identifiers that can never exist instead of querying for them."""
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidArgument(f"Invalid {name}: {value!r}")
        return value
