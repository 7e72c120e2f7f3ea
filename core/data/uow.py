"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.value_objects import ExecutionID

from .repositories import (
    SqlAlchemyAddressRepository,
    SqlAlchemyCartRepository,
    SqlAlchemyClientRepository,
    SqlAlchemyCouponRepository,
    SqlAlchemyCourierRepository,
    SqlAlchemyFeeConfigurationRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
    SqlAlchemyRestaurantRepository,
)

_NOT_INITIALIZED = "UnitOfWork not initialized. Use async context manager."


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories

    Nothing is committed implicitly; callers commit explicitly and any
    exception leaving the block rolls the transaction back.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None
        self._repositories: dict = {}

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        self._repositories = {}
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close the session."""
        try:
            if exc_type is not None:
                await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None
            self._repositories = {}

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._execution_id

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError(_NOT_INITIALIZED)
        return self._session

    def _repository(self, key: str, factory):
        """Lazy-load a repository bound to the current session."""
        session = self.session
        if key not in self._repositories:
            self._repositories[key] = factory(session)
        return self._repositories[key]

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        return self._repository("orders", SqlAlchemyOrderRepository)

    @property
    def coupons(self) -> SqlAlchemyCouponRepository:
        return self._repository("coupons", SqlAlchemyCouponRepository)

    @property
    def couriers(self) -> SqlAlchemyCourierRepository:
        return self._repository("couriers", SqlAlchemyCourierRepository)

    @property
    def clients(self) -> SqlAlchemyClientRepository:
        return self._repository("clients", SqlAlchemyClientRepository)

    @property
    def restaurants(self) -> SqlAlchemyRestaurantRepository:
        return self._repository("restaurants", SqlAlchemyRestaurantRepository)

    @property
    def addresses(self) -> SqlAlchemyAddressRepository:
        return self._repository("addresses", SqlAlchemyAddressRepository)

    @property
    def carts(self) -> SqlAlchemyCartRepository:
        return self._repository("carts", SqlAlchemyCartRepository)

    @property
    def products(self) -> SqlAlchemyProductRepository:
        return self._repository("products", SqlAlchemyProductRepository)

    @property
    def fee_configurations(self) -> SqlAlchemyFeeConfigurationRepository:
        return self._repository("fee_configurations", SqlAlchemyFeeConfigurationRepository)

    async def commit(self) -> None:
        """Commit all pending changes."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        await self.session.rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
