"""Repository interface for commission-rate configurations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.fee_configuration import FeeConfiguration
from ..enums import FeeCategory


class FeeConfigurationRepository(ABC):

    @abstractmethod
    async def add(self, configuration: FeeConfiguration) -> FeeConfiguration:
        pass

    @abstractmethod
    async def find_active(self, category: FeeCategory) -> Optional[FeeConfiguration]:
        pass

    @abstractmethod
    async def find_history(self, category: FeeCategory) -> List[FeeConfiguration]:
        """All configurations of a category, newest first."""
        pass

    @abstractmethod
    async def deactivate_all(self, category: FeeCategory) -> int:
        """Deactivate every active row of a category.

        Returns:
            Number of rows deactivated
        """
        pass
