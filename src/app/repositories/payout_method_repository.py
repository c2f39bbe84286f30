"""Payout Method Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.contributor import PayoutMethod


class PayoutMethodRepository(ABC):

    @abstractmethod
    async def get_by_id(self, payout_method_id: int) -> Optional[PayoutMethod]:
        pass

    @abstractmethod
    async def get_by_contributor(self, username: str, provider: str) -> List[PayoutMethod]:
        pass

    @abstractmethod
    async def get_active_for_contributor(
        self, username: str, provider: str
    ) -> Optional[PayoutMethod]:
        """
        Retrieve the active payout method of a contributor

        Returns:
            PayoutMethod if the contributor has an active one, None otherwise
        """
        pass

    @abstractmethod
    async def activate(self, payout_method: PayoutMethod) -> PayoutMethod:
        """
        Activate the payout method, deactivating the contributor's other methods

        Returns:
            The activated PayoutMethod
        """
        pass
