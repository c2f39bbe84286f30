"""Payment Method Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.wallet import PaymentMethod


class PaymentMethodRepository(ABC):

    @abstractmethod
    async def get_by_id(self, payment_method_id: int) -> Optional[PaymentMethod]:
        pass

    @abstractmethod
    async def get_by_wallet(self, wallet_id: int) -> List[PaymentMethod]:
        pass

    @abstractmethod
    async def get_active_for_wallet(self, wallet_id: int) -> Optional[PaymentMethod]:
        """
        Retrieve the active payment method of a wallet

        Returns:
            PaymentMethod if the wallet has an active one, None otherwise
        """
        pass

    @abstractmethod
    async def activate(self, payment_method: PaymentMethod) -> PaymentMethod:
        """
        Activate the payment method, deactivating the other methods of its wallet

        Returns:
            The activated PaymentMethod
        """
        pass
