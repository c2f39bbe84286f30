"""Platform Invoice Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.platform_invoice import PlatformInvoice


class PlatformInvoiceRepository(ABC):

    @abstractmethod
    async def create(self, platform_invoice: PlatformInvoice) -> PlatformInvoice:
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> Optional[PlatformInvoice]:
        pass
