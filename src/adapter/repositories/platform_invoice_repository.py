"""SQLAlchemy Platform Invoice Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.platform_invoice_repository import PlatformInvoiceRepository
from src.domain.platform_invoice import PlatformInvoice


class SqlAlchemyPlatformInvoiceRepository(PlatformInvoiceRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, platform_invoice: PlatformInvoice) -> PlatformInvoice:
        self.session.add(platform_invoice)
        await self.session.flush()
        await self.session.refresh(platform_invoice)
        return platform_invoice

    async def get_by_invoice_id(self, invoice_id: int) -> Optional[PlatformInvoice]:
        statement = select(PlatformInvoice).where(PlatformInvoice.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
