"""SQLAlchemy Payment Method Repository Implementation"""

from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_method_repository import PaymentMethodRepository
from src.domain.wallet import PaymentMethod


class SqlAlchemyPaymentMethodRepository(PaymentMethodRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, payment_method_id: int) -> Optional[PaymentMethod]:
        statement = select(PaymentMethod).where(PaymentMethod.id == payment_method_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_wallet(self, wallet_id: int) -> List[PaymentMethod]:
        statement = (
            select(PaymentMethod)
            .where(PaymentMethod.wallet_id == wallet_id)
            .order_by(PaymentMethod.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_active_for_wallet(self, wallet_id: int) -> Optional[PaymentMethod]:
        statement = (
            select(PaymentMethod)
            .where(PaymentMethod.wallet_id == wallet_id)
            .where(PaymentMethod.active == True)  # noqa: E712
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def activate(self, payment_method: PaymentMethod) -> PaymentMethod:
        statement = (
            update(PaymentMethod)
            .where(PaymentMethod.wallet_id == payment_method.wallet_id)
            .where(PaymentMethod.id != payment_method.id)
            .values(active=False)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(statement)

        payment_method.active = True
        self.session.add(payment_method)
        await self.session.flush()
        await self.session.refresh(payment_method)
        return payment_method
