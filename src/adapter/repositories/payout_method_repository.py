"""SQLAlchemy Payout Method Repository Implementation"""

from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payout_method_repository import PayoutMethodRepository
from src.domain.contributor import PayoutMethod


class SqlAlchemyPayoutMethodRepository(PayoutMethodRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, payout_method_id: int) -> Optional[PayoutMethod]:
        statement = select(PayoutMethod).where(PayoutMethod.id == payout_method_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_contributor(self, username: str, provider: str) -> List[PayoutMethod]:
        statement = (
            select(PayoutMethod)
            .where(PayoutMethod.contributor_username == username)
            .where(PayoutMethod.provider == provider)
            .order_by(PayoutMethod.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_active_for_contributor(
        self, username: str, provider: str
    ) -> Optional[PayoutMethod]:
        statement = (
            select(PayoutMethod)
            .where(PayoutMethod.contributor_username == username)
            .where(PayoutMethod.provider == provider)
            .where(PayoutMethod.active == True)  # noqa: E712
        )
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def activate(self, payout_method: PayoutMethod) -> PayoutMethod:
        statement = (
            update(PayoutMethod)
            .where(PayoutMethod.contributor_username == payout_method.contributor_username)
            .where(PayoutMethod.provider == payout_method.provider)
            .where(PayoutMethod.id != payout_method.id)
            .values(active=False)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(statement)

        payout_method.active = True
        self.session.add(payout_method)
        await self.session.flush()
        await self.session.refresh(payout_method)
        return payout_method
