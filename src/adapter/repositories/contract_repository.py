"""SQLAlchemy Contract Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.contract_repository import ContractRepository
from src.domain.contract import Contract, ContractId


class SqlAlchemyContractRepository(ContractRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_contract_id(self, contract_id: ContractId) -> Optional[Contract]:
        statement = (
            select(Contract)
            .where(Contract.repo_full_name == contract_id.repo_full_name)
            .where(Contract.contributor_username == contract_id.contributor_username)
            .where(Contract.provider == contract_id.provider)
            .where(Contract.role == contract_id.role)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_project(self, repo_full_name: str, provider: str) -> List[Contract]:
        statement = (
            select(Contract)
            .where(Contract.repo_full_name == repo_full_name)
            .where(Contract.provider == provider)
            .order_by(Contract.contributor_username.asc(), Contract.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
