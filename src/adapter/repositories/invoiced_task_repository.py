"""SQLAlchemy Invoiced Task Repository Implementation"""

from typing import List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoiced_task_repository import InvoicedTaskRepository
from src.domain.contract import ContractId
from src.domain.invoice import Invoice
from src.domain.invoiced_task import InvoicedTask


class SqlAlchemyInvoicedTaskRepository(InvoicedTaskRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoicedTask]:
        statement = (
            select(InvoicedTask)
            .where(InvoicedTask.invoice_id == invoice_id)
            .order_by(InvoicedTask.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, invoiced_task: InvoicedTask) -> InvoicedTask:
        self.session.add(invoiced_task)
        await self.session.flush()
        await self.session.refresh(invoiced_task)
        return invoiced_task

    async def exists_for_contract(self, contract_id: ContractId, task_id: int) -> bool:
        """
        Check whether a task was already billed on any invoice of a contract

        Args:
            contract_id: Composite contract id
            task_id: Task ID

        Returns:
            True if the task is on one of the contract's invoices
        """
        statement = (
            select(func.count())
            .select_from(InvoicedTask)
            .join(Invoice, Invoice.id == InvoicedTask.invoice_id)
            .where(InvoicedTask.task_id == task_id)
            .where(Invoice.repo_full_name == contract_id.repo_full_name)
            .where(Invoice.contributor_username == contract_id.contributor_username)
            .where(Invoice.provider == contract_id.provider)
            .where(Invoice.role == contract_id.role)
        )
        result = await self.session.execute(statement)
        count = result.scalar_one()
        return count > 0
