"""Project funds

committed = cost of every assigned, not yet invoiced task of the project
            (except the task being reassigned, if any)
            + total of every unpaid invoice of the project
available = wallet.cash - committed
"""

import logging
from decimal import Decimal
from typing import Optional
from src.app.services import pricing
from src.app.repositories.contract_repository import ContractRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.task_repository import TaskRepository
from src.domain.contract import ContractId, ContractRole
from src.domain.project import Project
from src.domain.task import Task
from src.domain.wallet import Wallet

logger = logging.getLogger(__name__)


class ProjectFunds:

    def __init__(
        self,
        contract_repo: ContractRepository,
        task_repo: TaskRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.contract_repo = contract_repo
        self.task_repo = task_repo
        self.invoice_repo = invoice_repo

    async def _assignee_rate(self, task: Task):
        for role in (task.role, ContractRole.ANY.value):
            contract = await self.contract_repo.get_by_contract_id(
                ContractId(
                    repo_full_name=task.repo_full_name,
                    contributor_username=task.assignee,
                    provider=task.provider,
                    role=role,
                )
            )
            if contract:
                return contract.hourly_rate
        return None

    async def committed(self, project: Project, excluded_task_id: Optional[int] = None) -> Decimal:
        total = Decimal(0)

        for task in await self.task_repo.get_open_assigned(project.repo_full_name, project.provider):
            if excluded_task_id is not None and task.id == excluded_task_id:
                continue
            rate = await self._assignee_rate(task)
            if rate is None:
                logger.warning(
                    f"Task #{task.issue_id} of {project.repo_full_name} is assigned to "
                    f"{task.assignee} who has no contract, ignored in committed funds"
                )
                continue
            total += pricing.task_cost(project, rate, task.estimation_minutes)

        for invoice in await self.invoice_repo.get_unpaid_by_project(
            project.repo_full_name, project.provider
        ):
            total += Decimal(invoice.total_amount)

        return total

    async def available(
        self, project: Project, wallet: Wallet, excluded_task_id: Optional[int] = None
    ) -> Decimal:
        return Decimal(wallet.cash) - await self.committed(project, excluded_task_id)
