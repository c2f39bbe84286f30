"""ContributorElector Use Case

Picks who gets an unassigned (or reassigned) task.
"""

import logging
import random
from typing import Dict, List, Optional
from libs.result import Result, Return, Error
from src.app.services import pricing
from src.app.repositories.contract_repository import ContractRepository
from src.app.repositories.project_repository import ProjectRepository
from src.app.repositories.task_repository import TaskRepository
from src.app.repositories.wallet_repository import WalletRepository
from src.domain.contract import Contract, ContractRole
from src.domain.task import Task
from .project_funds import ProjectFunds
from .dtos import ElectionResponseDTO

logger = logging.getLogger(__name__)


class ContributorElector:
    """
    Use Case: Elect a contributor for a task

    Business Rules:
    1. Candidates hold a contract on the task's project with the task's role or ANY
    2. The current assignee is never elected
    3. Contributors who resigned from the task are never elected
    4. A contributor holding both an exact-role and an ANY contract is
       considered once, under the exact-role contract
    5. A candidate is affordable iff value + commissions <= available funds
    6. Among affordable candidates the pick is uniformly random
    7. No candidate, or no affordable one, elects nobody (value None)

    Flow:
    1. Load project and its contracts
    2. Build the candidate set
    3. Compute available funds of the active wallet
    4. Filter by affordability
    5. Pick with the injected random source
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        contract_repo: ContractRepository,
        task_repo: TaskRepository,
        wallet_repo: WalletRepository,
        funds: ProjectFunds,
        rng: Optional[random.Random] = None,
    ):
        self.project_repo = project_repo
        self.contract_repo = contract_repo
        self.task_repo = task_repo
        self.wallet_repo = wallet_repo
        self.funds = funds
        self.rng = rng or random.Random()

    async def _candidates(self, task: Task) -> List[Contract]:
        contracts = await self.contract_repo.get_by_project(task.repo_full_name, task.provider)
        resigned = {r.username for r in await self.task_repo.get_resignations(task.id)}

        by_username: Dict[str, Contract] = {}
        for contract in contracts:
            if contract.role not in (task.role, ContractRole.ANY.value):
                continue
            username = contract.contributor_username
            if username == task.assignee or username in resigned:
                continue
            # Exact-role contract wins over ANY
            if username not in by_username or contract.role == task.role:
                by_username[username] = contract

        return [by_username[username] for username in sorted(by_username)]

    async def elect(self, task: Task) -> Result[Optional[ElectionResponseDTO]]:
        """
        Elect a contributor for the task

        Args:
            task: Task to assign

        Returns:
            Result[Optional[ElectionResponseDTO]]: The elected contributor,
            or None when nobody is eligible and affordable
        """
        try:
            # Step 1: Project
            project = await self.project_repo.get_by_repo(task.repo_full_name, task.provider)
            if not project:
                return Return.err(
                    Error(
                        code="PROJECT_NOT_FOUND",
                        message=f"Project {task.repo_full_name} not found",
                        reason=f"provider={task.provider}",
                    )
                )

            # Step 2: Candidates
            candidates = await self._candidates(task)
            if not candidates:
                logger.info(f"[Election] No candidates for task #{task.issue_id} of {task.repo_full_name}")
                return Return.ok(None)

            # Step 3: Budget
            wallet = await self.wallet_repo.get_active_for_project(task.repo_full_name, task.provider)
            if not wallet:
                logger.warning(f"[Election] {task.repo_full_name} has no active wallet, nobody elected")
                return Return.ok(None)
            # The task under election no longer commits its current assignee's cost
            available = await self.funds.available(project, wallet, excluded_task_id=task.id)

            # Step 4: Affordability
            affordable = []
            for contract in candidates:
                cost = pricing.task_cost(project, contract.hourly_rate, task.estimation_minutes)
                if cost <= available:
                    affordable.append((contract, cost))
                else:
                    logger.info(
                        f"[Election] {contract.contributor_username} too expensive for "
                        f"task #{task.issue_id}: cost={cost}, available={available}"
                    )

            if not affordable:
                logger.info(f"[Election] Nobody affordable for task #{task.issue_id} (available={available})")
                return Return.ok(None)

            # Step 5: Uniform pick
            contract, cost = self.rng.choice(affordable)
            logger.info(
                f"[Election] Elected {contract.contributor_username} ({contract.role}) "
                f"for task #{task.issue_id} out of {len(affordable)}"
            )

            return Return.ok(
                ElectionResponseDTO(
                    username=contract.contributor_username,
                    provider=contract.provider,
                    role=contract.role,
                    hourly_rate=contract.hourly_rate,
                    cost=cost,
                    available_funds=available,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="ELECTION_FAILED",
                    message=f"Failed to elect a contributor for task #{task.issue_id}",
                    reason=str(e),
                )
            )
