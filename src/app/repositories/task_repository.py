"""Task Repository Interface

Tasks and resignations are written by the event handling side; this core
only reads them.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.task import Task, Resignation


class TaskRepository(ABC):

    @abstractmethod
    async def get_by_id(self, task_id: int) -> Optional[Task]:
        pass

    @abstractmethod
    async def get_open_assigned(self, repo_full_name: str, provider: str) -> List[Task]:
        """
        Retrieve the assigned tasks of a project that were not invoiced yet

        Used to compute the funds already committed to running work.

        Args:
            repo_full_name: Project repository
            provider: Project provider

        Returns:
            List of tasks with an assignee and no InvoicedTask row
        """
        pass

    @abstractmethod
    async def get_resignations(self, task_id: int) -> List[Resignation]:
        pass
