"""SQLAlchemy Task Repository Implementation"""

from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.task_repository import TaskRepository
from src.domain.invoiced_task import InvoicedTask
from src.domain.task import Task, Resignation


class SqlAlchemyTaskRepository(TaskRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, task_id: int) -> Optional[Task]:
        statement = select(Task).where(Task.id == task_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_open_assigned(self, repo_full_name: str, provider: str) -> List[Task]:
        """
        Retrieve the assigned tasks of a project that were not invoiced yet

        Args:
            repo_full_name: Project repository
            provider: Project provider

        Returns:
            List of tasks with an assignee and no InvoicedTask row
        """
        invoiced = select(InvoicedTask.task_id).where(InvoicedTask.task_id == Task.id)
        statement = (
            select(Task)
            .where(Task.repo_full_name == repo_full_name)
            .where(Task.provider == provider)
            .where(Task.assignee.is_not(None))
            .where(~invoiced.exists())
            .order_by(Task.id.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_resignations(self, task_id: int) -> List[Resignation]:
        statement = (
            select(Resignation)
            .where(Resignation.task_id == task_id)
            .order_by(Resignation.resigned_at.asc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
