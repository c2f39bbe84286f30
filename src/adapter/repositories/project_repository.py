"""SQLAlchemy Project Repository Implementation"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.project_repository import ProjectRepository
from src.domain.project import Project


class SqlAlchemyProjectRepository(ProjectRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_repo(self, repo_full_name: str, provider: str) -> Optional[Project]:
        statement = (
            select(Project)
            .where(Project.repo_full_name == repo_full_name)
            .where(Project.provider == provider)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
