"""Project Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.project import Project


class ProjectRepository(ABC):

    @abstractmethod
    async def get_by_repo(self, repo_full_name: str, provider: str) -> Optional[Project]:
        """
        Retrieve project by repository name and provider

        Returns:
            Project if found, None otherwise
        """
        pass
