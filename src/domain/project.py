"""Project Domain Entity

A repository managed by the platform. Carries the commission percentages
charged on every task billed through it.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, UniqueConstraint
from sqlalchemy import Numeric
from src.domain.base import BaseModel, id_column


class Project(BaseModel, table=True):
    """
    Project - Managed repository

    Domain Rules:
    - (repo_full_name, provider) is unique
    - project_percentage is charged to the project on top of a task's value
    - contributor_percentage is the platform's share owed by the contributor
    """

    __tablename__ = "projects"
    __table_args__ = (
        UniqueConstraint("repo_full_name", "provider", name="uq_projects_repo"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique project identifier (auto-increment)"
    )

    repo_full_name: str = Field(
        index=True,
        description="Full name of the repository (owner/name)"
    )

    provider: str = Field(
        description="Repository provider (github, gitlab, bitbucket)"
    )

    project_percentage: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Commission charged to the project, percent of task value"
    )

    contributor_percentage: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="Commission owed by the contributor, percent of task value"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Project activation timestamp"
    )
