"""Task and Resignation Domain Entities

Tasks are produced from provider issues and pull requests. A resignation
records that a contributor gave a task up and must not receive it again.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, String, Text
from src.domain.base import BaseModel, id_column


class Task(BaseModel, table=True):
    """
    Task - Unit of work on a project

    Domain Rules:
    - (issue_id, repo_full_name, provider, is_pull_request) identifies a task
    - assignee is None while the task waits for election
    - estimation_minutes drives the task's value
    """

    __tablename__ = "tasks"
    __table_args__ = (
        Index('ix_tasks_project', 'repo_full_name', 'provider'),
        Index('ix_tasks_assignee', 'assignee'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique task identifier (auto-increment)"
    )

    issue_id: str = Field(
        description="Issue or pull request number at the provider"
    )

    repo_full_name: str = Field(
        description="Repository the task belongs to"
    )

    provider: str = Field(
        description="Repository provider"
    )

    role: str = Field(
        sa_column=Column(String(8), nullable=False),
        description="Role required to work on the task"
    )

    is_pull_request: bool = Field(
        default=False,
        description="True if the task is a pull request review"
    )

    assignee: Optional[str] = Field(
        default=None,
        description="Username of the current assignee (None = unassigned)"
    )

    estimation_minutes: int = Field(
        default=60,
        description="Estimated effort in minutes"
    )

    assignment_date: Optional[datetime] = Field(
        default=None,
        description="When the current assignee got the task"
    )

    deadline: Optional[datetime] = Field(
        default=None,
        description="Deadline for the current assignee"
    )


class Resignation(BaseModel, table=True):
    """Resignation - A contributor gave up a task"""

    __tablename__ = "resignations"
    __table_args__ = (
        Index('ix_resignations_task_id', 'task_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique resignation identifier (auto-increment)"
    )

    task_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Task"
    )

    username: str = Field(
        description="Contributor who resigned"
    )

    reason: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Why the contributor resigned (e.g. deadline missed)"
    )

    resigned_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Resignation timestamp"
    )
