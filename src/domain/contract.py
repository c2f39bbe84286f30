"""Contract Domain Entity

Binds one contributor to one project under one role and hourly rate.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel as ValueObject, ConfigDict
from sqlmodel import Field, Column, UniqueConstraint
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel, id_column


class ContractRole(str, Enum):
    """Roles a contributor can be contracted for"""
    DEV = "DEV"
    QA = "QA"
    ARCH = "ARCH"
    REV = "REV"
    BOT = "BOT"
    PM = "PM"
    PO = "PO"
    ANY = "ANY"  # eligible for tasks of every role


class ContractId(ValueObject):
    """
    Composite natural key of a Contract

    Immutable; two ids are equal when all four parts are equal.
    """

    model_config = ConfigDict(frozen=True)

    repo_full_name: str
    contributor_username: str
    provider: str
    role: str


class Contract(BaseModel, table=True):
    """
    Contract - Contributor engagement on a project

    Domain Rules:
    - (repo_full_name, contributor_username, provider, role) is unique
    - hourly_rate is expressed in cents
    - role is one of ContractRole
    """

    __tablename__ = "contracts"
    __table_args__ = (
        UniqueConstraint(
            "repo_full_name", "contributor_username", "provider", "role",
            name="uq_contracts_natural_key",
        ),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique contract identifier (auto-increment)"
    )

    repo_full_name: str = Field(
        index=True,
        description="Full name of the project's repository (owner/name)"
    )

    contributor_username: str = Field(
        index=True,
        description="Username of the contracted contributor"
    )

    provider: str = Field(
        description="Repository provider (github, gitlab, bitbucket)"
    )

    role: str = Field(
        sa_column=Column(String(8), nullable=False),
        description="Contract role (DEV, QA, ARCH, REV, BOT, PM, PO, ANY)"
    )

    hourly_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Hourly rate in cents"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Contract creation timestamp"
    )

    @property
    def contract_id(self) -> ContractId:
        return ContractId(
            repo_full_name=self.repo_full_name,
            contributor_username=self.contributor_username,
            provider=self.provider,
            role=self.role,
        )
