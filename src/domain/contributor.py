"""Contributor and PayoutMethod Domain Entities

A contributor receives funds through exactly one active payout method.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index, UniqueConstraint
from sqlalchemy import String
from src.domain.base import BaseModel, id_column


class PayoutMethodType(str, Enum):
    """Payout destination types"""
    STRIPE = "STRIPE"
    PAYPAL = "PAYPAL"


class Contributor(BaseModel, table=True):
    """Contributor - A user that can be contracted on projects"""

    __tablename__ = "contributors"
    __table_args__ = (
        UniqueConstraint("username", "provider", name="uq_contributors_username"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique contributor identifier (auto-increment)"
    )

    username: str = Field(
        index=True,
        description="Username at the provider"
    )

    provider: str = Field(
        description="Provider the contributor logged in with"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Registration timestamp"
    )


class PayoutMethod(BaseModel, table=True):
    """
    PayoutMethod - Contributor's destination for receiving funds

    Domain Rules:
    - At most one active payout method per contributor
    - identifier is the gateway-side account id (e.g. Stripe connected account)
    """

    __tablename__ = "payout_methods"
    __table_args__ = (
        Index('ix_payout_methods_contributor', 'contributor_username', 'provider'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique payout method identifier (auto-increment)"
    )

    contributor_username: str = Field(
        description="Owner of the payout method"
    )

    provider: str = Field(
        description="Provider of the owning contributor"
    )

    type: PayoutMethodType = Field(
        default=PayoutMethodType.STRIPE,
        description="Payout destination type"
    )

    identifier: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Gateway account identifier"
    )

    active: bool = Field(
        default=False,
        description="Whether this is the contributor's active payout method"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Registration timestamp"
    )
