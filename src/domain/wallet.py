"""Wallet and PaymentMethod Domain Entities

A wallet is a project's funding source and the balance settlements are
deducted from.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Numeric, String
from src.domain.base import BaseModel, id_column


class WalletType(str, Enum):
    """Wallet kinds; each kind is served by its own payment gateway"""
    FAKE = "FAKE"      # simulated, always confirms
    STRIPE = "STRIPE"  # real card payments through Stripe


class Wallet(BaseModel, table=True):
    """
    Wallet - Project funding source

    Domain Rules:
    - Exactly one active wallet per project
    - cash (the limit the project allows to be spent) is never negative
    - cash decreases only on a successful settlement
    """

    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint('cash >= 0', name='wallet_cash_non_negative'),
        Index('ix_wallets_project', 'repo_full_name', 'provider'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique wallet identifier (auto-increment)"
    )

    repo_full_name: str = Field(
        description="Owning project repository"
    )

    provider: str = Field(
        description="Owning project provider"
    )

    type: WalletType = Field(
        description="Wallet kind (FAKE, STRIPE)"
    )

    cash: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Cash limit in cents"
    )

    active: bool = Field(
        default=False,
        description="Whether this is the project's active wallet"
    )

    identifier: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Gateway customer identifier"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Wallet creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last cash update timestamp"
    )


class PaymentMethod(BaseModel, table=True):
    """
    PaymentMethod - Funding instrument attached to a wallet

    Domain Rules:
    - Exactly one active payment method per wallet
    """

    __tablename__ = "payment_methods"
    __table_args__ = (
        Index('ix_payment_methods_wallet_id', 'wallet_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=id_column(),
        description="Unique payment method identifier (auto-increment)"
    )

    wallet_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("wallets.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Wallet"
    )

    identifier: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Gateway payment method identifier"
    )

    active: bool = Field(
        default=False,
        description="Whether this is the wallet's active payment method"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Registration timestamp"
    )
