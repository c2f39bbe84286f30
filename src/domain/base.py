"""Shared base for all table entities"""

import uuid
from sqlalchemy import BigInteger, Column, Integer
from sqlmodel import SQLModel

# SQLite only auto-increments INTEGER PRIMARY KEY columns.
IdType = BigInteger().with_variant(Integer(), "sqlite")


class BaseModel(SQLModel):
    pass


def generate_uuid() -> str:
    return uuid.uuid4().hex


def id_column() -> Column:
    """Auto-increment primary key column (a fresh Column per table)"""
    return Column(IdType, primary_key=True, autoincrement=True)
