import os
from decimal import Decimal

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers every table on SQLModel.metadata
from src.domain import Contract, Project, Task, Wallet, WalletType


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Test database engine; TEST_DB_URI points it at PostgreSQL instead of a SQLite file"""
    test_db_url = os.environ.get(
        "TEST_DB_URI", f"sqlite+aiosqlite:///{tmp_path / 'settlement_test.db'}"
    )

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def project_setup(db_session):
    """
    Project mihai/test with 4% project and 1% contributor commission,
    john contracted as DEV at 120 EUR/h, one 60-minute task assigned to him
    and a FAKE wallet with 500 EUR
    """
    project = Project(
        repo_full_name="mihai/test",
        provider="github",
        project_percentage=Decimal(4),
        contributor_percentage=Decimal(1),
    )
    contract = Contract(
        repo_full_name="mihai/test",
        contributor_username="john",
        provider="github",
        role="DEV",
        hourly_rate=Decimal(12000),
    )
    task = Task(
        issue_id="42",
        repo_full_name="mihai/test",
        provider="github",
        role="DEV",
        assignee="john",
        estimation_minutes=60,
    )
    wallet = Wallet(
        repo_full_name="mihai/test",
        provider="github",
        type=WalletType.FAKE,
        cash=Decimal(50000),
        active=True,
        identifier="fake_wallet_mihai",
    )
    db_session.add_all([project, contract, task, wallet])
    await db_session.commit()

    return {"project": project, "contract": contract, "task": task, "wallet": wallet}
