"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timezone
from typing import Generator, List, Sequence
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from orbit_ledger.api.main import create_app
from orbit_ledger.infrastructure.database.models import Base
from orbit_ledger.infrastructure.database.session import get_db
from orbit_ledger.domain.models import Transaction


REFERENCE_DATE = date(2024, 6, 15)


def make_transaction(
    txn_id: str,
    amount: float,
    type: str = "expense",
    category: str = "Food & Dining",
    day: date = REFERENCE_DATE,
    note: str = "",
) -> Transaction:
    return Transaction(
        id=txn_id,
        amount=amount,
        type=type,
        category=category,
        note=note,
        date=day,
        created_at=datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc),
    )


class InMemoryStore:
    """Transaction store double recording every saved list"""

    def __init__(self, transactions: Sequence[Transaction] = (), fail_saves: bool = False):
        self.transactions = list(transactions)
        self.fail_saves = fail_saves
        self.saved: List[List[Transaction]] = []

    def load_transactions(self) -> List[Transaction]:
        return list(self.transactions)

    def save_transactions(self, transactions: Sequence[Transaction]) -> bool:
        if self.fail_saves:
            return False
        self.transactions = list(transactions)
        self.saved.append(list(transactions))
        return True


@pytest.fixture
def session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """Session factory bound to a throwaway SQLite file for this test"""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Create test database and session"""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Three months of salary plus regular spending around June 2024"""
    transactions = []

    for i, month in enumerate((4, 5, 6)):
        transactions.append(
            make_transaction(f"salary_{i}", 3000, "income", "Salary", date(2024, month, 1))
        )
        transactions.append(
            make_transaction(f"rent_{i}", 1200, "expense", "Rent / Housing", date(2024, month, 3))
        )
        transactions.append(
            make_transaction(f"food_{i}", 300, "expense", "Food & Dining", date(2024, month, 10))
        )

    return transactions


@pytest.fixture
def make_txn():
    """Factory for transactions with sensible defaults"""
    return make_transaction


@pytest.fixture
def store_factory():
    """Factory for in-memory transaction stores"""
    return InMemoryStore
