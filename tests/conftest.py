import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gridtable.db import Base
from tests.models import Company, Contact


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def db_session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(bind=connection, autoflush=False, autocommit=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture()
def company(db_session):
    company = Company(name="Acme Corp")
    db_session.add(company)
    db_session.flush()
    return company


@pytest.fixture()
def contacts(db_session, company):
    """Five contacts inserted in a known order."""
    rows = [
        Contact(name="Alice", email="alice@acme.io", is_active=True, score=0, company_id=company.id),
        Contact(name="Bob", email="bob@example.com", is_active=False, score=7, notes="vip"),
        Contact(name="Carol", email="carol@acme.io", is_active=True, score=None),
        Contact(name="Dave", email=None, is_active=True, score=3),
        Contact(name="Eve_1", email="eve@example.org", is_active=False, score=12),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return rows
