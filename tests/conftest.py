"""
Shared fixtures: in-memory database, seeded company and users, API client
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from supplycast.core.config import Settings
from supplycast.core.database import Base, build_engine, get_db
from supplycast.main import app
from supplycast.models import Company, DemandObservation, InventoryItem, Supplier
from supplycast.repositories.company_repository import create_company, create_user
from supplycast.services.auth_service import AuthService

TODAY = date(2024, 1, 15)
NOW = datetime(2024, 1, 15, 12, 0, 0)


def month_start(start: date, offset: int) -> date:
    months = start.month - 1 + offset
    return date(start.year + months // 12, months % 12 + 1, 1)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    test_engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def settings():
    return Settings(SCHEDULER_ENABLED=False)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def company(db_session):
    return create_company(db_session, "Acme Supplies")


@pytest.fixture
def admin_user(db_session, company):
    return create_user(
        db_session,
        company_id=company.id,
        username="admin",
        email="admin@acme.test",
        password="secret123",
        full_name="Acme Admin",
        is_admin=True
    )


@pytest.fixture
def member_user(db_session, company):
    user = create_user(
        db_session,
        company_id=company.id,
        username="planner",
        email="planner@acme.test",
        password="secret123"
    )
    user.is_approved = True
    db_session.commit()
    return user


@pytest.fixture
def supplier(db_session, company):
    supplier = Supplier(company_id=company.id, name="Widget Wholesale", email="orders@widgets.test")
    db_session.add(supplier)
    db_session.commit()
    db_session.refresh(supplier)
    return supplier


@pytest.fixture
def add_item(db_session, company):
    """Factory for inventory items of the seeded company."""
    def _add(sku, quantity=10, unit_cost=1.0, **kwargs):
        kwargs.setdefault("name", f"Item {sku}")
        kwargs.setdefault("last_updated", NOW)
        item = InventoryItem(company_id=company.id, sku=sku, quantity=quantity, unit_cost=unit_cost, **kwargs)
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item
    return _add


@pytest.fixture
def add_history(db_session, company):
    """Factory for monthly demand observations starting January 2023."""
    def _add(sku, values, start=date(2023, 1, 1), company_id=None):
        for offset, value in enumerate(values):
            db_session.add(DemandObservation(
                company_id=company_id or company.id,
                sku=sku,
                period_start=month_start(start, offset),
                demand=value
            ))
        db_session.commit()
    return _add


@pytest.fixture
def other_company(db_session):
    other = Company(name="Globex")
    db_session.add(other)
    db_session.commit()
    db_session.refresh(other)
    return other


@pytest.fixture
def client(session_factory):
    """API client bound to the test database; startup handlers are not run."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {AuthService.create_access_token(admin_user)}"}


@pytest.fixture
def member_headers(member_user):
    return {"Authorization": f"Bearer {AuthService.create_access_token(member_user)}"}
