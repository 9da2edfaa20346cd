"""
Pytest configuration and fixtures for ledger_service tests.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ledger_service.db.database import Base
from ledger_service.models import users, groups, expenses, settlements  # noqa: F401
from ledger_service.models.users import User
from ledger_service.schemas.group_schema import GroupCreate
from ledger_service.services.group_service import create_group


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared across connections"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Database session for service tests."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session):
    """Create a user row and return it"""
    def _make_user(name, email=None, image_url=None):
        user = User(name=name, email=email, image_url=image_url)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("Alice", "alice@example.com", "https://img.example.com/alice.png")


@pytest.fixture
def bob(make_user):
    return make_user("Bob", "bob@example.com")


@pytest.fixture
def carol(make_user):
    return make_user("Carol", "carol@example.com")


@pytest.fixture
def trio_group(db_session, alice, bob, carol):
    """Group of Alice (admin), Bob and Carol"""
    return create_group(
        db_session,
        GroupCreate(name="Flat", description="Shared flat", members=[bob.id, carol.id]),
        alice.id,
    )

