"""Конфігурація pytest для тестів."""

import shutil
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from backend.core.database import get_db
from backend.core.security import get_password_hash
from backend.models import Base, Organization, Profile
from shared.enums import UserRole

TEST_PASSWORD = "password123"


@pytest.fixture
def temp_db():
    """
    Створює тимчасову базу даних для тестів.

    Yields:
        Шлях до тимчасової бази даних
    """
    temp_dir = tempfile.mkdtemp()
    db_path = Path(temp_dir) / "test.db"
    db_url = f"sqlite:///{db_path}"

    engine = create_engine(db_url, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    engine.dispose()

    yield db_url

    # Cleanup
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def session_factory(temp_db):
    """Фабрика сесій на тимчасовій базі (спільна для тестів та API)."""
    engine = create_engine(temp_db, connect_args={"check_same_thread": False})
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
    yield factory
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    """
    Створює сесію бази даних для тестів.

    Yields:
        Сесія SQLAlchemy
    """
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def _make_profile(db, organization, email, full_name, role=UserRole.WORKER):
    profile = Profile(
        email=email,
        full_name=full_name,
        role=role,
        organization_id=organization.id if organization else None,
        password_hash=get_password_hash(TEST_PASSWORD),
        is_active=True,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def organization(db_session):
    """Тестова організація."""
    org = Organization(name="Impresa Rossi", slug="impresa-rossi")
    db_session.add(org)
    db_session.commit()
    db_session.refresh(org)
    return org


@pytest.fixture
def other_organization(db_session):
    """Друга організація для перевірки меж тенанта."""
    org = Organization(name="Costruzioni Bianchi", slug="costruzioni-bianchi")
    db_session.add(org)
    db_session.commit()
    db_session.refresh(org)
    return org


@pytest.fixture
def admin(db_session, organization):
    """Адміністратор тестової організації."""
    return _make_profile(db_session, organization, "admin@rossi.it", "Anna Rossi", UserRole.ADMIN)


@pytest.fixture
def worker(db_session, organization):
    """Працівник тестової організації."""
    return _make_profile(db_session, organization, "mario@rossi.it", "Mario Verdi")


@pytest.fixture
def second_worker(db_session, organization):
    """Ще один працівник тестової організації."""
    return _make_profile(db_session, organization, "luca@rossi.it", "Luca Neri")


@pytest.fixture
def other_admin(db_session, other_organization):
    """Адміністратор іншої організації."""
    return _make_profile(db_session, other_organization, "admin@bianchi.it", "Paolo Bianchi", UserRole.ADMIN)


@pytest.fixture
def test_client(session_factory):
    """
    TestClient з підміненою залежністю get_db.

    Кожен запит отримує власну сесію на тимчасовій базі.
    """
    from fastapi.testclient import TestClient

    from backend.main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def login(client, email: str, password: str = TEST_PASSWORD) -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Auth failed: {response.text}"
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def login_as(test_client):
    """Повертає функцію, що видає заголовки авторизації для користувача."""

    def _login(profile, password: str = TEST_PASSWORD) -> dict:
        return login(test_client, profile.email, password)

    return _login


@pytest.fixture
def admin_headers(test_client, admin):
    """Заголовки авторизації адміністратора."""
    return login(test_client, admin.email)


@pytest.fixture
def worker_headers(test_client, worker):
    """Заголовки авторизації працівника."""
    return login(test_client, worker.email)
