"""Shared fixtures: a throwaway SQLite database per test plus both FastAPI apps
wired to it."""

import os

# must be set before any service module builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shared.core import auth
from shared.core.database import Base, get_db, make_engine
from shared.core.schemas import AdminToken
from shared.models.admin_login_session import AdminLoginSession
from shared.models.admins import Admins
from shared.utils.enums import AdminRole
from partner_service.app.crud.partners import verification_workflow as workflow
from partner_service.app.models.partners import Partner, ServiceablePincode

DEFAULT_PASSWORD = "Correct-Horse-42"


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'console.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _override(app, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def partner_app(session_factory):
    from partner_service.app.main import app
    _override(app, session_factory)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def auth_app(session_factory):
    from auth_service.app.main import app
    _override(app, session_factory)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(partner_app):
    return TestClient(partner_app)


@pytest.fixture
def auth_client(auth_app):
    return TestClient(auth_app)


@pytest.fixture
def make_admin(db):
    counter = {"n": 0}

    def _make(role: AdminRole = AdminRole.ADMIN, email: str | None = None,
              password: str = DEFAULT_PASSWORD, is_active: bool = True) -> Admins:
        counter["n"] += 1
        admin = Admins(
            email=email or f"{role.value}{counter['n']}@console.test",
            full_name=f"{role.value.replace('_', ' ').title()} {counter['n']}",
            role=role,
            is_active=is_active,
        )
        admin.set_password(password)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin

    return _make


@pytest.fixture
def issue_token(db):
    """Open a login session for ``admin`` and return (bearer token, session id)."""

    def _issue(admin: Admins, expires_minutes: int | None = None):
        session = AdminLoginSession(admin_id=admin.id, ip_address="127.0.0.1")
        db.add(session)
        db.commit()
        db.refresh(session)
        token = auth.create_access_token(
            {"admin_id": admin.id, "session_id": session.id,
             "role": admin.role.value, "email": admin.email},
            expires_minutes=expires_minutes,
        )
        return token, session.id

    return _issue


@pytest.fixture
def headers_for(make_admin, issue_token):
    def _headers(role: AdminRole = AdminRole.ADMIN) -> dict:
        token, _ = issue_token(make_admin(role))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def reviewer(make_admin) -> AdminToken:
    admin = make_admin(AdminRole.ADMIN)
    return AdminToken(admin_id=admin.id, session_id="test-session", role=admin.role)


@pytest.fixture
def super_admin(make_admin) -> AdminToken:
    admin = make_admin(AdminRole.SUPER_ADMIN)
    return AdminToken(admin_id=admin.id, session_id="test-session", role=admin.role)


@pytest.fixture
def make_partner(db):
    counter = {"n": 0}

    def _make(is_active: bool = True, pincodes=(), **fields) -> Partner:
        counter["n"] += 1
        n = counter["n"]
        partner = Partner(
            email=fields.pop("email", f"partner{n}@resale.test"),
            full_name=fields.pop("full_name", f"Partner {n}"),
            phone=fields.pop("phone", f"+91900000{n:04d}"),
            company_name=fields.pop("company_name", f"Resale Co {n}"),
            is_active=is_active,
            **fields,
        )
        db.add(partner)
        db.flush()
        for code, city in pincodes:
            db.add(ServiceablePincode(partner_id=partner.id, pincode=code, city=city))
        db.commit()
        db.refresh(partner)
        return partner

    return _make


@pytest.fixture
def approved_partner(db, make_partner, reviewer):
    partner = make_partner()
    return workflow.approve_partner(db, partner.id, reviewer, "Documents verified")


@pytest.fixture
def rejected_partner(db, make_partner, reviewer):
    partner = make_partner()
    return workflow.reject_partner(db, partner.id, reviewer, "Invalid documents")
