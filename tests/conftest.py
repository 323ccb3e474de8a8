"""
Pytest configuration and fixtures for the AssetVerse API
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from assetverse.database import Base, get_db, transaction
from assetverse.services.container import Services, get_checkout_gateway
from assetverse.utils.auth import create_access_token
from main import app


class FakeCheckoutGateway:
    """Stands in for the payment provider"""

    def __init__(self):
        self.sessions = []

    def create_checkout_session(self, package_name, price, employee_limit, tracking_id=None):
        tracking_id = tracking_id or f"trk-{len(self.sessions) + 1}"
        self.sessions.append({
            "package_name": package_name,
            "price": price,
            "employee_limit": employee_limit,
            "tracking_id": tracking_id,
        })
        return {"url": f"https://checkout.test/session/{tracking_id}", "tracking_id": tracking_id}


@pytest.fixture
def engine(tmp_path):
    """File backed SQLite so separate sessions use separate connections"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'assetverse_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def services(db):
    svc = Services(db)
    with transaction(db):
        svc.packages.seed_packages()
    return svc


@pytest.fixture
def make_hr(services):
    """Register an HR, optionally with a custom employee ceiling"""
    def _make(email="hr@x.com", company_name="X Corp", employees_limit=None):
        with transaction(services.db):
            user = services.users.register(
                name=f"HR {email}", email=email, role="hr",
                company_name=company_name, company_logo="https://img.test/logo.png",
            )
            if employees_limit is not None:
                services.packages.apply_package(email, "Custom", employees_limit, 0)
        return user
    return _make


@pytest.fixture
def make_employee(services):
    def _make(email="e@x.com", name="E"):
        with transaction(services.db):
            return services.users.register(name=name, email=email, role="employee")
    return _make


@pytest.fixture
def make_asset(services):
    def _make(hr_email="hr@x.com", quantity=1, product_type="returnable", name="Laptop", company_name="X Corp"):
        with transaction(services.db):
            return services.inventory.create_asset(
                product_name=name,
                product_image="https://img.test/asset.png",
                product_type=product_type,
                hr_email=hr_email,
                company_name=company_name,
                available_quantity=quantity,
            )
    return _make


@pytest.fixture
def affiliate(services):
    def _affiliate(hr_email, employee_email, employee_name="E"):
        with transaction(services.db):
            return services.affiliations.affiliate(hr_email, employee_email, employee_name, "X Corp")
    return _affiliate


@pytest.fixture
def fake_gateway():
    return FakeCheckoutGateway()


@pytest.fixture
def client(session_factory, fake_gateway):
    """FastAPI test client bound to the per-test database"""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_checkout_gateway] = lambda: fake_gateway

    session = session_factory()
    with transaction(session):
        Services(session).packages.seed_packages()
    session.close()

    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Bearer header for a principal email"""
    def _headers(email):
        token = create_access_token({"email": email})
        return {"Authorization": f"Bearer {token}"}
    return _headers
