"""
Pytest fixtures for store_management tests.

Provides an in-memory SQLite app, a clean session per test, the wired
service container and a small Acme catalog (company 100 / store 200 / product 300).
"""

from decimal import Decimal

import pytest

from store_management import create_app
from store_management.container import build_services
from store_management.dtos import CreateCompanyDto, CreateProductDto, CreateStoreDto
from store_management.extensions import db


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'LOG_LEVEL': 'DEBUG',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def services(db_session):
    """Repositories, unit of work and services bound to the test session."""
    return build_services(db_session)


@pytest.fixture(scope='function')
def runner(app):
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def acme(services):
    """Company Acme (code 100)."""
    return services.companies.create(CreateCompanyDto(name="Acme", code=100))


@pytest.fixture(scope='function')
def globex(services):
    """Company Globex (code 500), second tenant."""
    return services.companies.create(CreateCompanyDto(name="Globex", code=500))


@pytest.fixture(scope='function')
def acme_store(services, acme):
    """Store 200 under Acme."""
    return services.stores.create(
        CreateStoreDto(name="Acme Downtown", code=200, company_code=acme.code, address="1 Main St")
    )


@pytest.fixture(scope='function')
def widget(services, acme_store):
    """Product 300 in the Acme store, priced 9.99."""
    return services.products.create(
        CreateProductDto(name="Widget", code=300, price=Decimal("9.99"), store_code=acme_store.code)
    )
