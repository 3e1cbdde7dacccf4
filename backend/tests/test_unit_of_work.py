# Overview: Pytest coverage for commit / rollback and audit timestamp stamping.

from decimal import Decimal

import pytest

from store_management.errors import ConstraintViolationError
from store_management.models import Company, Product
from store_management.repositories import CompanyRepository, ProductRepository
from store_management.unit_of_work import UnitOfWork


@pytest.fixture
def companies(db_session):
    return CompanyRepository(db_session)


@pytest.fixture
def uow(db_session):
    return UnitOfWork(db_session)


class TestCommit:
    """UnitOfWork.commit()"""

    def test_commit_returns_changed_row_count(self, companies, uow):
        companies.add(Company(name="A", code=1))
        companies.add(Company(name="B", code=2))

        assert uow.commit() == 2

    def test_commit_with_nothing_staged(self, uow):
        assert uow.commit() == 0

    def test_insert_stamps_created_at_only(self, companies, uow):
        company = companies.add(Company(name="A", code=1))
        uow.commit()

        assert company.created_at is not None
        assert company.updated_at is None

    def test_update_stamps_updated_at(self, companies, uow):
        company = companies.add(Company(name="A", code=1))
        uow.commit()
        created_at = company.created_at

        company.name = "A2"
        companies.update(company)
        assert uow.commit() == 1

        assert company.updated_at is not None
        assert company.updated_at >= created_at
        assert company.created_at == created_at

    def test_unchanged_entity_is_not_stamped(self, companies, uow):
        """Loading without modifying leaves updated_at null."""
        company = companies.add(Company(name="A", code=1))
        uow.commit()

        companies.get_by_code(1)
        uow.commit()

        assert company.updated_at is None

    def test_delete_counts_row(self, companies, uow):
        company = companies.add(Company(name="A", code=1))
        uow.commit()

        assert companies.delete(company.id) is True
        assert uow.commit() == 1
        assert companies.count() == 0

    def test_unique_violation_on_commit_is_translated(self, db_session, companies, uow):
        """Duplicates that reach the database become ConstraintViolationError."""
        first = companies.add(Company(name="A", code=1))
        uow.commit()

        first.code = 2
        db_session.add(Company(name="B", code=2))
        with pytest.raises(ConstraintViolationError):
            uow.commit()

        assert companies.count() == 1
        assert companies.get_by_code(1) is not None


class TestRollback:
    """UnitOfWork.rollback()"""

    def test_rollback_discards_pending_insert(self, db_session, companies, uow):
        companies.add(Company(name="A", code=1))
        uow.rollback()

        assert companies.count() == 0

    def test_rollback_restores_committed_values(self, companies, uow):
        company = companies.add(Company(name="A", code=1))
        uow.commit()

        company.name = "Changed"
        companies.update(company)
        uow.rollback()

        assert company.name == "A"
        assert company.updated_at is None

    def test_rollback_undoes_delete(self, companies, uow):
        company = companies.add(Company(name="A", code=1))
        uow.commit()

        companies.delete(company.id)
        uow.rollback()

        assert companies.exists(company.id)

    def test_rollback_across_repositories(self, db_session, companies, uow, acme_store):
        products = ProductRepository(db_session)
        companies.add(Company(name="Temp", code=2))
        products.add(Product(name="Temp", code=1, price=Decimal("1.00"), store_id=acme_store.id))

        uow.rollback()

        assert companies.get_by_code(2) is None
        assert products.count() == 0
