# Overview: Pytest coverage for company create / update / patch / delete semantics.

import pytest

from store_management.dtos import CreateCompanyDto, PatchCompanyDto, UpdateCompanyDto
from store_management.errors import ConstraintViolationError, NotFoundError, ValidationError
from store_management.models import Company, Product, Store


class TestCompanyCreate:
    """Company creation."""

    def test_create_assigns_identity_and_audit_fields(self, services):
        """New company gets an id, created_at, and no updated_at."""
        company = services.companies.create(CreateCompanyDto(name="Acme", code=100))

        assert company.id is not None
        assert company.name == "Acme"
        assert company.code == 100
        assert company.is_active is True
        assert company.created_at is not None
        assert company.updated_at is None

    def test_created_company_is_readable(self, services, acme):
        """A committed company is visible by id and by code."""
        assert services.companies.get_by_id(acme.id).code == 100
        assert services.companies.get_by_code(100).id == acme.id
        assert services.companies.exists(acme.id)
        assert services.companies.exists_by_code(100)

    def test_duplicate_code_rejected(self, services, db_session, acme):
        """Company codes are globally unique."""
        with pytest.raises(ConstraintViolationError):
            services.companies.create(CreateCompanyDto(name="Other", code=100))

        assert db_session.query(Company).count() == 1

    def test_create_from_payload_rejects_missing_fields(self):
        """Payload without code fails validation before touching storage."""
        with pytest.raises(ValidationError, match="Missing required fields: code"):
            CreateCompanyDto.from_payload({"name": "Acme"})

    def test_overlong_name_rejected(self, services, db_session):
        """A 300 character name never reaches storage."""
        with pytest.raises(ValidationError, match="name exceeds max length 255"):
            services.companies.create(CreateCompanyDto(name="x" * 300, code=1))

        assert db_session.query(Company).count() == 0

    def test_blank_name_rejected(self, services, db_session):
        with pytest.raises(ValidationError, match="name cannot be blank"):
            services.companies.create(CreateCompanyDto(name="", code=1))

        assert db_session.query(Company).count() == 0


class TestCompanyReads:
    """Company queries."""

    def test_get_all_ordered_by_code(self, services):
        services.companies.create(CreateCompanyDto(name="Zed", code=300))
        services.companies.create(CreateCompanyDto(name="Alpha", code=100))

        assert [c.code for c in services.companies.get_all()] == [100, 300]

    def test_get_active_skips_inactive(self, services):
        services.companies.create(CreateCompanyDto(name="On", code=1))
        services.companies.create(CreateCompanyDto(name="Off", code=2, is_active=False))

        assert [c.code for c in services.companies.get_active()] == [1]

    def test_unknown_lookups_return_none(self, services):
        """Missing rows come back as None, not as errors."""
        assert services.companies.get_by_code(404) is None
        assert services.companies.get_by_id("not-a-uuid") is None
        assert services.companies.exists_by_code(404) is False

    def test_get_with_stores(self, services, acme, acme_store):
        """Child stores are included only when asked for."""
        plain = services.companies.get_by_id(acme.id)
        loaded = services.companies.get_with_stores_by_code(100)

        assert plain.stores is None
        assert [s.code for s in loaded.stores] == [200]
        assert loaded.to_dict()["stores"][0]["company_code"] == 100


class TestCompanyUpdate:
    """Full update and patch."""

    def test_update_by_code_changes_code(self, services, acme):
        """Company 100 can be renumbered to 101."""
        updated = services.companies.update_by_code(
            100, UpdateCompanyDto(name="Acme Corp", code=101, is_active=True)
        )

        assert updated.code == 101
        assert updated.name == "Acme Corp"
        assert updated.updated_at is not None
        assert services.companies.get_by_code(100) is None
        assert services.companies.get_by_code(101).id == acme.id

    def test_update_with_identical_values_still_stamps(self, services, acme):
        """Every update counts as a modification."""
        updated = services.companies.update(
            acme.id, UpdateCompanyDto(name="Acme", code=100, is_active=True)
        )

        assert updated.updated_at is not None
        assert updated.updated_at >= updated.created_at

    def test_update_to_taken_code_rejected(self, services, acme, globex):
        with pytest.raises(ConstraintViolationError, match="Company code 500 already exists"):
            services.companies.update(acme.id, UpdateCompanyDto(name="Acme", code=500, is_active=True))

        assert services.companies.get_by_id(acme.id).code == 100

    def test_update_unknown_company(self, services):
        with pytest.raises(NotFoundError):
            services.companies.update_by_code(999, UpdateCompanyDto(name="X", code=999, is_active=True))

    def test_patch_touches_only_provided_fields(self, services, acme):
        """Patching the name leaves code and is_active alone."""
        patched = services.companies.patch(acme.id, PatchCompanyDto(name="Acme Patched"))

        assert patched.name == "Acme Patched"
        assert patched.code == 100
        assert patched.is_active is True
        assert patched.updated_at is not None

    def test_patch_by_code_deactivates(self, services, acme):
        patched = services.companies.patch_by_code(100, PatchCompanyDto.from_payload({"is_active": False}))

        assert patched.is_active is False
        assert patched.name == "Acme"

    def test_patch_keeping_own_code_is_allowed(self, services, acme):
        patched = services.companies.patch(acme.id, PatchCompanyDto(code=100))

        assert patched.code == 100

    def test_patch_payload_must_not_be_empty(self):
        with pytest.raises(ValidationError, match="At least one field"):
            PatchCompanyDto.from_payload({})


class TestCompanyDelete:
    """Deletion cascades to stores and products."""

    def test_delete_cascades(self, services, db_session, acme, acme_store, widget):
        services.companies.delete(acme.id)

        assert services.companies.get_by_id(acme.id) is None
        assert services.stores.get_by_id(acme_store.id) is None
        assert services.products.get_by_id(widget.id) is None
        assert db_session.query(Store).count() == 0
        assert db_session.query(Product).count() == 0

    def test_delete_leaves_other_tenants(self, services, acme, globex):
        services.companies.delete_by_code(100)

        assert [c.code for c in services.companies.get_all()] == [500]

    def test_delete_unknown_company(self, services):
        with pytest.raises(NotFoundError, match="Company with code 7 not found"):
            services.companies.delete_by_code(7)
