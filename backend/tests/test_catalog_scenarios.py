# Overview: End-to-end catalog scenarios across company, store and product services.

from datetime import timedelta
from decimal import Decimal

import pytest

from store_management.dtos import (
    CreateCompanyDto,
    CreateProductDto,
    CreateStoreDto,
    PatchProductDto,
    UpdateCompanyDto,
)
from store_management.errors import ValidationError
from store_management.time_utils import utcnow


class TestCatalogScenarios:
    def test_acme_widget_round_trip(self, services):
        """Acme 100 -> store 200 -> Widget 300 at 9.99, found by codes."""
        services.companies.create(CreateCompanyDto(name="Acme", code=100))
        services.stores.create(CreateStoreDto(name="Acme Store", code=200, company_code=100))
        services.products.create(
            CreateProductDto(name="Widget", code=300, price=Decimal("9.99"), store_code=200)
        )

        widget = services.products.get_by_codes(200, 300)

        assert widget.name == "Widget"
        assert widget.price == Decimal("9.99")

    def test_created_entity_matches_later_read(self, services):
        """Create returns the same values a fresh read does, stamped close to now."""
        before = utcnow()
        created = services.companies.create(CreateCompanyDto(name="Acme", code=100))

        fetched = services.companies.get_by_id(created.id)

        assert created.id
        assert before - timedelta(seconds=1) <= created.created_at <= utcnow() + timedelta(seconds=1)
        assert fetched == created

    def test_company_code_renumbering(self, services, acme):
        services.companies.update(acme.id, UpdateCompanyDto(name="Acme", code=101, is_active=True))

        assert services.companies.get_by_code(100) is None
        assert services.companies.get_by_code(101).id == acme.id

    def test_store_under_missing_company(self, services, acme):
        with pytest.raises(ValidationError):
            services.stores.create(CreateStoreDto(name="Nowhere", code=1, company_code=9999))

        assert not services.stores.company_exists_by_code(9999)
        assert services.stores.get_all() == []

    def test_patch_changes_exactly_the_provided_fields(self, services, widget):
        """Two of seven product fields change, the other five keep their values."""
        before = services.products.get_by_id(widget.id)

        after = services.products.patch(widget.id, PatchProductDto(price=Decimal("12.00"), is_active=False))

        assert after.price == Decimal("12.00")
        assert after.is_active is False
        for field in ("name", "code", "description", "store_id", "created_at"):
            assert getattr(after, field) == getattr(before, field)
        assert before.updated_at is None
        assert after.updated_at is not None

    def test_company_delete_removes_whole_tree(self, services, acme, acme_store, widget):
        services.companies.delete(acme.id)

        assert not services.stores.exists(acme_store.id)
        assert not services.products.exists(widget.id)
        assert services.products.get_by_codes(200, 300) is None
