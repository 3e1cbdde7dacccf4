# Overview: Flask CLI command groups for schema bootstrap, seeding and catalog inspection.

# backend/store_management/cli.py
# Commands Legend:
# Prereqs:
# - Activate your virtualenv and install the project (pip install -e .).
# - Use: flask --app store_management <group> <command> [options]
#
# Schema:
# - flask --app store_management db init
#   Create all tables (idempotent).
# - flask --app store_management db reset --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
# - flask --app store_management db seed [--force]
#   Create the demo company (code 1) if it does not exist yet.
#   Skipped when SEED_DEMO_DATA=0 unless --force is given.
#
# Catalog:
# - flask --app store_management companies list
# - flask --app store_management companies create --name "Acme" --code 100
# - flask --app store_management stores list [--company-code 100]
# - flask --app store_management stores create --name "Acme Store" --code 200 --company-code 100 [--address "..."]
# - flask --app store_management products list [--store-code 200] [--company-code 100]
# - flask --app store_management products create --name "Widget" --code 300 --price 9.99 --store-code 200

import click
from flask import current_app
from flask.cli import with_appcontext

from .container import build_services
from .dtos import CreateCompanyDto, CreateProductDto, CreateStoreDto
from .errors import StoreManagementError
from .extensions import db

DEMO_COMPANY_NAME = "Demo Company"
DEMO_COMPANY_CODE = 1


def _payload(**values) -> dict:
    return {k: v for k, v in values.items() if v is not None}


@click.group('db')
def db_group():
    """Schema bootstrap and demo data commands."""


@db_group.command('init')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database schema is ready.")


@db_group.command('reset')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete.")


@db_group.command('seed')
@click.option('--force', is_flag=True, help='Seed even when SEED_DEMO_DATA is off')
@with_appcontext
def seed_db(force):
    """Seed the demo company."""
    if not (force or current_app.config.get("SEED_DEMO_DATA", True)):
        click.echo("SKIP Demo data disabled (SEED_DEMO_DATA=0).")
        return

    services = build_services()
    existing = services.companies.get_by_code(DEMO_COMPANY_CODE)
    if existing:
        click.echo(f"PASS Using existing company: {existing.name} (Code: {existing.code})")
        return

    company = services.companies.create(CreateCompanyDto(name=DEMO_COMPANY_NAME, code=DEMO_COMPANY_CODE))
    click.echo(f"PASS Created company: {company.name} (ID: {company.id}, Code: {company.code})")


@click.group('companies')
def companies_group():
    """Company (tenant) commands."""


@companies_group.command('list')
@with_appcontext
def list_companies():
    """List all companies."""
    companies = build_services().companies.get_all()

    if not companies:
        click.echo("No companies found.")
        return

    click.echo("\n" + "="*72)
    click.echo(f"{'Code':<8} {'Name':<40} {'Active':<8} {'ID'}")
    click.echo("="*72)
    for company in companies:
        active_str = "Yes" if company.is_active else "No"
        click.echo(f"{company.code:<8} {company.name:<40} {active_str:<8} {company.id}")
    click.echo("="*72 + "\n")


@companies_group.command('create')
@click.option('--name', required=True, help='Company name')
@click.option('--code', required=True, type=int, help='Company code (globally unique)')
@with_appcontext
def create_company_cli(name, code):
    """Create a new company."""
    try:
        dto = CreateCompanyDto.from_payload(_payload(name=name, code=code))
        company = build_services().companies.create(dto)
    except StoreManagementError as e:
        click.echo(f"FAIL {e}")
        return

    click.echo(f"PASS Created company: {company.name} (ID: {company.id}, Code: {company.code})")


@click.group('stores')
def stores_group():
    """Store commands."""


@stores_group.command('list')
@click.option('--company-code', type=int, help='Only stores of this company')
@with_appcontext
def list_stores(company_code):
    """List stores, optionally for one company."""
    services = build_services()
    try:
        stores = (
            services.stores.get_by_company_code(company_code)
            if company_code is not None
            else services.stores.get_all()
        )
    except StoreManagementError as e:
        click.echo(f"FAIL {e}")
        return

    if not stores:
        click.echo("No stores found.")
        return

    for store in stores:
        active_str = "Yes" if store.is_active else "No"
        click.echo(f"{store.company_code:<8} {store.code:<8} {store.name:<40} {active_str}")


@stores_group.command('create')
@click.option('--name', required=True, help='Store name')
@click.option('--code', required=True, type=int, help='Store code (unique within the company)')
@click.option('--company-code', required=True, type=int, help='Owning company code')
@click.option('--address', help='Street address')
@with_appcontext
def create_store_cli(name, code, company_code, address):
    """Create a store under a company."""
    try:
        dto = CreateStoreDto.from_payload(
            _payload(name=name, code=code, company_code=company_code, address=address)
        )
        store = build_services().stores.create(dto)
    except StoreManagementError as e:
        click.echo(f"FAIL {e}")
        return

    click.echo(f"PASS Created store: {store.name} (Code: {store.code}, Company: {store.company_code})")


@click.group('products')
def products_group():
    """Product commands."""


@products_group.command('list')
@click.option('--store-code', type=int, help='Only products of this store')
@click.option('--company-code', type=int, help='Company of --store-code when the code is shared')
@with_appcontext
def list_products(store_code, company_code):
    """List products, optionally for one store."""
    services = build_services()
    try:
        products = (
            services.products.get_by_store_code(store_code, company_code=company_code)
            if store_code is not None
            else services.products.get_all()
        )
    except StoreManagementError as e:
        click.echo(f"FAIL {e}")
        return

    if not products:
        click.echo("No products found.")
        return

    for product in products:
        click.echo(f"{product.store_code:<8} {product.code:<8} {product.name:<40} {product.price:>12.2f}")


@products_group.command('create')
@click.option('--name', required=True, help='Product name')
@click.option('--code', required=True, type=int, help='Product code (unique within the store)')
@click.option('--price', required=True, help='Price, two decimals')
@click.option('--store-code', required=True, type=int, help='Owning store code')
@click.option('--company-code', type=int, help='Company of --store-code when the code is shared')
@click.option('--description', help='Free text description')
@with_appcontext
def create_product_cli(name, code, price, store_code, company_code, description):
    """Create a product in a store."""
    try:
        dto = CreateProductDto.from_payload(
            _payload(
                name=name,
                code=code,
                price=price,
                store_code=store_code,
                company_code=company_code,
                description=description,
            )
        )
        product = build_services().products.create(dto)
    except StoreManagementError as e:
        click.echo(f"FAIL {e}")
        return

    click.echo(f"PASS Created product: {product.name} (Code: {product.code}, Price: {product.price:.2f})")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(db_group)
    app.cli.add_command(companies_group)
    app.cli.add_command(stores_group)
    app.cli.add_command(products_group)
