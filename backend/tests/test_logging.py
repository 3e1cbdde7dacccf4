# Overview: Pytest coverage for logging configuration and service log output.

import logging

import pytest

from store_management.dtos import CreateCompanyDto
from store_management.errors import ConstraintViolationError
from store_management.logging_config import configure_logging


class TestLogging:
    def test_configure_logging_is_idempotent(self, app):
        logger = configure_logging(app)
        handlers = list(logger.handlers)

        configure_logging(app)

        assert logger.handlers == handlers

    def test_writes_are_logged(self, services, caplog):
        caplog.set_level(logging.INFO, logger="store_management")

        services.companies.create(CreateCompanyDto(name="Acme", code=100))

        assert any("Created company" in r.getMessage() for r in caplog.records)

    def test_rejected_duplicate_is_warned(self, services, acme, caplog):
        caplog.set_level(logging.INFO, logger="store_management")

        with pytest.raises(ConstraintViolationError):
            services.companies.create(CreateCompanyDto(name="Again", code=100))

        assert any(r.levelno == logging.WARNING for r in caplog.records)
