"""
Test the catalog exceptions and the error pages they produce.
"""
import logging

from fastapi.testclient import TestClient

from locallibrary.core.config import Settings
from locallibrary.core.exceptions import APIException, NotFoundException, NotImplementedException
from locallibrary.logging.setup import get_logger


class TestExceptions:
    def test_not_found(self):
        exc = NotFoundException("Author not found")
        assert isinstance(exc, APIException)
        assert exc.status_code == 404
        assert exc.detail == "Author not found"
        assert exc.code == "not_found"

    def test_not_implemented(self):
        exc = NotImplementedException()
        assert exc.status_code == 501
        assert exc.code == "not_implemented"

    def test_missing_entity_logs_error_code(self, client: TestClient):
        records = []
        handler = logging.Handler()
        handler.emit = records.append
        error_logger = logging.getLogger("locallibrary.errors")
        error_logger.addHandler(handler)
        try:
            response = client.get("/catalog/genre/missing")
        finally:
            error_logger.removeHandler(handler)

        assert response.status_code == 404
        assert [record.code for record in records] == ["not_found"]


class TestSupport:
    def test_get_logger_returns_plain_logger(self):
        assert isinstance(get_logger("locallibrary.tests"), logging.Logger)

    def test_is_production(self):
        assert Settings(APP_ENV="production").is_production
        assert not Settings(APP_ENV="development").is_production
