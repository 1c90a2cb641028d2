"""Tests for the query layer exceptions."""

import pytest
from sqlalchemy.exc import OperationalError

from roster.exceptions import AppException, InvalidPageRequest, StoreFailure


class TestExceptions:
    """Test exception attributes and hierarchy."""

    def test_invalid_page_request(self):
        ex = InvalidPageRequest("Page size must be positive, got 0")

        assert isinstance(ex, AppException)
        assert ex.message == "Page size must be positive, got 0"
        assert str(ex) == ex.message

    def test_store_failure_default_operation(self):
        ex = StoreFailure("Connection failed")

        assert isinstance(ex, AppException)
        assert ex.operation == "query"
        assert ex.message == "Connection failed"

    def test_store_failure_chains_cause(self):
        orig = OperationalError("SELECT 1", params=None, orig=Exception("refused"))

        with pytest.raises(StoreFailure) as exc_info:
            try:
                raise orig
            except OperationalError as e:
                raise StoreFailure("Count query failed", operation="count") from e

        assert exc_info.value.operation == "count"
        assert exc_info.value.__cause__ is orig
