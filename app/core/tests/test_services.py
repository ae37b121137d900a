"""
Tests for ServiceResult and BaseService.

These tests verify that:
- Failures carry an error_code the views can map to a status
- to_response produces the API error body
- handle_exception logs and keeps application error codes
- atomic rolls back on error
"""

import logging
from unittest.mock import patch

import pytest

from authentication.models import User
from authentication.tests.factories import UserFactory
from core.exceptions import BaseApplicationError, ExternalServiceError
from core.services import BaseService, ServiceResult


class DummyService(BaseService):
    pass


class TestServiceResult:
    def test_success_is_truthy(self):
        result = ServiceResult.success({"id": 1})

        assert result
        assert result.data == {"id": 1}
        assert result.error is None

    def test_failure_is_falsy(self):
        result = ServiceResult.failure("User not found", "USER_NOT_FOUND")

        assert not result
        assert result.data is None
        assert result.error_code == "USER_NOT_FOUND"

    def test_failure_response_body(self):
        result = ServiceResult.failure(
            "Invalid input", "INVALID", errors={"content": ["Required"]}
        )

        assert result.to_response() == {
            "error": "Invalid input",
            "error_code": "INVALID",
            "errors": {"content": ["Required"]},
        }

    def test_failure_response_without_code(self):
        assert ServiceResult.failure("Oops").to_response() == {"error": "Oops"}

    def test_map_transforms_success_only(self):
        assert ServiceResult.success(2).map(lambda x: x * 10).data == 20

        failed = ServiceResult.failure("no", "NO")
        assert failed.map(lambda x: x * 10) is failed

    def test_from_application_error_keeps_code(self):
        exc = ExternalServiceError("Gateway down", error_code="STRIPE_UNAVAILABLE")

        result = ServiceResult.from_exception(exc)

        assert result.error == "Gateway down"
        assert result.error_code == "STRIPE_UNAVAILABLE"

    def test_from_exception_code_override(self):
        exc = ExternalServiceError("Gateway down")

        result = ServiceResult.from_exception(exc, "PAYMENT_GATEWAY_ERROR")

        assert result.error_code == "PAYMENT_GATEWAY_ERROR"

    def test_from_plain_exception_uses_class_name(self):
        result = ServiceResult.from_exception(KeyError("missing"))

        assert result.error_code == "KEYERROR"


class TestBaseService:
    def test_logger_named_after_service(self):
        assert DummyService.get_logger().name == f"{__name__}.DummyService"

    def test_handle_exception_logs_and_fails(self):
        exc = BaseApplicationError("Broken", error_code="BROKEN")

        with patch.object(DummyService, "get_logger") as get_logger:
            result = DummyService.handle_exception(exc, "doing work")

        assert result.error_code == "BROKEN"
        logger = get_logger.return_value
        level, message = logger.log.call_args.args
        assert level == logging.ERROR
        assert message == "doing work: [BROKEN] Broken"

    @pytest.mark.django_db
    def test_atomic_rolls_back_on_error(self):
        user = UserFactory(coins=10)

        with pytest.raises(RuntimeError):
            with DummyService.atomic():
                User.objects.filter(pk=user.pk).update(coins=0)
                raise RuntimeError("abort")

        assert User.objects.get(pk=user.pk).coins == 10


class TestApplicationErrors:
    def test_to_dict_includes_details(self):
        exc = ExternalServiceError("Down", details={"service": "stripe"})

        assert exc.to_dict() == {
            "error": "Down",
            "error_code": "EXTERNAL_SERVICE_ERROR",
            "details": {"service": "stripe"},
        }

    def test_str_shows_code(self):
        assert str(BaseApplicationError("Boom")) == "[APPLICATION_ERROR] Boom"
