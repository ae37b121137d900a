"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by the domain apps (authentication, chat,
payments, houses). No business rules live here.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ExternalServiceError: Third-party service failures

Helpers (import from core.helpers):
    - parse_uuid / is_valid_uuid: identifier validation

Validators (import from core.validators):
    - FileSizeValidator, IMAGE_EXTENSIONS

Views (core.views):
    - health_check: /health/ endpoint

Note:
    Django models and model mixins are NOT imported here to avoid
    AppRegistryNotReady errors. Import them directly from their modules.
"""

from .exceptions import BaseApplicationError, ExternalServiceError
from .helpers import is_valid_uuid, parse_uuid
from .services import BaseService, ServiceResult

__all__ = [
    "BaseService",
    "ServiceResult",
    "BaseApplicationError",
    "ExternalServiceError",
    "is_valid_uuid",
    "parse_uuid",
]
