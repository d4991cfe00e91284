"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError        (application.py)
    │   ├── ConfigurationError
    │   │   ├── HandlerNotFoundError
    │   │   ├── DuplicateHandlerError
    │   │   ├── OrphanValidatorError
    │   │   └── PipelineContractError
    │   └── ValidationError
    ├── DomainError             (domain.py)
    │   ├── InvariantViolationError
    │   ├── NotFoundError
    │   └── ConflictError
    └── InfrastructureError     (infrastructure.py)
        ├── ExternalServiceError
        ├── RollbackError
        └── CommitError         (category: consistency)

Cancellation (:class:`asyncio.CancelledError`) is not part of the hierarchy.
"""

from mp_mediator.kernel.errors.application import (
    ApplicationError,
    ConfigurationError,
    DuplicateHandlerError,
    HandlerNotFoundError,
    OrphanValidatorError,
    PipelineContractError,
    ValidationError,
)
from mp_mediator.kernel.errors.base import BaseError, ErrorCategory, classify
from mp_mediator.kernel.errors.domain import (
    ConflictError,
    DomainError,
    InvariantViolationError,
    NotFoundError,
)
from mp_mediator.kernel.errors.infrastructure import (
    CommitError,
    ExternalServiceError,
    InfrastructureError,
    RollbackError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "CommitError",
    "ConfigurationError",
    "ConflictError",
    "DomainError",
    "DuplicateHandlerError",
    "ErrorCategory",
    "ExternalServiceError",
    "HandlerNotFoundError",
    "InfrastructureError",
    "InvariantViolationError",
    "NotFoundError",
    "OrphanValidatorError",
    "PipelineContractError",
    "RollbackError",
    "ValidationError",
    "classify",
]
