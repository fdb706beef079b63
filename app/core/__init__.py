"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

- Generic, reusable base classes (no domain-specific logic)
- Clear extension points for domain apps
- Infrastructure concerns separated from business logic

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logging, transactions)

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - AuthorizationError: Authorization failures
    - ConflictError / DuplicateError: State conflicts and uniqueness violations

Exception Handlers (import from core.exception_handlers):
    - application_exception_handler: DRF handler rendering application errors

Views (import from core.views):
    - health_check: Liveness/readiness endpoint
"""
