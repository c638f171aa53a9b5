"""
Core Application - Infrastructure & Base Classes

Generic building blocks shared by domain apps. Nothing here knows about
receivables.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Model Mixins (import from core.model_mixins):
    - UUIDPrimaryKeyMixin: UUID as primary key

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - ConflictError: State conflicts (immutable records, lock contention)

Views (import from core.views):
    - health_check: Liveness/readiness endpoint
"""
