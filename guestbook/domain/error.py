"""Domain layer errors.

Every error carries a stable ``kind`` string that the interface layer
returns to callers unchanged.
"""


class DomainError(Exception):
    """Base domain error."""

    kind: str = "domain_error"


class ValidationError(DomainError):
    """Malformed input: empty or oversized content, too many links, bad ids."""

    kind = "validation_error"


class UnauthenticatedError(DomainError):
    """No identity could be resolved for an action that requires one."""

    kind = "unauthenticated"

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Identity required to {action}")


class ForbiddenError(DomainError):
    """Identity resolved but lacks ownership or admin rights."""

    kind = "forbidden"

    def __init__(self, resource: str, resource_id: str, identity_key: str | None):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"Identity {identity_key} is not allowed to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = "not_found"

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InvalidStateError(DomainError):
    """Acting on content whose state forbids it (e.g. a deleted parent)."""

    kind = "invalid_state"


class TooManyRequestsError(DomainError):
    """Rate-limit breach."""

    kind = "too_many_requests"

    def __init__(self, scope: str, limit: int, window_seconds: int):
        self.scope = scope
        self.limit = limit
        self.window_seconds = window_seconds
        super().__init__(
            f"Rate limit exceeded for {scope}: {limit} entries per {window_seconds}s"
        )


class StoreError(DomainError):
    """Opaque failure of the backing store. Details are never exposed."""

    kind = "store_error"
