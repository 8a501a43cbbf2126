"""Caller identity.

Historical entries were written under two identity models: anonymous
visitor keys first, authenticated user ids later. Both can coexist on one
caller (a signed-in user whose browser still sends its visitor key), so an
identity carries both optional variants and every ownership check tests
each of them.
"""

from pydantic import model_validator

from guestbook.domain.value.common import ValueObject
from guestbook.domain.value.identifiers import UserId
from guestbook.domain.value.types import VisitorKey


class Identity(ValueObject):
    """Resolved caller identity.

    Attributes:
        user_id: Authenticated user id (takes precedence when acting)
        visitor_key: Anonymous visitor key, if the client sent a valid one
        email: Verified email from the identity provider
        display_name: Display name hint from the identity provider
        is_admin: Whether the verified email matches the configured admin
    """

    user_id: UserId | None = None
    visitor_key: VisitorKey | None = None
    email: str | None = None
    display_name: str | None = None
    is_admin: bool = False

    @model_validator(mode="after")
    def require_one_variant(self) -> "Identity":
        """An identity must carry at least one of user id / visitor key."""
        if self.user_id is None and self.visitor_key is None:
            raise ValueError("Identity requires a user id or a visitor key")
        return self

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def key(self) -> str:
        """Acting key: user id when authenticated, else the visitor key."""
        if self.user_id is not None:
            return str(self.user_id)
        return str(self.visitor_key)

    @property
    def keys(self) -> list[str]:
        """All keys this caller may have written under, in precedence order."""
        keys = []
        if self.user_id is not None:
            keys.append(str(self.user_id))
        if self.visitor_key is not None:
            keys.append(self.visitor_key.root)
        return keys

    def owns(self, author_user_id: UserId | None, author_key: str | None) -> bool:
        """Check ownership of a record against both identity variants."""
        if self.user_id is not None and author_user_id == self.user_id:
            return True
        return author_key is not None and author_key in self.keys
