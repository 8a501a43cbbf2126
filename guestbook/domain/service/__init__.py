"""Domain services."""

from .base import Service
from .content_policy import ContentPolicy
from .entry_service import EntryPage, EntryService
from .identity_service import IdentityService, ViewerSummary
from .jwt_service import JWTService
from .moderation_service import ModerationPage, ModerationService
from .rate_limit_service import RateLimitService
from .reaction_service import ReactionService

__all__ = [
    "ContentPolicy",
    "EntryPage",
    "EntryService",
    "IdentityService",
    "JWTService",
    "ModerationPage",
    "ModerationService",
    "RateLimitService",
    "ReactionService",
    "Service",
    "ViewerSummary",
]
