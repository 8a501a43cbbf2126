"""Moderation use cases."""

from .get_post import GetPostRequest, GetPostUseCase
from .list_authors import (
    AuthorGroupView,
    ListAuthorsRequest,
    ListAuthorsResponse,
    ListAuthorsUseCase,
)
from .list_posts import ListPostsRequest, ListPostsResponse, ListPostsUseCase
from .set_post_deleted import SetPostDeletedRequest, SetPostDeletedUseCase
from .view import ModerationPostView, PostAuthorView

__all__ = [
    "AuthorGroupView",
    "GetPostRequest",
    "GetPostUseCase",
    "ListAuthorsRequest",
    "ListAuthorsResponse",
    "ListAuthorsUseCase",
    "ListPostsRequest",
    "ListPostsResponse",
    "ListPostsUseCase",
    "ModerationPostView",
    "PostAuthorView",
    "SetPostDeletedRequest",
    "SetPostDeletedUseCase",
]
