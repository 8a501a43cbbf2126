"""Reaction use cases."""

from .clear_reaction import (
    ClearReactionRequest,
    ClearReactionResponse,
    ClearReactionUseCase,
)
from .get_reactions import GetReactionsRequest, GetReactionsResponse, GetReactionsUseCase
from .set_reaction import SetReactionRequest, SetReactionResponse, SetReactionUseCase

__all__ = [
    "ClearReactionRequest",
    "ClearReactionResponse",
    "ClearReactionUseCase",
    "GetReactionsRequest",
    "GetReactionsResponse",
    "GetReactionsUseCase",
    "SetReactionRequest",
    "SetReactionResponse",
    "SetReactionUseCase",
]
