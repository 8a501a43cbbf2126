"""Reaction routes."""

from typing import Union
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from guestbook.application.usecase.reaction import (
    ClearReactionRequest,
    ClearReactionResponse,
    ClearReactionUseCase,
    GetReactionsRequest,
    GetReactionsResponse,
    GetReactionsUseCase,
    SetReactionRequest,
    SetReactionResponse,
    SetReactionUseCase,
)
from guestbook.domain.error import ValidationError
from guestbook.domain.service import IdentityService
from guestbook.interface.api.credentials import Credentials

router = APIRouter(prefix="/reactions", tags=["reactions"], route_class=DishkaRoute)

MAX_IDS_PER_REQUEST = 200


class SetReactionAPIRequest(BaseModel):
    """API request for setting a reaction.

    ``value`` is "like", "dislike", 1, -1, or 0 to clear.
    """

    entry_id: UUID
    value: Union[int, str]


@router.get("", response_model=GetReactionsResponse)
async def get_reactions(
    ids: str,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    get_reactions_use_case: FromDishka[GetReactionsUseCase],
) -> GetReactionsResponse:
    """Batch reaction stats for comma-separated entry ids."""
    viewer = identity_service.resolve(credentials.token, credentials.visitor_key)
    return await get_reactions_use_case.execute(
        GetReactionsRequest(viewer=viewer, entry_ids=_parse_ids(ids))
    )


@router.post("", response_model=SetReactionResponse)
async def set_reaction(
    request: SetReactionAPIRequest,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    set_reaction_use_case: FromDishka[SetReactionUseCase],
) -> SetReactionResponse:
    """Like, dislike, or clear (value 0) the caller's reaction."""
    identity = identity_service.require(
        credentials.token, credentials.visitor_key, "react to entries"
    )
    return await set_reaction_use_case.execute(
        SetReactionRequest(
            identity=identity, entry_id=request.entry_id, value=request.value
        )
    )


@router.delete("", response_model=ClearReactionResponse)
async def clear_reaction(
    entry_id: UUID,
    credentials: Credentials,
    identity_service: FromDishka[IdentityService],
    clear_reaction_use_case: FromDishka[ClearReactionUseCase],
) -> ClearReactionResponse:
    """Remove the caller's reaction; succeeds when there is none."""
    identity = identity_service.require(
        credentials.token, credentials.visitor_key, "react to entries"
    )
    return await clear_reaction_use_case.execute(
        ClearReactionRequest(identity=identity, entry_id=entry_id)
    )


def _parse_ids(raw: str) -> list[UUID]:
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if len(parts) > MAX_IDS_PER_REQUEST:
        raise ValidationError(f"At most {MAX_IDS_PER_REQUEST} ids per request")
    try:
        return [UUID(p) for p in parts]
    except ValueError:
        raise ValidationError("ids must be comma-separated UUIDs")
