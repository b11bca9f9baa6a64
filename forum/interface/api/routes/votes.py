"""Vote routes.

One set of routes serves every votable kind; the ``kind`` path segment
selects questions, answers, articles or comments.
"""

from enum import Enum
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query
from pydantic import BaseModel

from forum.application.usecase.vote import (
    AddVoteRequest,
    AddVoteResponse,
    AddVoteUseCase,
    DeleteVoteRequest,
    DeleteVoteResponse,
    DeleteVoteUseCase,
    GetVoteCountRequest,
    GetVoteCountResponse,
    GetVoteCountUseCase,
    GetVotersRequest,
    GetVotersResponse,
    GetVotersUseCase,
    GetVotingRelationshipRequest,
    GetVotingRelationshipUseCase,
)
from forum.domain.service import JWTService
from forum.domain.value import Relationship, UserId, VotableType
from forum.interface.error import unauthorized

router = APIRouter(tags=["votes"], route_class=DishkaRoute)


class VotableKind(str, Enum):
    """Plural path segment for each votable kind."""

    QUESTIONS = "questions"
    ANSWERS = "answers"
    ARTICLES = "articles"
    COMMENTS = "comments"

    @property
    def votable_type(self) -> VotableType:
        return _VOTABLE_TYPES[self]


_VOTABLE_TYPES = {
    VotableKind.QUESTIONS: VotableType.QUESTION,
    VotableKind.ANSWERS: VotableType.ANSWER,
    VotableKind.ARTICLES: VotableType.ARTICLE,
    VotableKind.COMMENTS: VotableType.COMMENT,
}


class VoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    type: str  # "up" or "down"


def _extract_token(auth_token: str | None, authorization: str | None) -> str | None:
    """Prefer a bearer token from the Authorization header, else the cookie."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[len("bearer ") :].strip()
    return auth_token


def _require_user(
    jwt_service: JWTService, auth_token: str | None, authorization: str | None
) -> UserId:
    user_id = jwt_service.get_user_id_from_token(
        _extract_token(auth_token, authorization)
    )
    if not user_id:
        raise unauthorized("Authentication required to vote")
    return user_id


@router.post("/{kind}/{votable_id}/votes", response_model=AddVoteResponse)
async def add_vote(
    kind: VotableKind,
    votable_id: UUID,
    request: VoteAPIRequest,
    add_vote_use_case: FromDishka[AddVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> AddVoteResponse:
    """Cast, repeat or flip a vote on an item.

    Requires authentication.

    Args:
        kind: Votable kind (plural path segment)
        votable_id: Item UUID
        request: Vote direction
        add_vote_use_case: Add vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Bearer token header

    Returns:
        The item's vote count after the vote
    """
    user_id = _require_user(jwt_service, auth_token, authorization)
    return await add_vote_use_case.execute(
        AddVoteRequest(
            votable_type=kind.votable_type,
            votable_id=str(votable_id),
            user_id=str(user_id),
            type=request.type,
        )
    )


@router.delete("/{kind}/{votable_id}/votes", response_model=DeleteVoteResponse)
async def delete_vote(
    kind: VotableKind,
    votable_id: UUID,
    delete_vote_use_case: FromDishka[DeleteVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> DeleteVoteResponse:
    """Retract the caller's vote on an item.

    Requires authentication. Retracting when no vote exists succeeds.
    """
    user_id = _require_user(jwt_service, auth_token, authorization)
    return await delete_vote_use_case.execute(
        DeleteVoteRequest(
            votable_type=kind.votable_type,
            votable_id=str(votable_id),
            user_id=str(user_id),
        )
    )


@router.get("/{kind}/{votable_id}/votes/count", response_model=GetVoteCountResponse)
async def get_vote_count(
    kind: VotableKind,
    votable_id: UUID,
    get_vote_count_use_case: FromDishka[GetVoteCountUseCase],
) -> GetVoteCountResponse:
    """Read an item's vote count."""
    return await get_vote_count_use_case.execute(
        GetVoteCountRequest(votable_type=kind.votable_type, votable_id=str(votable_id))
    )


@router.get("/{kind}/{votable_id}/voters", response_model=GetVotersResponse)
async def get_voters(
    kind: VotableKind,
    votable_id: UUID,
    get_voters_use_case: FromDishka[GetVotersUseCase],
    type: str | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    per_page: int | None = Query(default=None, ge=1),
    include_relationship: bool = Query(default=False),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetVotersResponse:
    """List users who voted on an item, newest vote first.

    Authentication is optional; it only affects relationship blocks.
    """
    return await get_voters_use_case.execute(
        GetVotersRequest(
            votable_type=kind.votable_type,
            votable_id=str(votable_id),
            type=type,
            page=page,
            per_page=per_page,
            include_relationship=include_relationship,
            auth_token=_extract_token(auth_token, authorization),
        )
    )


@router.get("/{kind}/relationships", response_model=dict[str, Relationship])
async def get_relationships(
    kind: VotableKind,
    get_voting_relationship_use_case: FromDishka[GetVotingRelationshipUseCase],
    ids: list[UUID] = Query(default=[]),
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> dict[str, Relationship]:
    """Relationship blocks (``voting``, ``is_following``) for listed items.

    Anonymous callers get default blocks for every requested ID.
    """
    response = await get_voting_relationship_use_case.execute(
        GetVotingRelationshipRequest(
            votable_type=kind.votable_type,
            votable_ids=[str(vid) for vid in ids],
            auth_token=_extract_token(auth_token, authorization),
        )
    )
    return response.relationships
