"""Vote use cases."""

from .add_vote import AddVoteRequest, AddVoteResponse, AddVoteUseCase
from .delete_vote import DeleteVoteRequest, DeleteVoteResponse, DeleteVoteUseCase
from .get_vote_count import (
    GetVoteCountRequest,
    GetVoteCountResponse,
    GetVoteCountUseCase,
)
from .get_voters import GetVotersRequest, GetVotersResponse, GetVotersUseCase
from .get_voting_relationship import (
    GetVotingRelationshipRequest,
    GetVotingRelationshipResponse,
    GetVotingRelationshipUseCase,
)

__all__ = [
    "AddVoteRequest",
    "AddVoteResponse",
    "AddVoteUseCase",
    "DeleteVoteRequest",
    "DeleteVoteResponse",
    "DeleteVoteUseCase",
    "GetVoteCountRequest",
    "GetVoteCountResponse",
    "GetVoteCountUseCase",
    "GetVotersRequest",
    "GetVotersResponse",
    "GetVotersUseCase",
    "GetVotingRelationshipRequest",
    "GetVotingRelationshipResponse",
    "GetVotingRelationshipUseCase",
]
