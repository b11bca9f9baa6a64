"""Domain layer errors.

Every error a client can see carries a stable numeric code so that API
consumers can branch on it without parsing messages.
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Stable, client-facing error codes."""

    SYSTEM_ERROR = 100000
    FIELD_VERIFY_FAILED = 100002
    VOTE_TYPE_ERROR = 100006
    VOTE_CONFLICT = 100007

    USER_TOKEN_FAILED = 200003
    USER_NOT_FOUND = 200006

    QUESTION_NOT_FOUND = 300001
    ANSWER_NOT_FOUND = 310001
    COMMENT_NOT_FOUND = 320001
    ARTICLE_NOT_FOUND = 500001


class DomainError(Exception):
    """Base domain error."""

    code: ErrorCode = ErrorCode.SYSTEM_ERROR


class ValidationError(DomainError):
    """Domain validation error."""

    code = ErrorCode.FIELD_VERIFY_FAILED


class InvalidVoteTypeError(ValidationError):
    """Raised when a vote type is neither ``up`` nor ``down``."""

    code = ErrorCode.VOTE_TYPE_ERROR

    def __init__(self, vote_type: object):
        self.vote_type = vote_type
        super().__init__(f"Vote type must be one of up, down (got {vote_type!r})")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: ErrorCode = ErrorCode.SYSTEM_ERROR,
    ):
        self.resource = resource
        self.identifier = identifier
        self.code = code
        super().__init__(f"{resource} not found: {identifier}")


class VoteConflictError(DomainError):
    """Raised when a vote transition keeps losing races with concurrent writers."""

    code = ErrorCode.VOTE_CONFLICT

    def __init__(self, user_id: str, votable_type: str, votable_id: str):
        super().__init__(
            f"Could not apply vote by {user_id} on {votable_type} {votable_id} "
            "after repeated conflicts"
        )
