"""Domain services."""

from .answer_service import AnswerService
from .article_service import ArticleService
from .base import Service
from .comment_service import CommentService
from .follow_service import FollowService
from .jwt_service import JWTService
from .question_service import QuestionService
from .relationship_service import RelationshipService
from .user_service import UserService
from .votable import ContentService, Votable
from .vote_service import VoteService, parse_vote_type

__all__ = [
    "AnswerService",
    "ArticleService",
    "CommentService",
    "ContentService",
    "FollowService",
    "JWTService",
    "QuestionService",
    "RelationshipService",
    "Service",
    "UserService",
    "Votable",
    "VoteService",
    "parse_vote_type",
]
