"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

from forum.domain.model import Answer, Article, Comment, Question, User
from forum.domain.repository import (
    AnswerRepository,
    ArticleRepository,
    CommentRepository,
    QuestionRepository,
    UserRepository,
)
from forum.domain.value import (
    AnswerId,
    ArticleId,
    CommentId,
    QuestionId,
    UserId,
    Username,
    VotableType,
)


def make_user(
    username: str | None = None,
    disabled: bool = False,
    user_id: UUID | None = None,
) -> User:
    """Helper function to build a test user.

    Args:
        username: Username (random if omitted)
        disabled: Whether the user has been disabled by a manager
        user_id: Fixed ID (random if omitted)

    Returns:
        User domain model
    """
    uid = user_id or uuid4()
    name = username or f"user{uid.hex[:8]}"
    return User(
        id=UserId(uid),
        username=Username(name),
        email=f"{name}@example.com",
        password_hash="$2y$10$notarealhash",
        headline="Tester",
        disabled_at=datetime.now() - timedelta(days=1) if disabled else None,
    )


def make_question(author: User | None = None, deleted: bool = False) -> Question:
    """Helper function to build a test question."""
    return Question(
        id=QuestionId(uuid4()),
        user_id=author.id if author else UserId(uuid4()),
        title="How do counters stay consistent?",
        content_markdown="Body",
        content_rendered="<p>Body</p>",
        deleted_at=datetime.now() if deleted else None,
    )


def make_answer(question: Question | None = None) -> Answer:
    """Helper function to build a test answer."""
    return Answer(
        id=AnswerId(uuid4()),
        question_id=question.id if question else QuestionId(uuid4()),
        user_id=UserId(uuid4()),
        content_markdown="An answer",
        content_rendered="<p>An answer</p>",
    )


def make_article() -> Article:
    """Helper function to build a test article."""
    return Article(
        id=ArticleId(uuid4()),
        user_id=UserId(uuid4()),
        title="Notes on voting",
        content_markdown="Long form",
        content_rendered="<p>Long form</p>",
    )


def make_comment(commentable: Question | Answer | Article | None = None) -> Comment:
    """Helper function to build a test comment."""
    commentable_type = {
        Question: "question",
        Answer: "answer",
        Article: "article",
    }.get(type(commentable), "question")
    return Comment(
        id=CommentId(uuid4()),
        commentable_type=commentable_type,
        commentable_id=commentable.id if commentable else uuid4(),
        user_id=UserId(uuid4()),
        content="Nice one",
    )


async def seed_user(env, **kwargs) -> User:
    """Save a test user through the environment's user repository."""
    user = make_user(**kwargs)
    await (await env.get(UserRepository)).save(user)
    return user


async def seed_votable(env, votable_type, deleted: bool = False) -> UUID:
    """Save one votable item of the given kind and return its ID.

    Args:
        env: Request-scoped test container
        votable_type: Kind of item to create
        deleted: Soft-delete the item before returning

    Returns:
        ID of the saved item
    """
    repositories = {
        VotableType.QUESTION: (QuestionRepository, make_question),
        VotableType.ANSWER: (AnswerRepository, make_answer),
        VotableType.ARTICLE: (ArticleRepository, make_article),
        VotableType.COMMENT: (CommentRepository, make_comment),
    }
    repository_type, factory = repositories[votable_type]
    entity = factory()
    if deleted:
        entity = entity.model_copy(update={"deleted_at": datetime.now()})
    await (await env.get(repository_type)).save(entity)
    return entity.id
