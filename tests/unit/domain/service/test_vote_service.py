"""Unit tests for VoteService."""

import asyncio
import random
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from forum.config import PaginationSettings, VotingSettings
from forum.domain.error import (
    ErrorCode,
    InvalidVoteTypeError,
    NotFoundError,
    VoteConflictError,
)
from forum.domain.model import Follow, Vote
from forum.domain.repository import (
    AnswerRepository,
    ArticleRepository,
    CommentRepository,
    FollowRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from forum.domain.service import UserService, Votable, VoteService
from forum.domain.value import (
    FollowableType,
    FollowId,
    PageRequest,
    UserId,
    VotableType,
    VoteId,
    VoteType,
    Voting,
)
from forum.persistence.repository.inmemory import (
    InMemoryUnitOfWork,
    InMemoryVoteRepository,
)
from tests.conftest import seed_user, seed_votable
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

ALL_KINDS = list(VotableType)


async def _ledger(env, votable_type, votable_id) -> list[Vote]:
    vote_repo = await env.get(VoteRepository)
    return await vote_repo.find_by_votable(votable_type, votable_id)


async def _assert_counter_matches_ledger(env, votable_type, votable_id) -> int:
    vote_service = await env.get(VoteService)
    count = await vote_service.get_vote_count(votable_type, votable_id)
    assert count == await vote_service.get_ledger_vote_count(votable_type, votable_id)
    return count


async def _service_with(env, vote_repository: VoteRepository) -> VoteService:
    """Build a VoteService over a custom vote repository, sharing everything else."""
    return VoteService(
        vote_repository=vote_repository,
        votables=await env.get(dict[VotableType, Votable]),
        user_service=await env.get(UserService),
        voting_settings=VotingSettings(),
        pagination_settings=PaginationSettings(),
        unit_of_work=InMemoryUnitOfWork(
            vote_repository,
            [
                await env.get(QuestionRepository),
                await env.get(AnswerRepository),
                await env.get(ArticleRepository),
                await env.get(CommentRepository),
            ],
        ),
    )


class InterleavingVoteRepository(InMemoryVoteRepository):
    """Yields to the event loop between the ledger read and the write.

    Concurrent ``add_vote`` calls therefore all read before any of them
    writes, the way racing requests on separate connections do.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        super().__init__(user_repository)
        self.calls: list[str] = []

    async def find_by_user_and_votable(self, *args, **kwargs):
        vote = await super().find_by_user_and_votable(*args, **kwargs)
        self.calls.append("read")
        await asyncio.sleep(0)
        return vote

    async def save(self, vote: Vote) -> Vote:
        self.calls.append("save")
        return await super().save(vote)


class TestAddVote:
    """Tests for add_vote method."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("votable_type", ALL_KINDS)
    async def test_first_up_vote_increments_count(self, unit_env, votable_type):
        """A first up vote records one ledger row and adds one point."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        votable_id = await seed_votable(unit_env, votable_type)

        # Act
        await vote_service.add_vote(user.id, votable_type, votable_id, "up")

        # Assert
        assert await vote_service.get_vote_count(votable_type, votable_id) == 1
        ledger = await _ledger(unit_env, votable_type, votable_id)
        assert len(ledger) == 1
        assert ledger[0].user_id == user.id
        assert ledger[0].type == VoteType.UP

    @pytest.mark.asyncio
    async def test_first_down_vote_decrements_count(self, unit_env):
        """A first down vote takes the count below zero."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)

        await vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "down")

        assert await vote_service.get_vote_count(VotableType.ARTICLE, article_id) == -1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("vote_type", ["up", "down"])
    async def test_repeating_a_vote_is_idempotent(self, unit_env, vote_type):
        """Casting the same vote twice changes nothing the second time."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, vote_type)
        count_after_first = await vote_service.get_vote_count(
            VotableType.QUESTION, question_id
        )
        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, vote_type)

        assert (
            await vote_service.get_vote_count(VotableType.QUESTION, question_id)
            == count_after_first
        )
        assert len(await _ledger(unit_env, VotableType.QUESTION, question_id)) == 1

    @pytest.mark.asyncio
    async def test_flip_up_to_down_moves_count_by_two(self, unit_env):
        """Changing up to down subtracts two and keeps a single ledger row."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        answer_id = await seed_votable(unit_env, VotableType.ANSWER)

        await vote_service.add_vote(user.id, VotableType.ANSWER, answer_id, "up")
        first = (await _ledger(unit_env, VotableType.ANSWER, answer_id))[0]
        await vote_service.add_vote(user.id, VotableType.ANSWER, answer_id, "down")

        assert await vote_service.get_vote_count(VotableType.ANSWER, answer_id) == -1
        ledger = await _ledger(unit_env, VotableType.ANSWER, answer_id)
        assert len(ledger) == 1
        assert ledger[0].type == VoteType.DOWN
        assert ledger[0].id == first.id
        assert ledger[0].created_at >= first.created_at

    @pytest.mark.asyncio
    async def test_flip_down_to_up_moves_count_by_two(self, unit_env):
        """Changing down to up adds two."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        comment_id = await seed_votable(unit_env, VotableType.COMMENT)

        await vote_service.add_vote(user.id, VotableType.COMMENT, comment_id, "down")
        await vote_service.add_vote(user.id, VotableType.COMMENT, comment_id, "up")

        assert await vote_service.get_vote_count(VotableType.COMMENT, comment_id) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_type", ["", "none", "UP", "sideways"])
    async def test_invalid_type_rejected_before_any_lookup(self, unit_env, bad_type):
        """An invalid type fails validation even when user and item are missing."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(InvalidVoteTypeError) as exc_info:
            await vote_service.add_vote(
                UserId(uuid4()), VotableType.QUESTION, uuid4(), bad_type
            )

        assert exc_info.value.code == ErrorCode.VOTE_TYPE_ERROR

    @pytest.mark.asyncio
    async def test_invalid_type_does_not_touch_ledger(self, unit_env):
        """Rejected votes leave the counter and ledger alone."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        with pytest.raises(InvalidVoteTypeError):
            await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "meh")

        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 0
        assert await _ledger(unit_env, VotableType.QUESTION, question_id) == []

    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, unit_env):
        """Voting as a user that does not exist fails with the user code."""
        vote_service = await unit_env.get(VoteService)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.add_vote(
                UserId(uuid4()), VotableType.QUESTION, question_id, "up"
            )

        assert exc_info.value.code == ErrorCode.USER_NOT_FOUND

    @pytest.mark.asyncio
    async def test_disabled_user_cannot_vote(self, unit_env):
        """Disabled users are treated as missing when acting."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env, disabled=True)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        assert exc_info.value.code == ErrorCode.USER_NOT_FOUND
        assert await _ledger(unit_env, VotableType.QUESTION, question_id) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("votable_type", "code"),
        [
            (VotableType.QUESTION, ErrorCode.QUESTION_NOT_FOUND),
            (VotableType.ANSWER, ErrorCode.ANSWER_NOT_FOUND),
            (VotableType.ARTICLE, ErrorCode.ARTICLE_NOT_FOUND),
            (VotableType.COMMENT, ErrorCode.COMMENT_NOT_FOUND),
        ],
    )
    async def test_missing_item_raises_kind_specific_not_found(
        self, unit_env, votable_type, code
    ):
        """Each kind reports its own not-found code."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)

        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.add_vote(user.id, votable_type, uuid4(), "up")

        assert exc_info.value.code == code

    @pytest.mark.asyncio
    async def test_deleted_item_raises_not_found(self, unit_env):
        """Soft-deleted items cannot receive votes."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION, deleted=True)

        with pytest.raises(NotFoundError):
            await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

    @pytest.mark.asyncio
    async def test_votes_on_different_kinds_are_independent(self, unit_env):
        """The same UUID under two kinds keeps two separate ledgers."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)

        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")
        await vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "down")

        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 1
        assert await vote_service.get_vote_count(VotableType.ARTICLE, article_id) == -1


class TestDeleteVote:
    """Tests for delete_vote method."""

    @pytest.mark.asyncio
    async def test_retracting_up_vote_subtracts_one(self, unit_env):
        """Retracting an up vote removes its point and its ledger row."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        await vote_service.delete_vote(user.id, VotableType.QUESTION, question_id)

        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 0
        assert await _ledger(unit_env, VotableType.QUESTION, question_id) == []

    @pytest.mark.asyncio
    async def test_retracting_down_vote_adds_one(self, unit_env):
        """Retracting a down vote gives its point back."""
        vote_service = await unit_env.get(VoteService)
        voter = await seed_user(unit_env)
        other = await seed_user(unit_env)
        answer_id = await seed_votable(unit_env, VotableType.ANSWER)
        await vote_service.add_vote(other.id, VotableType.ANSWER, answer_id, "up")
        await vote_service.add_vote(voter.id, VotableType.ANSWER, answer_id, "down")
        assert await vote_service.get_vote_count(VotableType.ANSWER, answer_id) == 0

        await vote_service.delete_vote(voter.id, VotableType.ANSWER, answer_id)

        assert await vote_service.get_vote_count(VotableType.ANSWER, answer_id) == 1

    @pytest.mark.asyncio
    async def test_retracting_without_vote_is_a_no_op(self, unit_env):
        """Retracting a vote that was never cast changes nothing and does not fail."""
        vote_service = await unit_env.get(VoteService)
        voter = await seed_user(unit_env)
        bystander = await seed_user(unit_env)
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)
        await vote_service.add_vote(bystander.id, VotableType.ARTICLE, article_id, "up")

        await vote_service.delete_vote(voter.id, VotableType.ARTICLE, article_id)
        await vote_service.delete_vote(voter.id, VotableType.ARTICLE, article_id)

        assert await vote_service.get_vote_count(VotableType.ARTICLE, article_id) == 1
        assert len(await _ledger(unit_env, VotableType.ARTICLE, article_id)) == 1

    @pytest.mark.asyncio
    async def test_retracting_twice_only_counts_once(self, unit_env):
        """A second retraction after a real one is a no-op."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        comment_id = await seed_votable(unit_env, VotableType.COMMENT)
        await vote_service.add_vote(user.id, VotableType.COMMENT, comment_id, "down")

        await vote_service.delete_vote(user.id, VotableType.COMMENT, comment_id)
        await vote_service.delete_vote(user.id, VotableType.COMMENT, comment_id)

        assert await vote_service.get_vote_count(VotableType.COMMENT, comment_id) == 0

    @pytest.mark.asyncio
    async def test_retracting_on_missing_item_raises_not_found(self, unit_env):
        """Retraction still validates that the item exists."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)

        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.delete_vote(user.id, VotableType.ARTICLE, uuid4())

        assert exc_info.value.code == ErrorCode.ARTICLE_NOT_FOUND


class TestLedgerInvariant:
    """The stored counter always equals the ledger's up minus down."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [1, 7, 42])
    async def test_random_sequences_keep_counter_in_step(self, unit_env, seed):
        """Random add/flip/retract sequences never let the counter drift."""
        rng = random.Random(seed)
        vote_service = await unit_env.get(VoteService)
        users = [await seed_user(unit_env) for _ in range(6)]
        targets = [
            (kind, await seed_votable(unit_env, kind))
            for kind in (VotableType.QUESTION, VotableType.COMMENT)
        ]

        for _ in range(120):
            user = rng.choice(users)
            votable_type, votable_id = rng.choice(targets)
            if rng.random() < 0.3:
                await vote_service.delete_vote(user.id, votable_type, votable_id)
            else:
                await vote_service.add_vote(
                    user.id, votable_type, votable_id, rng.choice(["up", "down"])
                )
            await _assert_counter_matches_ledger(unit_env, votable_type, votable_id)

        for votable_type, votable_id in targets:
            ledger = await _ledger(unit_env, votable_type, votable_id)
            assert len({vote.user_id for vote in ledger}) == len(ledger)

    @pytest.mark.asyncio
    async def test_disabled_voter_still_counts(self, unit_env):
        """Disabling a user hides them from listings but keeps their vote."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        await user_repo.save(user.model_copy(update={"disabled_at": datetime.now()}))

        assert await _assert_counter_matches_ledger(
            unit_env, VotableType.QUESTION, question_id
        ) == 1

    @pytest.mark.asyncio
    async def test_failed_counter_update_leaves_no_ledger_row(self, unit_env):
        """An item vanishing between the insert and the delta undoes the insert."""
        vote_service = await unit_env.get(VoteService)
        question_repo = await unit_env.get(QuestionRepository)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        with patch.object(
            question_repo,
            "apply_vote_count_delta",
            new_callable=AsyncMock,
            return_value=False,
        ):
            with pytest.raises(NotFoundError) as exc_info:
                await vote_service.add_vote(
                    user.id, VotableType.QUESTION, question_id, "up"
                )

        assert exc_info.value.code == ErrorCode.QUESTION_NOT_FOUND
        assert await _ledger(unit_env, VotableType.QUESTION, question_id) == []
        assert await _assert_counter_matches_ledger(
            unit_env, VotableType.QUESTION, question_id
        ) == 0

    @pytest.mark.asyncio
    async def test_failed_counter_update_keeps_flipped_vote_unchanged(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        user = await seed_user(unit_env)
        comment_id = await seed_votable(unit_env, VotableType.COMMENT)
        await vote_service.add_vote(user.id, VotableType.COMMENT, comment_id, "up")

        with patch.object(
            comment_repo,
            "apply_vote_count_delta",
            new_callable=AsyncMock,
            return_value=False,
        ):
            with pytest.raises(NotFoundError):
                await vote_service.add_vote(
                    user.id, VotableType.COMMENT, comment_id, "down"
                )

        ledger = await _ledger(unit_env, VotableType.COMMENT, comment_id)
        assert [vote.type for vote in ledger] == [VoteType.UP]
        assert await _assert_counter_matches_ledger(
            unit_env, VotableType.COMMENT, comment_id
        ) == 1

    @pytest.mark.asyncio
    async def test_failed_counter_update_restores_retracted_vote(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        article_repo = await unit_env.get(ArticleRepository)
        user = await seed_user(unit_env)
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)
        await vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "down")

        with patch.object(
            article_repo,
            "apply_vote_count_delta",
            new_callable=AsyncMock,
            return_value=False,
        ):
            with pytest.raises(NotFoundError):
                await vote_service.delete_vote(
                    user.id, VotableType.ARTICLE, article_id
                )

        ledger = await _ledger(unit_env, VotableType.ARTICLE, article_id)
        assert [vote.type for vote in ledger] == [VoteType.DOWN]
        assert await _assert_counter_matches_ledger(
            unit_env, VotableType.ARTICLE, article_id
        ) == -1


class TestConcurrentVotes:
    """Races between writers on the same item."""

    @pytest.mark.asyncio
    async def test_concurrent_first_votes_all_count(self, unit_env):
        """N gathered votes from different users leave N points and N ledger rows."""
        vote_service = await unit_env.get(VoteService)
        users = [await seed_user(unit_env) for _ in range(25)]
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        await asyncio.gather(
            *(
                vote_service.add_vote(u.id, VotableType.QUESTION, question_id, "up")
                for u in users
            )
        )

        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 25
        ledger = await _ledger(unit_env, VotableType.QUESTION, question_id)
        assert len(ledger) == 25
        assert {vote.user_id for vote in ledger} == {u.id for u in users}

    @pytest.mark.asyncio
    async def test_interleaved_first_votes_all_count(self, unit_env):
        """Every read happens before any insert, and no vote is lost."""
        vote_repo = InterleavingVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        users = [await seed_user(unit_env) for _ in range(25)]
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        await asyncio.gather(
            *(
                vote_service.add_vote(u.id, VotableType.QUESTION, question_id, "up")
                for u in users
            )
        )

        assert vote_repo.calls[:25] == ["read"] * 25
        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 25
        ledger = await vote_repo.find_by_votable(VotableType.QUESTION, question_id)
        assert sorted(str(vote.user_id) for vote in ledger) == sorted(
            str(u.id) for u in users
        )

    @pytest.mark.asyncio
    async def test_interleaved_first_votes_from_one_user_count_once(self, unit_env):
        vote_repo = InterleavingVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        user = await seed_user(unit_env)
        answer_id = await seed_votable(unit_env, VotableType.ANSWER)

        await asyncio.gather(
            *(
                vote_service.add_vote(user.id, VotableType.ANSWER, answer_id, "up")
                for _ in range(5)
            )
        )

        assert vote_repo.calls[:5] == ["read"] * 5
        assert await vote_service.get_vote_count(VotableType.ANSWER, answer_id) == 1
        assert len(await vote_repo.find_by_votable(VotableType.ANSWER, answer_id)) == 1

    @pytest.mark.asyncio
    async def test_interleaved_opposite_first_votes_keep_counter_in_step(
        self, unit_env
    ):
        """Up and down racing from one user leave one row that the counter matches."""
        vote_repo = InterleavingVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        user = await seed_user(unit_env)
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)

        await asyncio.gather(
            vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "up"),
            vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "down"),
        )

        ledger = await vote_repo.find_by_votable(VotableType.ARTICLE, article_id)
        assert len(ledger) == 1
        count = await vote_service.get_vote_count(VotableType.ARTICLE, article_id)
        assert count == ledger[0].type.weight
        assert count == await vote_service.get_ledger_vote_count(
            VotableType.ARTICLE, article_id
        )

    @pytest.mark.asyncio
    async def test_duplicate_insert_falls_back_to_flip(self, unit_env):
        """Losing the first-insert race re-reads the ledger and flips instead."""

        class StaleReadVoteRepository(InMemoryVoteRepository):
            """Misses the existing vote on the first read, like a racing writer."""

            stale_reads = 1

            async def find_by_user_and_votable(self, *args, **kwargs):
                if self.stale_reads:
                    self.stale_reads -= 1
                    return None
                return await super().find_by_user_and_votable(*args, **kwargs)

        user_repo = await unit_env.get(UserRepository)
        vote_repo = StaleReadVoteRepository(user_repo)
        vote_service = await _service_with(unit_env, vote_repo)
        user = await seed_user(unit_env)
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)
        # The racing writer's up vote, already committed
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                user_id=user.id,
                votable_type=VotableType.ARTICLE,
                votable_id=article_id,
                type=VoteType.UP,
            )
        )
        votables = await unit_env.get(dict[VotableType, Votable])
        await votables[VotableType.ARTICLE].apply_vote_count_delta(article_id, 1)

        await vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "down")

        assert await vote_service.get_vote_count(VotableType.ARTICLE, article_id) == -1
        ledger = await vote_repo.find_by_votable(VotableType.ARTICLE, article_id)
        assert [vote.type for vote in ledger] == [VoteType.DOWN]

    @pytest.mark.asyncio
    async def test_duplicate_insert_of_same_type_adds_nothing(self, unit_env):
        """If the racing writer cast the same vote, the retry is a no-op."""

        class StaleReadVoteRepository(InMemoryVoteRepository):
            stale_reads = 1

            async def find_by_user_and_votable(self, *args, **kwargs):
                if self.stale_reads:
                    self.stale_reads -= 1
                    return None
                return await super().find_by_user_and_votable(*args, **kwargs)

        vote_repo = StaleReadVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        await vote_repo.save(
            Vote(
                id=VoteId(uuid4()),
                user_id=user.id,
                votable_type=VotableType.QUESTION,
                votable_id=question_id,
                type=VoteType.UP,
            )
        )

        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 0
        assert len(await vote_repo.find_by_votable(VotableType.QUESTION, question_id)) == 1

    @pytest.mark.asyncio
    async def test_lost_flip_is_retried(self, unit_env):
        """A compare-and-set flip that loses once is evaluated again."""

        class RacingFlipVoteRepository(InMemoryVoteRepository):
            lost_flips = 1

            async def update_type(self, *args, **kwargs):
                if self.lost_flips:
                    self.lost_flips -= 1
                    return False
                return await super().update_type(*args, **kwargs)

        vote_repo = RacingFlipVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        user = await seed_user(unit_env)
        comment_id = await seed_votable(unit_env, VotableType.COMMENT)
        await vote_service.add_vote(user.id, VotableType.COMMENT, comment_id, "up")

        await vote_service.add_vote(user.id, VotableType.COMMENT, comment_id, "down")

        assert await vote_service.get_vote_count(VotableType.COMMENT, comment_id) == -1
        assert vote_repo.lost_flips == 0

    @pytest.mark.asyncio
    async def test_persistent_conflicts_raise_vote_conflict(self, unit_env):
        """Giving up after the configured number of attempts raises VoteConflictError."""

        class AlwaysConflictingVoteRepository(InMemoryVoteRepository):
            saves = 0

            async def find_by_user_and_votable(self, *args, **kwargs):
                return None

            async def save(self, vote):
                self.saves += 1
                raise IntegrityError("Duplicate vote", None, Exception())

        vote_repo = AlwaysConflictingVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        with pytest.raises(VoteConflictError):
            await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        assert vote_repo.saves == VotingSettings().max_conflict_retries
        assert await vote_service.get_vote_count(VotableType.QUESTION, question_id) == 0


class TestEndToEndScenario:
    """Two users voting on one article."""

    @pytest.mark.asyncio
    async def test_two_user_sequence(self, unit_env):
        """0 -> 1 -> 0 -> -2 -> -1, ending with only B's down vote."""
        vote_service = await unit_env.get(VoteService)
        alice = await seed_user(unit_env, username="alice")
        bob = await seed_user(unit_env, username="bob")
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)

        async def count() -> int:
            return await vote_service.get_vote_count(VotableType.ARTICLE, article_id)

        assert await count() == 0
        await vote_service.add_vote(alice.id, VotableType.ARTICLE, article_id, "up")
        assert await count() == 1
        await vote_service.add_vote(bob.id, VotableType.ARTICLE, article_id, "down")
        assert await count() == 0
        await vote_service.add_vote(alice.id, VotableType.ARTICLE, article_id, "down")
        assert await count() == -2
        await vote_service.delete_vote(alice.id, VotableType.ARTICLE, article_id)
        assert await count() == -1

        ledger = await _ledger(unit_env, VotableType.ARTICLE, article_id)
        assert [(v.user_id, v.votable_id, v.type) for v in ledger] == [
            (bob.id, article_id, VoteType.DOWN)
        ]


class TestVotingInRelationship:
    """Tests for get_voting_in_relationship method."""

    @pytest.mark.asyncio
    async def test_batch_of_500_uses_one_query(self, unit_env):
        """Ten up and five down among 500 IDs come back from a single lookup."""

        class CountingVoteRepository(InMemoryVoteRepository):
            batch_calls = 0

            async def find_by_user_and_votables(self, *args, **kwargs):
                self.batch_calls += 1
                return await super().find_by_user_and_votables(*args, **kwargs)

        vote_repo = CountingVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        viewer_id = UserId(uuid4())
        ids = [uuid4() for _ in range(500)]
        up_ids, down_ids = set(ids[:10]), set(ids[100:105])
        for votable_id in up_ids | down_ids:
            await vote_repo.save(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=viewer_id,
                    votable_type=VotableType.ANSWER,
                    votable_id=votable_id,
                    type=VoteType.UP if votable_id in up_ids else VoteType.DOWN,
                )
            )

        votings = await vote_service.get_voting_in_relationship(
            ids, VotableType.ANSWER, viewer_id
        )

        assert len(votings) == 500
        assert {k for k, v in votings.items() if v == Voting.UP} == up_ids
        assert {k for k, v in votings.items() if v == Voting.DOWN} == down_ids
        assert sum(1 for v in votings.values() if v == Voting.NONE) == 485
        assert vote_repo.batch_calls == 1

    @pytest.mark.asyncio
    async def test_anonymous_viewer_gets_defaults_without_query(self, unit_env):
        """No viewer means every item maps to no vote and storage is not asked."""

        class CountingVoteRepository(InMemoryVoteRepository):
            batch_calls = 0

            async def find_by_user_and_votables(self, *args, **kwargs):
                self.batch_calls += 1
                return await super().find_by_user_and_votables(*args, **kwargs)

        vote_repo = CountingVoteRepository(await unit_env.get(UserRepository))
        vote_service = await _service_with(unit_env, vote_repo)
        ids = [uuid4() for _ in range(3)]

        votings = await vote_service.get_voting_in_relationship(
            ids, VotableType.QUESTION, None
        )

        assert votings == {vid: Voting.NONE for vid in ids}
        assert vote_repo.batch_calls == 0

    @pytest.mark.asyncio
    async def test_empty_id_set_returns_empty_map(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        votings = await vote_service.get_voting_in_relationship(
            [], VotableType.QUESTION, UserId(uuid4())
        )

        assert votings == {}

    @pytest.mark.asyncio
    async def test_other_kinds_are_not_mixed_in(self, unit_env):
        """A vote on a question does not show up when listing answers."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        votings = await vote_service.get_voting_in_relationship(
            [question_id], VotableType.ANSWER, user.id
        )

        assert votings == {question_id: Voting.NONE}


class TestGetVoters:
    """Tests for get_voters method."""

    @pytest.mark.asyncio
    async def test_lists_newest_voters_first(self, unit_env):
        """Voters come back ordered by when they last voted, newest first."""
        vote_repo = await unit_env.get(VoteRepository)
        vote_service = await unit_env.get(VoteService)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        base = datetime(2026, 1, 1, 12, 0, 0)
        users = [await seed_user(unit_env) for _ in range(3)]
        for offset, user in enumerate(users):
            await vote_repo.save(
                Vote(
                    id=VoteId(uuid4()),
                    user_id=user.id,
                    votable_type=VotableType.QUESTION,
                    votable_id=question_id,
                    type=VoteType.UP,
                    created_at=base + timedelta(minutes=offset),
                )
            )

        page = await vote_service.get_voters(VotableType.QUESTION, question_id)

        assert [item["id"] for item in page.data] == [
            str(user.id) for user in reversed(users)
        ]
        assert page.pagination.total == 3

    @pytest.mark.asyncio
    async def test_excludes_disabled_users(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        active = await seed_user(unit_env)
        later_disabled = await seed_user(unit_env)
        await vote_service.add_vote(active.id, VotableType.QUESTION, question_id, "up")
        await vote_service.add_vote(
            later_disabled.id, VotableType.QUESTION, question_id, "up"
        )
        await user_repo.save(
            later_disabled.model_copy(update={"disabled_at": datetime.now()})
        )

        page = await vote_service.get_voters(VotableType.QUESTION, question_id)

        assert [item["id"] for item in page.data] == [str(active.id)]
        assert page.pagination.total == 1

    @pytest.mark.asyncio
    async def test_strips_privacy_fields(self, unit_env):
        """Email, password hash and internal timestamps never leave the service."""
        vote_service = await unit_env.get(VoteService)
        user = await seed_user(unit_env, username="carol")
        article_id = await seed_votable(unit_env, VotableType.ARTICLE)
        await vote_service.add_vote(user.id, VotableType.ARTICLE, article_id, "down")

        page = await vote_service.get_voters(VotableType.ARTICLE, article_id)

        (record,) = page.data
        assert record["username"] == "carol"
        for field in ("email", "password_hash", "disabled_at", "updated_at"):
            assert field not in record
        assert "relationship" not in record

    @pytest.mark.asyncio
    async def test_filters_by_type(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        up_voter = await seed_user(unit_env)
        down_voter = await seed_user(unit_env)
        answer_id = await seed_votable(unit_env, VotableType.ANSWER)
        await vote_service.add_vote(up_voter.id, VotableType.ANSWER, answer_id, "up")
        await vote_service.add_vote(down_voter.id, VotableType.ANSWER, answer_id, "down")

        ups = await vote_service.get_voters(VotableType.ANSWER, answer_id, "up")
        downs = await vote_service.get_voters(VotableType.ANSWER, answer_id, "down")

        assert [item["id"] for item in ups.data] == [str(up_voter.id)]
        assert [item["id"] for item in downs.data] == [str(down_voter.id)]

    @pytest.mark.asyncio
    async def test_invalid_type_filter_raises(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)

        with pytest.raises(InvalidVoteTypeError):
            await vote_service.get_voters(VotableType.QUESTION, question_id, "both")

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self, unit_env):
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError) as exc_info:
            await vote_service.get_voters(VotableType.COMMENT, uuid4())

        assert exc_info.value.code == ErrorCode.COMMENT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_paginates_with_default_and_capped_page_size(self, unit_env):
        """Default page size is 15; requests above the cap are clamped."""
        vote_service = await unit_env.get(VoteService)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        for _ in range(17):
            user = await seed_user(unit_env)
            await vote_service.add_vote(user.id, VotableType.QUESTION, question_id, "up")

        first = await vote_service.get_voters(VotableType.QUESTION, question_id)
        second = await vote_service.get_voters(
            VotableType.QUESTION, question_id, page=PageRequest(page=2, per_page=15)
        )
        huge = await vote_service.get_voters(
            VotableType.QUESTION, question_id, page=PageRequest(page=1, per_page=1000)
        )

        assert len(first.data) == 15
        assert first.pagination.pages == 2
        assert first.pagination.previous is None
        assert first.pagination.next == 2
        assert len(second.data) == 2
        assert second.pagination.previous == 1
        assert second.pagination.next is None
        assert huge.pagination.per_page == 100
        assert len(huge.data) == 17

    @pytest.mark.asyncio
    async def test_attaches_relationship_blocks(self, unit_env):
        """With relationships requested, each voter carries the viewer's block."""
        vote_service = await unit_env.get(VoteService)
        follow_repo = await unit_env.get(FollowRepository)
        viewer = await seed_user(unit_env)
        followed = await seed_user(unit_env)
        question_id = await seed_votable(unit_env, VotableType.QUESTION)
        await vote_service.add_vote(viewer.id, VotableType.QUESTION, question_id, "up")
        await vote_service.add_vote(followed.id, VotableType.QUESTION, question_id, "up")
        await follow_repo.save(
            Follow(
                id=FollowId(uuid4()),
                user_id=viewer.id,
                followable_type=FollowableType.USER,
                followable_id=followed.id,
            )
        )

        page = await vote_service.get_voters(
            VotableType.QUESTION,
            question_id,
            with_relationship=True,
            viewer_id=viewer.id,
        )

        by_id = {item["id"]: item["relationship"] for item in page.data}
        assert by_id[str(viewer.id)] == {
            "is_me": True,
            "is_following": False,
            "is_followed": False,
        }
        assert by_id[str(followed.id)] == {
            "is_me": False,
            "is_following": True,
            "is_followed": False,
        }
