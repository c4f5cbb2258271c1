"""
Tests for foundation_console.voting module.

Covers:
- Vote tracking from /votes/my-votes
- Board loading and auto-selection
- Casting votes and failure mapping
"""

from unittest import mock

import pytest


def _ok(data):
    return {"success": True, "data": data}


@pytest.fixture
def board_api(sample_contests, sample_contestants):
    api = mock.MagicMock()
    api.contests.get_all.return_value = _ok(sample_contests)
    api.contests.get_contestants.return_value = _ok(sample_contestants)
    api.contests.get_stats.return_value = _ok(
        {"totalVotes": 14, "voteDistribution": [{"votes": 10}, {"votes": 4}]}
    )
    api.votes.get_my_votes.return_value = _ok([])
    api.votes.cast_vote.return_value = {"success": True, "message": "Vote recorded"}
    return api


@pytest.fixture
def board(board_api):
    from foundation_console.voting import VotingBoard

    return VotingBoard(board_api)


class TestVoteTracker:
    def test_load_accepts_ids_and_populated_refs(self):
        """Test loading votes with plain and populated references."""
        from foundation_console.voting import VoteTracker

        tracker = VoteTracker()
        tracker.load(
            [
                {"contest": "c1", "contestant": "p1"},
                {"contest": {"_id": "c2"}, "contestant": {"_id": "p9", "name": "Zoe"}},
                {"contest": None, "contestant": "p3"},
            ]
        )

        assert tracker.as_dict() == {"c1": "p1", "c2": "p9"}
        assert len(tracker) == 2

    def test_load_replaces_previous_votes(self):
        """Test that loading replaces previous votes."""
        from foundation_console.voting import VoteTracker

        tracker = VoteTracker({"old": "x"})
        tracker.load([])

        assert len(tracker) == 0

    def test_record(self):
        """Test recording a vote."""
        from foundation_console.voting import VoteTracker

        tracker = VoteTracker()
        tracker.record("c1", "p2")

        assert tracker.has_voted_in("c1")
        assert tracker.voted_for("c1") == "p2"
        assert tracker.voted_for("c2") is None


class TestLoading:
    def test_load_selects_first_active_contest(self, board, board_api):
        """Test that loading selects the first active contest."""
        board.load()

        assert board.selected_id == "c2"
        assert [c["_id"] for c in board.contestants] == ["p1", "p2"]
        assert board.stats["totalVotes"] == 14
        assert board.error is None
        board_api.contests.get_contestants.assert_called_once_with("c2")

    def test_load_keeps_existing_selection(self, board, board_api):
        """Test that reloading keeps the selected contest."""
        board.load()
        board.select("c3")
        board.load()

        assert board.selected_id == "c3"

    def test_load_without_active_contest(self, board, board_api):
        """Test loading when no contest is active."""
        board_api.contests.get_all.return_value = _ok([{"_id": "c1", "isActive": False}])

        board.load()

        assert board.selected is None
        board_api.contests.get_contestants.assert_not_called()

    def test_load_rejected(self, board, board_api):
        """Test the message for a rejected contest list."""
        board_api.contests.get_all.return_value = {"success": False, "message": "nope"}

        board.load()

        assert board.error == "Failed to load contests"

    def test_load_transport_failure(self, board, board_api):
        """Test the message for an unreachable backend."""
        from foundation_console.exceptions import APIError

        board_api.contests.get_all.side_effect = APIError("down")

        board.load()

        assert board.error == "An error occurred while loading contests"
        assert board.contests == []

    def test_load_propagates_authentication_error(self, board, board_api):
        """Test that a 401 on the contest list propagates."""
        from foundation_console.exceptions import AuthenticationError

        board_api.contests.get_all.side_effect = AuthenticationError()

        with pytest.raises(AuthenticationError):
            board.load()

    def test_vote_history_failure_is_ignored(self, board, board_api):
        """Test that a failing vote history is ignored."""
        from foundation_console.exceptions import APIError

        board_api.votes.get_my_votes.side_effect = APIError("down")

        board.load()

        assert board.error is None
        assert board.selected_id == "c2"

    def test_previous_votes_loaded(self, board, board_api):
        """Test that earlier votes mark the chosen contestant."""
        board_api.votes.get_my_votes.return_value = _ok([{"contest": "c2", "contestant": "p2"}])

        board.load()

        assert board.voted_contestant() == "p2"
        assert board.has_voted_for({"_id": "p2"})
        assert not board.can_vote({"_id": "p1"})

    def test_vote_history_401_is_ignored(self, board, board_api):
        """Test that a 401 from /votes/my-votes still leaves a usable board."""
        from foundation_console.exceptions import AuthenticationError

        board_api.votes.get_my_votes.side_effect = AuthenticationError(server_message="Not authorized, no token")

        board.load()

        assert board.error is None
        assert board.selected_id == "c2"
        assert len(board.tracker) == 0

    def test_anonymous_board_skips_vote_history(self, board_api):
        """Test that a signed-out board never asks for vote history."""
        from foundation_console.voting import VotingBoard

        board = VotingBoard(board_api, signed_in=False)
        board.load()

        board_api.votes.get_my_votes.assert_not_called()
        assert board.selected_id == "c2"

    def test_anonymous_visitor_over_http(self, fake_session):
        """Test loading for a visitor without a token against a backend answering 401."""
        from foundation_console.api.client import ApiClient
        from foundation_console.api.resources import FoundationAPI
        from foundation_console.voting import VotingBoard
        from tests.conftest import FakeResponse

        fake_session.queue(
            FakeResponse(200, {"success": True, "data": [{"_id": "c1", "name": "Best", "isActive": True}]}),
            FakeResponse(401, {"success": False, "message": "Not authorized, no token"}),
        )
        client = ApiClient("https://api.test", token_provider=lambda: None, session=fake_session)
        board = VotingBoard(FoundationAPI(client))

        board.load()

        assert board.error is None
        assert board.selected_id == "c1"
        assert "Authorization" not in (fake_session.calls[1].get("headers") or {})

    def test_take_error_clears_it(self, board, board_api):
        """Test that a load error is handed over once."""
        board_api.contests.get_all.return_value = {"success": False, "message": "nope"}
        board.load()

        assert board.take_error() == "Failed to load contests"
        assert board.take_error() is None
        assert board.error is None

    def test_select_unknown_contest(self, board):
        """Test selecting an unknown contest."""
        from foundation_console.exceptions import ValidationError

        board.load()

        with pytest.raises(ValidationError):
            board.select("nope")

    def test_refresh_failure_keeps_previous_data(self, board, board_api):
        """Test that a failed refresh keeps previous data."""
        from foundation_console.exceptions import APIError

        board.load()
        board_api.contests.get_contestants.side_effect = APIError("down")
        board.refresh()

        assert [c["_id"] for c in board.contestants] == ["p1", "p2"]

    def test_leading_votes(self, board):
        """Test the leading vote count."""
        assert board.leading_votes() == 0
        board.load()
        assert board.leading_votes() == 10


class TestCastVote:
    def test_success(self, board, board_api):
        """Test a successful vote."""
        board.load()

        message = board.cast_vote({"_id": "p1", "name": "Alice"})

        assert message == "Vote submitted successfully for Alice!"
        board_api.votes.cast_vote.assert_called_once_with("c2", "p1")
        assert board.tracker.voted_for("c2") == "p1"
        assert board.has_voted_for({"_id": "p1"})
        # contestants and stats are refetched after voting
        assert board_api.contests.get_contestants.call_count == 2

    def test_no_contestant_votable_after_voting(self, board, sample_contestants):
        """Test that every contestant of the contest is locked once a vote is cast."""
        board.load()
        assert all(board.can_vote(c) for c in sample_contestants)

        board.cast_vote(sample_contestants[0])

        assert not any(board.can_vote(c) for c in sample_contestants)

    def test_requires_selected_contest(self, board):
        """Test that voting needs a selected contest."""
        from foundation_console.exceptions import ValidationError

        with pytest.raises(ValidationError, match="Please select a contest"):
            board.cast_vote({"_id": "p1"})

    def test_second_vote_blocked_locally(self, board, board_api):
        """Test that a second vote is blocked without a request."""
        from foundation_console.exceptions import DuplicateVoteError

        board.load()
        board.cast_vote({"_id": "p1", "name": "Alice"})

        with pytest.raises(DuplicateVoteError) as exc_info:
            board.cast_vote({"_id": "p2", "name": "Bob"})
        assert exc_info.value.user_message() == "You have already voted in this contest"
        assert board_api.votes.cast_vote.call_count == 1

    def test_vote_in_another_contest_allowed(self, board, board_api):
        """Test voting in another contest."""
        board.load()
        board.cast_vote({"_id": "p1", "name": "Alice"})
        board.select("c3")

        board.cast_vote({"_id": "p2", "name": "Bob"})

        assert board.tracker.as_dict() == {"c2": "p1", "c3": "p2"}

    def test_server_duplicate_propagates(self, board, board_api):
        """Test that a server duplicate records nothing."""
        from foundation_console.exceptions import DuplicateVoteError

        board.load()
        board_api.votes.cast_vote.side_effect = DuplicateVoteError(server_message="dup")

        with pytest.raises(DuplicateVoteError):
            board.cast_vote({"_id": "p1"})
        assert not board.tracker.has_voted_in("c2")

    def test_rejected_vote_keeps_server_message(self, board, board_api):
        """Test that a rejected vote keeps the server message."""
        from foundation_console.exceptions import RequestRejectedError

        board.load()
        board_api.votes.cast_vote.return_value = {"success": False, "message": "Contest has ended"}

        with pytest.raises(RequestRejectedError) as exc_info:
            board.cast_vote({"_id": "p1"})
        assert exc_info.value.user_message("Failed to cast vote") == "Contest has ended"

    def test_other_failure_becomes_generic_message(self, board, board_api):
        """Test the generic message for other failures."""
        from foundation_console.exceptions import APIError
        from foundation_console.voting import VOTE_FAILED_MESSAGE

        board.load()
        board_api.votes.cast_vote.side_effect = APIError("HTTP 500", status_code=500)

        with pytest.raises(APIError) as exc_info:
            board.cast_vote({"_id": "p1"})
        assert exc_info.value.user_message() == VOTE_FAILED_MESSAGE
        assert exc_info.value.status_code == 500
