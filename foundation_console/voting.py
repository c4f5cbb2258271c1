"""
Client-side voting flow.

``VotingBoard`` drives the public voting page: it loads contests and the
user's previous votes, auto-selects the first active contest and casts
votes. One vote per user per contest is enforced by the backend; the board
keeps an optimistic local copy so the UI can mark the chosen contestant and
refuse a second vote without a round trip.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from foundation_console.api.client import unwrap
from foundation_console.api.resources import FoundationAPI
from foundation_console.domain import ref_id
from foundation_console.exceptions import (
    APIError,
    AuthenticationError,
    DuplicateVoteError,
    RequestRejectedError,
    ValidationError,
)
from foundation_console.logging_config import log_event

logger = logging.getLogger(__name__)

VOTE_FAILED_MESSAGE = "Failed to cast vote. Please try again."


class VoteTracker:
    """Contest id -> contestant id the current user voted for."""

    def __init__(self, votes: Mapping[str, str] | None = None) -> None:
        self._votes: dict[str, str] = dict(votes or {})

    def load(self, votes: Iterable[Mapping[str, Any]]) -> None:
        """Replace the map with entries from ``/votes/my-votes``."""
        self._votes = {}
        for vote in votes:
            contest_id = ref_id(vote.get("contest"))
            contestant_id = ref_id(vote.get("contestant"))
            if contest_id and contestant_id:
                self._votes[contest_id] = contestant_id

    def record(self, contest_id: str, contestant_id: str) -> None:
        self._votes[contest_id] = contestant_id

    def voted_for(self, contest_id: str) -> str | None:
        return self._votes.get(contest_id)

    def has_voted_in(self, contest_id: str) -> bool:
        return contest_id in self._votes

    def as_dict(self) -> dict[str, str]:
        return dict(self._votes)

    def __len__(self) -> int:
        return len(self._votes)


class VotingBoard:
    """
    Args:
        api: Endpoint bundle.
        tracker: Previously known votes.
        signed_in: Whether the visitor has a session; anonymous visitors
            have no vote history to fetch.
    """

    def __init__(self, api: FoundationAPI, tracker: VoteTracker | None = None, *, signed_in: bool = True) -> None:
        self.api = api
        self.tracker = tracker or VoteTracker()
        self.signed_in = signed_in
        self.contests: list[dict[str, Any]] = []
        self.selected: dict[str, Any] | None = None
        self.contestants: list[dict[str, Any]] = []
        self.stats: dict[str, Any] | None = None
        self.error: str | None = None

    @property
    def selected_id(self) -> str | None:
        return self.selected.get("_id") if self.selected else None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Fetch contests and the user's votes, then select the first active contest."""
        self.error = None
        try:
            self.contests = list(unwrap(self.api.contests.get_all(), default=[]))
        except AuthenticationError:
            raise
        except RequestRejectedError:
            self.error = "Failed to load contests"
        except APIError as exc:
            logger.warning("Loading contests failed: %s", exc)
            self.error = "An error occurred while loading contests"

        self.load_votes()

        if self.selected is None:
            active = next((contest for contest in self.contests if contest.get("isActive")), None)
            if active is not None:
                self.select(active["_id"])

    def load_votes(self) -> None:
        """Fetch the visitor's vote history; failures leave the tracker as it was."""
        if not self.signed_in:
            return
        try:
            self.tracker.load(unwrap(self.api.votes.get_my_votes(), default=[]))
        except APIError as exc:
            # Includes a 401 for a visitor whose token the backend no longer accepts
            logger.warning("Loading votes failed: %s", exc)

    def take_error(self) -> str | None:
        """Return the pending load error once and clear it."""
        error, self.error = self.error, None
        return error

    def select(self, contest_id: str) -> None:
        contest = next((item for item in self.contests if item.get("_id") == contest_id), None)
        if contest is None:
            raise ValidationError(f"Unknown contest: {contest_id}", field="contest")
        self.selected = contest
        log_event("contest_selected", contest_id=contest_id)
        self.refresh()

    def refresh(self) -> None:
        """Refetch contestants and stats of the selected contest.

        Failures are logged and the previous data is kept.
        """
        contest_id = self.selected_id
        if not contest_id:
            return
        try:
            contestants = self.api.contests.get_contestants(contest_id)
            if contestants.get("success"):
                self.contestants = list(contestants.get("data") or [])
            stats = self.api.contests.get_stats(contest_id)
            if stats.get("success"):
                self.stats = stats.get("data")
        except AuthenticationError:
            raise
        except APIError as exc:
            logger.warning("Loading contest %s failed: %s", contest_id, exc)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def voted_contestant(self) -> str | None:
        contest_id = self.selected_id
        return self.tracker.voted_for(contest_id) if contest_id else None

    def has_voted_for(self, contestant: Mapping[str, Any]) -> bool:
        return self.voted_contestant() == contestant.get("_id")

    def can_vote(self, contestant: Mapping[str, Any]) -> bool:
        contest_id = self.selected_id
        return bool(contest_id) and not self.tracker.has_voted_in(contest_id) and bool(contestant.get("_id"))

    def leading_votes(self) -> int:
        distribution = (self.stats or {}).get("voteDistribution") or []
        return max((int(item.get("votes") or 0) for item in distribution), default=0)

    # ------------------------------------------------------------------
    # Voting
    # ------------------------------------------------------------------

    def cast_vote(self, contestant: Mapping[str, Any]) -> str:
        """
        Vote for ``contestant`` in the selected contest.

        Returns:
            The confirmation message.

        Raises:
            DuplicateVoteError: a vote for this contest is already recorded
                locally or the backend answered 409.
            RequestRejectedError: the backend rejected the vote.
            APIError: any other failure, with a generic message.
        """
        contest_id = self.selected_id
        if not contest_id:
            raise ValidationError("Please select a contest", field="contest")
        if self.tracker.has_voted_in(contest_id):
            raise DuplicateVoteError()

        contestant_id = contestant["_id"]
        try:
            unwrap(self.api.votes.cast_vote(contest_id, contestant_id))
        except (DuplicateVoteError, RequestRejectedError, AuthenticationError):
            raise
        except APIError as exc:
            logger.warning("Casting vote in %s failed: %s", contest_id, exc)
            raise APIError(VOTE_FAILED_MESSAGE, status_code=exc.status_code, method=exc.method, path=exc.path) from exc

        self.tracker.record(contest_id, contestant_id)
        log_event("vote_cast", contest_id=contest_id, contestant_id=contestant_id)
        self.refresh()
        return f"Vote submitted successfully for {contestant.get('name', '')}!"
