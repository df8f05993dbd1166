import logging
import threading
from datetime import datetime
from typing import Dict, List

from voter_api.domain.exceptions import AlreadyExistsError, NotFoundError
from voter_api.domain.voter import PollRecord, Voter

logger = logging.getLogger(__name__)


class VoterRepository:
    """In-memory store of voters keyed by ``voter_id``.

    A single re-entrant lock guards the mapping.  Poll operations read the
    voter, edit its history in memory and write the whole voter back through
    ``update_voter`` while still holding the lock, so concurrent callers never
    lose each other's updates.  Records are copied on the way in and on the
    way out; callers never hold a reference to stored state.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._voters: Dict[int, Voter] = {}
        # Highest vote id handed out per voter; survives poll deletions
        self._vote_counters: Dict[int, int] = {}

    def add_voter(self, voter: Voter) -> Voter:
        with self._lock:
            if voter.voter_id in self._voters:
                raise AlreadyExistsError(f"Voter {voter.voter_id} already exists")
            self._voters[voter.voter_id] = voter.model_copy(deep=True)
            logger.debug("Added voter %s", voter.voter_id)
            return voter.model_copy(deep=True)

    def get_voter(self, voter_id: int) -> Voter:
        with self._lock:
            voter = self._voters.get(voter_id)
            if voter is None:
                raise NotFoundError(f"Voter {voter_id} does not exist")
            return voter.model_copy(deep=True)

    def get_all_voters(self) -> List[Voter]:
        with self._lock:
            return [voter.model_copy(deep=True) for voter in self._voters.values()]

    def voter_exists(self, voter_id: int) -> bool:
        with self._lock:
            return voter_id in self._voters

    def count(self) -> int:
        with self._lock:
            return len(self._voters)

    def update_voter(self, voter: Voter) -> Voter:
        """Replace the stored voter, poll history included."""
        with self._lock:
            if voter.voter_id not in self._voters:
                raise NotFoundError(f"Voter {voter.voter_id} does not exist")
            self._voters[voter.voter_id] = voter.model_copy(deep=True)
            logger.debug("Updated voter %s", voter.voter_id)
            return voter.model_copy(deep=True)

    def delete_voter(self, voter_id: int) -> None:
        with self._lock:
            if self._voters.pop(voter_id, None) is not None:
                logger.debug("Deleted voter %s", voter_id)
            self._vote_counters.pop(voter_id, None)

    def delete_all(self) -> None:
        with self._lock:
            self._voters = {}
            self._vote_counters = {}
            logger.debug("Deleted all voters")

    def get_voter_polls(self, voter_id: int) -> List[PollRecord]:
        return self.get_voter(voter_id).poll_history

    def get_voter_poll(self, voter_id: int, poll_id: int) -> PollRecord:
        voter = self.get_voter(voter_id)
        index = voter.find_poll_index(poll_id)
        if index < 0:
            raise NotFoundError(f"Poll {poll_id} not found for voter {voter_id}")
        return voter.poll_history[index]

    def add_voter_poll(self, voter_id: int, poll_id: int, vote_date: datetime) -> PollRecord:
        with self._lock:
            voter = self.get_voter(voter_id)
            if voter.find_poll_index(poll_id) >= 0:
                raise AlreadyExistsError(f"Poll {poll_id} already recorded for voter {voter_id}")

            vote_id = max(self._vote_counters.get(voter_id, 0), voter.highest_vote_id()) + 1
            record = PollRecord(poll_id=poll_id, vote_id=vote_id, vote_date=vote_date)
            voter.poll_history.append(record)

            self.update_voter(voter)
            self._vote_counters[voter_id] = vote_id
            return record.model_copy()

    def update_voter_poll(self, voter_id: int, poll_id: int, vote_date: datetime) -> PollRecord:
        with self._lock:
            voter = self.get_voter(voter_id)
            index = voter.find_poll_index(poll_id)
            if index < 0:
                raise NotFoundError(f"Poll {poll_id} not found for voter {voter_id}")

            record = voter.poll_history[index]
            record.vote_date = vote_date

            self.update_voter(voter)
            return record.model_copy()

    def delete_voter_poll(self, voter_id: int, poll_id: int) -> None:
        with self._lock:
            voter = self.get_voter(voter_id)
            index = voter.find_poll_index(poll_id)
            if index < 0:
                raise NotFoundError(f"Poll {poll_id} not found for voter {voter_id}")

            # Remember the highest vote id before the record disappears
            self._vote_counters[voter_id] = max(
                self._vote_counters.get(voter_id, 0), voter.highest_vote_id()
            )
            del voter.poll_history[index]

            self.update_voter(voter)
