from datetime import datetime
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def wire_field(camel: str, pascal: str, snake: str, **kwargs):
    """Serialize as camelCase; accept camelCase, PascalCase or snake_case."""
    return Field(
        validation_alias=AliasChoices(camel, pascal, snake),
        serialization_alias=camel,
        **kwargs,
    )


class PollRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    poll_id: int = wire_field("pollId", "PollId", "poll_id")
    vote_id: int = wire_field("voteId", "VoteId", "vote_id")
    vote_date: datetime = wire_field("voteDate", "VoteDate", "vote_date")


class Voter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    voter_id: int = wire_field("voterId", "VoterId", "voter_id")
    name: str = wire_field("name", "Name", "name")
    email: str = wire_field("email", "Email", "email")
    # VoteHistory is the legacy client's name for the same list
    poll_history: List[PollRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("pollHistory", "VoteHistory", "PollHistory", "poll_history"),
        serialization_alias="pollHistory",
    )

    @field_validator("poll_history", mode="before")
    @classmethod
    def null_history_is_empty(cls, poll_history):
        return [] if poll_history is None else poll_history

    @field_validator("poll_history")
    @classmethod
    def poll_ids_unique(cls, poll_history: List[PollRecord]) -> List[PollRecord]:
        seen = set()
        for record in poll_history:
            if record.poll_id in seen:
                raise ValueError(f"Duplicate poll id {record.poll_id} in poll history")
            seen.add(record.poll_id)
        return poll_history

    def find_poll_index(self, poll_id: int) -> int:
        """Position of ``poll_id`` in the history, or -1 if absent."""
        for index, record in enumerate(self.poll_history):
            if record.poll_id == poll_id:
                return index
        return -1

    def highest_vote_id(self) -> int:
        return max((record.vote_id for record in self.poll_history), default=0)
