from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from voter_api.domain.voter import Voter, wire_field


class AddVoterCommand(BaseModel):
    voter: Voter


class UpdateVoterCommand(BaseModel):
    voter: Voter


class DeleteVoterCommand(BaseModel):
    voter_id: int


class DeleteAllVotersCommand(BaseModel):
    pass


class AddVoterPollCommand(BaseModel):
    voter_id: int
    poll_id: int
    vote_date: datetime


class UpdateVoterPollCommand(BaseModel):
    voter_id: int
    poll_id: int
    vote_date: datetime


class DeleteVoterPollCommand(BaseModel):
    voter_id: int
    poll_id: int


class VoterPollBody(BaseModel):
    vote_date: Optional[datetime] = wire_field("voteDate", "VoteDate", "vote_date", default=None)
