from pydantic import BaseModel


class GetVoterQuery(BaseModel):
    voter_id: int

class GetAllVotersQuery(BaseModel):
    pass  # No parameters are required for listing every voter

class GetVoterPollsQuery(BaseModel):
    voter_id: int

class GetVoterPollQuery(BaseModel):
    voter_id: int
    poll_id: int

class HealthQuery(BaseModel):
    pass
