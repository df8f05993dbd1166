import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from voter_api.application.commands import (
    AddVoterCommand,
    AddVoterPollCommand,
    DeleteAllVotersCommand,
    DeleteVoterCommand,
    DeleteVoterPollCommand,
    UpdateVoterCommand,
    UpdateVoterPollCommand,
    VoterPollBody,
)
from voter_api.application.handlers import CommandBus, QueryBus
from voter_api.application.queries import (
    GetAllVotersQuery,
    GetVoterPollQuery,
    GetVoterPollsQuery,
    GetVoterQuery,
    HealthQuery,
)
from voter_api.domain.exceptions import AlreadyExistsError, NotFoundError
from voter_api.domain.voter import PollRecord, Voter
from voter_api.interfaces.dependencies import get_command_bus, get_query_bus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/voters", tags=["Voters"])


# Registered before /{voter_id} so "health" is never parsed as an id
@router.get("/health")
def health_check(query_bus: QueryBus = Depends(get_query_bus)):
    return query_bus.handle(HealthQuery())


@router.get("", response_model=List[Voter])
def list_all_voters(query_bus: QueryBus = Depends(get_query_bus)):
    try:
        return query_bus.handle(GetAllVotersQuery())
    except Exception:
        logger.exception("Error getting all voters")
        raise HTTPException(status_code=500, detail="Error getting all voters")


@router.get("/{voter_id}", response_model=Voter)
def get_voter(voter_id: int, query_bus: QueryBus = Depends(get_query_bus)):
    try:
        return query_bus.handle(GetVoterQuery(voter_id=voter_id))
    except NotFoundError as e:
        logger.warning("Voter not found: %s", e)
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=Voter)
def add_voter(voter: Voter, command_bus: CommandBus = Depends(get_command_bus)):
    try:
        return command_bus.handle(AddVoterCommand(voter=voter))
    except ValueError as e:
        logger.warning("Error adding voter: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.put("", response_model=Voter)
def update_voter(voter: Voter, command_bus: CommandBus = Depends(get_command_bus)):
    try:
        return command_bus.handle(UpdateVoterCommand(voter=voter))
    except ValueError as e:
        logger.warning("Error updating voter: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("", response_class=PlainTextResponse)
def delete_all_voters(command_bus: CommandBus = Depends(get_command_bus)):
    try:
        command_bus.handle(DeleteAllVotersCommand())
    except Exception:
        logger.exception("Error deleting all voters")
        raise HTTPException(status_code=500, detail="Error deleting all voters")
    return "Delete All OK"


@router.delete("/{voter_id}", response_class=PlainTextResponse)
def delete_voter(voter_id: int, command_bus: CommandBus = Depends(get_command_bus)):
    try:
        command_bus.handle(DeleteVoterCommand(voter_id=voter_id))
    except Exception:
        logger.exception("Error deleting voter %s", voter_id)
        raise HTTPException(status_code=500, detail="Error deleting voter")
    return "Delete OK"


@router.get("/{voter_id}/polls", response_model=List[PollRecord])
def get_voter_polls(voter_id: int, query_bus: QueryBus = Depends(get_query_bus)):
    try:
        return query_bus.handle(GetVoterPollsQuery(voter_id=voter_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{voter_id}/polls/{poll_id}", response_model=PollRecord)
def get_voter_poll(voter_id: int, poll_id: int, query_bus: QueryBus = Depends(get_query_bus)):
    try:
        return query_bus.handle(GetVoterPollQuery(voter_id=voter_id, poll_id=poll_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{voter_id}/polls/{poll_id}", response_model=PollRecord)
def add_voter_poll(
    voter_id: int,
    poll_id: int,
    body: Optional[VoterPollBody] = Body(default=None),
    command_bus: CommandBus = Depends(get_command_bus),
):
    vote_date = body.vote_date if body and body.vote_date else datetime.now(timezone.utc)
    command = AddVoterPollCommand(voter_id=voter_id, poll_id=poll_id, vote_date=vote_date)
    try:
        return command_bus.handle(command)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AlreadyExistsError as e:
        logger.warning("Error adding poll: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{voter_id}/polls/{poll_id}", response_model=PollRecord)
def update_voter_poll(
    voter_id: int,
    poll_id: int,
    body: VoterPollBody,
    command_bus: CommandBus = Depends(get_command_bus),
):
    if body.vote_date is None:
        raise HTTPException(status_code=400, detail="voteDate is required")

    command = UpdateVoterPollCommand(voter_id=voter_id, poll_id=poll_id, vote_date=body.vote_date)
    try:
        return command_bus.handle(command)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        logger.warning("Error updating poll: %s", e)
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{voter_id}/polls/{poll_id}", response_class=PlainTextResponse)
def delete_voter_poll(voter_id: int, poll_id: int, command_bus: CommandBus = Depends(get_command_bus)):
    try:
        command_bus.handle(DeleteVoterPollCommand(voter_id=voter_id, poll_id=poll_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return "Delete OK"
