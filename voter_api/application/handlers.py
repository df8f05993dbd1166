import logging
import time

from voter_api.application.commands import (
    AddVoterCommand,
    AddVoterPollCommand,
    DeleteAllVotersCommand,
    DeleteVoterCommand,
    DeleteVoterPollCommand,
    UpdateVoterCommand,
    UpdateVoterPollCommand,
)
from voter_api.application.queries import (
    GetAllVotersQuery,
    GetVoterPollQuery,
    GetVoterPollsQuery,
    GetVoterQuery,
    HealthQuery,
)
from voter_api.infrastructure.voter_repo import VoterRepository

logger = logging.getLogger(__name__)


class RepositoryHandler:
    def __init__(self, repo: VoterRepository):
        self.repo = repo


class AddVoterHandler(RepositoryHandler):
    def handle(self, command: AddVoterCommand):
        voter = self.repo.add_voter(command.voter)
        logger.info("Voter %s added", voter.voter_id)
        return voter


class UpdateVoterHandler(RepositoryHandler):
    def handle(self, command: UpdateVoterCommand):
        return self.repo.update_voter(command.voter)


class DeleteVoterHandler(RepositoryHandler):
    def handle(self, command: DeleteVoterCommand):
        self.repo.delete_voter(command.voter_id)


class DeleteAllVotersHandler(RepositoryHandler):
    def handle(self, command: DeleteAllVotersCommand):
        self.repo.delete_all()
        logger.info("All voters deleted")


class AddVoterPollHandler(RepositoryHandler):
    def handle(self, command: AddVoterPollCommand):
        return self.repo.add_voter_poll(command.voter_id, command.poll_id, command.vote_date)


class UpdateVoterPollHandler(RepositoryHandler):
    def handle(self, command: UpdateVoterPollCommand):
        return self.repo.update_voter_poll(command.voter_id, command.poll_id, command.vote_date)


class DeleteVoterPollHandler(RepositoryHandler):
    def handle(self, command: DeleteVoterPollCommand):
        self.repo.delete_voter_poll(command.voter_id, command.poll_id)


class GetVoterHandler(RepositoryHandler):
    def handle(self, query: GetVoterQuery):
        return self.repo.get_voter(query.voter_id)


class GetAllVotersHandler(RepositoryHandler):
    def handle(self, query: GetAllVotersQuery):
        return self.repo.get_all_voters()


class GetVoterPollsHandler(RepositoryHandler):
    def handle(self, query: GetVoterPollsQuery):
        return self.repo.get_voter_polls(query.voter_id)


class GetVoterPollHandler(RepositoryHandler):
    def handle(self, query: GetVoterPollQuery):
        return self.repo.get_voter_poll(query.voter_id, query.poll_id)


class HealthHandler(RepositoryHandler):
    def __init__(self, repo: VoterRepository, version: str):
        super().__init__(repo)
        self.version = version
        self.started_at = time.monotonic()

    def handle(self, query: HealthQuery):
        return {
            "status": "ok",
            "version": self.version,
            "uptime": round(time.monotonic() - self.started_at, 3),
            "voters": self.repo.count(),
        }


class CommandBus:
    def __init__(self):
        self.handlers = {}

    def register_handler(self, command_type, handler):
        self.handlers[command_type] = handler

    def handle(self, command):
        command_type = type(command)
        if command_type not in self.handlers:
            raise ValueError(f"No handler registered for {command_type}")
        handler = self.handlers[command_type]

        # Return the result from the handler
        return handler.handle(command)


class QueryBus:
    def __init__(self):
        self.handlers = {}

    def register_handler(self, query_type, handler):
        self.handlers[query_type] = handler

    def handle(self, query):
        query_type = type(query)
        if query_type not in self.handlers:
            raise ValueError(f"No handler registered for query type: {query_type}")
        return self.handlers[query_type].handle(query)


def build_buses(repo: VoterRepository, version: str):
    """Create a command bus and a query bus wired to ``repo``."""
    command_bus = CommandBus()
    command_bus.register_handler(AddVoterCommand, AddVoterHandler(repo))
    command_bus.register_handler(UpdateVoterCommand, UpdateVoterHandler(repo))
    command_bus.register_handler(DeleteVoterCommand, DeleteVoterHandler(repo))
    command_bus.register_handler(DeleteAllVotersCommand, DeleteAllVotersHandler(repo))
    command_bus.register_handler(AddVoterPollCommand, AddVoterPollHandler(repo))
    command_bus.register_handler(UpdateVoterPollCommand, UpdateVoterPollHandler(repo))
    command_bus.register_handler(DeleteVoterPollCommand, DeleteVoterPollHandler(repo))

    query_bus = QueryBus()
    query_bus.register_handler(GetVoterQuery, GetVoterHandler(repo))
    query_bus.register_handler(GetAllVotersQuery, GetAllVotersHandler(repo))
    query_bus.register_handler(GetVoterPollsQuery, GetVoterPollsHandler(repo))
    query_bus.register_handler(GetVoterPollQuery, GetVoterPollHandler(repo))
    query_bus.register_handler(HealthQuery, HealthHandler(repo, version))

    return command_bus, query_bus
