from fastapi import Request

from voter_api.application.handlers import CommandBus, QueryBus


def get_command_bus(request: Request) -> CommandBus:
    return request.app.state.command_bus


def get_query_bus(request: Request) -> QueryBus:
    return request.app.state.query_bus
