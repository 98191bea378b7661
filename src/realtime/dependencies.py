"""
FastAPI dependencies exposing the push subsystem built at startup.
"""
from fastapi import Request

from .dispatcher import EventDispatcher
from .identity import IdentityResolver
from .registry import ConnectionRegistry

def get_registry(request: Request) -> ConnectionRegistry:
    return request.app.state.registry

def get_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.dispatcher

def get_identity_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver
