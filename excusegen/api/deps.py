"""
Request dependencies. The catalog and the generator agent are built once in
the application lifespan and live on app.state.
"""

from fastapi import Request

from ..agents.agent import BaseExcuseAgent
from ..core.catalog import Catalog


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


def get_agent(request: Request) -> BaseExcuseAgent:
    return request.app.state.agent
