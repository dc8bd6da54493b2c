"""Shared FastAPI dependency definitions."""
from __future__ import annotations

from fastapi import Request

from watcher.service import ParserService


def get_parser_service(request: Request) -> ParserService:
    """Return the service the application was created with."""

    return request.app.state.parser_service
