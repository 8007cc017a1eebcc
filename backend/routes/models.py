"""Pydantic request models for API endpoints."""

from uuid import UUID

from pydantic import BaseModel


class CreateAdventure(BaseModel):
    name: str
    description: str = ""
    language: str | None = None


class CreateLocation(BaseModel):
    name: str
    initial: bool = False
    final: bool = False
    source_key: UUID | None = None
    enter_script_id: int | None = None
    exit_script_id: int | None = None


class CreateRoute(BaseModel):
    location_id: int
    destination_location_id: int
    name: str = ""
    source_key: UUID | None = None
    route_taken_source_key: UUID | None = None
    route_taken_script_id: int | None = None


class StartGame(BaseModel):
    adventure_id: int
    language: str | None = None
    timestamp: int | None = None


class TakeRoute(BaseModel):
    route_id: int
    timestamp: int | None = None


class CreateSource(BaseModel):
    adventure_id: int | None = None
    key: UUID | None = None
    name: str = ""
    text: str = ""
    language: str | None = None
    languages: list[str] | None = None


class UpdateSource(BaseModel):
    adventure_id: int | None = None
    name: str = ""
    text: str
    language: str | None = None


class SaveScript(BaseModel):
    adventure_id: int
    name: str = ""
    content: str = ""
    includes: list[int] | None = None
