"""
API Request and Response Schemas

This module defines the Pydantic models for API responses.
Request bodies are read leniently in the endpoints (bad input degrades to
defaults), so only the links document has an input-side shape.
"""

from pydantic import BaseModel, ConfigDict, Field


class OkResponse(BaseModel):
    """Acknowledgment returned by write endpoints."""
    ok: bool = Field(..., description="Always true for tracking; true after a settings write")


class CountryCount(BaseModel):
    """Visits from one country within a window."""
    country: str
    c: int = Field(..., description="Visit count")


class WindowStats(BaseModel):
    """Aggregate for one time window."""
    visits: int
    countries: list[CountryCount]


class StatsResponse(BaseModel):
    """Response model for the admin stats endpoint."""
    day: WindowStats
    week: WindowStats
    month: WindowStats
    all: WindowStats


class VisitOut(BaseModel):
    """One row of the recent visits listing."""
    model_config = ConfigDict(from_attributes=True)

    ts: int = Field(..., description="Milliseconds since epoch")
    ip: str
    country: str
    path: str
    ref: str


class ButtonLinks(BaseModel):
    """Outbound button URLs. Extra keys sent by the admin are kept."""
    model_config = ConfigDict(extra="allow")

    operator: str
    chats: str
    reviews: str
    bot: str
    channel: str
    exchanger: str
    jobs: str
    support: str


class LinksDocument(BaseModel):
    """The links settings document as stored and served."""
    model_config = ConfigDict(extra="allow")

    fortune: str
    job: str
    buttons: ButtonLinks
