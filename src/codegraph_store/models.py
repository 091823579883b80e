"""Pydantic data models for codegraph-store.

Field aliases carry the persisted (wire) names, which stay compatible with
data written by the browser client. Dump with ``by_alias=True``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ActivityKind(str, Enum):
    """Activity kinds the front end records. Any other string is accepted too."""

    GRAPH = "graph"
    HAMMING = "hamming"
    EXPORT = "export"
    IMPORT = "import"
    TEMPLATE = "template"
    DELETE = "delete"


class Record(BaseModel):
    """One named, timestamped project payload."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    payload: Any = Field(default=None, alias="data")
    created_at: str = Field(alias="timestamp")
    display_timestamp: str = Field(default="", alias="dateCreated")


class LogEntry(BaseModel):
    """One activity history entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    kind: str = Field(alias="type")
    description: str
    payload: Any = Field(default_factory=dict, alias="data")
    created_at: str = Field(alias="timestamp")
    display_timestamp: str = Field(default="", alias="dateFormatted")


class StorageStats(BaseModel):
    """Size summary for one collection. ``size_kb`` keeps two decimals, e.g. ``"0.00"``."""

    count: int
    size_kb: str


class ImportResult(BaseModel):
    success: bool
    error: Optional[str] = None
