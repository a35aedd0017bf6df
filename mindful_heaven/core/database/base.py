"""
Base database models and utilities.

This module provides the foundational database components used across
all entities in the centralized database layer using SQLModel.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlmodel import SQLModel


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)


def utc_now_naive() -> datetime:
    """Current UTC time without tzinfo, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    """Primary key generator for every entity."""
    return str(uuid.uuid4())
