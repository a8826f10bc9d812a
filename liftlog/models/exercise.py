"""Exercise model - predefined exercise catalogue shared by all users."""

from __future__ import annotations

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.base import Base


class Exercise(Base):
    """A named exercise (e.g. Back Squat). Names are unique."""

    __tablename__ = "exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
