from datetime import UTC, datetime

import sqlalchemy as sa
from pydantic import BaseModel
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


class Entity(BaseModel):
    """Base entity class with a store-assigned integer identifier."""

    id: int | None = PydanticField(
        default=None,
        description="Unique identifier assigned by the store on creation",
    )

    created_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = PydanticField(default_factory=lambda: datetime.now(UTC))


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement primary key and timestamps."""

    id: int | None = Field(
        default=None,
        primary_key=True,
        description="Unique identifier assigned by the store",
    )

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        sa_column_kwargs={
            "server_default": sa.func.now(),
            "onupdate": sa.func.now(),
        },
    )
