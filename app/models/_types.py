"""Column types shared by the table models."""

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB

# JSONB on PostgreSQL, plain JSON text everywhere else
JSONType = JSON().with_variant(JSONB(), "postgresql")
