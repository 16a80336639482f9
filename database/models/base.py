from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# JSONB on PostgreSQL, plain JSON everywhere else (SQLite in tests and local runs)
JsonDocument = JSON().with_variant(JSONB(), 'postgresql')
