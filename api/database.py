# api/database.py

import os
from pathlib import Path
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from sqlalchemy import (
    create_engine,
    MetaData,
    Table,
    Column,
    String,
    Text,
    func,
    TIMESTAMP,
)
from sqlalchemy.engine import Connection, Engine

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./skill_tree.db")

# Key under which the skill tree document is stored.
TREE_STORAGE_KEY = os.getenv("TREE_STORAGE_KEY", "skill-tree-builder-v2")


def make_engine(database_url: str) -> Engine:
    """Creates an engine; SQLite connections may be used from FastAPI's worker threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


engine = make_engine(DATABASE_URL)
metadata = MetaData()

# A plain key-value store: one row holds the whole serialized tree.
tree_documents = Table(
    "tree_documents",
    metadata,
    Column("key", String, primary_key=True),
    Column("value", Text, nullable=False),
    Column("updated_at", TIMESTAMP, server_default=func.now(), onupdate=func.now()),
)


def get_db() -> Connection:
    conn = engine.connect()
    try:
        yield conn
    finally:
        conn.close()
