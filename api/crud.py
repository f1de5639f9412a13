# api/crud.py

import logging

from sqlalchemy import select, insert, update
from sqlalchemy.engine import Connection

from skill_tree import serialization
from skill_tree.models import SkillGraph
from . import database

logger = logging.getLogger(__name__)

# We use the SQLAlchemy table object defined in database.py


def get_document(conn: Connection, key: str = None):
    """Fetches the stored document text for a key, or None."""
    key = key or database.TREE_STORAGE_KEY
    query = select(database.tree_documents.c.value).where(database.tree_documents.c.key == key)
    return conn.execute(query).scalar_one_or_none()


def load_graph(conn: Connection, key: str = None) -> SkillGraph:
    """
    Loads the saved skill tree.
    Falls back to the default single-node tree if nothing usable is stored.
    """
    return serialization.load_saved(get_document(conn, key))


def save_graph(conn: Connection, graph: SkillGraph, key: str = None):
    """Stores the skill tree, replacing any previously saved version."""
    key = key or database.TREE_STORAGE_KEY
    value = serialization.export_json(graph, indent=None)

    if get_document(conn, key) is None:
        query = insert(database.tree_documents).values(key=key, value=value)
    else:
        query = (
            update(database.tree_documents)
            .where(database.tree_documents.c.key == key)
            .values(value=value)
        )
    conn.execute(query)
    conn.commit()  # Commit the transaction
    logger.debug("Saved skill tree '%s' with %d nodes", key, len(graph))
