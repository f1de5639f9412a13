# conftest.py

import os
import tempfile
import pytest
from fastapi.testclient import TestClient

from skill_tree.models import SkillGraph, SkillNode

# --- Environment Configuration ---

def pytest_configure(config):
    """
    Forcefully sets the environment variables for the entire test session.
    The database is a throwaway SQLite file so no service needs to be running.
    """
    db_dir = tempfile.mkdtemp(prefix="skill_tree_test_")
    os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(db_dir, 'skill_tree_test.db')}"
    os.environ["TREE_STORAGE_KEY"] = "skill-tree-test"


# --- Fixtures ---

def _make_graph(*nodes):
    """Builds a snapshot from SkillNode objects."""
    return SkillGraph(nodes={node.id: node for node in nodes})


@pytest.fixture
def chain_graph():
    """A (no prerequisites) <- B <- C, nothing completed."""
    return _make_graph(
        SkillNode(id="a", name="A"),
        SkillNode(id="b", name="B", prerequisite_ids=["a"]),
        SkillNode(id="c", name="C", prerequisite_ids=["b"]),
    )


@pytest.fixture
def clean_db_client():
    """
    Provides a TestClient instance with a clean database state.
    """
    from api.main import create_app
    import api.database

    app_instance = create_app()  # create_app uses the env vars set above

    with api.database.engine.connect() as connection:
        for table in reversed(api.database.metadata.sorted_tables):
            connection.execute(table.delete())
        connection.commit()

    yield TestClient(app_instance)


@pytest.fixture
def make_graph():
    """Returns a helper that builds a snapshot from SkillNode objects."""
    return _make_graph
