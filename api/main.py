# api/main.py

import os
from fastapi import FastAPI
from .routers import nodes, tree
import api.database # To access and re-assign api.database.engine

def create_app():
    # Initialize the database engine here, ensuring it uses the
    # environment variables set by pytest_configure for tests.
    database_url = os.getenv("DATABASE_URL", api.database.DATABASE_URL)

    # Re-assign the engine in the database module.
    # This allows existing parts of the app (like get_db) to use the new engine.
    api.database.engine = api.database.make_engine(database_url)
    api.database.metadata.create_all(bind=api.database.engine)

    app = FastAPI(
        title="Skill Tree API",
        description="Tracks progress through a graph of achievements and their prerequisites.",
        version="0.1.0",
    )

    app.include_router(nodes.router)
    app.include_router(tree.router)

    # Also expose the same routes under /api for the frontend
    api_prefix = "/api"
    app.include_router(nodes.router, prefix=api_prefix)
    app.include_router(tree.router, prefix=api_prefix)

    return app

# Run with the factory so nothing touches the database at import time:
# uvicorn api.main:create_app --factory
