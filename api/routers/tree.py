# api/routers/tree.py

from fastapi import APIRouter, HTTPException, Depends, Body
from sqlalchemy.engine import Connection
from typing import Any, Dict, List

from skill_tree import progress, serialization, store
from skill_tree.errors import InvalidImport

from ..database import get_db
from .. import crud, schemas


router = APIRouter(
    prefix="/tree",
    tags=["Tree"],
)


@router.get("/export")
def export_tree(conn: Connection = Depends(get_db)):
    """
    Export the whole tree as a backup document.
    """
    graph = crud.load_graph(conn)
    return serialization.export_document(graph)


@router.post("/import", response_model=schemas.TreeStats)
def import_tree(document: Dict[str, Any] = Body(...), conn: Connection = Depends(get_db)):
    """
    Replace the whole tree with a backup document.
    An invalid document is rejected and the current tree is kept.
    """
    try:
        graph = serialization.import_document(document)
    except InvalidImport as e:
        raise HTTPException(status_code=422, detail=str(e))

    crud.save_graph(conn, graph)
    return tree_stats(graph)


@router.post("/reset", response_model=schemas.TreeStats)
def reset_tree(conn: Connection = Depends(get_db)):
    """
    Throw away every node and start over from the default tree.
    """
    graph = store.reset_to_default()
    crud.save_graph(conn, graph)
    return tree_stats(graph)


@router.get("/stats", response_model=schemas.TreeStats)
def read_stats(conn: Connection = Depends(get_db)):
    return tree_stats(crud.load_graph(conn))


@router.get("/connections", response_model=List[schemas.Connection])
def list_connections(conn: Connection = Depends(get_db)):
    """
    Retrieve every prerequisite edge between existing nodes.
    """
    graph = crud.load_graph(conn)
    return [connection._asdict() for connection in progress.connections(graph)]


def tree_stats(graph) -> schemas.TreeStats:
    return schemas.TreeStats(
        node_count=len(graph),
        completed_count=progress.completed_count(graph),
        total_reward=progress.total_reward(graph),
    )
