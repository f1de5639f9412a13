# api/routers/nodes.py

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.engine import Connection
from typing import List

from skill_tree import progress, store
from skill_tree.errors import InvalidNode, InvariantViolation, NotFound
from skill_tree.models import SkillGraph
from skill_tree.status import node_status

from ..database import get_db
from .. import crud, schemas


router = APIRouter(tags=["Nodes"])


def node_response(graph: SkillGraph, node_id: str) -> schemas.Node:
    node = graph.nodes[node_id]
    return schemas.Node(**node.model_dump(), status=node_status(graph, node))


@router.get("/nodes", response_model=List[schemas.Node])
def list_nodes(conn: Connection = Depends(get_db)):
    """
    Retrieve every node together with its current status.
    """
    graph = crud.load_graph(conn)
    return [node_response(graph, node_id) for node_id in graph.nodes]


@router.post("/nodes", response_model=schemas.Node, status_code=201)
def create_node(node: schemas.NodeCreate, conn: Connection = Depends(get_db)):
    """
    Create a new node with no prerequisites.
    """
    graph = crud.load_graph(conn)
    try:
        graph, node_id = store.create_node(graph, **node.model_dump(exclude_none=True))
    except InvalidNode as e:
        raise HTTPException(status_code=422, detail=str(e))
    crud.save_graph(conn, graph)
    return node_response(graph, node_id)


@router.get("/nodes/{node_id}", response_model=schemas.Node)
def get_node(node_id: str, conn: Connection = Depends(get_db)):
    graph = crud.load_graph(conn)
    if node_id not in graph:
        raise HTTPException(status_code=404, detail=f"Node '{node_id}' not found")
    return node_response(graph, node_id)


@router.patch("/nodes/{node_id}", response_model=schemas.Node)
def update_node(node_id: str, node_update: schemas.NodeUpdate, conn: Connection = Depends(get_db)):
    """
    Update some fields of a node. Fields left out of the request are kept.
    Completion is not editable here; use the toggle endpoint.
    """
    graph = crud.load_graph(conn)
    try:
        graph = store.update_node(graph, node_id, **node_update.model_dump(exclude_unset=True, exclude_none=True))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidNode as e:
        raise HTTPException(status_code=422, detail=str(e))

    crud.save_graph(conn, graph)
    return node_response(graph, node_id)


@router.delete("/nodes/{node_id}", status_code=200)
def delete_node(node_id: str, conn: Connection = Depends(get_db)):
    """
    Delete a node. Every other node stops requiring it.
    """
    graph = crud.load_graph(conn)
    try:
        graph = store.delete_node(graph, node_id)
    except InvariantViolation as e:
        raise HTTPException(status_code=409, detail=str(e))

    crud.save_graph(conn, graph)
    return {"message": f"Node '{node_id}' deleted successfully"}


@router.put("/nodes/{node_id}/position", response_model=schemas.Node)
def move_node(node_id: str, position: schemas.NodePosition, conn: Connection = Depends(get_db)):
    graph = crud.load_graph(conn)
    try:
        graph = store.move_node(graph, node_id, position.x, position.y)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    crud.save_graph(conn, graph)
    return node_response(graph, node_id)


@router.post("/nodes/{node_id}/toggle", response_model=schemas.ToggleResult)
def toggle_node(node_id: str, conn: Connection = Depends(get_db)):
    """
    Mark a node as achieved, or take the achievement back.
    Locked nodes are not changed.
    """
    graph = crud.load_graph(conn)
    try:
        result = progress.toggle_completion(graph, node_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    if result.toggled:
        crud.save_graph(conn, result.graph)
    return schemas.ToggleResult(
        node=node_response(result.graph, node_id),
        toggled=result.toggled,
        reward_granted=result.reward_granted,
    )


@router.post("/nodes/{prerequisite_id}/unlocks/{dependent_id}", response_model=schemas.Node, status_code=201)
def connect_nodes(prerequisite_id: str, dependent_id: str, conn: Connection = Depends(get_db)):
    """
    Make the dependent node require the prerequisite node.
    """
    graph = crud.load_graph(conn)
    try:
        graph = store.connect(graph, prerequisite_id, dependent_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    crud.save_graph(conn, graph)
    return node_response(graph, dependent_id)


@router.delete("/nodes/{prerequisite_id}/unlocks/{dependent_id}", status_code=200)
def disconnect_nodes(prerequisite_id: str, dependent_id: str, conn: Connection = Depends(get_db)):
    graph = crud.load_graph(conn)
    graph = store.disconnect(graph, prerequisite_id, dependent_id)
    crud.save_graph(conn, graph)
    return {"message": f"Dependency from {prerequisite_id} to {dependent_id} removed."}
