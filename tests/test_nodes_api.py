# tests/test_nodes_api.py


def _node(client, node_id):
    response = client.get(f"/nodes/{node_id}")
    assert response.status_code == 200
    return response.json()


def test_empty_database_serves_default_tree(clean_db_client):
    response = clean_db_client.get("/nodes")

    assert response.status_code == 200
    nodes = response.json()
    assert len(nodes) == 1
    assert nodes[0]["id"] == "start"
    assert nodes[0]["status"] == "available"


def test_create_node(clean_db_client):
    response = clean_db_client.post("/nodes", json={"name": "Launch Podcast", "reward_value": 300, "category": "content"})

    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Launch Podcast"
    assert created["reward_value"] == 300
    assert created["category"] == "content"
    assert created["prerequisite_ids"] == []
    assert created["status"] == "available"

    # The new node was persisted
    assert len(clean_db_client.get("/nodes").json()) == 2


def test_get_missing_node_returns_404(clean_db_client):
    response = clean_db_client.get("/nodes/ghost")
    assert response.status_code == 404


def test_update_node(clean_db_client):
    response = clean_db_client.patch("/nodes/start", json={"name": "Day One", "emphasized": True})

    assert response.status_code == 200
    assert response.json()["name"] == "Day One"
    assert response.json()["emphasized"] is True
    assert _node(clean_db_client, "start")["description"] == "Your journey begins here"


def test_update_missing_node_returns_404(clean_db_client):
    response = clean_db_client.patch("/nodes/ghost", json={"name": "Nope"})
    assert response.status_code == 404


def test_update_rejects_negative_reward(clean_db_client):
    response = clean_db_client.patch("/nodes/start", json={"reward_value": -1})
    assert response.status_code == 422


def test_delete_last_node_returns_409(clean_db_client):
    response = clean_db_client.delete("/nodes/start")

    assert response.status_code == 409
    assert len(clean_db_client.get("/nodes").json()) == 1


def test_delete_node_prunes_dependencies(clean_db_client):
    quest_id = clean_db_client.post("/nodes", json={}).json()["id"]
    clean_db_client.post(f"/nodes/start/unlocks/{quest_id}")

    response = clean_db_client.delete("/nodes/start")

    assert response.status_code == 200
    assert _node(clean_db_client, quest_id)["prerequisite_ids"] == []


def test_connect_and_disconnect(clean_db_client):
    quest_id = clean_db_client.post("/nodes", json={"name": "quest1"}).json()["id"]

    response = clean_db_client.post(f"/nodes/start/unlocks/{quest_id}")
    assert response.status_code == 201
    assert response.json()["prerequisite_ids"] == ["start"]
    assert response.json()["status"] == "locked"

    response = clean_db_client.delete(f"/nodes/start/unlocks/{quest_id}")
    assert response.status_code == 200
    assert _node(clean_db_client, quest_id)["status"] == "available"


def test_connect_missing_node_returns_404(clean_db_client):
    response = clean_db_client.post("/nodes/ghost/unlocks/start")
    assert response.status_code == 404


def test_move_node(clean_db_client):
    response = clean_db_client.put("/nodes/start/position", json={"x": 120, "y": 80})

    assert response.status_code == 200
    assert (response.json()["x"], response.json()["y"]) == (120, 80)


def test_move_node_rejects_negative_coordinates(clean_db_client):
    response = clean_db_client.put("/nodes/start/position", json={"x": -5, "y": 80})
    assert response.status_code == 422


def test_toggle_walkthrough(clean_db_client):
    quest_id = clean_db_client.post("/nodes", json={"name": "quest1", "reward_value": 250}).json()["id"]
    clean_db_client.post(f"/nodes/start/unlocks/{quest_id}")

    # Locked nodes cannot be completed
    response = clean_db_client.post(f"/nodes/{quest_id}/toggle")
    assert response.status_code == 200
    assert response.json()["toggled"] is False
    assert response.json()["node"]["status"] == "locked"

    clean_db_client.post("/nodes/start/toggle")
    response = clean_db_client.post(f"/nodes/{quest_id}/toggle")
    assert response.json()["toggled"] is True
    assert response.json()["reward_granted"] == 250
    assert response.json()["node"]["status"] == "completed"

    response = clean_db_client.post("/nodes/start/toggle")
    assert response.json()["node"]["status"] == "available"
    assert _node(clean_db_client, quest_id)["status"] == "unstable"


def test_routes_are_also_served_under_api_prefix(clean_db_client):
    response = clean_db_client.get("/api/nodes")
    assert response.status_code == 200


def test_patch_cannot_complete_locked_node(clean_db_client):
    quest_id = clean_db_client.post("/nodes", json={"name": "quest1"}).json()["id"]
    clean_db_client.post(f"/nodes/start/unlocks/{quest_id}")

    response = clean_db_client.patch(f"/nodes/{quest_id}", json={"completed": True})

    assert response.status_code == 200
    assert response.json()["completed"] is False
    assert _node(clean_db_client, quest_id)["status"] == "locked"


def test_create_node_without_position_is_placed_near_center(clean_db_client):
    created = clean_db_client.post("/nodes", json={}).json()

    assert 400 <= created["x"] <= 500
    assert 250 <= created["y"] <= 350
