def save(client, rows, columns, data, **kwargs):
    return client.post("/api/saveTable", json={"rows": rows, "columns": columns, "data": data}, **kwargs)


def test_unsaved_sheet_returns_default_grid(client):
    res = client.get("/api/getTable")
    assert res.status_code == 200
    assert res.json() == {"metadata": {"rows": 5, "columns": 5}, "data": []}


def test_save_then_get_round_trips(client):
    cells = [{"row": 0, "col": 0, "value": "10"}, {"row": 2, "col": 1, "value": "total"}]
    res = save(client, 3, 4, cells)
    assert res.status_code == 200
    assert res.json() == {"message": "Table data saved successfully"}
    assert client.get("/api/getTable").json() == {"metadata": {"rows": 3, "columns": 4}, "data": cells}


def test_save_overwrites_whole_grid(client, store):
    save(client, 3, 3, [{"row": 0, "col": 0, "value": "a"}, {"row": 1, "col": 1, "value": "b"}])
    save(client, 2, 2, [{"row": 0, "col": 0, "value": "c"}])
    assert client.get("/api/getTable").json() == {
        "metadata": {"rows": 2, "columns": 2},
        "data": [{"row": 0, "col": 0, "value": "c"}],
    }
    assert store.tables.count_documents({}) == 1


def test_cells_outside_bounds_are_kept(client):
    save(client, 1, 1, [{"row": 7, "col": 9, "value": "far"}])
    assert client.get("/api/getTable").json()["data"] == [{"row": 7, "col": 9, "value": "far"}]


def test_set_collection_switches_target(client):
    save(client, 1, 1, [{"row": 0, "col": 0, "value": "default"}])

    res = client.post("/api/setCollection", json={"collection": "X"})
    assert res.json() == {"message": "Active collection set to X"}
    assert client.get("/api/getTable").json() == {"metadata": {"rows": 5, "columns": 5}, "data": []}

    save(client, 2, 2, [{"row": 1, "col": 1, "value": "x"}])
    client.post("/api/setCollection", json={"collection": "defaultCollection"})
    assert client.get("/api/getTable").json()["data"] == [{"row": 0, "col": 0, "value": "default"}]


def test_selection_does_not_require_existing_sheet(client):
    client.post("/api/setCollection", json={"collection": "ghost"})
    assert client.get("/api/getSheets").json() == {"sheets": []}
    assert client.get("/api/getTable").status_code == 200


def test_selections_are_scoped_per_client(client):
    alice = {"X-Client-Id": "alice"}
    bob = {"X-Client-Id": "bob"}
    client.post("/api/setCollection", json={"collection": "A"}, headers=alice)
    client.post("/api/setCollection", json={"collection": "B"}, headers=bob)

    save(client, 1, 1, [{"row": 0, "col": 0, "value": "from alice"}], headers=alice)
    save(client, 1, 1, [{"row": 0, "col": 0, "value": "from bob"}], headers=bob)

    assert client.get("/api/getTable", headers=alice).json()["data"][0]["value"] == "from alice"
    assert client.get("/api/getTable", headers=bob).json()["data"][0]["value"] == "from bob"
    # callers without a client id still see the default sheet
    assert client.get("/api/getTable").json()["data"] == []


def test_collection_query_parameter_overrides_selection(client):
    save(client, 1, 1, [{"row": 0, "col": 0, "value": "q"}], params={"collection": "Explicit"})
    assert client.get("/api/getTable").json()["data"] == []
    assert client.get("/api/getTable", params={"collection": "Explicit"}).json()["data"] == [
        {"row": 0, "col": 0, "value": "q"}
    ]


def test_negative_dimensions_are_rejected(client):
    assert save(client, -1, 3, []).status_code == 422


def test_set_collection_requires_a_name(client):
    assert client.post("/api/setCollection", json={}).status_code == 422
    assert client.get("/api/getTable").json()["data"] == []
