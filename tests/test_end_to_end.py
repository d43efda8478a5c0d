def test_signup_login_and_edit_a_sheet(client):
    assert client.post("/api/signup", json={"username": "alice", "password": "pw1"}).status_code == 201

    res = client.post("/api/login", json={"username": "alice", "password": "pw1"})
    assert res.status_code == 200
    assert res.json()["token"]

    # sheet routes do not require a token
    res = client.post("/api/addSheet", json={"sheetName": "Budget"})
    assert res.json() == {"success": True, "message": "Sheet added successfully"}

    client.post("/api/setCollection", json={"collection": "Budget"})
    res = client.post("/api/saveTable", json={
        "rows": 3,
        "columns": 3,
        "data": [{"row": 0, "col": 0, "value": "10"}],
    })
    assert res.status_code == 200

    assert client.get("/api/getTable").json() == {
        "metadata": {"rows": 3, "columns": 3},
        "data": [{"row": 0, "col": 0, "value": "10"}],
    }
    assert client.get("/api/getSheets").json() == {"sheets": ["Budget"]}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
