"""Transfer Routes — handover over HTTP and the append-only log."""


async def _handover(seed):
    box_id = await seed.box()
    old_id = await seed.assignment(box_id, user_id="seller")
    new_id = await seed.assignment(box_id, user_id="buyer")
    return box_id, old_id, new_id


def _body(box_id, old_id, new_id, **kw):
    body = {
        "water_box_id": box_id,
        "old_assignment_id": old_id,
        "new_assignment_id": new_id,
        "transfer_reason": "  Inheritance  ",
    }
    body.update(kw)
    return body


async def test_transfer_round_trip(client, admin_headers, client_headers, seed):
    box_id, old_id, new_id = await _handover(seed)

    res = await client.post(
        "/api/v1/water-box-transfers",
        json=_body(box_id, old_id, new_id, documents=["will.pdf", "id.png"]),
        headers=admin_headers,
    )
    assert res.status_code == 201
    transfer = res.json()
    assert transfer["transfer_reason"] == "Inheritance"
    assert transfer["documents"] == ["will.pdf", "id.png"]

    res = await client.get(
        f"/api/v1/water-box-transfers/{transfer['id']}", headers=client_headers,
    )
    assert res.status_code == 200
    assert res.json()["new_assignment_id"] == new_id

    res = await client.get("/api/v1/water-box-transfers", headers=client_headers)
    assert [t["id"] for t in res.json()] == [transfer["id"]]

    res = await client.get(f"/api/v1/water-boxes/{box_id}", headers=client_headers)
    assert res.json()["current_assignment_id"] == new_id

    res = await client.get(
        f"/api/v1/water-box-assignments/{old_id}", headers=client_headers,
    )
    old = res.json()
    assert old["status"] == "INACTIVE"
    assert old["transfer_id"] == transfer["id"]


async def test_identical_assignments_is_400(client, admin_headers, seed):
    box_id, old_id, _ = await _handover(seed)
    res = await client.post(
        "/api/v1/water-box-transfers",
        json=_body(box_id, old_id, old_id),
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ASSIGNMENTS_IDENTICAL"


async def test_blank_reason_is_validation_error(client, admin_headers, seed):
    box_id, old_id, new_id = await _handover(seed)
    res = await client.post(
        "/api/v1/water-box-transfers",
        json=_body(box_id, old_id, new_id, transfer_reason="   "),
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_client_cannot_transfer(client, client_headers, seed):
    box_id, old_id, new_id = await _handover(seed)
    res = await client.post(
        "/api/v1/water-box-transfers",
        json=_body(box_id, old_id, new_id),
        headers=client_headers,
    )
    assert res.status_code == 403


async def test_unknown_transfer_is_404(client, client_headers):
    res = await client.get("/api/v1/water-box-transfers/5", headers=client_headers)
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "WaterBoxTransfer with id 5 not found"


async def test_transfers_cannot_be_deleted(client, admin_headers):
    res = await client.delete("/api/v1/water-box-transfers/1", headers=admin_headers)
    assert res.status_code == 405
