"""Assignment Routes — create/retire/restore over HTTP and pointer effects."""

from decimal import Decimal


def _body(box_id, user_id="user-a", fee="12.00"):
    return {
        "water_box_id": box_id,
        "user_id": user_id,
        "start_date": "2024-02-01T00:00:00",
        "monthly_fee": fee,
    }


async def test_create_assignment_links_box(
    client, admin_headers, client_headers, seed,
):
    box_id = await seed.box()
    res = await client.post(
        "/api/v1/water-box-assignments", json=_body(box_id), headers=admin_headers,
    )
    assert res.status_code == 201
    assignment = res.json()
    assert assignment["status"] == "ACTIVE"
    assert Decimal(str(assignment["monthly_fee"])) == Decimal("12.00")

    res = await client.get(f"/api/v1/water-boxes/{box_id}", headers=client_headers)
    assert res.json()["current_assignment_id"] == assignment["id"]


async def test_negative_fee_rejected(client, admin_headers, seed):
    box_id = await seed.box()
    res = await client.post(
        "/api/v1/water-box-assignments",
        json=_body(box_id, fee="-1"),
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_on_inactive_box_is_400(client, admin_headers, seed):
    box_id = await seed.box()
    await client.delete(f"/api/v1/water-boxes/{box_id}", headers=admin_headers)

    res = await client.post(
        "/api/v1/water-box-assignments", json=_body(box_id), headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BOX_INACTIVE"


async def test_delete_and_restore_assignment(
    client, admin_headers, client_headers, seed,
):
    box_id = await seed.box()
    assignment_id = await seed.assignment(box_id)

    res = await client.delete(
        f"/api/v1/water-box-assignments/{assignment_id}", headers=admin_headers,
    )
    assert res.status_code == 204

    res = await client.get(f"/api/v1/water-boxes/{box_id}", headers=client_headers)
    assert res.json()["current_assignment_id"] is None

    res = await client.get(
        "/api/v1/water-box-assignments/inactive", headers=client_headers,
    )
    inactive = res.json()
    assert [a["id"] for a in inactive] == [assignment_id]
    assert inactive[0]["end_date"] is not None

    res = await client.delete(
        f"/api/v1/water-box-assignments/{assignment_id}", headers=admin_headers,
    )
    assert res.status_code == 400

    res = await client.patch(
        f"/api/v1/water-box-assignments/{assignment_id}/restore",
        headers=admin_headers,
    )
    assert res.status_code == 200
    assert res.json()["end_date"] is None

    res = await client.get(f"/api/v1/water-boxes/{box_id}", headers=client_headers)
    assert res.json()["current_assignment_id"] == assignment_id


async def test_active_listing_and_404(client, client_headers, seed):
    box_id = await seed.box()
    assignment_id = await seed.assignment(box_id)

    res = await client.get(
        "/api/v1/water-box-assignments/active", headers=client_headers,
    )
    assert [a["id"] for a in res.json()] == [assignment_id]

    res = await client.get(
        "/api/v1/water-box-assignments/999", headers=client_headers,
    )
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Assignment with id 999 not found"


async def test_update_current_assignment_to_other_box_is_400(
    client, admin_headers, seed,
):
    box_a = await seed.box("WB-A")
    box_b = await seed.box("WB-B")
    assignment_id = await seed.assignment(box_a)

    res = await client.put(
        f"/api/v1/water-box-assignments/{assignment_id}",
        json=_body(box_b),
        headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "ASSIGNMENT_IS_CURRENT"
