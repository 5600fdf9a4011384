"""API tests: authentication, hotels, user scope, roles and the audit log endpoint."""


async def test_missing_token_is_unauthorized(client, auth_header, directory) -> None:
    response = await client.get("/api/v1/hotels")
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_inactive_user_is_unauthorized(client, auth_header, directory) -> None:
    user_id = await directory.user("idle", permissions=["HOTEL_VIEW"], active=False)
    response = await client.get("/api/v1/hotels", headers=auth_header(user_id))
    assert response.status_code == 401


async def test_me_reports_permissions_and_scope(client, auth_header, directory) -> None:
    h1 = await directory.hotel("Alpha")
    user_id = await directory.user("rita", permissions=["HOTEL_VIEW"], hotels=[h1])
    response = await client.get("/api/v1/auth/me", headers=auth_header(user_id))
    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "rita"
    assert body["permissions"] == ["HOTEL_VIEW"]
    assert body["is_admin"] is False
    assert body["scope"] == {"hotelIds": [h1], "departmentIds": [], "hotelDeptPairs": []}


async def test_admin_sees_everything(client, auth_header, directory) -> None:
    await directory.hotel("Alpha")
    await directory.hotel("Beta")
    admin = await directory.user("root", admin=True)
    response = await client.get("/api/v1/hotels", headers=auth_header(admin))
    assert response.status_code == 200
    assert [h["name"] for h in response.json()] == ["Alpha", "Beta"]
    me = await client.get("/api/v1/auth/me", headers=auth_header(admin))
    assert me.json()["scope"] == {"unrestricted": True}


async def test_empty_scope_sees_no_hotels(client, auth_header, directory) -> None:
    await directory.hotel("Alpha")
    user_id = await directory.user("wes", permissions=["HOTEL_VIEW"])
    response = await client.get("/api/v1/hotels", headers=auth_header(user_id))
    assert response.status_code == 200
    assert response.json() == []


async def test_hotel_toggle_twice_restores_state(client, auth_header, directory, dispatcher) -> None:
    h1 = await directory.hotel("Alpha")
    admin = await directory.user("root", admin=True)
    first = await client.patch(f"/api/v1/hotels/{h1}/toggle-active", headers=auth_header(admin))
    second = await client.patch(f"/api/v1/hotels/{h1}/toggle-active", headers=auth_header(admin))
    assert first.json()["is_active"] is False
    assert second.json()["is_active"] is True
    await dispatcher.drain()
    rows = await directory.audit_rows()
    assert [r.action_name for r in rows] == ["HOTEL_EDIT", "HOTEL_EDIT"]
    assert rows[0].old_values["is_active"] is True
    assert rows[1].new_values["is_active"] is True


async def test_hotel_create_is_audited_with_new_id(client, auth_header, directory, dispatcher) -> None:
    admin = await directory.user("root", admin=True)
    response = await client.post(
        "/api/v1/hotels",
        json={"name": "Gamma", "location": "Lima"},
        headers={**auth_header(admin), "X-Forwarded-For": "203.0.113.9, 10.0.0.1"},
    )
    assert response.status_code == 201
    await dispatcher.drain()
    (row,) = await directory.audit_rows()
    assert row.entity_id == str(response.json()["id"])
    assert row.ip_address == "203.0.113.9"
    assert row.old_values is None


async def test_user_scope_get_and_replace(client, auth_header, directory, dispatcher) -> None:
    h1, h2 = await directory.hotel("Alpha"), await directory.hotel("Beta")
    d1 = await directory.department("Spa")
    target = await directory.user("sam", hotels=[h1])
    admin = await directory.user("root", admin=True)

    response = await client.get(f"/api/v1/users/{target}/scope", headers=auth_header(admin))
    assert response.json() == {"hotelIds": [h1], "departmentIds": [], "hotelDeptPairs": []}

    response = await client.put(
        f"/api/v1/users/{target}/scope",
        json={
            "hotelIds": [h2],
            "departmentIds": [d1],
            "hotelDeptPairs": [{"hotelId": h2, "departmentId": d1}],
        },
        headers=auth_header(admin),
    )
    assert response.status_code == 200
    assert response.json() == {
        "hotelIds": [h2],
        "departmentIds": [d1],
        "hotelDeptPairs": [{"hotelId": h2, "departmentId": d1}],
    }

    await dispatcher.drain()
    (row,) = await directory.audit_rows()
    assert row.action_name == "USER_SCOPE_UPDATE"
    assert row.old_values == {"hotelIds": [h1], "departmentIds": [], "hotelDeptPairs": []}
    assert row.new_values["hotelIds"] == [h2]


async def test_role_permissions_bulk_replace(client, auth_header, directory, dispatcher) -> None:
    await directory.user("tia", permissions=["HOTEL_VIEW", "CONTACT_VIEW"])
    admin = await directory.user("root", admin=True)
    roles = await client.get("/api/v1/roles", headers=auth_header(admin))
    role = next(r for r in roles.json() if r["name"] == "TIA_ROLE")
    permissions = await client.get("/api/v1/permissions", headers=auth_header(admin))
    hotel_view = next(p for p in permissions.json() if p["perm_key"] == "HOTEL_VIEW")

    response = await client.put(
        f"/api/v1/roles/{role['id']}/permissions",
        json={"permission_ids": [hotel_view["id"]]},
        headers=auth_header(admin),
    )
    assert response.status_code == 200
    assert [p["perm_key"] for p in response.json()] == ["HOTEL_VIEW"]

    cleared = await client.put(
        f"/api/v1/roles/{role['id']}/permissions",
        json={"permission_ids": []},
        headers=auth_header(admin),
    )
    assert cleared.json() == []

    await dispatcher.drain()
    rows = await directory.audit_rows()
    assert [r.action_name for r in rows] == [
        "ROLE_PERMISSIONS_BULK_UPDATE",
        "ROLE_PERMISSIONS_BULK_UPDATE",
    ]
    assert rows[1].new_values == {"permission_ids": []}


async def test_audit_log_listing_uses_camel_case(client, auth_header, directory, dispatcher) -> None:
    admin = await directory.user("root", admin=True)
    for name in ("A", "B", "C"):
        await client.post("/api/v1/hotels", json={"name": name}, headers=auth_header(admin))
    await dispatcher.drain()

    response = await client.get(
        "/api/v1/audit-logs", params={"page": 1, "limit": 2}, headers=auth_header(admin)
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["totalPages"] == 2
    assert len(body["items"]) == 2
    entry = body["items"][0]
    assert entry["actionName"] == "HOTEL_CREATE"
    assert entry["success"] == 1
    assert entry["username"] == "root"


async def test_audit_log_limit_above_maximum_is_clamped(client, auth_header, directory) -> None:
    admin = await directory.user("root", admin=True)
    response = await client.get(
        "/api/v1/audit-logs", params={"limit": 101}, headers=auth_header(admin)
    )
    assert response.status_code == 200
    assert response.json()["limit"] == 100


async def test_audit_log_requires_audit_view(client, auth_header, directory) -> None:
    user_id = await directory.user("vic", permissions=["HOTEL_VIEW"])
    response = await client.get("/api/v1/audit-logs", headers=auth_header(user_id))
    assert response.status_code == 403


async def test_user_list_filters_by_status_and_search(client, auth_header, directory) -> None:
    await directory.user("anna")
    await directory.user("hannah")
    await directory.user("bob", active=False)
    admin = await directory.user("root", admin=True)

    found = await client.get("/api/v1/users", params={"q": "ANN"}, headers=auth_header(admin))
    assert found.status_code == 200
    assert [u["username"] for u in found.json()] == ["anna", "hannah"]

    inactive = await client.get(
        "/api/v1/users", params={"status": "false"}, headers=auth_header(admin)
    )
    assert [u["username"] for u in inactive.json()] == ["bob"]

    active = await client.get(
        "/api/v1/users", params={"status": "true", "q": "b"}, headers=auth_header(admin)
    )
    assert active.json() == []


async def test_user_delete_records_deleted_row(client, auth_header, directory, dispatcher) -> None:
    target = await directory.user("gone")
    admin = await directory.user("root", admin=True)
    response = await client.delete(f"/api/v1/users/{target}", headers=auth_header(admin))
    assert response.status_code == 204
    await dispatcher.drain()
    (row,) = await directory.audit_rows()
    assert row.success is True
    assert row.old_values["username"] == "gone"
    assert row.new_values["id"] == target
    assert row.new_values["deleted_at"] is not None
    assert row.new_values["deleted_by"] == admin
