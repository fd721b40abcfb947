"""Admin review tests."""


def _flag(client, admin_headers, user, threshold=1):
    """Push a user over their missed check-in threshold."""
    client.put("/wellbeing/settings", headers=user["headers"], json={"max_missed_alerts": threshold})
    for _ in range(threshold):
        client.post(f"/admin/users/{user['id']}/missed", headers=admin_headers)


def test_admin_routes_require_admin(client, register_user):
    user = register_user()
    assert client.get("/admin/stats").status_code == 401
    assert client.get("/admin/stats", headers=user["headers"]).status_code == 403
    assert client.post(f"/admin/users/{user['id']}/missed", headers=user["headers"]).status_code == 403


def test_stats(client, register_user, admin_headers):
    user = register_user()
    _flag(client, admin_headers, user)
    stats = client.get("/admin/stats", headers=admin_headers).json()
    assert stats["total_users"] >= 1
    assert stats["active_users"] >= 1
    assert stats["users_at_risk"] >= 1
    assert set(stats) == {
        "total_users",
        "active_users",
        "total_assets",
        "total_nominees",
        "users_at_risk",
        "pending_validations",
    }


def test_list_users_search(client, register_user, admin_headers):
    user = register_user(full_name="Zubin Quartermaine")
    r = client.get("/admin/users", headers=admin_headers, params={"search": "Quartermaine"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 1
    assert body["users"][0]["id"] == user["id"]
    assert body["users"][0]["max_missed_alerts"] == 15

    r = client.get("/admin/users", headers=admin_headers, params={"search": user["mobile"]})
    assert [u["id"] for u in r.json()["users"]] == [user["id"]]


def test_user_detail_counts_only(client, register_user, admin_headers):
    user = register_user()
    client.post(
        "/assets",
        headers=user["headers"],
        json={"asset_type": "real_estate", "title": "Flat in Thane", "access_instructions": "Locker 12"},
    )
    client.post(
        "/nominees",
        headers=user["headers"],
        json={"full_name": "Kiran Rao", "relationship": "brother", "mobile_number": "9800011122"},
    )
    r = client.get(f"/admin/users/{user['id']}", headers=admin_headers)
    assert r.status_code == 200
    detail = r.json()
    assert detail["asset_count"] == 1
    assert detail["nominee_count"] == 1
    assert detail["alert_frequency"] == "daily"
    assert detail["nominees"][0]["full_name"] == "Kiran Rao"
    assert "Locker 12" not in r.text

    assert client.get("/admin/users/999999", headers=admin_headers).status_code == 404


def test_pending_validations_include_nominees(client, register_user, admin_headers):
    user = register_user()
    client.post(
        "/nominees",
        headers=user["headers"],
        json={"full_name": "Lata Iyer", "relationship": "wife", "mobile_number": "9800022233"},
    )
    _flag(client, admin_headers, user, threshold=2)

    pending = client.get("/admin/pending-validations", headers=admin_headers).json()
    entry = next(p for p in pending if p["user"]["id"] == user["id"])
    assert entry["user"]["wellbeing_counter"] == 2
    assert [n["full_name"] for n in entry["nominees"]] == ["Lata Iyer"]


def test_suspension_blocks_access(client, register_user, admin_headers):
    user = register_user()
    r = client.patch(
        f"/admin/users/{user['id']}/status",
        headers=admin_headers,
        json={"account_status": "suspended", "reason": "Reported deceased, awaiting documents"},
    )
    assert r.status_code == 200
    assert r.json()["account_status"] == "suspended"

    assert client.get("/auth/me", headers=user["headers"]).status_code == 401
    login = client.post("/auth/login", json={"identifier": user["email"], "password": user["password"]})
    assert login.status_code == 401

    actions = client.get("/admin/actions", headers=admin_headers, params={"target_user_id": user["id"]}).json()
    assert actions[0]["action_type"] == "account_suspension"
    assert actions[0]["status"] == "completed"

    client.patch(f"/admin/users/{user['id']}/status", headers=admin_headers, json={"account_status": "active"})
    login = client.post("/auth/login", json={"identifier": user["email"], "password": user["password"]})
    assert login.status_code == 200


def test_invalid_account_status(client, register_user, admin_headers):
    user = register_user()
    r = client.patch(f"/admin/users/{user['id']}/status", headers=admin_headers, json={"account_status": "deceased"})
    assert r.status_code == 422


def test_admin_action_lifecycle(client, register_user, admin_headers):
    user = register_user()
    r = client.post(
        "/admin/actions",
        headers=admin_headers,
        json={"target_user_id": user["id"], "action_type": "death_validation", "description": "Verify certificate"},
    )
    assert r.status_code == 201
    action = r.json()
    assert action["status"] == "pending"
    assert action["completed_at"] is None

    pending = client.get("/admin/actions", headers=admin_headers, params={"status": "pending"}).json()
    assert action["id"] in [a["id"] for a in pending]

    r = client.patch(f"/admin/actions/{action['id']}", headers=admin_headers, json={"status": "completed"})
    assert r.status_code == 200
    assert r.json()["status"] == "completed"
    assert r.json()["completed_at"] is not None

    r = client.patch(f"/admin/actions/{action['id']}", headers=admin_headers, json={"status": "cancelled"})
    assert r.status_code == 409

    # description can still be amended
    r = client.patch(f"/admin/actions/{action['id']}", headers=admin_headers, json={"description": "Certificate verified"})
    assert r.status_code == 200
    assert r.json()["description"] == "Certificate verified"


def test_admin_action_validation(client, admin_headers):
    r = client.post(
        "/admin/actions",
        headers=admin_headers,
        json={"target_user_id": 999999, "action_type": "death_validation", "description": "x"},
    )
    assert r.status_code == 404
    r = client.post("/admin/actions", headers=admin_headers, json={"action_type": "delete_everything", "description": "x"})
    assert r.status_code == 422
    assert client.patch("/admin/actions/999999", headers=admin_headers, json={"status": "cancelled"}).status_code == 404


def test_trigger_alert(client, register_user, admin_headers):
    user = register_user()
    r = client.post(
        f"/admin/users/{user['id']}/alert",
        headers=admin_headers,
        json={"message": "Please call the helpline"},
    )
    assert r.status_code == 201
    assert r.json()["alert_type"] == "admin_escalation"

    alerts = client.get("/wellbeing/alerts?open_only=true", headers=user["headers"]).json()
    assert [a["message"] for a in alerts] == ["Please call the helpline"]

    r = client.post("/wellbeing/confirm", headers=user["headers"])
    assert r.json()["resolved_alerts"] == 1

    assert client.post("/admin/users/999999/alert", headers=admin_headers, json={}).status_code == 404


def test_activity_logs_filter(client, register_user, admin_headers):
    user = register_user()
    client.patch(f"/admin/users/{user['id']}/status", headers=admin_headers, json={"account_status": "deactivated"})

    logs = client.get(
        "/admin/activity-logs",
        headers=admin_headers,
        params={"category": "admin", "user_id": user["id"]},
    ).json()
    assert logs[0]["action"] == "user_deactivated"
    assert logs[0]["severity"] == "warning"
    assert logs[0]["admin_identity"] is not None
    assert logs[0]["metadata"] == {"from": "active", "to": "deactivated"}

    assert client.get("/admin/activity-logs", headers=admin_headers, params={"category": "bogus"}).status_code == 422


def test_user_sees_own_activity(client, register_user):
    user = register_user()
    client.post("/wellbeing/confirm", headers=user["headers"])
    actions = [log["action"] for log in client.get("/activity/me", headers=user["headers"]).json()]
    assert "wellbeing_check_in" in actions
    assert "user_registered" in actions
