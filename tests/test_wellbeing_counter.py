"""Missed check-in counter and escalation tests."""

import threading

import pytest
from sqlalchemy import func, select

from legacy_vault.core.errors import NotFoundError
from legacy_vault.models.user import User
from legacy_vault.models.wellbeing_alert import WellbeingAlert
from legacy_vault.services.wellbeing_service import (
    get_settings_row,
    increment_missed,
    is_exceeded,
    list_exceeded,
    record_check_in,
)


def _at_risk_ids(client, admin_headers):
    r = client.get("/admin/users-at-risk", headers=admin_headers)
    assert r.status_code == 200
    return [u["id"] for u in r.json()]


def _miss(client, admin_headers, user_id):
    r = client.post(f"/admin/users/{user_id}/missed", headers=admin_headers)
    assert r.status_code == 200, r.text
    return r.json()


def test_threshold_reached_then_check_in_clears(client, register_user, admin_headers):
    """Three missed windows against a threshold of 3 flag the user; a check-in clears it."""
    user = register_user()
    client.put("/wellbeing/settings", headers=user["headers"], json={"max_missed_alerts": 3})

    assert _miss(client, admin_headers, user["id"]) == {"user_id": user["id"], "wellbeing_counter": 1, "is_exceeded": False}
    _miss(client, admin_headers, user["id"])
    third = _miss(client, admin_headers, user["id"])
    assert third["wellbeing_counter"] == 3
    assert third["is_exceeded"] is True
    assert user["id"] in _at_risk_ids(client, admin_headers)

    status = client.get("/wellbeing/status", headers=user["headers"]).json()
    assert status["is_exceeded"] is True
    assert status["max_missed_alerts"] == 3

    r = client.post("/wellbeing/confirm", headers=user["headers"])
    assert r.status_code == 200
    assert r.json()["wellbeing_counter"] == 0
    assert r.json()["resolved_alerts"] == 3
    assert r.json()["last_wellbeing_check"]
    assert user["id"] not in _at_risk_ids(client, admin_headers)


def test_disabled_escalation_masks_threshold(client, register_user, admin_headers):
    user = register_user()
    client.put(
        "/wellbeing/settings",
        headers=user["headers"],
        json={"max_missed_alerts": 2, "escalation_enabled": False},
    )
    for _ in range(4):
        result = _miss(client, admin_headers, user["id"])
    assert result["wellbeing_counter"] == 4
    assert result["is_exceeded"] is False
    assert user["id"] not in _at_risk_ids(client, admin_headers)

    # turning escalation back on makes the existing count eligible
    client.put("/wellbeing/settings", headers=user["headers"], json={"escalation_enabled": True})
    assert user["id"] in _at_risk_ids(client, admin_headers)


def test_user_without_settings_is_never_exceeded(db_session, make_user):
    user = make_user(with_wellbeing_settings=False)
    for _ in range(60):
        count, exceeded = increment_missed(db_session, user.id)
    assert count == 60
    assert exceeded is False
    assert user.id not in [u.id for u, _ in list_exceeded(db_session)]


def test_non_positive_threshold_is_skipped(db_session, make_user):
    """A corrupt stored threshold never flags the user."""
    user = make_user()
    settings = get_settings_row(db_session, user.id)
    settings.max_missed_alerts = 0
    db_session.commit()

    count, exceeded = increment_missed(db_session, user.id)
    assert count == 1
    assert exceeded is False
    assert user.id not in [u.id for u, _ in list_exceeded(db_session)]


def test_exceeded_list_is_most_overdue_first(db_session, make_user):
    """Ordered by counter/threshold ratio, then by user id."""
    relaxed = make_user()
    strict = make_user()
    tie = make_user()
    for user, threshold in ((relaxed, 4), (strict, 2), (tie, 4)):
        get_settings_row(db_session, user.id).max_missed_alerts = threshold
    db_session.commit()

    for _ in range(4):
        increment_missed(db_session, relaxed.id)
        increment_missed(db_session, strict.id)
        increment_missed(db_session, tie.id)

    ours = {relaxed.id, strict.id, tie.id}
    ordered = [u.id for u, _ in list_exceeded(db_session) if u.id in ours]
    assert ordered == [strict.id, relaxed.id, tie.id]


def test_counter_counts_every_window(db_session, make_user):
    user = make_user()
    for expected in range(1, 6):
        count, _ = increment_missed(db_session, user.id)
        assert count == expected
    db_session.expire_all()
    assert db_session.get(User, user.id).wellbeing_counter == 5


def _run_threads(targets):
    """Start all targets together and return any exceptions they raised."""
    barrier = threading.Barrier(len(targets))
    errors = []

    def wrap(target):
        def run():
            barrier.wait()
            try:
                target()
            except Exception as exc:  # surfaced through the returned list
                errors.append(exc)

        return run

    threads = [threading.Thread(target=wrap(t)) for t in targets]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)
    return errors


def test_concurrent_increments_are_not_lost(make_user, session_factory):
    user = make_user()
    workers, per_worker = 5, 10
    seen = []

    def miss_windows():
        db = session_factory()
        try:
            for _ in range(per_worker):
                count, _ = increment_missed(db, user.id)
                seen.append(count)
        finally:
            db.close()

    assert _run_threads([miss_windows] * workers) == []

    total = workers * per_worker
    assert sorted(seen) == list(range(1, total + 1))
    db = session_factory()
    try:
        assert db.get(User, user.id).wellbeing_counter == total
    finally:
        db.close()


def test_concurrent_check_ins_and_increments(make_user, session_factory):
    user = make_user()
    workers, per_worker = 4, 10

    def miss_windows():
        db = session_factory()
        try:
            for _ in range(per_worker):
                increment_missed(db, user.id)
        finally:
            db.close()

    def check_in():
        db = session_factory()
        try:
            for _ in range(5):
                record_check_in(db, user.id)
        finally:
            db.close()

    assert _run_threads([miss_windows] * workers + [check_in]) == []

    db = session_factory()
    try:
        counter = db.get(User, user.id).wellbeing_counter
        assert 0 <= counter <= workers * per_worker
        alerts = db.scalars(
            select(func.count()).select_from(WellbeingAlert).where(
                WellbeingAlert.user_id == user.id, WellbeingAlert.alert_type == "missed_check_in"
            )
        ).one()
        assert alerts == workers * per_worker

        checked, _ = record_check_in(db, user.id)
        assert checked.wellbeing_counter == 0
    finally:
        db.close()


def test_check_in_on_zero_counter_stays_zero(db_session, make_user):
    user = make_user()
    checked, resolved = record_check_in(db_session, user.id)
    assert checked.wellbeing_counter == 0
    assert resolved == 0
    assert checked.last_wellbeing_check is not None


def test_missing_user(db_session, client, admin_headers):
    with pytest.raises(NotFoundError):
        increment_missed(db_session, 999999)
    with pytest.raises(NotFoundError):
        record_check_in(db_session, 999999)
    assert client.post("/admin/users/999999/missed", headers=admin_headers).status_code == 404
    assert client.post("/admin/users/999999/check-in", headers=admin_headers).status_code == 404


def test_is_exceeded_boundaries(db_session, make_user):
    settings = get_settings_row(db_session, make_user().id)
    settings.max_missed_alerts = 5
    assert is_exceeded(4, settings) is False
    assert is_exceeded(5, settings) is True
    assert is_exceeded(6, settings) is True
    settings.escalation_enabled = False
    assert is_exceeded(6, settings) is False
    assert is_exceeded(6, None) is False
    db_session.rollback()


def test_missed_windows_open_alerts(client, register_user, admin_headers):
    user = register_user()
    _miss(client, admin_headers, user["id"])
    _miss(client, admin_headers, user["id"])

    alerts = client.get("/wellbeing/alerts?open_only=true", headers=user["headers"]).json()
    assert len(alerts) == 2
    assert {a["alert_type"] for a in alerts} == {"missed_check_in"}

    client.post("/wellbeing/confirm", headers=user["headers"])
    assert client.get("/wellbeing/alerts?open_only=true", headers=user["headers"]).json() == []
    assert len(client.get("/wellbeing/alerts", headers=user["headers"]).json()) == 2


def test_admin_cannot_check_in_for_itself(client, admin_headers):
    """The administrator has no counter."""
    assert client.post("/wellbeing/confirm", headers=admin_headers).status_code == 403
    assert client.get("/wellbeing/alerts", headers=admin_headers).json() == []


def test_admin_check_in_on_behalf_of_user(client, register_user, admin_headers):
    user = register_user()
    _miss(client, admin_headers, user["id"])
    r = client.post(f"/admin/users/{user['id']}/check-in", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["wellbeing_counter"] == 0
    assert r.json()["resolved_alerts"] == 1


def test_threshold_crossing_is_logged_once(client, register_user, admin_headers):
    user = register_user()
    client.put("/wellbeing/settings", headers=user["headers"], json={"max_missed_alerts": 1})
    _miss(client, admin_headers, user["id"])
    _miss(client, admin_headers, user["id"])

    logs = client.get(
        "/admin/activity-logs",
        headers=admin_headers,
        params={"user_id": user["id"], "category": "system"},
    ).json()
    crossings = [log for log in logs if log["action"] == "wellbeing_threshold_exceeded"]
    assert len(crossings) == 1
    assert crossings[0]["severity"] == "warning"
    assert crossings[0]["metadata"] == {"counter": 1, "threshold": 1}
