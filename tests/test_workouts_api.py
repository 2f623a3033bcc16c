"""Endpoint tests for /entrenamientos."""
import json
from datetime import date

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from factories import add_user, add_workout
from wodtracker.core.constants import BUSY_MESSAGE
from wodtracker.models import User

FRAN_DETAILS = {
    "name": "Fran",
    "type": "For Time",
    "total_rounds": 3,
    "rest_between_rounds": 0,
    "exercises": [{"name": "Thrusters", "reps": [21, 15, 9], "weight_kg": 43}],
    "metadata": {"benchmark": True},
    "scaled": "rx",
}


def workout_payload(**overrides):
    payload = {
        "date": "2026-10-18",
        "level": "Intermedio",
        "completed": True,
        "notes": "good session",
        "components": [
            {"component_type": "warmup", "exercise_name": "Jumping jacks", "duration": 300},
            {
                "component_type": "wod",
                "wod_id": 2,
                "exercise_name": "Fran",
                "duration": 420,
                "notes": "broke thrusters 11-10",
                "wod_details": FRAN_DETAILS,
            },
            {"component_type": "cardio", "exercise_name": "Run 5k", "distance": 5.0},
        ],
    }
    payload.update(overrides)
    return payload


def users_counter(sync_session, user_id=1):
    sync_session.expire_all()
    return sync_session.get(User, user_id).workouts_completed


def test_create_then_list_round_trips_components(client, sync_session):
    resp = client.post("/api/entrenamientos", json=workout_payload())
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    workout_id = body["id"]

    [workout] = client.get("/api/entrenamientos").json()
    assert workout["id"] == workout_id
    assert workout["date"] == "2026-10-18"
    assert workout["duration"] == 720
    assert [c["component_type"] for c in workout["components"]] == ["warmup", "wod", "cardio"]
    assert [c["order"] for c in workout["components"]] == [0, 1, 2]

    wod = workout["components"][1]
    assert wod["wod_details"] == FRAN_DETAILS
    assert wod["notes"] == "broke thrusters 11-10"
    assert wod["wod_name"] == "Fran"
    assert wod["wod_type"] == "For Time"
    assert workout["components"][0]["wod_details"] is None

    assert users_counter(sync_session) == 1


def test_create_bootstraps_unknown_user(client, sync_session):
    resp = client.post("/api/entrenamientos", json=workout_payload(user_id=42, components=[]))
    assert resp.status_code == 201
    sync_session.expire_all()
    user = sync_session.get(User, 42)
    assert user.email == "usuario42@entrenamiento.app"
    assert user.workouts_completed == 1


def test_duration_without_components_is_kept(client):
    client.post("/api/entrenamientos", json=workout_payload(components=[], duration=1800))
    [workout] = client.get("/api/entrenamientos").json()
    assert workout["duration"] == 1800
    assert workout["components"] == []


def test_components_without_durations_give_null_duration(client):
    payload = workout_payload(
        duration=999, components=[{"component_type": "cardio", "exercise_name": "Run 5k", "distance": 5}]
    )
    client.post("/api/entrenamientos", json=payload)
    [workout] = client.get("/api/entrenamientos").json()
    assert workout["duration"] is None


def test_explicit_order_is_respected(client):
    components = [
        {"component_type": "cardio", "exercise_name": "Row", "order": 2},
        {"component_type": "warmup", "exercise_name": "Jumping jacks", "order": 0},
        {"component_type": "oly", "exercise_name": "Snatch", "weight": 50, "order": 1},
    ]
    client.post("/api/entrenamientos", json=workout_payload(components=components))
    [workout] = client.get("/api/entrenamientos").json()
    assert [c["exercise_name"] for c in workout["components"]] == ["Jumping jacks", "Snatch", "Row"]
    assert workout["components"][1]["weight"] == 50


def test_list_is_newest_first_and_per_user(client, sync_session):
    add_user(sync_session)
    add_user(sync_session, user_id=2)
    add_workout(sync_session, date(2026, 10, 1))
    add_workout(sync_session, date(2026, 10, 5))
    add_workout(sync_session, date(2026, 10, 3), user_id=2)

    dates = [w["date"] for w in client.get("/api/entrenamientos").json()]
    assert dates == ["2026-10-05", "2026-10-01"]
    assert len(client.get("/api/entrenamientos", params={"user_id": 2}).json()) == 1


def test_legacy_notes_envelope_is_split_on_read(client, sync_session):
    add_user(sync_session)
    envelope = json.dumps({"wod_details": {"name": "Murph", "total_rounds": 1}, "custom_notes": "with vest"})
    add_workout(
        sync_session,
        date(2026, 10, 1),
        components=[{"component_type": "wod", "wod_id": 1, "duration": 2700, "notes": envelope}],
    )
    [component] = client.get("/api/entrenamientos").json()[0]["components"]
    assert component["notes"] == "with vest"
    assert component["wod_details"]["name"] == "Murph"
    assert component["wod_details"]["total_rounds"] == 1


def test_wod_details_values_are_not_coerced(client):
    details = {"name": "Fran", "total_rounds": "3", "rest_between_rounds": "1:00", "metadata": ["benchmark"]}
    client.post(
        "/api/entrenamientos",
        json=workout_payload(components=[{"component_type": "wod", "wod_id": 2, "wod_details": details}]),
    )
    [component] = client.get("/api/entrenamientos").json()[0]["components"]
    assert component["wod_details"] == details


def test_list_retries_when_connections_are_exhausted(client, monkeypatch):
    client.post("/api/entrenamientos", json=workout_payload())
    original_execute = AsyncSession.execute
    calls = []

    async def busy_once(self, statement, *args, **kwargs):
        calls.append(statement)
        if len(calls) == 1:
            raise OperationalError("SELECT", {}, Exception("sorry, too many clients already"))
        return await original_execute(self, statement, *args, **kwargs)

    monkeypatch.setattr(AsyncSession, "execute", busy_once)
    resp = client.get("/api/entrenamientos")
    assert resp.status_code == 200
    assert len(resp.json()) == 1
    assert len(calls) == 2


def test_exhausted_connections_on_write_are_503(client, monkeypatch):
    calls = []

    async def busy(self, *args, **kwargs):
        calls.append(1)
        raise OperationalError("INSERT", {}, Exception("Too many connections"))

    monkeypatch.setattr(AsyncSession, "flush", busy)
    resp = client.post("/api/entrenamientos", json=workout_payload())
    assert resp.status_code == 503
    assert resp.json() == {"error": BUSY_MESSAGE}
    assert len(calls) == 1


def test_list_before_migration_is_empty(client, sync_session):
    sync_session.execute(text("DROP TABLE workouts"))
    sync_session.commit()
    resp = client.get("/api/entrenamientos")
    assert resp.status_code == 200
    assert resp.json() == []


def test_update_changes_fields(client):
    workout_id = client.post("/api/entrenamientos", json=workout_payload()).json()["id"]
    resp = client.put(f"/api/entrenamientos/{workout_id}", json={"level": "Avanzado", "notes": None})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "id": None}

    [workout] = client.get("/api/entrenamientos").json()
    assert workout["level"] == "Avanzado"
    assert workout["notes"] is None
    assert workout["completed"] is True
    assert len(workout["components"]) == 3


def test_update_without_fields_is_400(client):
    workout_id = client.post("/api/entrenamientos", json=workout_payload()).json()["id"]
    resp = client.put(f"/api/entrenamientos/{workout_id}", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No fields to update"}


def test_update_missing_workout_is_404(client):
    resp = client.put("/api/entrenamientos/999", json={"completed": True})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Workout not found"}


def test_delete_removes_components_and_decrements(client, sync_session):
    first = client.post("/api/entrenamientos", json=workout_payload()).json()["id"]
    client.post("/api/entrenamientos", json=workout_payload(date="2026-10-19"))
    assert users_counter(sync_session) == 2

    resp = client.delete(f"/api/entrenamientos/{first}")
    assert resp.status_code == 200
    assert users_counter(sync_session) == 1
    assert [w["date"] for w in client.get("/api/entrenamientos").json()] == ["2026-10-19"]
    remaining = sync_session.execute(
        text("SELECT count(*) FROM workout_components WHERE workout_id = :id"), {"id": first}
    ).scalar_one()
    assert remaining == 0


def test_delete_keeps_counter_at_zero(client, sync_session):
    add_user(sync_session, workouts_completed=0)
    workout = add_workout(sync_session, date(2026, 10, 1))
    assert client.delete(f"/api/entrenamientos/{workout.id}").status_code == 200
    assert users_counter(sync_session) == 0


def test_delete_missing_workout_is_404(client):
    resp = client.delete("/api/entrenamientos/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Workout not found"}


def test_invalid_component_type_is_400(client):
    payload = workout_payload(components=[{"component_type": "yoga"}])
    resp = client.post("/api/entrenamientos", json=payload)
    assert resp.status_code == 400
    assert "component_type" in resp.json()["error"]


def test_invalid_level_is_400(client):
    resp = client.post("/api/entrenamientos", json=workout_payload(level="Experto"))
    assert resp.status_code == 400
    assert "error" in resp.json()
