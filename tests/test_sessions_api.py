"""Session lifecycle, set logging and the session detail view over HTTP."""

import uuid

import pytest

from liftlog.core.constants import MAX_SETS_PER_EXERCISE_PER_SESSION
from liftlog.services import exercise_history

from .factories import OTHER_USER_ID

API = "/api/v1"


async def _create_plan(client, warmup_sets=3, exercise_names=("Back Squat",)):
    exercise_ids = []
    for name in exercise_names:
        r = await client.post(f"{API}/exercises", json={"name": name})
        assert r.status_code == 201
        exercise_ids.append(r.json()["id"])
    r = await client.post(
        f"{API}/workout-plans",
        json={
            "plan_name": f"Plan {uuid.uuid4().hex[:8]}",
            "exercises": [
                {
                    "exercise_id": exercise_id,
                    "display_order": order,
                    "warmup_sets": warmup_sets,
                    "working_sets": 3,
                    "target_reps": 5,
                    "rpe_early": 7,
                    "rpe_last": 9,
                    "rest_time": 180,
                }
                for order, exercise_id in enumerate(exercise_ids)
            ],
        },
    )
    assert r.status_code == 201
    return r.json()


async def _start_session(client, plan_id):
    r = await client.post(f"{API}/sessions", json={"plan_id": plan_id})
    assert r.status_code == 201
    return r.json()["id"]


async def _detail(client, session_id):
    r = await client.get(f"{API}/sessions/{session_id}")
    assert r.status_code == 200
    return r.json()


async def _log_set(client, session_id, session_exercise_id, set_type, reps, load):
    return await client.post(
        f"{API}/sessions/{session_id}/exercises/{session_exercise_id}/sets",
        json={"set_type": set_type, "reps": reps, "load": load},
    )


class TestSessionLifecycle:
    async def test_start_copies_plan_exercises(self, client):
        plan = await _create_plan(client, exercise_names=("Back Squat", "Bench Press"))
        session_id = await _start_session(client, plan["id"])

        detail = await _detail(client, session_id)
        assert detail["status"] == "in_progress"
        assert detail["completed_at"] is None
        assert [e["exercise_name"] for e in detail["exercises"]] == ["Back Squat", "Bench Press"]
        assert [e["plan_exercise_id"] for e in detail["exercises"]] == [pe["id"] for pe in plan["exercises"]]

    async def test_start_from_unknown_plan(self, client):
        r = await client.post(f"{API}/sessions", json={"plan_id": str(uuid.uuid4())})
        assert r.status_code == 404

    async def test_complete_stamps_completed_at_and_locks_session(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])

        r = await client.patch(f"{API}/sessions/{session_id}", json={"status": "completed"})
        assert r.status_code == 200
        assert r.json()["status"] == "completed"
        assert r.json()["completed_at"] is not None

        r = await client.patch(f"{API}/sessions/{session_id}", json={"status": "cancelled"})
        assert r.status_code == 400
        assert (await client.delete(f"{API}/sessions/{session_id}")).status_code == 400

    async def test_cancel_is_soft(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])

        assert (await client.delete(f"{API}/sessions/{session_id}")).status_code == 204
        detail = await _detail(client, session_id)
        assert detail["status"] == "cancelled"
        assert detail["completed_at"] is not None

    async def test_list_filters_by_status(self, client):
        plan = await _create_plan(client)
        first = await _start_session(client, plan["id"])
        second = await _start_session(client, plan["id"])
        await client.patch(f"{API}/sessions/{first}", json={"status": "completed"})

        r = await client.get(f"{API}/sessions", params={"status": "completed"})
        assert r.json()["total"] == 1
        assert r.json()["items"][0]["id"] == first

        r = await client.get(f"{API}/sessions")
        assert r.json()["total"] == 2
        assert {item["id"] for item in r.json()["items"]} == {first, second}

    async def test_sessions_are_scoped_to_user(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])

        r = await client.get(f"{API}/sessions/{session_id}", headers={"X-User-Id": str(OTHER_USER_ID)})
        assert r.status_code == 404
        r = await client.get(f"{API}/sessions", headers={"X-User-Id": str(OTHER_USER_ID)})
        assert r.json()["total"] == 0

    async def test_invalid_user_header(self, client):
        r = await client.get(f"{API}/sessions", headers={"X-User-Id": "not-a-uuid"})
        assert r.status_code == 400


class TestSets:
    async def test_log_update_and_delete_set(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        se_id = (await _detail(client, session_id))["exercises"][0]["id"]

        r = await _log_set(client, session_id, se_id, "working", 5, 100)
        assert r.status_code == 201
        assert r.json()["set_index"] == 1
        set_id = r.json()["id"]
        r = await _log_set(client, session_id, se_id, "working", 5, 100)
        assert r.json()["set_index"] == 2

        r = await client.patch(
            f"{API}/sessions/{session_id}/exercises/{se_id}/sets/{set_id}", json={"reps": 6, "load": 102.5}
        )
        assert r.status_code == 200
        assert (r.json()["reps"], r.json()["load"]) == (6, 102.5)

        r = await client.delete(f"{API}/sessions/{session_id}/exercises/{se_id}/sets/{set_id}")
        assert r.status_code == 204
        sets = (await _detail(client, session_id))["exercises"][0]["sets"]
        assert [s["set_index"] for s in sets] == [2]

    async def test_set_validation(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        se_id = (await _detail(client, session_id))["exercises"][0]["id"]

        assert (await _log_set(client, session_id, se_id, "working", 0, 100)).status_code == 422
        assert (await _log_set(client, session_id, se_id, "working", 5, -1)).status_code == 422
        assert (await _log_set(client, session_id, se_id, "dropset", 5, 100)).status_code == 422

    async def test_set_limit_per_exercise(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        se_id = (await _detail(client, session_id))["exercises"][0]["id"]

        for _ in range(MAX_SETS_PER_EXERCISE_PER_SESSION):
            assert (await _log_set(client, session_id, se_id, "working", 5, 100)).status_code == 201
        r = await _log_set(client, session_id, se_id, "working", 5, 100)
        assert r.status_code == 400

    async def test_no_sets_after_completion(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        se_id = (await _detail(client, session_id))["exercises"][0]["id"]
        await client.patch(f"{API}/sessions/{session_id}", json={"status": "completed"})

        assert (await _log_set(client, session_id, se_id, "working", 5, 100)).status_code == 400

    async def test_unknown_session_exercise(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        r = await _log_set(client, session_id, uuid.uuid4(), "working", 5, 100)
        assert r.status_code == 404


class TestSessionExercises:
    async def test_add_ad_hoc_exercise_and_update_notes(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        curl = (await client.post(f"{API}/exercises", json={"name": "Barbell Curl"})).json()["id"]

        r = await client.post(
            f"{API}/sessions/{session_id}/exercises", json={"exercise_id": curl, "display_order": 5}
        )
        assert r.status_code == 201
        assert r.json()["plan_exercise_id"] is None
        se_id = r.json()["id"]

        r = await client.patch(f"{API}/sessions/{session_id}/exercises/{se_id}", json={"notes": "strict form"})
        assert r.status_code == 200
        assert r.json()["notes"] == "strict form"

        detail = await _detail(client, session_id)
        assert [e["exercise_name"] for e in detail["exercises"]] == ["Back Squat", "Barbell Curl"]

    async def test_add_unknown_exercise(self, client):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])
        r = await client.post(f"{API}/sessions/{session_id}/exercises", json={"exercise_id": str(uuid.uuid4())})
        assert r.status_code == 400


class TestSessionDetailDecorations:
    async def test_first_session_uses_default_working_load(self, client):
        plan = await _create_plan(client, warmup_sets=3)
        session_id = await _start_session(client, plan["id"])

        [exercise] = (await _detail(client, session_id))["exercises"]
        assert exercise["history"] == []
        assert exercise["warmup_sets_configured"] == 3
        # 60%, 70%, 80% of the 60 kg default: 36 -> 35, 42 -> 42.5, 48 -> 47.5
        assert exercise["warmup_suggestions"] == [
            {"load": 35.0, "reps": 5, "percentage": 60},
            {"load": 42.5, "reps": 3, "percentage": 70},
            {"load": 47.5, "reps": 2, "percentage": 80},
        ]

    async def test_next_session_is_seeded_by_best_working_set(self, client):
        plan = await _create_plan(client, warmup_sets=3)
        first = await _start_session(client, plan["id"])
        se_id = (await _detail(client, first))["exercises"][0]["id"]
        await _log_set(client, first, se_id, "warmup", 5, 110)
        await _log_set(client, first, se_id, "working", 5, 100)
        await _log_set(client, first, se_id, "working", 3, 102.5)
        await client.patch(f"{API}/sessions/{first}", json={"status": "completed"})

        second = await _start_session(client, plan["id"])
        [exercise] = (await _detail(client, second))["exercises"]

        assert [(h["load"], h["reps"]) for h in exercise["history"]] == [(102.5, 3)]
        # 60/70/80% of 102.5 kg: 61.5 -> 62.5, 71.75 -> 72.5, 82 -> 82.5
        assert [s["load"] for s in exercise["warmup_suggestions"]] == [62.5, 72.5, 82.5]

    async def test_zero_configured_warmups(self, client):
        plan = await _create_plan(client, warmup_sets=0)
        session_id = await _start_session(client, plan["id"])
        [exercise] = (await _detail(client, session_id))["exercises"]
        assert exercise["warmup_suggestions"] == []

    async def test_history_failure_does_not_fail_detail(self, client, monkeypatch):
        plan = await _create_plan(client)
        session_id = await _start_session(client, plan["id"])

        async def broken_query(*args, **kwargs):
            raise RuntimeError("statement timeout")

        monkeypatch.setattr(
            "liftlog.services.exercise_history.find_completed_sessions_with_exercise", broken_query
        )
        [exercise] = (await _detail(client, session_id))["exercises"]
        assert exercise["history"] == []
        # Planner still runs on the default load
        assert len(exercise["warmup_suggestions"]) == 3

    async def test_one_exercise_history_failure_leaves_others_intact(self, client, monkeypatch):
        plan = await _create_plan(client, exercise_names=("Back Squat", "Bench Press"))
        first = await _start_session(client, plan["id"])
        squat_se, bench_se = [e["id"] for e in (await _detail(client, first))["exercises"]]
        await _log_set(client, first, squat_se, "working", 5, 100)
        await _log_set(client, first, bench_se, "working", 5, 80)
        await client.patch(f"{API}/sessions/{first}", json={"status": "completed"})

        squat_id = plan["exercises"][0]["exercise_id"]
        real_query = exercise_history.find_completed_sessions_with_exercise

        async def squat_query_fails(db, user_id, exercise_id, limit):
            if str(exercise_id) == squat_id:
                raise RuntimeError("statement timeout")
            return await real_query(db, user_id, exercise_id, limit)

        monkeypatch.setattr(exercise_history, "find_completed_sessions_with_exercise", squat_query_fails)
        second = await _start_session(client, plan["id"])
        squat, bench = (await _detail(client, second))["exercises"]

        assert squat["history"] == []
        assert [(h["load"], h["reps"]) for h in bench["history"]] == [(80, 5)]
        # 60/70/80% of 80 kg: 48 -> 47.5, 56 -> 55, 64 -> 65
        assert [s["load"] for s in bench["warmup_suggestions"]] == [47.5, 55.0, 65.0]

    @pytest.mark.parametrize("status", ["in_progress", "cancelled"])
    async def test_unfinished_sessions_are_not_history(self, client, status):
        plan = await _create_plan(client)
        first = await _start_session(client, plan["id"])
        se_id = (await _detail(client, first))["exercises"][0]["id"]
        await _log_set(client, first, se_id, "working", 5, 140)
        if status == "cancelled":
            await client.delete(f"{API}/sessions/{first}")

        second = await _start_session(client, plan["id"])
        [exercise] = (await _detail(client, second))["exercises"]
        assert exercise["history"] == []
