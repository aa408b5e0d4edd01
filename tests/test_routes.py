"""End-to-end tests for the JSON API."""

from __future__ import annotations

import pytest

TODAY = "2024-06-05"


def _create_habit(client, **payload):
    body = {"title": "Meditate", **payload}
    response = client.post("/habits/", json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestAuthRoutes:
    def test_signup_login_logout(self, client):
        assert client.get("/auth/me").status_code == 401

        response = client.post("/auth/signup", json={"username": "bob", "password": "hunter22"})
        assert response.status_code == 201
        assert "password_hash" not in response.get_json()
        assert client.get("/auth/me").get_json()["username"] == "bob"

        assert client.post("/auth/logout").status_code == 204
        assert client.get("/auth/me").status_code == 401

        assert client.post("/auth/login", json={"username": "bob", "password": "wrong-one"}).status_code == 401
        assert client.post("/auth/login", json={"username": "bob", "password": "hunter22"}).status_code == 200
        assert client.get("/auth/me").status_code == 200

    def test_onboarding(self, client):
        assert client.post("/auth/onboarding").status_code == 401

        created = client.post("/auth/signup", json={"username": "bob", "password": "hunter22"}).get_json()
        assert created["is_onboarded"] is False

        response = client.post("/auth/onboarding")
        assert response.status_code == 200
        assert response.get_json()["is_onboarded"] is True
        assert client.get("/auth/me").get_json()["is_onboarded"] is True

    def test_duplicate_signup_conflicts(self, client):
        client.post("/auth/signup", json={"username": "bob", "password": "hunter22"})
        response = client.post("/auth/signup", json={"username": "bob", "password": "hunter22"})
        assert response.status_code == 409

    def test_signup_validation_errors(self, client):
        response = client.post("/auth/signup", json={"username": "b", "password": "x"})
        assert response.status_code == 400
        assert set(response.get_json()["errors"]) == {"username", "password"}

    def test_protected_routes_require_login(self, client):
        paths = ("/habits/", "/todos/", "/reminders/", "/notes/", "/calendar/", "/dashboard/", "/activity/")
        for path in paths:
            response = client.get(path)
            assert response.status_code == 401
            assert response.get_json() == {"error": "Authentication required"}


class TestHabitRoutes:
    def test_create_normalizes_recurrence(self, auth_client):
        habit = _create_habit(auth_client, frequency_days="monday, fri, nonsense")
        assert habit["frequency_days"] == ["Mon", "Fri"]
        assert habit["summary"]["current_streak"] == 0

    def test_blank_title_is_rejected(self, auth_client):
        response = auth_client.post("/habits/", json={"title": "   "})
        assert response.status_code == 400
        assert "title" in response.get_json()["errors"]

    def test_toggle_builds_streak(self, auth_client):
        habit = _create_habit(auth_client)
        for day in ("2024-06-03", "2024-06-04", "2024-06-05"):
            response = auth_client.post(f"/habits/{habit['id']}/toggle?today={TODAY}", json={"date": day})
            assert response.get_json()["completed"] is True

        listing = auth_client.get(f"/habits/?today={TODAY}").get_json()
        summary = listing["habits"][0]["summary"]
        assert listing["today"] == TODAY
        assert summary["current_streak"] == 3
        assert summary["weekly_rate"] == 43
        assert summary["completed_today"] is True

        # Un-marking a day in the middle breaks the run.
        response = auth_client.post(f"/habits/{habit['id']}/toggle?today={TODAY}", json={"date": "2024-06-04"})
        assert response.get_json()["completed"] is False
        assert response.get_json()["summary"]["current_streak"] == 1

    def test_toggle_defaults_to_today(self, auth_client):
        habit = _create_habit(auth_client)
        response = auth_client.post(f"/habits/{habit['id']}/toggle?today={TODAY}")
        assert response.get_json()["date"] == TODAY
        assert response.get_json()["summary"]["completed_today"] is True

    def test_update_and_delete(self, auth_client):
        habit = _create_habit(auth_client)
        response = auth_client.patch(f"/habits/{habit['id']}", json={"title": "Breathe", "frequency_days": ["Tue"]})
        assert response.status_code == 200
        assert response.get_json()["title"] == "Breathe"
        assert response.get_json()["frequency_days"] == ["Tue"]

        assert auth_client.delete(f"/habits/{habit['id']}").status_code == 204
        assert auth_client.get(f"/habits/{habit['id']}").status_code == 404
        assert auth_client.post(f"/habits/{habit['id']}/toggle").status_code == 404

    def test_bad_today_parameter(self, auth_client):
        response = auth_client.get("/habits/?today=June-5")
        assert response.status_code == 400
        assert "today" in response.get_json()["error"]

    def test_payload_must_be_object(self, auth_client):
        response = auth_client.post("/habits/", json=["Meditate"])
        assert response.status_code == 400


class TestTodoRoutes:
    def test_tree_notes_and_cascade(self, auth_client):
        parent = auth_client.post("/todos/", json={"title": "Move house", "priority": "high"}).get_json()
        child = auth_client.post("/todos/", json={"title": "Pack books", "parent_id": parent["id"]}).get_json()
        note = auth_client.post(f"/todos/{child['id']}/notes", json={"content": "Use small boxes"})
        assert note.status_code == 201

        tree = auth_client.get("/todos/").get_json()["todos"]
        assert [node["id"] for node in tree] == [parent["id"]]
        assert tree[0]["children"][0]["id"] == child["id"]
        assert tree[0]["children"][0]["notes"][0]["content"] == "Use small boxes"

        assert auth_client.delete(f"/todos/{parent['id']}").status_code == 204
        assert auth_client.get("/todos/").get_json()["todos"] == []

    def test_unknown_parent(self, auth_client):
        response = auth_client.post("/todos/", json={"title": "Lost", "parent_id": "missing"})
        assert response.status_code == 400

    def test_cannot_move_under_own_subtask(self, auth_client):
        parent = auth_client.post("/todos/", json={"title": "Plan trip"}).get_json()
        child = auth_client.post("/todos/", json={"title": "Book flights", "parent_id": parent["id"]}).get_json()

        response = auth_client.patch(f"/todos/{parent['id']}", json={"parent_id": child["id"]})
        assert response.status_code == 400
        assert "subtask" in response.get_json()["error"]

        tree = auth_client.get("/todos/").get_json()["todos"]
        assert [node["id"] for node in tree] == [parent["id"]]
        assert tree[0]["children"][0]["id"] == child["id"]

    def test_invalid_priority(self, auth_client):
        response = auth_client.post("/todos/", json={"title": "Task", "priority": "urgent"})
        assert response.status_code == 400
        assert "priority" in response.get_json()["errors"]

    def test_timer_lifecycle(self, auth_client):
        todo = auth_client.post("/todos/", json={"title": "Deep work", "timer_minutes": 30}).get_json()

        started = auth_client.put(f"/todos/{todo['id']}/timer", json={"action": "start"}).get_json()
        assert started["is_running"] is True
        assert 0 < started["remaining_seconds"] <= 30 * 60

        paused = auth_client.put(f"/todos/{todo['id']}/timer", json={"action": "pause"}).get_json()
        assert paused["is_running"] is False
        assert paused["paused_time_remaining"] == paused["remaining_seconds"]

        done = auth_client.put(f"/todos/{todo['id']}/timer", json={"action": "complete"}).get_json()
        assert done["completed"] is True
        assert done["remaining_seconds"] == 0

        again = auth_client.put(f"/todos/{todo['id']}/timer", json={"action": "start"}).get_json()
        assert again["completed"] is False
        assert again["remaining_seconds"] == 30 * 60

        response = auth_client.put(f"/todos/{todo['id']}/timer", json={"action": "snooze"})
        assert response.status_code == 400

    def test_status_update(self, auth_client):
        todo = auth_client.post("/todos/", json={"title": "Call plumber"}).get_json()
        response = auth_client.patch(f"/todos/{todo['id']}", json={"status": "completed"})
        assert response.get_json()["status"] == "completed"
        assert auth_client.patch("/todos/missing", json={"status": "completed"}).status_code == 404


class TestReminderAndNoteRoutes:
    def test_reminder_flow(self, auth_client):
        created = auth_client.post(
            "/reminders/",
            json={"title": "Dentist", "reminder_time": "2024-06-06T09:00:00Z", "tags": "health, teeth"},
        )
        assert created.status_code == 201
        reminder = created.get_json()
        assert reminder["tags"] == ["health", "teeth"]
        assert reminder["reminder_time"] == "2024-06-06T09:00:00+00:00"

        in_range = auth_client.get("/reminders/?start=2024-06-06&end=2024-06-06").get_json()
        assert [row["id"] for row in in_range["reminders"]] == [reminder["id"]]
        assert auth_client.get("/reminders/?start=2024-06-07").get_json()["reminders"] == []

        assert auth_client.post(f"/reminders/{reminder['id']}/complete").get_json()["status"] == "completed"
        assert auth_client.post(f"/reminders/{reminder['id']}/dismiss").get_json()["status"] == "dismissed"
        assert auth_client.delete(f"/reminders/{reminder['id']}").status_code == 204

    def test_reminder_spaces(self, auth_client):
        space = auth_client.post("/reminders/spaces", json={"name": "Work", "icon": "Briefcase"}).get_json()
        assert space["color"] == "bg-blue-500"

        auth_client.post(
            "/reminders/",
            json={"title": "Standup", "reminder_time": "2024-06-05T09:00:00Z", "space_id": space["id"]},
        )
        auth_client.post("/reminders/", json={"title": "Gym", "reminder_time": "2024-06-05T18:00:00Z"})

        filtered = auth_client.get(f"/reminders/?space={space['id']}").get_json()["reminders"]
        assert [row["title"] for row in filtered] == ["Standup"]
        assert auth_client.get("/reminders/?space=missing").status_code == 404

        bad = auth_client.post(
            "/reminders/", json={"title": "X", "reminder_time": "2024-06-05T09:00:00Z", "space_id": "missing"}
        )
        assert bad.status_code == 400

        renamed = auth_client.patch(f"/reminders/spaces/{space['id']}", json={"name": "Office"}).get_json()
        assert renamed["name"] == "Office"
        assert auth_client.get("/reminders/spaces/default").get_json()["name"] == "General"
        names = [row["name"] for row in auth_client.get("/reminders/spaces").get_json()["spaces"]]
        assert names == ["Office", "General"]

        assert auth_client.delete(f"/reminders/spaces/{space['id']}").status_code == 204
        remaining = auth_client.get("/reminders/").get_json()["reminders"]
        assert [row["space_id"] for row in remaining] == [None, None]

    def test_reversed_reminder_range(self, auth_client):
        response = auth_client.get("/reminders/?start=2024-06-07&end=2024-06-01")
        assert response.status_code == 400

    def test_note_flow(self, auth_client):
        note = auth_client.post("/notes/", json={"title": "Ideas", "content": "ship it soon"}).get_json()
        assert note["word_count"] == 3

        updated = auth_client.patch(f"/notes/{note['id']}", json={"is_pinned": True, "content": "ship"}).get_json()
        assert updated["is_pinned"] is True
        assert updated["character_count"] == 4

        listing = auth_client.get("/notes/").get_json()["notes"]
        assert [row["id"] for row in listing] == [note["id"]]
        assert auth_client.delete(f"/notes/{note['id']}").status_code == 204
        assert auth_client.delete(f"/notes/{note['id']}").status_code == 404


class TestCalendarAndDashboardRoutes:
    def test_empty_week(self, auth_client):
        data = auth_client.get(f"/calendar/?view=week&date={TODAY}&today={TODAY}").get_json()

        assert data["range"] == {"start": "2024-06-02", "end": "2024-06-08"}
        assert len(data["days"]) == 7
        assert all(not day["has_items"] for day in data["days"])
        assert [day["is_today"] for day in data["days"]].count(True) == 1

    def test_month_view_with_items(self, auth_client):
        habit = _create_habit(auth_client, frequency_days=["Wed"])
        auth_client.post(f"/habits/{habit['id']}/toggle?today={TODAY}", json={"date": TODAY})
        auth_client.post("/todos/", json={"title": "File taxes", "due_date": "2024-06-10T12:00:00Z"})
        auth_client.post("/reminders/", json={"title": "Standup", "reminder_time": "2024-06-05T09:00:00Z"})

        data = auth_client.get(f"/calendar/?view=month&date={TODAY}&today={TODAY}").get_json()
        days = {day["date"]: day for day in data["days"]}

        assert data["range"] == {"start": "2024-05-26", "end": "2024-07-06"}
        assert days["2024-05-29"]["is_current_period"] is False
        assert days[TODAY]["habits"]["completed"] == 1
        assert days[TODAY]["reminders"]["total"] == 1
        assert days["2024-06-10"]["todos"]["total"] == 1
        assert data["summary"]["days"] == 30
        assert data["summary"]["habits_due"] == 4
        assert data["summary"]["habits_completed"] == 1

    def test_year_view_has_month_cards(self, auth_client):
        data = auth_client.get(f"/calendar/?view=year&date={TODAY}&today={TODAY}").get_json()
        assert len(data["days"]) == 366
        assert [card["month"] for card in data["months"]][:2] == ["2024-01", "2024-02"]
        assert data["months"][1]["days"] == 29

    def test_bad_view(self, auth_client):
        assert auth_client.get("/calendar/?view=decade").status_code == 400
        assert auth_client.get("/calendar/?date=tomorrow").status_code == 400

    def test_dashboard(self, auth_client):
        habit = _create_habit(auth_client)
        auth_client.post(f"/habits/{habit['id']}/toggle?today={TODAY}")
        auth_client.post("/todos/", json={"title": "Overdue", "due_date": "2024-06-01T09:00:00Z"})
        auth_client.post("/reminders/", json={"title": "Soon", "reminder_time": "2024-06-06T09:00:00Z"})

        data = auth_client.get(f"/dashboard/?today={TODAY}").get_json()
        assert data["habits_due_today"] == 1
        assert data["habits_completed_today"] == 1
        assert data["best_streak"] == 1
        assert data["todos"]["overdue"] == 1
        assert [card["title"] for card in data["upcoming_reminders"]] == ["Soon"]
        assert data["upcoming_reminders"][0]["is_tomorrow"] is True


class TestUnexpectedErrors:
    def _add_failing_route(self, app):
        @app.get("/boom")
        def boom():
            raise RuntimeError("kaboom")

    def test_propagates_while_testing(self, app):
        self._add_failing_route(app)

        with pytest.raises(RuntimeError, match="kaboom"):
            app.test_client().get("/boom")

    def test_json_500_outside_testing(self, app):
        self._add_failing_route(app)
        app.testing = False
        app.config["PROPAGATE_EXCEPTIONS"] = False

        response = app.test_client().get("/boom")
        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}


class TestActivityRoutes:
    def test_stream_and_filters(self, auth_client):
        _create_habit(auth_client, frequency_days=["Wed"])
        auth_client.post("/todos/", json={"title": "Renew passport", "due_date": "2024-06-01T09:00:00Z"})

        data = auth_client.get(f"/activity/?today={TODAY}").get_json()
        assert data["today"] == TODAY
        assert [(item["type"], item["urgency"]) for item in data["items"]] == [
            ("todo", "overdue"),
            ("habit", "today"),
        ]

        habits_only = auth_client.get(f"/activity/?today={TODAY}&type=habits").get_json()["items"]
        assert [item["title"] for item in habits_only] == ["Meditate"]
        searched = auth_client.get(f"/activity/?today={TODAY}&q=passport").get_json()["items"]
        assert [item["title"] for item in searched] == ["Renew passport"]

        assert auth_client.get(f"/activity/?today={TODAY}&urgency=later").status_code == 400
