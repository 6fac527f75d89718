"""API route tests against both storage backends with a mocked pipeline."""

from fastapi.testclient import TestClient

from emerge_career.config import Settings
from emerge_career.main import create_app
from emerge_career.models.records import Goal
from emerge_career.storage.database import DatabaseStorage
from emerge_career.suggestions import fallbacks


class TestHealth:
    def test_health(self, client, storage):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        expected = "database" if isinstance(storage, DatabaseStorage) else "memory"
        assert data["storage"] == expected


class TestAuth:
    def test_register_then_login(self, client, storage):
        response = client.post("/api/auth/register", json={"email": "a@b.co", "password": "pw"})
        assert response.status_code == 200
        user_id = response.json()["userId"]

        response = client.post("/api/auth/login", json={"email": "a@b.co", "password": "pw"})
        assert response.status_code == 200
        body = response.json()
        assert body["userId"] == user_id
        assert body["hasProfile"] is False
        assert storage.get_user(user_id).streak_days == 1

        again = client.post("/api/auth/login", json={"email": "a@b.co", "password": "pw"})
        assert again.status_code == 200
        user = storage.get_user(user_id)
        assert user.streak_days == 1
        assert user.last_login_date is not None

    def test_duplicate_registration(self, client):
        client.post("/api/auth/register", json={"email": "a@b.co", "password": "pw"})
        response = client.post("/api/auth/register", json={"email": "a@b.co", "password": "pw"})
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Email already registered"}

    def test_wrong_password(self, client):
        client.post("/api/auth/register", json={"email": "a@b.co", "password": "pw"})
        response = client.post("/api/auth/login", json={"email": "a@b.co", "password": "nope"})
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_missing_fields(self, client):
        response = client.post("/api/auth/login", json={"email": "a@b.co"})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"].startswith("Invalid request")


class TestSurvey:
    def test_new_profile_gets_goals_and_welcome(self, client, storage):
        response = client.post(
            "/api/survey",
            json={
                "email": "ada@example.com",
                "name": "Ada",
                "subjects": ["Biology"],
                "interests": "genetics",
            },
        )
        assert response.status_code == 200
        user_id = response.json()["userId"]

        user = storage.get_user(user_id)
        assert user.username.startswith("ada")
        assert user.password == "password123"
        goals = storage.get_goals_by_user_id(user_id)
        assert [g.title for g in goals] == fallbacks.GOALS_BY_SUBJECT["biology"][:3]
        activities = storage.get_activities_by_user_id(user_id)
        assert activities[0].title == "Joined Emerge Career Platform"

    def test_update_existing_profile(self, client, storage, biology_user):
        storage.create_goal(Goal(user_id=biology_user.id, title="Keep me"))
        response = client.post(
            "/api/survey",
            json={"user_id": biology_user.id, "subjects": ["Physics"], "interests": "optics"},
        )
        assert response.status_code == 200
        user = storage.get_user(biology_user.id)
        assert user.subjects == ["Physics"]
        assert user.name == "Ada"
        assert [g.title for g in storage.get_goals_by_user_id(user.id)] == ["Keep me"]
        activities = storage.get_activities_by_user_id(user.id)
        assert activities[0].title == "Updated Career Profile"

    def test_update_unknown_user(self, client):
        response = client.post("/api/survey", json={"user_id": 999, "subjects": ["Art"]})
        assert response.status_code == 404


class TestDashboard:
    def test_aggregate(self, client, biology_user):
        response = client.get(f"/api/dashboard/{biology_user.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["name"] == "Ada"
        assert len(data["goals"]) == 3
        assert [t["id"] for t in data["trends"]] == ["fallback-1", "fallback-2"]
        assert data["daily_challenge"]["xp"] == 50

    def test_unknown_user(self, client):
        response = client.get("/api/dashboard/999")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_get_user(self, client, biology_user):
        response = client.get(f"/api/user/{biology_user.id}")
        assert response.json()["user"]["hasProfile"] is True


class TestGoals:
    def test_create(self, client, biology_user):
        response = client.post(
            "/api/goals", json={"user_id": biology_user.id, "title": "Email a professor"}
        )
        assert response.status_code == 200
        assert response.json()["goal"]["title"] == "Email a professor"

    def test_create_for_unknown_user(self, client):
        response = client.post("/api/goals", json={"user_id": 999, "title": "Orphan"})
        assert response.status_code == 404

    def test_partial_update(self, client, storage, biology_user):
        goal = storage.create_goal(Goal(user_id=biology_user.id, title="Read"))
        response = client.put(f"/api/goals/{goal.id}", json={"progress": 40})
        assert response.status_code == 200
        stored = storage.get_goal(goal.id)
        assert stored.progress == 40
        assert stored.title == "Read"

    def test_progress_out_of_range(self, client, storage, biology_user):
        goal = storage.create_goal(Goal(user_id=biology_user.id, title="Read"))
        response = client.put(f"/api/goals/{goal.id}", json={"progress": 150})
        assert response.status_code == 400

    def test_completion_side_effects(self, client, storage, biology_user):
        goal = storage.create_goal(Goal(user_id=biology_user.id, title="Read a paper"))
        response = client.put(f"/api/goals/{goal.id}", json={"completed": True})
        assert response.status_code == 200

        user = storage.get_user(biology_user.id)
        assert (user.level, user.progress) == (1, 10)
        assert storage.get_goal(goal.id) is None
        badge = storage.get_activities_by_user_id(user.id)[0]
        assert badge.type == "badge"
        assert badge.title == "Completed goal: Read a paper"

    def test_completion_levels_up(self, client, storage, biology_user):
        storage.update_user(biology_user.id, level=2, progress=95)
        goal = storage.create_goal(Goal(user_id=biology_user.id, title="Ship it"))
        client.put(f"/api/goals/{goal.id}", json={"completed": True})
        user = storage.get_user(biology_user.id)
        assert (user.level, user.progress) == (3, 5)

    def test_null_fields_rejected(self, client, storage, biology_user):
        goal = storage.create_goal(Goal(user_id=biology_user.id, title="Read"))
        for field in ("title", "completed", "progress"):
            response = client.put(f"/api/goals/{goal.id}", json={field: None})
            assert response.status_code == 400
            assert response.json()["success"] is False
        stored = storage.get_goal(goal.id)
        assert stored.title == "Read"
        assert stored.completed is False

    def test_update_missing_goal(self, client):
        response = client.put("/api/goals/999", json={"completed": True})
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Goal 999 not found"}

    def test_delete(self, client, storage, biology_user):
        goal = storage.create_goal(Goal(user_id=biology_user.id, title="Drop me"))
        assert client.delete(f"/api/goals/{goal.id}").status_code == 200
        assert client.delete(f"/api/goals/{goal.id}").status_code == 404

    def test_suggest_appends_one(self, client, storage, biology_user):
        storage.create_goal(Goal(user_id=biology_user.id, title="Existing"))
        response = client.get(f"/api/goals/suggest/{biology_user.id}")
        assert response.status_code == 200
        assert response.json()["goals"] == [
            "Existing",
            fallbacks.GOALS_BY_SUBJECT["biology"][0],
        ]

    def test_suggest_requires_subjects(self, client):
        user_id = client.post(
            "/api/auth/register", json={"email": "x@y.z", "password": "pw"}
        ).json()["userId"]
        response = client.get(f"/api/goals/suggest/{user_id}")
        assert response.status_code == 400
        assert "subjects" in response.json()["message"]


class TestActivitiesAndChat:
    def test_create_activity(self, client, biology_user):
        response = client.post(
            "/api/activities",
            json={"user_id": biology_user.id, "type": "course", "title": "Started Genetics"},
        )
        assert response.status_code == 200
        assert response.json()["activity"]["isRecent"] is True

    def test_invalid_activity_type(self, client, biology_user):
        response = client.post(
            "/api/activities",
            json={"user_id": biology_user.id, "type": "party", "title": "x"},
        )
        assert response.status_code == 400

    def test_chat_round_trip(self, client, biology_user):
        for sender, text in [("user", "Hi"), ("bot", "Hello!")]:
            client.post(
                "/api/chat", json={"user_id": biology_user.id, "message": text, "sender": sender}
            )
        for path in ("chat", "chat-history"):
            messages = client.get(f"/api/{path}/{biology_user.id}").json()["messages"]
            assert [m["message"] for m in messages] == ["Hi", "Hello!"]

    def test_chat_history_unknown_user(self, client):
        assert client.get("/api/chat/999").status_code == 404


class TestCareerCoach:
    def test_reply_and_persistence(self, client, generator, storage, biology_user):
        generator.generate.side_effect = None
        generator.generate.return_value = "Look for lab internships."
        response = client.post(
            "/api/career-coach", json={"message": "Where do I start?", "user_id": biology_user.id}
        )
        assert response.status_code == 200
        assert response.json() == {"success": True, "response": "Look for lab internships."}

        history = storage.get_chat_history_by_user_id(biology_user.id)
        assert [(m.sender, m.message) for m in history] == [
            ("user", "Where do I start?"),
            ("bot", "Look for lab internships."),
        ]

    def test_user_data_payload(self, client, biology_user):
        response = client.post(
            "/api/career-coach",
            json={"message": "Hello", "userData": {"id": biology_user.id, "name": "Ada"}},
        )
        assert response.status_code == 200
        assert response.json()["response"] == fallbacks.CHAT_OFFLINE_REPLY

    def test_missing_user(self, client):
        response = client.post("/api/career-coach", json={"message": "Hello"})
        assert response.status_code == 400
        assert "User data is required" in response.json()["message"]

    def test_malformed_user_data(self, client, biology_user):
        for user_data in ({"id": [biology_user.id]}, {"id": {"value": 1}}):
            response = client.post(
                "/api/career-coach", json={"message": "Hello", "userData": user_data}
            )
            assert response.status_code == 400
            assert response.json()["message"].startswith("Invalid request")

    def test_history_window(self, client, generator, storage, biology_user):
        for i in range(15):
            client.post(
                "/api/chat",
                json={"user_id": biology_user.id, "message": f"m{i}", "sender": "user"},
            )
        generator.generate.side_effect = None
        generator.generate.return_value = "ok"
        client.post("/api/career-coach", json={"message": "latest", "user_id": biology_user.id})
        prompt = generator.generate.await_args.args[0]
        assert "Student: m4\n" not in prompt
        assert "Student: m5\n" in prompt
        assert "Student: m14\n" in prompt


class TestRecommendations:
    def test_video_fallback_persisted(self, client, storage, biology_user):
        response = client.get(f"/api/personalized-recommendations/{biology_user.id}")
        assert response.status_code == 200
        video = response.json()["data"]["video"]
        assert video["title"] == "Biology Career Guide"

        stored = storage.get_recommendations_by_user_id(biology_user.id, "video")
        assert stored[0].meta["channelTitle"] == "Career Insights"

    def test_video_requires_subjects(self, client):
        user_id = client.post(
            "/api/auth/register", json={"email": "x@y.z", "password": "pw"}
        ).json()["userId"]
        assert client.get(f"/api/personalized-recommendations/{user_id}").status_code == 404

    def test_course_is_stored_then_reused(self, client, generator, biology_user):
        first = client.get(f"/api/course-recommendation/{biology_user.id}").json()["course"]
        assert first["title"] == fallbacks.COURSES_BY_SUBJECT["biology"].title

        generator.generate.reset_mock()
        second = client.get(f"/api/course-recommendation/{biology_user.id}").json()["course"]
        assert second == first
        generator.generate.assert_not_awaited()

    def test_course_unknown_user(self, client):
        assert client.get("/api/course-recommendation/999").status_code == 404

    def test_career_trends(self, client):
        response = client.get("/api/career-trends/Biology")
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 2
        assert data[0]["metrics"]["like_count"] == 42


class TestAppSecret:
    def test_secret_required(self, memory_storage, pipeline):
        settings = Settings(_env_file=None, app_secret="s3cret")
        app = create_app(settings=settings, storage=memory_storage, pipeline=pipeline)
        with TestClient(app) as c:
            assert c.get("/api/health").status_code == 200
            assert c.get("/api/user/1").status_code == 401
            response = c.get("/api/user/1", headers={"X-App-Secret": "s3cret"})
            assert response.status_code == 404
