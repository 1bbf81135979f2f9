"""Tests for the HTTP API."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator, fixed_clock
from qahq.api.deps import get_content_store, get_idea_queue_processor
from qahq.config import settings
from qahq.core.idea_queue import IdeaQueueProcessor
from qahq.main import app

ADMIN = {"x-admin-secret": "admin-secret"}
CRON = {"x-cron-secret": "cron-secret"}


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_SECRET", "admin-secret")
    monkeypatch.setattr(settings, "CRON_SECRET", "cron-secret")
    app.dependency_overrides[get_content_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def processor(store):
    processor = IdeaQueueProcessor(store, FakeGenerator(), clock=fixed_clock)
    app.dependency_overrides[get_idea_queue_processor] = lambda: processor
    return processor


class TestSystem:
    """Tests for the system routes."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestCronTrigger:
    """Tests for POST /api/cron/generate-questions."""

    def test_missing_secret(self, client, processor):
        response = client.post("/api/cron/generate-questions")

        assert response.status_code == 401

    def test_wrong_secret(self, client, processor):
        response = client.post("/api/cron/generate-questions", headers={"x-cron-secret": "nope"})

        assert response.status_code == 401

    def test_unset_secret_always_rejects(self, client, processor, monkeypatch):
        monkeypatch.setattr(settings, "CRON_SECRET", None)

        response = client.post("/api/cron/generate-questions", headers={"x-cron-secret": ""})

        assert response.status_code == 401

    def test_runs_pipeline(self, client, processor, add_idea):
        add_idea("Does the cron endpoint work?")

        response = client.post("/api/cron/generate-questions", headers=CRON)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "completed"
        assert body["run_status"] == "completed"
        assert body["successful"] == 1
        assert body["created_slugs"] == ["does-the-cron-endpoint-work"]
        assert body["message"].startswith("Processed 1 ideas (1 successful")

    def test_nothing_to_do_is_still_completed(self, client, processor):
        body = client.post("/api/cron/generate-questions", headers=CRON).json()

        assert body["status"] == "completed"
        assert body["run_status"] == "no_ideas"
        assert body["message"] == "No new ideas to process."

    def test_run_error(self, client, processor, monkeypatch):
        monkeypatch.setattr(processor, "run", AsyncMock(side_effect=RuntimeError("database is locked")))

        response = client.post("/api/cron/generate-questions", headers=CRON)

        assert response.status_code == 500
        assert response.json() == {"error": "database is locked"}


class TestIdeasApi:
    """Tests for the idea admin endpoints."""

    def test_requires_admin(self, client):
        assert client.get("/api/ideas").status_code == 401
        assert client.get("/api/ideas", headers={"x-admin-secret": "wrong"}).status_code == 401

    def test_admin_cookie_from_login(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_COOKIE_SECURE", False)

        response = client.post("/api/auth/login", json={"password": "admin-secret"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        token = response.cookies["admin_session"]
        assert token != "admin-secret"
        assert client.get("/api/ideas").status_code == 200

    def test_raw_secret_cookie_is_rejected(self, client):
        """The session cookie holds a derived token, never the secret itself."""
        client.cookies.set("admin_session", "admin-secret")

        assert client.get("/api/ideas").status_code == 401

    def test_create_idea(self, client):
        response = client.post("/api/ideas", headers=ADMIN, json={
            "proposed_question": "  Does chewing gum aid focus?  ",
            "category": "Productivity",
            "tags": ["focus"],
            "notes": "  ",
        })

        assert response.status_code == 200
        idea = response.json()
        assert idea["proposed_question"] == "Does chewing gum aid focus?"
        assert idea["category"] == "productivity"
        assert idea["status"] == "pending"
        assert idea["notes"] is None

    def test_create_idea_invalid_category(self, client):
        response = client.post("/api/ideas", headers=ADMIN, json={
            "proposed_question": "Is the moon hollow?",
            "category": "conspiracies",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Invalid category: conspiracies. Must be one of the valid category IDs."
        )

    def test_create_idea_requires_question(self, client):
        response = client.post("/api/ideas", headers=ADMIN, json={
            "proposed_question": "   ",
            "category": "science",
        })

        assert response.status_code == 400

    def test_bulk_import(self, client, store):
        ideas = [{"proposed_question": f"Bulk question {i}?", "tags": "one"} for i in range(120)]
        ideas.append({"proposed_question": "   "})

        response = client.post("/api/ideas/bulk-import", headers=ADMIN, json={"ideas": ideas})

        body = response.json()
        assert body["total"] == 120
        assert body["inserted"] == 120
        assert [r["inserted"] for r in body["results"]] == [50, 50, 20]
        total, stored = asyncio.run(store.list_ideas(limit=1))
        assert total == 120
        assert stored[0].category == "general_health"
        assert stored[0].tags == ["one"]

    def test_bulk_import_nothing_valid(self, client):
        response = client.post("/api/ideas/bulk-import", headers=ADMIN, json={"ideas": [{"notes": "x"}]})

        assert response.status_code == 400

    def test_list_ideas_by_status(self, client, add_idea):
        add_idea("Errored?", status="error")
        add_idea("Fresh?")

        body = client.get("/api/ideas", params={"status": "error"}, headers=ADMIN).json()

        assert body["total"] == 1
        assert body["items"][0]["proposed_question"] == "Errored?"

    def test_reset_idea(self, client, add_idea):
        idea = add_idea("Stuck?", status="processing")

        response = client.post(f"/api/ideas/{idea.id}/reset", headers=ADMIN)

        assert response.status_code == 200
        assert response.json()["status"] == "new"
        assert response.json()["processing_started_at"] is None

    def test_reset_missing_idea(self, client):
        assert client.post("/api/ideas/missing/reset", headers=ADMIN).status_code == 404

    def test_cleanup_statuses(self, client, add_idea, add_question):
        add_question("Do carrots improve eyesight?")
        add_idea("do carrots improve eyesight")

        body = client.post("/api/ideas/cleanup-statuses", headers=ADMIN).json()

        assert body["updated"] == 1
        assert body["results"][0]["status"] == "updated"


class TestQuestionsApi:
    """Tests for the question endpoints."""

    def test_public_list_and_detail(self, client, add_question):
        add_question("Does coffee stunt growth?", category="nutrition")
        add_question("Hidden draft?", status="draft")

        body = client.get("/api/questions", params={"category": "Nutrition"}).json()
        assert body["total"] == 1
        assert body["items"][0]["slug"] == "does-coffee-stunt-growth"

        assert client.get("/api/questions/does-coffee-stunt-growth").status_code == 200
        assert client.get("/api/questions/hidden-draft").status_code == 404

    def test_search(self, client, add_question):
        add_question("Does honey go bad?")
        add_question("Is salt unhealthy?")

        body = client.get("/api/questions", params={"q": "honey"}).json()

        assert [q["slug"] for q in body["items"]] == ["does-honey-go-bad"]

    def test_create_requires_admin(self, client):
        response = client.post("/api/questions", json={"question": "Q?", "slug": "q", "category": "science"})

        assert response.status_code == 401

    def test_create_published_sets_published_at(self, client):
        response = client.post("/api/questions", headers=ADMIN, json={
            "question": "Do sunsets cause colds?",
            "slug": "sunsets-colds",
            "category": "science",
            "status": "published",
        })

        assert response.status_code == 200
        assert response.json()["published_at"] is not None

    def test_offset_published_at_is_stored_as_utc(self, client, store):
        """A New York evening timestamp lands on the next UTC day."""
        response = client.post("/api/questions", headers=ADMIN, json={
            "question": "Does daylight saving affect sleep?",
            "slug": "daylight-saving-sleep",
            "category": "sleep",
            "status": "published",
            "published_at": "2026-10-19T23:30:00-05:00",
        })

        assert response.json()["published_at"].startswith("2026-10-20T04:30:00")
        oct19 = datetime(2026, 10, 19, tzinfo=timezone.utc)
        oct20 = datetime(2026, 10, 20, tzinfo=timezone.utc)
        assert asyncio.run(store.count_published_between(oct19, oct20)) == 0
        assert asyncio.run(store.count_published_between(oct20, oct20 + timedelta(days=1))) == 1

    def test_slug_is_normalized(self, client):
        response = client.post("/api/questions", headers=ADMIN, json={
            "question": "Is my slug safe?", "slug": "  My Slug! ", "category": "science",
        })

        assert response.status_code == 200
        assert response.json()["slug"] == "my-slug"

    def test_unusable_slug(self, client):
        response = client.post("/api/questions", headers=ADMIN, json={
            "question": "Bad slug?", "slug": "?!", "category": "science",
        })

        assert response.status_code == 400

    def test_update_normalizes_slug(self, client, add_question):
        question = add_question("Rename me?")

        response = client.put(f"/api/questions/{question.id}", headers=ADMIN, json={"slug": "New Name"})

        assert response.json()["slug"] == "new-name"

    def test_create_duplicate_slug(self, client, add_question):
        add_question("Taken?", slug="taken")

        response = client.post("/api/questions", headers=ADMIN, json={
            "question": "Other?", "slug": "taken", "category": "science",
        })

        assert response.status_code == 400

    def test_first_publish_sets_published_at(self, client, add_question):
        question = add_question("Draft question?", status="draft")

        response = client.put(f"/api/questions/{question.id}", headers=ADMIN, json={"status": "published"})

        assert response.status_code == 200
        assert response.json()["published_at"] is not None

    def test_republish_keeps_published_at(self, client, add_question):
        question = add_question("Published question?")

        response = client.put(
            f"/api/questions/{question.id}", headers=ADMIN, json={"status": "published", "summary": "New"}
        )

        assert response.json()["published_at"].startswith("2026-01-01")
        assert response.json()["summary"] == "New"

    def test_update_missing(self, client):
        assert client.put("/api/questions/missing", headers=ADMIN, json={}).status_code == 404


class TestSubscribeApi:
    """Tests for POST /api/subscribe."""

    def test_subscribe_twice(self, client):
        first = client.post("/api/subscribe", json={"email": " Reader@Example.com "})
        second = client.post("/api/subscribe", json={"email": "reader@example.com"})

        assert first.json() == {"message": "Subscribed successfully"}
        assert second.json() == {"message": "Already subscribed"}

    def test_invalid_email(self, client):
        assert client.post("/api/subscribe", json={"email": "nope"}).status_code == 400


class TestCategoriesApi:
    """Tests for GET /api/categories."""

    def test_lists_fixed_set(self, client):
        items = client.get("/api/categories").json()["items"]

        assert {"id": "fitness_exercise", "name": "Fitness & Exercise"} in items
        assert len(items) == 18


class TestAuthApi:
    """Tests for the admin login endpoints."""

    def test_wrong_password(self, client):
        response = client.post("/api/auth/login", json={"password": "guess"})

        assert response.status_code == 401
        assert "admin_session" not in response.cookies

    def test_missing_password(self, client):
        assert client.post("/api/auth/login", json={}).status_code == 400

    def test_unset_secret_rejects_login(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_SECRET", None)

        assert client.post("/api/auth/login", json={"password": "anything"}).status_code == 401

    def test_session_cookie_is_http_only(self, client):
        response = client.post("/api/auth/login", json={"password": "admin-secret"})

        set_cookie = response.headers["set-cookie"].lower()
        assert "httponly" in set_cookie
        assert "secure" in set_cookie
        assert "samesite=lax" in set_cookie

    def test_rotating_secret_ends_sessions(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_COOKIE_SECURE", False)
        client.post("/api/auth/login", json={"password": "admin-secret"})
        monkeypatch.setattr(settings, "ADMIN_SECRET", "rotated-secret")

        assert client.get("/api/ideas").status_code == 401

    def test_logout_clears_cookie(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_COOKIE_SECURE", False)
        client.post("/api/auth/login", json={"password": "admin-secret"})

        response = client.post("/api/auth/logout")

        assert response.json() == {"success": True}
        assert client.get("/api/ideas").status_code == 401
