"""Tests for the SQLAlchemy content store."""

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError


class TestIdeas:
    """Tests for idea reads and writes."""

    def test_mark_ideas_processing(self, store, add_idea):
        first = add_idea("First?")
        second = add_idea("Second?")
        other = add_idea("Other?")
        started = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

        asyncio.run(store.mark_ideas_processing([first.id, second.id], started))

        for idea_id in (first.id, second.id):
            idea = asyncio.run(store.get_idea(idea_id))
            assert idea.status == "processing"
            assert idea.processing_started_at == datetime(2026, 10, 19, 9, 0)
        assert asyncio.run(store.get_idea(other.id)).status == "new"

    def test_update_missing_idea(self, store):
        with pytest.raises(LookupError):
            asyncio.run(store.update_idea("missing", status="error"))

    def test_list_ideas_filters_by_status(self, store, add_idea):
        add_idea("New one?")
        add_idea("Errored one?", status="error")

        total, ideas = asyncio.run(store.list_ideas(status="error"))

        assert total == 1
        assert ideas[0].proposed_question == "Errored one?"


class TestQuestions:
    """Tests for question reads and writes."""

    def test_slug_is_unique(self, store, add_question):
        add_question("Original?", slug="same-slug")

        with pytest.raises(IntegrityError):
            add_question("Copy?", slug="same-slug")

    def test_find_question_by_text(self, store, add_question):
        question = add_question("Does Salt Raise Blood Pressure?")

        found = asyncio.run(store.find_question_by_text("  does salt raise blood pressure?  "))

        assert found.id == question.id
        assert asyncio.run(store.find_question_by_text("Does salt lower blood pressure?")) is None
        assert asyncio.run(store.find_question_by_text("   ")) is None

    def test_question_keys(self, store, add_question):
        add_question("  Mixed Case Question?  ", slug="mixed")

        assert asyncio.run(store.list_question_keys()) == {"mixed case question?"}

    def test_list_questions_search_and_category(self, store, add_question):
        add_question("Does coffee stunt growth?", category="nutrition")
        add_question("Does coffee help sleep?", category="sleep")
        add_question("Is tea better than coffee?", category="nutrition", status="draft")

        total, questions = asyncio.run(store.list_questions(category="nutrition", search="COFFEE"))

        assert total == 1
        assert questions[0].question == "Does coffee stunt growth?"

    def test_related_questions_exclude_slug(self, store, add_question):
        add_question("One?", slug="one", category="history")
        add_question("Two?", slug="two", category="history")
        add_question("Three?", slug="three", category="geography")

        related = asyncio.run(store.list_related_questions("history", "one"))

        assert [q.slug for q in related] == ["two"]

    def test_update_question(self, store, add_question):
        question = add_question("Before?", status="draft")

        updated = asyncio.run(store.update_question(question.id, {"summary": "After"}))

        assert updated.summary == "After"
        assert updated.updated_at is not None
        assert asyncio.run(store.update_question("missing", {"summary": "x"})) is None


class TestSubscribers:
    """Tests for newsletter subscribers."""

    def test_duplicate_email(self, store):
        assert asyncio.run(store.add_subscriber("reader@example.com")) is True
        assert asyncio.run(store.add_subscriber("reader@example.com")) is False
