"""
API tests for generated study material: flashcards, MCQs and summary notes.
"""

import json

from conftest import USER_A, USER_B, auth_headers, seed_chunks, seed_document

CONTEXT = [
    "Newton's first law describes inertia.",
    "Force equals mass times acceleration.",
    "Every action has an equal and opposite reaction.",
]


def _ready_document(db):
    seed_document(db, title="Physics")
    seed_chunks(db, CONTEXT)


def _mcq(question, answer=1):
    return {
        "question": question,
        "options": ["A", "B", "C", "D"],
        "correct_answer": answer,
        "explanation": "Because.",
    }


# -- Flashcards --

class TestGenerateFlashcards:
    def test_generates_and_stores_cards(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = [
            "Sure!\n" + json.dumps([
                {"front": "What is inertia?", "back": "Resistance to change in motion."},
                {"front": "F = ?", "back": "m * a"},
            ])
        ]

        response = client.post("/api/flashcards/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        assert response.status_code == 200
        cards = response.json()["flashcards"]
        assert [c["front"] for c in cards] == ["What is inertia?", "F = ?"]
        assert len(fake_db.rows("flashcards")) == 2

        listed = client.get("/api/documents/doc-1/flashcards", headers=auth_headers()).json()["flashcards"]
        assert [c["front"] for c in listed] == ["What is inertia?", "F = ?"]

    def test_prompt_includes_document_context(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = ['[{"front": "Q", "back": "A"}]']

        client.post("/api/flashcards/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        prompt = fake_llm.calls[0][-1].content
        for text in CONTEXT:
            assert text in prompt

    def test_missing_document_id_is_400(self, client):
        response = client.post("/api/flashcards/generate", json={}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json() == {"error": "Document ID is required"}

    def test_other_users_document_is_404(self, client, fake_db):
        seed_document(fake_db, USER_B)
        response = client.post("/api/flashcards/generate", json={"documentId": "doc-1"}, headers=auth_headers())
        assert response.status_code == 404

    def test_document_without_chunks_is_400(self, client, fake_db):
        seed_document(fake_db)
        response = client.post("/api/flashcards/generate", json={"documentId": "doc-1"}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json() == {"error": "No content found in document"}

    def test_unparseable_output_is_500_and_stores_nothing(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = ["I cannot produce flashcards today."]

        response = client.post("/api/flashcards/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to parse generated flashcards"}
        assert fake_db.rows("flashcards") == []


# -- MCQs --

class TestGenerateMCQs:
    def test_generates_requested_count_with_clamped_answers(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = [json.dumps([_mcq("Q1", 9), _mcq("Q2", 2), _mcq("Q3", 0)])]

        response = client.post(
            "/api/mcqs/generate",
            json={"documentId": "doc-1", "count": 2},
            headers=auth_headers(),
        )

        assert response.status_code == 200
        mcqs = response.json()["mcqs"]
        assert [m["question"] for m in mcqs] == ["Q1", "Q2"]
        assert [m["correct_answer"] for m in mcqs] == [3, 2]
        assert all(len(m["options"]) == 4 for m in mcqs)

    def test_malformed_question_is_not_stored(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = [json.dumps([_mcq(42), _mcq("ok?")])]

        response = client.post("/api/mcqs/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        assert response.status_code == 200
        assert [m["question"] for m in response.json()["mcqs"]] == ["ok?"]
        assert [row["question"] for row in fake_db.rows("mcqs")] == ["ok?"]

    def test_prompt_asks_for_count(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = [json.dumps([_mcq("Q1")])]

        client.post("/api/mcqs/generate", json={"documentId": "doc-1", "count": 7}, headers=auth_headers())

        assert "7" in fake_llm.calls[0][-1].content

    def test_default_count_is_fifteen(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = [json.dumps([_mcq(f"Q{i}") for i in range(20)])]

        response = client.post("/api/mcqs/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        assert len(response.json()["mcqs"]) == 15

    def test_count_out_of_range_is_400(self, client, fake_db):
        _ready_document(fake_db)
        response = client.post(
            "/api/mcqs/generate",
            json={"documentId": "doc-1", "count": 500},
            headers=auth_headers(),
        )
        assert response.status_code == 400

    def test_list_decodes_string_options(self, client, fake_db):
        seed_document(fake_db)
        fake_db.table("mcqs").insert({
            "id": "m1",
            "document_id": "doc-1",
            "user_id": USER_A,
            "question": "Q",
            "options": json.dumps(["a", "b", "c", "d"]),
            "correct_answer": 0,
            "explanation": "",
        }).execute()

        response = client.get("/api/documents/doc-1/mcqs", headers=auth_headers())
        assert response.json()["mcqs"][0]["options"] == ["a", "b", "c", "d"]

    def test_missing_document_id_is_400(self, client):
        response = client.post("/api/mcqs/generate", json={"count": 5}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json() == {"error": "Document ID is required"}

    def test_unparseable_output_is_500(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = ["no json here"]
        response = client.post("/api/mcqs/generate", json={"documentId": "doc-1"}, headers=auth_headers())
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to parse generated MCQs"}


# -- Notes --

class TestNotes:
    def test_missing_notes_is_404(self, client, fake_db):
        seed_document(fake_db)
        response = client.get("/api/documents/doc-1/notes", headers=auth_headers())
        assert response.status_code == 404
        assert response.json() == {"error": "Notes not found"}

    def test_generate_then_fetch(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = ["# Physics\n\n- Inertia\n- F = ma"]

        response = client.post("/api/notes/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        assert response.status_code == 200
        assert response.json()["note"]["content"].startswith("# Physics")

        fetched = client.get("/api/documents/doc-1/notes", headers=auth_headers())
        assert fetched.json()["note"]["content"] == "# Physics\n\n- Inertia\n- F = ma"

    def test_regenerate_replaces_existing_note(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        fake_llm.responses = ["first version", "second version"]

        client.post("/api/notes/generate", json={"documentId": "doc-1"}, headers=auth_headers())
        client.post("/api/notes/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        notes = fake_db.rows("notes")
        assert len(notes) == 1
        assert notes[0]["content"] == "second version"

    def test_document_without_chunks_is_400(self, client, fake_db):
        seed_document(fake_db)
        response = client.post("/api/notes/generate", json={"documentId": "doc-1"}, headers=auth_headers())
        assert response.status_code == 400

    def test_other_users_notes_are_hidden(self, client, fake_db, fake_llm):
        _ready_document(fake_db)
        client.post("/api/notes/generate", json={"documentId": "doc-1"}, headers=auth_headers())

        response = client.get("/api/documents/doc-1/notes", headers=auth_headers(USER_B))
        assert response.status_code == 404
