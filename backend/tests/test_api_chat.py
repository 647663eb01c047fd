"""
API tests for the per-document tutor chat.
"""

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from conftest import USER_A, USER_B, auth_headers, seed_chunks, seed_document


def _seed_history(db, n: int):
    rows = [
        {
            "id": f"m{i}",
            "document_id": "doc-1",
            "user_id": USER_A,
            "role": "user" if i % 2 == 0 else "assistant",
            "content": f"message {i}",
        }
        for i in range(n)
    ]
    db.table("chat_messages").insert(rows).execute()


class TestSendMessage:
    def test_answer_is_saved_with_question(self, client, fake_db, fake_llm):
        seed_document(fake_db)
        seed_chunks(fake_db, ["Mitochondria produce ATP.", "Ribosomes build proteins."])
        fake_llm.responses = ["Mitochondria are the powerhouse of the cell."]

        response = client.post(
            "/api/documents/doc-1/chat",
            json={"message": "What do mitochondria do?"},
            headers=auth_headers(),
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Mitochondria are the powerhouse of the cell."
        assert body["userMessage"]["role"] == "user"
        assert body["userMessage"]["content"] == "What do mitochondria do?"
        assert body["assistantMessage"]["content"] == body["message"]

        stored = fake_db.rows("chat_messages")
        assert [m["role"] for m in stored] == ["user", "assistant"]

    def test_prompt_carries_retrieved_context(self, client, fake_db, fake_llm):
        seed_document(fake_db)
        seed_chunks(fake_db, ["Mitochondria produce ATP."])

        client.post("/api/documents/doc-1/chat", json={"message": "ATP?"}, headers=auth_headers())

        messages = fake_llm.calls[0]
        assert isinstance(messages[0], SystemMessage)
        assert "Mitochondria produce ATP." in messages[-1].content

    def test_only_last_six_messages_are_sent_as_history(self, client, fake_db, fake_llm):
        seed_document(fake_db)
        seed_chunks(fake_db, ["Some context."])
        _seed_history(fake_db, 10)

        client.post("/api/documents/doc-1/chat", json={"message": "next?"}, headers=auth_headers())

        history = [m for m in fake_llm.calls[0][1:-1] if isinstance(m, (HumanMessage, AIMessage))]
        assert [m.content for m in history] == [f"message {i}" for i in range(4, 10)]

    def test_blank_message_is_400(self, client, fake_db):
        seed_document(fake_db)
        response = client.post("/api/documents/doc-1/chat", json={"message": "  "}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}

    def test_missing_message_is_400(self, client, fake_db):
        seed_document(fake_db)
        response = client.post("/api/documents/doc-1/chat", json={}, headers=auth_headers())
        assert response.status_code == 400

    def test_unknown_document_is_404(self, client, fake_db):
        seed_document(fake_db, USER_B)
        response = client.post("/api/documents/doc-1/chat", json={"message": "hi"}, headers=auth_headers())
        assert response.status_code == 404
        assert fake_db.rows("chat_messages") == []

    def test_llm_failure_is_500(self, client, fake_db, fake_llm):
        seed_document(fake_db)
        seed_chunks(fake_db, ["Some context."])

        async def boom(messages):
            raise RuntimeError("provider down")

        fake_llm.ainvoke = boom
        response = client.post("/api/documents/doc-1/chat", json={"message": "hi"}, headers=auth_headers())

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to process chat message"}


class TestListMessages:
    def test_history_oldest_first(self, client, fake_db):
        seed_document(fake_db)
        _seed_history(fake_db, 3)

        response = client.get("/api/documents/doc-1/chat", headers=auth_headers())

        assert response.status_code == 200
        assert [m["id"] for m in response.json()["messages"]] == ["m0", "m1", "m2"]

    def test_other_users_history_is_hidden(self, client, fake_db):
        _seed_history(fake_db, 3)
        response = client.get("/api/documents/doc-1/chat", headers=auth_headers(USER_B))
        assert response.json()["messages"] == []
