"""
Shared fixtures: env config, an in-memory stand-in for the Supabase query
builder, fake embedding / chat models, and an authenticated TestClient.
"""

import copy
import hashlib
import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import patch

import pytest

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "anon-test-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-studybuddy")
os.environ.setdefault("LLM_API_KEY", "test-llm-key")
os.environ.setdefault("EMBEDDING_API_KEY", "test-embedding-key")

from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from langchain_core.messages import AIMessage  # noqa: E402

from studybuddy.config import get_settings  # noqa: E402
from studybuddy.core.dependencies import get_db  # noqa: E402
from studybuddy.main import create_app  # noqa: E402

USER_A = "11111111-1111-1111-1111-111111111111"
USER_B = "22222222-2222-2222-2222-222222222222"


# -- Fake Supabase --

class FakeQuery:
    """Just enough of the postgrest builder for the services under test."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.filters: list[tuple[str, object]] = []
        self.columns: list[str] | None = None
        self.order_by: tuple[str, bool] | None = None
        self.limit_n: int | None = None
        self.action = "select"
        self.payload = None

    def select(self, columns: str = "*", count: str | None = None):
        self.action = "select"
        if columns.strip() != "*":
            self.columns = [c.strip() for c in columns.split(",")]
        return self

    def insert(self, rows):
        self.action = "insert"
        self.payload = rows
        return self

    def update(self, values: dict):
        self.action = "update"
        self.payload = values
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column: str, value):
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_by = (column, desc)
        return self

    def limit(self, n: int):
        self.limit_n = n
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(col) == val for col, val in self.filters)

    def execute(self):
        self.db.calls.append((self.table_name, self.action, list(self.filters)))
        rows = self.db.tables.setdefault(self.table_name, [])

        if self.action == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            stored = []
            for row in new_rows:
                row = dict(row)
                stamp = self.db.next_timestamp()
                row.setdefault("created_at", stamp)
                row.setdefault("updated_at", stamp)
                rows.append(row)
                stored.append(copy.deepcopy(row))
            return SimpleNamespace(data=stored, count=None)

        matched = [row for row in rows if self._matches(row)]

        if self.action == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=copy.deepcopy(matched), count=None)

        if self.action == "delete":
            self.db.tables[self.table_name] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=copy.deepcopy(matched), count=None)

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: r.get(column) or "", reverse=desc)
        if self.limit_n is not None:
            matched = matched[:self.limit_n]
        if self.columns:
            matched = [{c: row.get(c) for c in self.columns} for row in matched]
        return SimpleNamespace(data=copy.deepcopy(matched), count=len(matched))


class FakeRPC:
    def __init__(self, db: "FakeSupabase", name: str, params: dict):
        self.db = db
        self.name = name
        self.params = params

    def execute(self):
        self.db.rpc_calls.append((self.name, self.params))
        if self.db.rpc_handler is None:
            raise RuntimeError(f"Could not find the function public.{self.name}")
        return SimpleNamespace(data=self.db.rpc_handler(self.name, self.params))


class FakeSupabase:
    """In-memory tables keyed by name; rpc() fails unless rpc_handler is set."""

    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self.rpc_calls: list[tuple] = []
        self.rpc_handler = None
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def next_timestamp(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRPC:
        return FakeRPC(self, name, params)

    def rows(self, name: str) -> list[dict]:
        return self.tables.get(name, [])


# -- Fake models --

def fake_vector(text: str, dims: int = 8) -> list[float]:
    """Deterministic, non-zero vector derived from the text."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [b / 255 + 0.01 for b in digest[:dims]]


class FakeEmbeddings:
    def __init__(self):
        self.queries: list[str] = []

    async def aembed_query(self, text: str) -> list[float]:
        self.queries.append(text)
        return fake_vector(text)


class FakeLLM:
    """Returns queued responses in order; repeats the last one when the queue runs dry."""

    def __init__(self, responses: list[str] | None = None):
        self.responses = list(responses or ["ok"])
        self.calls: list[list] = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        text = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        return AIMessage(content=text)


# -- Fixtures --

@pytest.fixture
def settings():
    get_settings.cache_clear()
    return get_settings()


@pytest.fixture
def fake_db():
    return FakeSupabase()


@pytest.fixture
def fake_embeddings():
    model = FakeEmbeddings()
    with patch("studybuddy.features.rag.embedding.get_embeddings_model", return_value=model):
        yield model


@pytest.fixture
def fake_llm():
    llm = FakeLLM()
    with patch("studybuddy.features.rag.generation.create_llm", return_value=llm):
        yield llm


def make_token(user_id: str, secret: str | None = None, expires_in: int = 3600) -> str:
    settings = get_settings()
    payload = {
        "sub": user_id,
        "aud": settings.JWT_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user_id: str = USER_A) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
def app(settings, fake_db):
    application = create_app()
    application.dependency_overrides[get_db] = lambda: fake_db
    return application


@pytest.fixture
def client(app, fake_embeddings, fake_llm):
    return TestClient(app, raise_server_exceptions=False)


def seed_document(db: FakeSupabase, user_id: str = USER_A, doc_id: str = "doc-1", title: str = "Biology") -> dict:
    row = {"id": doc_id, "user_id": user_id, "title": title, "filename": None, "content_type": "text"}
    return db.table("documents").insert(row).execute().data[0]


def seed_chunks(db: FakeSupabase, texts: list[str], user_id: str = USER_A, doc_id: str = "doc-1") -> None:
    rows = [
        {
            "document_id": doc_id,
            "user_id": user_id,
            "chunk_index": i,
            "text": text,
            "embedding": fake_vector(text),
        }
        for i, text in enumerate(texts)
    ]
    db.table("document_chunks").insert(rows).execute()
