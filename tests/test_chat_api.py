# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-16
# Description: test_chat_api.py
# -----------------------------------------------------------------------------
import json

import pytest
from starlette.testclient import TestClient

from api.dependencies import get_activity_service, get_answer_service, get_review_service, get_source_service
from api.main import app
from config.KBPrompts import NO_SOURCE_MESSAGE
from kb_fakes import FakeChat, FakeEmbedder, unit
from services.KBActivityService import KBActivityService
from services.KBAnswerService import KBAnswerService
from services.KBReviewService import KBReviewService
from services.KBSearchService import KBSearchService
from services.KBSourceService import KBSourceService
from store.InMemoryKBActivityStore import InMemoryKBActivityStore
from store.InMemoryKBSourceStore import InMemoryKBSourceStore

RETURN_CONTENT = "Returns accepted within 30 days, unopened only."
RETURN_QUESTION = "What is the return window?"


@pytest.fixture
def wiring():
    embedder = FakeEmbedder(overrides={RETURN_CONTENT: unit(1.0, 0.2), RETURN_QUESTION: unit(1.0)})
    store = InMemoryKBSourceStore()
    chat = FakeChat(response="Within 30 days, unopened.")
    search = KBSearchService(embedder=embedder, store=store)

    services = {
        "sources": KBSourceService(store=store, embedder=embedder),
        "answer": KBAnswerService(search_service=search, chat_client=chat),
        "review": KBReviewService(search_service=search, chat_client=chat),
        "activity": KBActivityService(store=InMemoryKBActivityStore()),
        "chat": chat,
    }
    app.dependency_overrides[get_source_service] = lambda: services["sources"]
    app.dependency_overrides[get_answer_service] = lambda: services["answer"]
    app.dependency_overrides[get_review_service] = lambda: services["review"]
    app.dependency_overrides[get_activity_service] = lambda: services["activity"]
    yield services
    app.dependency_overrides.clear()


@pytest.fixture
def client(wiring) -> TestClient:
    return TestClient(app)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_question_without_sources_returns_refusal(client, wiring):
    resp = client.post("/chat/question", json={"session_id": "s1", "message": RETURN_QUESTION})

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["answer"] == NO_SOURCE_MESSAGE
    assert data["has_answer"] is False
    assert data["sources"] == []
    assert data["message_id"]
    assert wiring["chat"].calls == []


def test_question_answered_from_registered_source(client, wiring):
    created = client.post("/sources", json={"title": "Return Policy", "content": RETURN_CONTENT})
    assert created.status_code == 201, created.text
    source_id = created.json()["id"]

    resp = client.post(
        "/chat/question",
        json={
            "session_id": "s1",
            "message": RETURN_QUESTION,
            "history": [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}],
        },
    )

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["has_answer"] is True
    assert "30 days" in data["answer"]
    assert data["sources"][0]["id"] == source_id
    assert data["sources"][0]["title"] == "Return Policy"
    assert data["sources"][0]["relevance_score"] >= 0.3
    assert [m["role"] for m in wiring["chat"].calls[0]["messages"]] == ["system", "user", "assistant", "user"]


def test_question_filters_are_forwarded(client, wiring):
    client.post("/sources", json={"title": "Return Policy", "content": RETURN_CONTENT, "metadata": {"company": "Acme Corp"}})

    hit = client.post("/chat/question", json={"session_id": "s", "message": RETURN_QUESTION, "filters": {"company": "acme"}})
    miss = client.post("/chat/question", json={"session_id": "s", "message": RETURN_QUESTION, "filters": {"company": "Globex"}})

    assert hit.json()["has_answer"] is True
    assert miss.json()["has_answer"] is False


def test_question_provider_failure_is_generic_500(client, wiring):
    client.post("/sources", json={"title": "Return Policy", "content": RETURN_CONTENT})
    wiring["chat"].error = RuntimeError("upstream 502")

    resp = client.post("/chat/question", json={"session_id": "s", "message": RETURN_QUESTION})
    assert resp.status_code == 500
    assert "try again" in resp.json()["detail"]
    assert "upstream" not in resp.json()["detail"]


def test_question_validation(client):
    assert client.post("/chat/question", json={"session_id": "s", "message": ""}).status_code == 422
    assert client.post("/chat/question", json={"session_id": "s", "message": "   "}).status_code == 400
    bad_role = {"session_id": "s", "message": "q", "history": [{"role": "system", "content": "x"}]}
    assert client.post("/chat/question", json=bad_role).status_code == 422


def test_review_returns_structured_corrections(client, wiring):
    wiring["chat"].response = json.dumps({
        "revised_text": "Please reply.",
        "corrections": [{"type": "wording", "original": "pls", "revised": "Please", "reason": "Source 1"}],
    })

    resp = client.post("/chat/review", json={"session_id": "s", "text": "pls reply."})

    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["original_text"] == "pls reply."
    assert data["revised_text"] == "Please reply."
    assert data["corrections"] == [{"type": "wording", "original": "pls", "revised": "Please", "reason": "Source 1"}]


def test_review_unparseable_output_degrades_gracefully(client, wiring):
    wiring["chat"].response = "{not json at all}"

    data = client.post("/chat/review", json={"session_id": "s", "text": "pls reply."}).json()

    assert data["revised_text"] == "pls reply."
    assert data["corrections"] == [{"type": "info", "original": "", "revised": "", "reason": "{not json at all}"}]


def test_source_crud(client):
    created = client.post(
        "/sources",
        json={"title": "Dress code", "content": "Business casual.", "metadata": {"phase": "onboarding", "jobType": "sales"}},
    ).json()
    sid = created["id"]
    assert created["is_active"] is True
    assert created["has_embedding"] is True
    assert created["metadata"] == {"phase": "onboarding", "jobType": "sales"}

    assert client.get(f"/sources/{sid}").json()["title"] == "Dress code"

    patched = client.patch(f"/sources/{sid}", json={"content": "Smart casual."}).json()
    assert patched["content"] == "Smart casual."

    deleted = client.delete(f"/sources/{sid}")
    assert deleted.status_code == 200
    assert deleted.json()["is_active"] is False

    listing = client.get("/sources", params={"is_active": "false"}).json()
    assert listing["total"] == 1
    assert listing["total_pages"] == 1
    assert listing["data"][0]["id"] == sid


def test_source_errors(client):
    assert client.get("/sources/missing").status_code == 404
    assert client.patch("/sources/missing", json={"title": "x"}).status_code == 404
    assert client.delete("/sources/missing").status_code == 404
    assert client.post("/sources", json={"title": "t", "content": "   "}).status_code == 400


def test_answered_question_is_logged_under_its_message_id(client, wiring):
    source_id = client.post("/sources", json={"title": "Return Policy", "content": RETURN_CONTENT}).json()["id"]

    data = client.post("/chat/question", json={"session_id": "s1", "message": RETURN_QUESTION}).json()

    logs = wiring["activity"].list_chat_logs("s1")
    assert len(logs) == 1
    log = logs[0]
    assert log.message_id == data["message_id"]
    assert log.mode.value == "question"
    assert log.question == RETURN_QUESTION
    assert log.answer == data["answer"]
    assert log.source_ids == [source_id]
    assert log.response_time_ms >= 0


def test_refusal_and_review_are_logged_too(client, wiring):
    wiring["chat"].response = json.dumps({"revised_text": "Please reply.", "corrections": []})

    client.post("/chat/question", json={"session_id": "s2", "message": RETURN_QUESTION})
    client.post("/chat/review", json={"session_id": "s2", "text": "pls reply."})

    logs = wiring["activity"].list_chat_logs("s2")
    assert [(x.mode.value, x.question, x.answer, x.source_ids) for x in logs] == [
        ("question", RETURN_QUESTION, NO_SOURCE_MESSAGE, []),
        ("review", "pls reply.", "Please reply.", []),
    ]


def test_failed_generation_is_not_logged(client, wiring):
    client.post("/sources", json={"title": "Return Policy", "content": RETURN_CONTENT})
    wiring["chat"].error = RuntimeError("upstream 502")

    client.post("/chat/question", json={"session_id": "s3", "message": RETURN_QUESTION})
    assert wiring["activity"].list_chat_logs("s3") == []


def test_chat_log_failure_does_not_fail_the_answer(client, wiring):
    class BrokenActivityStore(InMemoryKBActivityStore):
        def add_chat_log(self, log):
            raise RuntimeError("disk full")

    wiring["activity"] = KBActivityService(store=BrokenActivityStore())

    resp = client.post("/chat/question", json={"session_id": "s4", "message": RETURN_QUESTION})
    assert resp.status_code == 200
    assert resp.json()["answer"] == NO_SOURCE_MESSAGE


def test_feedback_is_recorded_against_a_message(client, wiring):
    message_id = client.post("/chat/question", json={"session_id": "s5", "message": RETURN_QUESTION}).json()["message_id"]

    resp = client.post("/feedback", json={
        "session_id": "s5",
        "message_id": message_id,
        "rating": -1,
        "comment": "Please add the return policy.",
        "question": RETURN_QUESTION,
        "answer": NO_SOURCE_MESSAGE,
    })

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["rating"] == -1
    assert body["data"]["status"] == "pending"
    stored = wiring["activity"].list_feedback(message_id)
    assert [(f.rating, f.comment) for f in stored] == [(-1, "Please add the return policy.")]


def test_feedback_validation(client, wiring):
    base = {"session_id": "s", "message_id": "m", "question": "q", "answer": "a"}

    assert client.post("/feedback", json={**base, "rating": 1}).status_code == 200
    assert client.post("/feedback", json={**base, "comment": "comment only"}).status_code == 200
    assert client.post("/feedback", json={**base, "rating": 0}).status_code == 422
    assert client.post("/feedback", json={**base, "rating": 5}).status_code == 422
    assert client.post("/feedback", json={**base, "comment": "x" * 1001}).status_code == 422
    assert client.post("/feedback", json={**base, "message_id": ""}).status_code == 422
    assert len(wiring["activity"].list_feedback()) == 2
