import asyncio
import json

import pytest

import service_app
from flashdeck.workflow.llm import WordAssistant

from fakes import FIXED_NOW, fake_openai


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_post_assigns_identity_and_schedule(api):
    response = api.post("/api/flashcards", json={"word": "quixotic", "definition": "unrealistically idealistic"})

    assert response.status_code == 201
    body = response.json()
    assert body["id"]
    assert body["createdAt"] == FIXED_NOW
    assert body["dueDate"] == FIXED_NOW
    assert body["interval"] == 0
    assert "exampleSentence" not in body


def test_post_ignores_client_supplied_identity(api):
    response = api.post(
        "/api/flashcards",
        json={"id": "mine", "word": "w", "definition": "d", "createdAt": 1, "dueDate": 2, "interval": 9},
    )

    body = response.json()
    assert body["id"] != "mine"
    assert body["interval"] == 0
    assert body["createdAt"] == FIXED_NOW


@pytest.mark.parametrize(
    "payload",
    [
        {"word": "", "definition": "d"},
        {"word": "w", "definition": "   "},
        {"definition": "d"},
        {"word": 5, "definition": "d"},
    ],
)
def test_post_rejects_missing_fields(api, payload):
    response = api.post("/api/flashcards", json=payload)

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_put_requires_matching_ids(api):
    created = api.post("/api/flashcards", json={"word": "w", "definition": "d"}).json()

    response = api.put("/api/flashcards/other-id", json=created)

    assert response.status_code == 400
    assert response.json()["error"] == "Flashcard ID in path and body do not match."


def test_put_replaces_whole_record(api):
    created = api.post("/api/flashcards", json={"word": "w", "definition": "d", "exampleSentence": "e"}).json()
    replacement = {key: value for key, value in created.items() if key != "exampleSentence"}
    replacement["interval"] = 2

    response = api.put(f"/api/flashcards/{created['id']}", json=replacement)
    fetched = api.get(f"/api/flashcards/{created['id']}").json()

    assert response.status_code == 200
    assert fetched == replacement


def test_put_rejects_negative_interval(api):
    created = api.post("/api/flashcards", json={"word": "w", "definition": "d"}).json()
    created["interval"] = -1

    assert api.put(f"/api/flashcards/{created['id']}", json=created).status_code == 400


def test_delete_returns_no_content_even_when_absent(api):
    created = api.post("/api/flashcards", json={"word": "w", "definition": "d"}).json()

    first = api.delete(f"/api/flashcards/{created['id']}")
    second = api.delete(f"/api/flashcards/{created['id']}")

    assert first.status_code == 204
    assert first.content == b""
    assert second.status_code == 204
    assert api.get("/api/flashcards").json() == []


def test_list_skips_corrupt_records(api, redis_backend):
    for word in ("one", "two", "three"):
        api.post("/api/flashcards", json={"word": word, "definition": "d"})
    redis_backend.data["flashcards:corrupt"] = "<<<"
    redis_backend.data["flashcards:wrong-shape"] = json.dumps({"id": "x"})
    redis_backend.data["other:namespace"] = json.dumps({"id": "y", "word": "w", "definition": "d", "createdAt": 1})

    response = api.get("/api/flashcards")

    assert response.status_code == 200
    assert sorted(card["word"] for card in response.json()) == ["one", "three", "two"]


def test_get_missing_card_is_not_found(api):
    assert api.get("/api/flashcards/nope").status_code == 404


def test_cors_allows_any_origin(api):
    response = api.options(
        "/api/flashcards",
        headers={"Origin": "https://example.org", "Access-Control-Request-Method": "PUT"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert api.get("/api/flashcards", headers={"Origin": "https://example.org"}).headers["access-control-allow-origin"] == "*"


def test_assist_unavailable_without_api_key(api):
    service_app.app.dependency_overrides[service_app.get_word_assistant] = lambda: WordAssistant(api_key="sk-dummy")

    response = api.post("/api/assist/definition", json={"word": "hello"})

    assert response.status_code == 503


def test_assist_definition_and_suggestions(api):
    client = fake_openai(
        '{"word": "hello", "definition": "a greeting", "exampleSentence": "Hello there."}',
        '```json\n{"suggestions": [{"word": "sun", "definition": "a star"}, {"word": "", "definition": "x"}]}\n```',
    )
    service_app.app.dependency_overrides[service_app.get_word_assistant] = lambda: WordAssistant(api_key="sk-test", client=client)

    definition = api.post("/api/assist/definition", json={"word": "hello"})
    suggestions = api.post("/api/assist/suggestions", json={"count": 2, "theme": "space"})

    assert definition.json() == {"word": "hello", "definition": "a greeting", "exampleSentence": "Hello there."}
    assert suggestions.json() == {"suggestions": [{"word": "sun", "definition": "a star"}]}
    assert 'theme "space"' in client.requests[1]["messages"][1]["content"]


def test_assist_definition_requires_word(api):
    assert api.post("/api/assist/definition", json={"word": "  "}).status_code == 400


def test_assist_generation_failure_is_server_error(api):
    service_app.app.dependency_overrides[service_app.get_word_assistant] = lambda: WordAssistant(api_key="sk-test", client=fake_openai("not json at all"))

    response = api.post("/api/assist/definition", json={"word": "hello"})

    assert response.status_code == 500
    assert "Definition error" in response.json()["error"]


@pytest.mark.parametrize("field, literal", [("dueDate", "Infinity"), ("lastReviewedAt", "NaN"), ("interval", "Infinity")])
def test_put_rejects_non_finite_numbers_and_keeps_record(api, field, literal):
    created = api.post("/api/flashcards", json={"word": "w", "definition": "d"}).json()
    body = json.dumps(created)[:-1] + f', "{field}": {literal}}}'

    response = api.put(f"/api/flashcards/{created['id']}", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert api.get(f"/api/flashcards/{created['id']}").json() == created
    assert api.get("/api/flashcards").status_code == 200


@pytest.mark.parametrize("blanked", [{"word": ""}, {"definition": "   "}, {"word": "", "definition": ""}])
def test_put_rejects_blank_word_or_definition(api, blanked):
    created = api.post("/api/flashcards", json={"word": "w", "definition": "d"}).json()

    response = api.put(f"/api/flashcards/{created['id']}", json={**created, **blanked})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert api.get(f"/api/flashcards/{created['id']}").json() == created


def test_assist_generation_runs_off_the_event_loop(api):
    loops_seen = []
    client = fake_openai('{"word": "hello", "definition": "a greeting"}', '{"suggestions": [{"word": "sun", "definition": "a star"}]}')
    reply = client.chat.completions.create

    def create(**kwargs):
        try:
            loops_seen.append(asyncio.get_running_loop())
        except RuntimeError:
            loops_seen.append(None)
        return reply(**kwargs)

    client.chat.completions.create = create
    service_app.app.dependency_overrides[service_app.get_word_assistant] = lambda: WordAssistant(api_key="sk-test", client=client)

    assert api.post("/api/assist/definition", json={"word": "hello"}).status_code == 200
    assert api.post("/api/assist/suggestions", json={"count": 1}).status_code == 200
    assert loops_seen == [None, None]
