from __future__ import annotations

import asyncio
from typing import Callable

from fastapi import Body, Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from flashdeck.db.kv import KeyValueFlashcards, get_redis_client
from flashdeck.errors import DecodeError
from flashdeck.logging_config import get_logger
from flashdeck.utils.env import load_env
from flashdeck.utils.request_models import DefinitionRequest, FlashcardDraftIn, FlashcardIn, SuggestionsRequest
from flashdeck.utils.settings import default_settings
from flashdeck.utils.types import now_ms
from flashdeck.workflow.llm import WordAssistant

logger = get_logger("flashdeck.service")

load_env()

_assistant: WordAssistant | None = None


def get_flashcards() -> KeyValueFlashcards:
    settings = default_settings()
    return KeyValueFlashcards(get_redis_client(settings.redis_url), prefix=settings.kv_prefix)


def get_word_assistant() -> WordAssistant:
    global _assistant
    if _assistant is None:
        settings = default_settings()
        _assistant = WordAssistant(api_key=settings.openai_api_key or None, model=settings.openai_model)
    return _assistant


def get_clock() -> Callable[[], int]:
    return now_ms


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


app = FastAPI(title="Flashcard Storage Proxy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Cache-Control"],
    max_age=86400,
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()) if part != 'body')}: {err.get('msg')}" for err in exc.errors()
    )
    logger.info("Rejected request | %s %s: %s", request.method, request.url.path, details)
    return error_response(f"Invalid request body: {details}", 400)


@app.get("/health")
async def health() -> JSONResponse:
    return JSONResponse({"status": "ok"})


@app.get("/api/flashcards")
async def list_flashcards(store: KeyValueFlashcards = Depends(get_flashcards)) -> JSONResponse:
    try:
        cards = await store.list_cards()
    except RedisError as exc:
        logger.warning("Failed to list flashcards", exc_info=True)
        return error_response(f"Failed to retrieve flashcards: {exc}", 500)
    return JSONResponse([card.to_dict() for card in cards])


@app.post("/api/flashcards")
async def create_flashcard(
    payload: FlashcardDraftIn = Body(...),
    store: KeyValueFlashcards = Depends(get_flashcards),
    clock: Callable[[], int] = Depends(get_clock),
) -> JSONResponse:
    draft = payload.to_draft()
    if not draft.word or not draft.definition:
        return error_response("word and definition are required", 400)
    try:
        card = await store.create(draft, clock())
    except RedisError as exc:
        logger.warning("Failed to add flashcard | word=%s", draft.word, exc_info=True)
        return error_response(f"Failed to add flashcard: {exc}", 500)
    logger.info("Flashcard stored | id=%s", card.id)
    return JSONResponse(card.to_dict(), status_code=201)


@app.put("/api/flashcards/{card_id}")
async def update_flashcard(
    card_id: str,
    payload: FlashcardIn = Body(...),
    store: KeyValueFlashcards = Depends(get_flashcards),
) -> JSONResponse:
    if payload.id != card_id:
        return error_response("Flashcard ID in path and body do not match.", 400)
    try:
        card = await store.put(payload.to_card())
    except RedisError as exc:
        logger.warning("Failed to update flashcard | id=%s", card_id, exc_info=True)
        return error_response(f"Failed to update flashcard: {exc}", 500)
    return JSONResponse(card.to_dict())


@app.delete("/api/flashcards/{card_id}")
async def delete_flashcard(card_id: str, store: KeyValueFlashcards = Depends(get_flashcards)) -> Response:
    try:
        await store.delete(card_id)
    except RedisError as exc:
        logger.warning("Failed to delete flashcard | id=%s", card_id, exc_info=True)
        return error_response(f"Failed to delete flashcard: {exc}", 500)
    return Response(status_code=204)


@app.get("/api/flashcards/{card_id}")
async def get_flashcard(card_id: str, store: KeyValueFlashcards = Depends(get_flashcards)) -> JSONResponse:
    try:
        card = await store.get(card_id)
    except DecodeError as exc:
        return error_response(f"Stored flashcard is corrupt: {exc.message}", 500)
    except RedisError as exc:
        logger.warning("Failed to read flashcard | id=%s", card_id, exc_info=True)
        return error_response(f"Failed to retrieve flashcard: {exc}", 500)
    if card is None:
        return error_response("Flashcard not found.", 404)
    return JSONResponse(card.to_dict())


@app.post("/api/assist/definition")
async def assist_definition(payload: DefinitionRequest = Body(...), assistant: WordAssistant = Depends(get_word_assistant)) -> JSONResponse:
    word = (payload.word or "").strip()
    if not word:
        return error_response("word is required", 400)
    if not assistant.is_active:
        return error_response("OPENAI_API_KEY is not configured for the word assistant.", 503)
    try:
        entry = await asyncio.to_thread(assistant.define, word)
    except RuntimeError as exc:
        logger.warning("Definition generation failed | word=%s", word, exc_info=True)
        return error_response(f"Definition error: {exc}", 500)
    return JSONResponse(entry)


@app.post("/api/assist/suggestions")
async def assist_suggestions(payload: SuggestionsRequest = Body(...), assistant: WordAssistant = Depends(get_word_assistant)) -> JSONResponse:
    if not assistant.is_active:
        return error_response("OPENAI_API_KEY is not configured for the word assistant.", 503)
    theme = (payload.theme or "").strip() or None
    try:
        suggestions = await asyncio.to_thread(assistant.suggest, payload.count, theme)
    except RuntimeError as exc:
        logger.warning("Suggestion generation failed | theme=%s", theme, exc_info=True)
        return error_response(f"Suggestions error: {exc}", 500)
    return JSONResponse({"suggestions": suggestions})
