"""FastAPI server for dictee application."""

import logging
import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.engine import RoundEngine
from core.errors import (
    EmptyPoolError, NoActiveItemError, RoundNotCompleteError,
    InvalidRoundConfigError, ListValidationError, ListNotFoundError
)
from core.models import RoundMode
from core.wordlists import (
    WordListCatalog, DEFAULT_LIST_NAME,
    clamp_question_count, default_question_count
)
from core.config import LOCALE, PRESET_QUESTION_COUNTS, MIN_QUESTION_COUNT, MAX_QUESTION_COUNT

from server.file_storage import FileStorage


# Pydantic models for API
class ListRequest(BaseModel):
    title: str
    body: str
    random: bool = True
    gif_url: Optional[str] = None


class StartRoundRequest(BaseModel):
    user_id: str = "default"
    list_name: Optional[str] = None
    question_count: Optional[int] = None
    until_all_correct: bool = False


class SubmitRequest(BaseModel):
    attempt: str
    user_id: str = "default"


class UserRequest(BaseModel):
    user_id: str = "default"


class JudgmentModel(BaseModel):
    kind: str
    expected: Optional[str] = None
    actual: Optional[str] = None


class MistakeModel(BaseModel):
    item: str
    attempt: str
    alignment: list[JudgmentModel]


class WordListResponse(BaseModel):
    name: str
    entries: list[str]
    random: bool
    gif_url: Optional[str]
    builtin: bool


class SubmitResponse(BaseModel):
    item: str
    attempt: str
    alignment: list[JudgmentModel]
    correct: bool
    asked_count: int
    correct_count: int
    round_complete: bool
    next_item: Optional[str]


class StatusResponse(BaseModel):
    phase: str
    list_name: Optional[str]
    gif_url: Optional[str]
    round_number: int
    questions_per_round: Optional[int]  # None while repeating until all correct
    until_all_correct: bool
    current_item: Optional[str]
    question_number: int
    asked_count: int
    correct_count: int
    remaining_count: int
    mistakes: list[MistakeModel]
    mistake_tally: dict[str, int]
    total_asked: int
    total_correct: int
    accuracy: int


# Errors raised by the core, mapped to HTTP status codes
ERROR_STATUS = {
    EmptyPoolError: 400,
    InvalidRoundConfigError: 400,
    ListValidationError: 400,
    ListNotFoundError: 404,
    NoActiveItemError: 409,
    RoundNotCompleteError: 409,
}


# Global state (one engine per user, like a browser session)
storage: FileStorage = None
user_engines: dict[str, RoundEngine] = {}
user_lists: dict[str, str] = {}  # user_id -> name of the list the round was started from


def http_error(error: Exception) -> HTTPException:
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


def get_storage() -> FileStorage:
    """Get the storage, creating it from DICTEE_STATE_DIR on first use."""
    global storage
    if storage is None:
        storage = FileStorage(os.environ.get('DICTEE_STATE_DIR'))
    return storage


def get_catalog() -> WordListCatalog:
    return WordListCatalog(get_storage())


def get_engine(user_id: str = "default") -> RoundEngine:
    """Get or create the round engine for a user."""
    if user_id not in user_engines:
        user_engines[user_id] = RoundEngine()
    return user_engines[user_id]


def build_status(user_id: str) -> StatusResponse:
    engine = get_engine(user_id)
    status = engine.status()
    list_name = user_lists.get(user_id)
    gif_url = None
    if list_name is not None:
        try:
            gif_url = get_catalog().get(list_name).gif_url
        except ListNotFoundError:
            gif_url = None
    mode = status.pop('mode') or {}
    return StatusResponse(
        list_name=list_name,
        gif_url=gif_url,
        questions_per_round=mode.get('count'),
        until_all_correct=mode.get('kind') == 'until_all_correct',
        **status
    )


app = FastAPI(title="Dictee API", description="Dutch dictation practice API")


@app.on_event("startup")
async def startup():
    """Initialize storage on startup."""
    store = get_storage()
    print(f"Using file storage in {store.state_dir}")


@app.get("/")
async def root():
    return {"service": "dictee"}


# Word list endpoints
@app.get("/api/lists")
async def list_word_lists():
    """List all word list names, built-in lists first."""
    return {
        "lists": get_catalog().names(),
        "preset_question_counts": PRESET_QUESTION_COUNTS,
        "min_question_count": MIN_QUESTION_COUNT,
        "max_question_count": MAX_QUESTION_COUNT,
        "locale": LOCALE
    }


@app.get("/api/lists/{name}", response_model=WordListResponse)
async def get_word_list(name: str):
    catalog = get_catalog()
    try:
        word_list = catalog.get(name)
    except ListNotFoundError as e:
        raise http_error(e)
    return WordListResponse(
        name=name,
        entries=word_list.entries,
        random=word_list.random,
        gif_url=word_list.gif_url,
        builtin=catalog.is_builtin(name)
    )


@app.post("/api/lists")
async def create_word_list(request: ListRequest):
    try:
        key = get_catalog().save(request.title, request.body, request.random, request.gif_url)
    except (ListValidationError, ListNotFoundError) as e:
        raise http_error(e)
    logger.info(f"Created word list {key!r}")
    return {"name": key}


@app.put("/api/lists/{name}")
async def update_word_list(name: str, request: ListRequest):
    """Edit a user list. Renaming is allowed; the new title is made unique."""
    try:
        key = get_catalog().save(request.title, request.body, request.random, request.gif_url,
                                 original_key=name)
    except (ListValidationError, ListNotFoundError) as e:
        raise http_error(e)
    # Keep active rounds pointing at the renamed list
    for user_id, list_name in user_lists.items():
        if list_name == name:
            user_lists[user_id] = key
    logger.info(f"Updated word list {name!r} -> {key!r}")
    return {"name": key}


@app.delete("/api/lists/{name}")
async def delete_word_list(name: str):
    try:
        get_catalog().delete(name)
    except (ListValidationError, ListNotFoundError) as e:
        raise http_error(e)
    return {"deleted": name, "lists": get_catalog().names()}


# Round endpoints
@app.post("/api/round/start", response_model=StatusResponse)
async def start_round(request: StartRoundRequest):
    """Start a round from a word list, carrying the user's outstanding mistakes."""
    list_name = request.list_name or DEFAULT_LIST_NAME
    engine = get_engine(request.user_id)
    try:
        word_list = get_catalog().get(list_name)
        if request.until_all_correct:
            mode = RoundMode.until_all_correct()
        elif request.question_count is not None:
            mode = RoundMode.fixed_count(clamp_question_count(request.question_count))
        else:
            mode = RoundMode.fixed_count(default_question_count(word_list))
        engine.start_round(word_list.entries, mode, engine.mistake_tally, shuffle=word_list.random)
    except (ListNotFoundError, EmptyPoolError, InvalidRoundConfigError) as e:
        raise http_error(e)
    user_lists[request.user_id] = list_name
    logger.info(f"User {request.user_id} started round {engine.round_number} on {list_name!r}")
    return build_status(request.user_id)


@app.post("/api/round/submit", response_model=SubmitResponse)
async def submit_attempt(request: SubmitRequest):
    engine = get_engine(request.user_id)
    try:
        result = engine.submit(request.attempt)
    except NoActiveItemError as e:
        raise http_error(e)
    data = result.to_dict()
    return SubmitResponse(next_item=engine.current_item, **data)


@app.post("/api/round/next", response_model=StatusResponse)
async def next_round(request: UserRequest):
    engine = get_engine(request.user_id)
    try:
        engine.start_next_round()
    except RoundNotCompleteError as e:
        raise http_error(e)
    return build_status(request.user_id)


@app.post("/api/round/replay")
async def replay_item(request: UserRequest):
    """Return the current item again so the client can re-narrate it."""
    engine = get_engine(request.user_id)
    try:
        item = engine.replay()
    except NoActiveItemError as e:
        raise http_error(e)
    return {"current_item": item}


@app.post("/api/round/reset", response_model=StatusResponse)
async def reset_round(request: UserRequest):
    """Back to the start screen. Outstanding mistakes are kept for the next round."""
    get_engine(request.user_id).reset()
    user_lists.pop(request.user_id, None)
    return build_status(request.user_id)


@app.get("/api/status", response_model=StatusResponse)
async def get_status(user_id: str = "default"):
    return build_status(user_id)


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
