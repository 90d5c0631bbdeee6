from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from history.config import Settings, load_settings
from history.db import create_db_engine, redacted_url
from history.errors import (
    ContentValidationError,
    EntryNotFound,
    InconsistentStoreError,
    StorageError,
)
from history.models import EntryView
from history.navigation import NavigationService
from history.render import render_entry_page
from history.repo import EntryStore
from history.schemas import EntryViewOut, HealthOut, ReadyOut
from history.validation import validate_content

logger = logging.getLogger(__name__)

router = APIRouter()


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings or load_settings()
    engine = create_db_engine(settings.database_url)

    store = EntryStore(engine)
    store.ensure_schema()
    # keep the site renderable on a fresh database
    store.seed_if_empty()

    app.state.store = store
    app.state.navigation = NavigationService(store, settings.display_timezone)
    logger.info(
        "History started: db=%s tz=%s latest=%s",
        redacted_url(engine),
        settings.display_timezone,
        store.latest_id(),
    )
    try:
        yield
    finally:
        engine.dispose()


def get_store(request: Request) -> EntryStore:
    return request.app.state.store


def get_navigation(request: Request) -> NavigationService:
    return request.app.state.navigation


def _parse_entry_id(raw: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise HTTPException(status_code=404, detail="Not found")
    return int(raw)


def _resolve_or_raise(navigation: NavigationService, entry_id: int) -> EntryView:
    try:
        return navigation.resolve(entry_id)
    except EntryNotFound:
        raise HTTPException(status_code=404, detail="Not found")
    except InconsistentStoreError as e:
        logger.error("Error retrieving entry %s: %s", entry_id, e)
        raise HTTPException(status_code=500, detail="Error retrieving entry")


def _client_address(request: Request) -> str:
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


# -----------------------------
# Health checks
# -----------------------------
@router.get("/healthz", response_model=HealthOut)
def healthz():
    return {"status": "ok"}


@router.get("/readyz", response_model=ReadyOut)
def readyz(store: EntryStore = Depends(get_store)):
    try:
        store.ping()
    except StorageError as e:
        logger.error("Readiness check failed: %s", e)
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ready", "db": "ok"}


# -----------------------------
# Pages
# -----------------------------
@router.get("/")
def root(navigation: NavigationService = Depends(get_navigation)):
    latest = navigation.resolve_latest_redirect_target()
    return RedirectResponse(url=f"/entry/{latest}", status_code=302)


@router.get("/entry/{entry_id}", response_class=HTMLResponse)
def entry_page(
    entry_id: str,
    edit: Optional[str] = None,
    navigation: NavigationService = Depends(get_navigation),
):
    view = _resolve_or_raise(navigation, _parse_entry_id(entry_id))
    return HTMLResponse(render_entry_page(view, editing=(edit == "true")))


@router.post("/save")
def save_entry(
    request: Request,
    new_text: str = Form("", alias="newText"),
    store: EntryStore = Depends(get_store),
):
    try:
        content = validate_content(new_text)
    except ContentValidationError as e:
        return PlainTextResponse(str(e), status_code=400)

    try:
        new_id = store.append(content, _client_address(request))
    except StorageError as e:
        logger.error("Error saving entry: %s", e)
        return PlainTextResponse("Failed to save entry", status_code=500)

    return RedirectResponse(url=f"/entry/{new_id}", status_code=302)


# -----------------------------
# JSON read API
# -----------------------------
@router.get("/api/entry/{entry_id}", response_model=EntryViewOut)
def entry_json(
    entry_id: str,
    edit: Optional[str] = None,
    navigation: NavigationService = Depends(get_navigation),
):
    view = _resolve_or_raise(navigation, _parse_entry_id(entry_id))
    out = EntryViewOut.model_validate(view)
    return out.model_copy(update={"editing": edit == "true"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    app = FastAPI(title="History", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(router)
    return app


app = create_app()


def serve() -> None:
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()
    logger.info("Server starting at http://%s:%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
