"""Collection endpoints backed by the app's :class:`CollectorSession`.

Routes
------
GET  /collection                       Current collection text + card count
PUT  /collection/source                Capture the page shown in the browse pane
POST /collection/transfer              Merge the captured page into the collection
POST /collection/remove-selected       Drop the cards the user selected
PUT  /collection/search                Set the search term to highlight
GET  /collection/highlighted           Collection with the search term marked
GET  /collection/cards                 Result cards of the collection
GET  /collection/events                Drain pending view commands
POST /collection/save                  Write the collection (optionally to a new path)
POST /collection/load                  Replace the collection with a file's content
GET  /collection/script/highlight      mark.js snippet for the current term
GET  /collection/script/remove-selected
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from scholar_collector.assets import highlight_script, remove_selected_script
from scholar_collector.document import DocumentReadError, DocumentWriteError
from scholar_collector.merger import ParseError, count_cards, extract_cards
from scholar_collector.session import CollectorSession, NothingCapturedError

router = APIRouter()


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class SourceCapture(BaseModel):
    html: str


class SearchRequest(BaseModel):
    term: str


class PathRequest(BaseModel):
    path: Optional[str] = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _session(request: Request) -> CollectorSession:
    return request.app.state.session


def _collection_dict(session: CollectorSession) -> dict[str, Any]:
    document = session.document
    try:
        cards = count_cards(document.text)
    except ParseError:
        cards = 0
    return {
        "text": document.text,
        "path": str(document.path) if document.path else None,
        "cards": cards,
        "search_term": session.search_term,
    }


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("", response_model=dict[str, Any])
def get_collection(request: Request) -> dict[str, Any]:
    return _collection_dict(_session(request))


@router.put("/source", status_code=204)
def capture_source(body: SourceCapture, request: Request) -> None:
    _session(request).capture(body.html)


@router.post("/transfer", response_model=dict[str, Any])
def transfer(request: Request) -> dict[str, Any]:
    """Merge the captured page into the collection (the "=>" action)."""
    session = _session(request)
    try:
        result = session.transfer()
    except NothingCapturedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "appended": result.appended,
        "dropped": result.dropped,
        "bootstrapped": result.bootstrapped,
        **_collection_dict(session),
    }


@router.post("/remove-selected", response_model=dict[str, Any])
def remove_selected_endpoint(request: Request) -> dict[str, Any]:
    session = _session(request)
    try:
        session.remove_selections()
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _collection_dict(session)


@router.put("/search", status_code=204)
def set_search(body: SearchRequest, request: Request) -> None:
    _session(request).set_search(body.term)


@router.get("/highlighted", response_class=PlainTextResponse)
def get_highlighted(request: Request) -> str:
    try:
        return _session(request).highlighted()
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/cards", response_model=list[dict[str, Any]])
def list_cards(request: Request) -> list[dict[str, Any]]:
    text = _session(request).document.text
    if not text:
        return []
    try:
        cards = extract_cards(text)
    except ParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return [
        {
            "title": c.title,
            "link": c.link,
            "authors": c.authors,
            "snippet": c.snippet,
            "cited_by": c.cited_by,
            "selected": c.selected,
        }
        for c in cards
    ]


@router.get("/events", response_model=list[str])
def drain_events(request: Request) -> list[str]:
    """Return and clear the view commands posted since the last call."""
    return [command.value for command in _session(request).drain()]


@router.post("/save", response_model=dict[str, Any])
def save(body: PathRequest, request: Request) -> dict[str, Any]:
    session = _session(request)
    try:
        session.save(body.path)
    except DocumentWriteError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _collection_dict(session)


@router.post("/load", response_model=dict[str, Any])
def load(body: PathRequest, request: Request) -> dict[str, Any]:
    if not body.path:
        raise HTTPException(status_code=400, detail="A path is required.")
    session = _session(request)
    try:
        session.load(body.path)
    except DocumentReadError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _collection_dict(session)


@router.get("/script/highlight", response_class=PlainTextResponse)
def get_highlight_script(request: Request, term: Optional[str] = None) -> str:
    return highlight_script(term if term is not None else _session(request).search_term)


@router.get("/script/remove-selected", response_class=PlainTextResponse)
def get_remove_selected_script() -> str:
    return remove_selected_script()
