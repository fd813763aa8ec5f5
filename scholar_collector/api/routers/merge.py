"""Stateless merge endpoint.

Routes
------
POST /merge    Body: {"source": "<html>", "destination": "<html>"}
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from soupsieve import SelectorSyntaxError

from scholar_collector.merger import ParseError, merge_with_report

router = APIRouter()


class MergeRequest(BaseModel):
    source: str
    destination: str = ""
    selector: Optional[str] = None
    orphans: Optional[Literal["drop", "append"]] = None


class MergeResponse(BaseModel):
    html: str
    appended: int
    dropped: int
    bootstrapped: bool


@router.post("", response_model=MergeResponse)
def merge_endpoint(body: MergeRequest) -> dict[str, Any]:
    """Append the result cards of ``source`` to ``destination``."""
    try:
        result = merge_with_report(
            body.source,
            body.destination,
            selector=body.selector,
            orphans=body.orphans,
        )
    except (ParseError, SelectorSyntaxError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {
        "html": result.html,
        "appended": result.appended,
        "dropped": result.dropped,
        "bootstrapped": result.bootstrapped,
    }
