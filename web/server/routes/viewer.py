from __future__ import annotations

import logging
import threading

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from dzview.core.descriptor import descriptor_fields
from dzview.core.session import Event, Session, ZoomIn, ZoomOut, tiles, update

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds the server's one viewer session and serializes its updates."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._lock = threading.Lock()

    @property
    def session(self) -> Session:
        with self._lock:
            return self._session

    def dispatch(self, event: Event) -> Session:
        with self._lock:
            self._session = update(self._session, event)
            return self._session


def session_payload(session: Session) -> dict:
    return {
        "url": session.url,
        "zoomLevel": session.zoom_level,
        "status": session.status,
        "fetchError": session.fetch_error,
        "parseError": session.parse_error.to_dict() if session.parse_error else None,
    }


def create_viewer_router(store: SessionStore) -> APIRouter:
    router = APIRouter()

    @router.get("/api/session")
    def get_session() -> JSONResponse:
        return JSONResponse(content=session_payload(store.session))

    @router.get("/api/descriptor")
    def get_descriptor() -> JSONResponse:
        session = store.session
        if session.descriptor is None:
            raise HTTPException(status_code=404, detail="Descriptor not loaded")
        return JSONResponse(
            content=[
                {"key": key, "value": value}
                for key, value in descriptor_fields(session.descriptor)
            ]
        )

    @router.get("/api/tiles")
    def get_tiles() -> JSONResponse:
        return JSONResponse(
            content=[tile._asdict() for tile in tiles(store.session)],
            headers={"Cache-Control": "no-cache"},
        )

    @router.post("/api/zoom/in")
    def zoom_in() -> JSONResponse:
        session = store.dispatch(ZoomIn())
        logger.debug("Zoomed in to level %d", session.zoom_level)
        return JSONResponse(content=session_payload(session))

    @router.post("/api/zoom/out")
    def zoom_out() -> JSONResponse:
        session = store.dispatch(ZoomOut())
        logger.debug("Zoomed out to level %d", session.zoom_level)
        return JSONResponse(content=session_payload(session))

    return router
