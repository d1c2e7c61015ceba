from __future__ import annotations

import logging
from typing import Callable, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware

from dzview.core.fetch import fetch_descriptor
from dzview.core.session import FetchFailed, FetchSucceeded, init_session

from .config import ServerConfig, load_config
from .routes.viewer import SessionStore, create_viewer_router

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Union[FetchSucceeded, FetchFailed]]


def create_app(
    config: ServerConfig | None = None,
    fetcher: Fetcher = fetch_descriptor,
) -> FastAPI:
    config = config or load_config()

    # The descriptor is fetched exactly once, when the app is built
    store = SessionStore(init_session(config.descriptor_url))
    session = store.dispatch(fetcher(config.descriptor_url))
    if session.descriptor is None:
        logger.warning(
            "Serving %s without a descriptor (%s)", config.descriptor_url, session.status
        )

    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.state.config = config
    app.state.store = store

    app.include_router(create_viewer_router(store))
    return app


def main() -> None:
    import uvicorn

    config = load_config()
    uvicorn.run(
        "web.server.main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
