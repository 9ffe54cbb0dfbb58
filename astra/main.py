# astra/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from astra.core.config import Settings
from astra.routes.deploy import router as deploy_router
from astra.routes.generate import router as generate_router
from astra.routes.workshop import router as workshop_router


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(title="Astra Workshop")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )
    app.include_router(workshop_router)
    app.include_router(generate_router)
    app.include_router(deploy_router)
    return app


app = create_app()
