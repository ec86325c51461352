"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tilegen.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.tilegen_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="tilegen",
        description="Recursive tile partitioning for gradient tile scenes",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all splitter modules to trigger registration
    _register_splitters()

    from tilegen.api.router import api_router

    app.include_router(api_router)

    return app


def _register_splitters() -> None:
    """Import every module of the splitters package so @splitter decorators fire."""
    import importlib
    import pkgutil

    package = importlib.import_module("tilegen.engine.splitters")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")


app = create_app()
