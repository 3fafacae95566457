import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from blinkmint.core.config import Settings, settings as default_settings
from blinkmint.core.products import get_product_config
from blinkmint.core.registry import build_collaborators, build_mint_service
from blinkmint.domains.actions.router import router as actions_router
from blinkmint.domains.actions.schemas import ActionRule, ActionsJson
from blinkmint.domains.actions.service import MintActionService
from blinkmint.domains.files.router import router as files_router
from blinkmint.shared.pinata_client import PinataClient
from blinkmint.shared.utils.response import action_response, actions_cors_headers

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def create_app(
    settings: Optional[Settings] = None,
    mint_service: Optional[MintActionService] = None,
    pinata: Optional[PinataClient] = None,
) -> FastAPI:
    """
    Build the API for the configured product.

    ``mint_service`` and ``pinata`` replace the collaborators normally built
    at startup, which lets tests run the app without credentials.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())
    product = get_product_config(settings.product)
    cors_headers = actions_cors_headers(settings.solana_network)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        collaborators = None
        if app.state.mint_service is None or app.state.pinata is None:
            collaborators = build_collaborators(settings)
            if app.state.mint_service is None:
                app.state.mint_service = build_mint_service(settings, product, collaborators)
            if app.state.pinata is None:
                app.state.pinata = collaborators.pinata
        logger.info("Serving %s actions on %s", product.title, settings.solana_network)
        try:
            yield
        finally:
            if collaborators is not None:
                await collaborators.aclose()

    application = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.product = product
    application.state.mint_service = mint_service
    application.state.pinata = pinata
    application.state.cors_headers = cors_headers

    # Include routers
    application.include_router(actions_router, prefix="/api")
    application.include_router(files_router, prefix="/api")
    application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @application.get("/")
    async def root() -> dict[str, str]:
        return {"message": f"Welcome to {product.title}"}

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        return {
            "status": "healthy",
            "product": product.key,
            "network": settings.solana_network,
        }

    @application.api_route("/actions.json", methods=["GET", "OPTIONS"])
    async def actions_json() -> JSONResponse:
        return action_response(
            ActionsJson(
                rules=[
                    ActionRule(pathPattern="/api/actions/**", apiPath="/api/actions/**"),
                ]
            ),
            headers=cors_headers,
        )

    return application


app = create_app()
