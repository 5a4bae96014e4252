import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from feeportal.api.v1.payment_receipts.router import router as payment_receipts_router
from feeportal.api.v1.receipts.router import router as receipts_router
from feeportal.core.config import settings
from feeportal.pages.router import router as pages_router


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Fee Receipts Portal")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(receipts_router)
    app.include_router(payment_receipts_router)
    app.include_router(pages_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
