"""
FastAPI application - Main entry point
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.endpoints.momo import momo_api
from src.error_handler import ErrorHandler
from src.integrations.errors import PaymentError, PaymentsDisabledError
from src.integrations.policy.payment_service import PaymentService
from src.utils.config_loader import MomoSettings, load_settings

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "AdHouse Payments API"
SERVICE_VERSION = "1.0.0"

error_handler = ErrorHandler()


def create_app(settings: Optional[MomoSettings] = None, payment_service: Optional[PaymentService] = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title=SERVICE_NAME,
        description="Mobile money listing-fee payments (MTN MoMo Collections) for AdHouse",
        version=SERVICE_VERSION,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.payment_service = payment_service or PaymentService(settings)

    # Register MoMo router
    app.include_router(momo_api, prefix="/api/momo", tags=["MoMo"])

    # ========================================================================
    # ERROR MAPPING
    # ========================================================================

    @app.exception_handler(PaymentError)
    async def payment_error_handler(request: Request, exc: PaymentError):
        content = error_handler.handle_payment_error(exc, context={"path": request.url.path})
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        if not settings.payments_enabled:
            # Disabled routes answer 503 whatever the body.
            disabled = PaymentsDisabledError()
            content = error_handler.handle_payment_error(disabled, context={"path": request.url.path})
            return JSONResponse(status_code=disabled.status_code, content=content)
        fields = ", ".join(".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors())
        content = {"error": f"Invalid request body: {fields or 'malformed payload'}"}
        if settings.development_mode:
            content["developmentMode"] = True
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        content = error_handler.handle_exception(exc, context={"path": request.url.path})
        return JSONResponse(status_code=500, content=content)

    # ========================================================================
    # ENDPOINTS
    # ========================================================================

    @app.get("/", tags=["Health"])
    async def root():
        """Health check endpoint."""
        return {"service": SERVICE_NAME, "status": "healthy", "version": SERVICE_VERSION, "timestamp": datetime.now().isoformat()}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check (payment mode)."""
        return {
            "status": "healthy",
            "payments": {
                "enabled": settings.payments_enabled,
                "developmentMode": settings.development_mode,
                "targetEnvironment": settings.target_environment,
                "telecelConfigured": settings.telecel.is_configured,
            },
            "timestamp": datetime.now().isoformat(),
        }

    @app.on_event("startup")
    async def startup_event():
        """Log payment mode on startup"""
        logger.info("Starting %s on port %s", SERVICE_NAME, settings.port)
        logger.info("Recipient number: %s", settings.recipient_number)
        if not settings.payments_enabled:
            logger.warning("MoMo payments are DISABLED; set MOMO_PAYMENTS_ENABLED=true to enable them")
        elif settings.development_mode:
            logger.warning("DEVELOPMENT MODE: no MTN API credentials found, payments are simulated")
            logger.info("To use real payments, set MOMO_API_KEY, MOMO_USER_ID and MOMO_USER_SECRET")
        else:
            logger.info("PRODUCTION MODE: MTN API credentials configured (target=%s)", settings.target_environment)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutting down %s...", SERVICE_NAME)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
