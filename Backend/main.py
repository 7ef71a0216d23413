import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agents.summarizer_agent import SummaryGenerator
from config import Settings
from models.schemas import (
    EmailRequest,
    EmailResponse,
    ErrorResponse,
    SummaryRequest,
    SummaryResponse,
    as_text,
)
from utils.body_limit import BodySizeLimitMiddleware
from utils.mailer import MailCredentialsError, send_summary_email

logger = logging.getLogger(__name__)

MISSING_EMAIL_FIELDS = "Recipients, subject, and summary are required to send email."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def health_message(openai_enabled: bool) -> str:
    status = "enabled" if openai_enabled else "disabled (mock summaries active)"
    return f"Meeting Notes AI backend is running! OpenAI {status}"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with settings read once (from the environment if not given)."""
    if settings is None:
        settings = Settings.from_env()

    generator = SummaryGenerator(settings.openai_api_key)

    # Lifespan: the shared aiohttp session lives as long as the app
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up, %s", health_message(generator.enabled))
        yield
        logger.info("Shutting down, closing OpenAI session...")
        await generator.close()
        logger.info("Cleanup complete")

    # 1) CREATE APP
    app = FastAPI(
        title="Meeting Notes AI API",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.generator = generator

    # 2) BODY SIZE LIMIT
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    # 3) CORS (credentials only for an explicit origin list)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
        return error_response(400, "Invalid request body.")

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    # ROUTES

    @app.post(
        "/api/generate-summary",
        response_model=SummaryResponse,
        responses={500: {"model": ErrorResponse}},
    )
    async def generate_summary(request: Request, payload: Optional[SummaryRequest] = None):
        """Summarize a meeting transcript (mock summary when OpenAI is unavailable)"""
        payload = payload or SummaryRequest()
        try:
            summary = await request.app.state.generator.generate(
                as_text(payload.transcript), as_text(payload.instruction)
            )
        except Exception as e:
            logger.error("Summary Error: %s", e)
            return error_response(500, str(e) or "Error generating summary")

        return SummaryResponse(summary=summary)

    @app.post(
        "/api/send-email",
        response_model=EmailResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def send_email(request: Request, payload: Optional[EmailRequest] = None):
        """Email a summary to a comma-separated list of recipients"""
        payload = payload or EmailRequest()
        if not payload.recipients or not payload.subject or not payload.summary:
            return error_response(400, MISSING_EMAIL_FIELDS)

        app_settings: Settings = request.app.state.settings
        if not app_settings.email_configured:
            return error_response(500, str(MailCredentialsError()))

        try:
            send_summary_email(
                app_settings.email_user,
                app_settings.email_pass,
                as_text(payload.recipients),
                as_text(payload.subject),
                as_text(payload.summary),
            )
        except Exception as e:
            logger.exception("Email Error: %s", e)
            return error_response(500, str(e) or "Error sending email")

        return EmailResponse(message="Email sent successfully!")

    @app.get("/", response_class=PlainTextResponse)
    def home(request: Request):
        return health_message(request.app.state.generator.enabled)

    return app


app = create_app()
