from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.application.errors import AppError, AuthError
from src.application.use_cases.profiles import ensure_profile
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    # The reminder trigger checks its own shared secret
    "/api/v1/cron",
    "/api/v1/notifications/vapid-public-key",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        try:
            authorization = request.headers.get("Authorization")
            if not authorization:
                raise AuthError("Missing Authorization header")
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            jwks_client = getattr(request.app.state, "jwks_client", None)
            if jwks_client is None:
                raise RuntimeError("JWKS client not configured")
            claims = await jwks_client.decode_token(
                token,
                issuer=self.settings.oidc_issuer,
                audience=self.settings.oidc_audience,
            )

            subject = claims.get("sub")
            if not subject:
                raise AuthError("Token missing subject")
            session_factory = getattr(request.app.state, "session_factory", None)
            if session_factory is None:
                raise RuntimeError("Session factory not configured")
            async with SQLAlchemyUnitOfWork(session_factory) as uow:
                profile = await ensure_profile.execute(uow, str(subject), claims)
            request.state.auth_context = AuthContext(
                profile_id=profile.id,
                external_user_id=str(subject),
                claims=claims,
            )
        except AppError as exc:
            if not isinstance(exc, AuthError):
                logger.warning("Authentication aborted: %s", exc.message)
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
        return await call_next(request)
