# backend/app/main.py

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.auth_routes import router as auth_router
from app.api.product_routes import router as product_router
from app.api.user_routes import router as user_router
from app.core.config import Settings, get_settings
from app.core.database import Base, make_engine, make_session_factory
from app.core.errors import install_error_handlers
from app.core.security import PasswordHasher, TokenIssuer, TokenVerifier

# register tables on Base.metadata
from app.models import product, user  # noqa: F401

logger = logging.getLogger("authgate.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    Base.metadata.create_all(bind=engine)
    logger.info(
        "AuthGate API starting (db=%s, token lifetime=%s)",
        engine.url.get_backend_name(),
        app.state.token_issuer.expires_delta,
    )

    yield

    engine.dispose()
    logger.info("AuthGate API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    app = FastAPI(title="AuthGate API", version="0.1.0", lifespan=lifespan)

    # one secret per app instance, handed to the token classes explicitly
    engine = make_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.password_hash_rounds)
    app.state.token_issuer = TokenIssuer(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    app.state.token_verifier = TokenVerifier(settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["Authorization", "Content-Type"],
    )

    install_error_handlers(app)

    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(user_router, prefix="/api/users", tags=["users"])
    app.include_router(product_router, prefix="/api/products", tags=["products"])

    @app.get("/")
    def root():
        return {"message": "API is running..."}

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
