from typing import Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.sessions import SessionMiddleware

from ..config import Settings
from ..database import Base, build_engine, build_sessionmaker
from ..logging_config import setup_logging
from .methods import routes
from .middleware import DatabaseSessionMiddleware


def create_app(settings: Optional[Settings] = None, create_tables: bool = False):
    setup_logging()
    settings = settings or Settings.from_environ()

    engine = build_engine(settings)
    if create_tables:
        Base.metadata.create_all(engine)
    session_factory = build_sessionmaker(engine)

    app = Starlette(
        routes=routes,
        middleware=[
            Middleware(
                SessionMiddleware,
                secret_key=settings.session_secret_key,
                session_cookie=settings.session_cookie,
            ),
            Middleware(DatabaseSessionMiddleware, session_factory=session_factory),
        ],
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    return app


# Entry point for uvicorn
if __name__ == "__main__":
    import uvicorn
    from os import environ

    uvicorn.run(
        "calendar_view.api.main:create_app",
        factory=True,
        host=environ.get("API_HOST", "127.0.0.1"),
        port=int(environ.get("API_PORT", "8000")),
    )
