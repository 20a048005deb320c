from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blogapi.api.errors import register_exception_handlers
from blogapi.api.routes import posts, system
from blogapi.core.logger import logger
from blogapi.core.settings import settings
from blogapi.db.database import Database
from blogapi.db.repository import PostRepository


# ------------------------------------------------------------------
# Lifespan: abrir/cerrar la DB, crear tablas en dev
# ------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Blog API starting...")

    db = Database(settings.database_url, echo=settings.db_echo)
    db.connect()
    app.state.db = db
    app.state.repository = PostRepository(db, timeout=settings.db_timeout)

    if settings.env == "dev":
        try:
            await db.create_all()
            logger.info("Dev tables created")
        except Exception:
            logger.error("Error creating dev tables", exc_info=True)
            raise

    yield

    try:
        await db.dispose()
    except Exception:
        logger.error("Error disposing engine", exc_info=True)


app = FastAPI(
    title="Blog CMS API",
    version="1.0.0",
    description="Posts CRUD for the blog admin and public site",
    lifespan=lifespan,
    docs_url="/docs" if settings.env != "prod" else None,
    redoc_url="/redoc" if settings.env != "prod" else None,
)


# ------------------------------------------------------------------
# CORS
# ------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# ------------------------------------------------------------------
# Routes
# ------------------------------------------------------------------
app.include_router(system.router, prefix="/api", tags=["system"])
app.include_router(posts.router, prefix="/api", tags=["Posts"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("blogapi.main:app", host="0.0.0.0", port=3001, reload=settings.env == "dev")
