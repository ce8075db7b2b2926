# backend/app/main.py
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from backend.app.api import budgets, entries, goals, recurring, reports, tags
from backend.app.config import Settings, get_settings
from backend.app.errors import FinanceError
from backend.app.store import RecordStore, create_store

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, store: RecordStore = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Finance Tracker")
    app.state.store = store or create_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],  # ✅ ensures DELETE is allowed
        allow_headers=["*"],
    )

    @app.exception_handler(FinanceError)
    async def handle_finance_error(request: Request, exc: FinanceError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    app.include_router(entries.router, prefix="/api", tags=["entries"])
    app.include_router(budgets.router, prefix="/api/budgets", tags=["budgets"])
    app.include_router(recurring.router, prefix="/api/recurring", tags=["recurring"])
    app.include_router(goals.router, prefix="/api/goals", tags=["goals"])
    app.include_router(tags.router, prefix="/api/tags", tags=["tags"])
    app.include_router(reports.router, prefix="/api/reports", tags=["reports"])

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        # mounted last so /api routes win
        logger.info("Serving static files from %s", static_dir)
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        @app.get("/")
        def root():
            return {"message": "Finance Tracker API is running 🚀"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
