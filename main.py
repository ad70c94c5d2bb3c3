from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import logging

from config import Settings, get_settings, configure_logging
from core.game_manager import GameStore
from api import games, players, transactions

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: 資料只存在記憶體中，重新啟動後會清空
    configure_logging(app.state.settings)
    logger.info(f"{app.title} started (in-memory store, no persistence)")
    yield
    # Shutdown
    logger.info(f"{app.title} stopped with {len(app.state.store.list_games())} games in memory")


def create_app(store: Optional[GameStore] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    """
    建立 FastAPI 應用

    參數：
        store: 共用的 GameStore；省略時建立新的（測試可以傳入自己的實例）
        settings: 設定；省略時從環境變數 / .env 讀取
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="In-memory play-money ledger for board game sessions",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store or GameStore(settings)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(games.router)
    app.include_router(players.router)
    app.include_router(transactions.router)

    @app.get("/")
    def root():
        return {"message": settings.app_name, "status": "ok"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
