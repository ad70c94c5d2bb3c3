from fastapi import Request

from core.game_manager import GameStore


def get_store(request: Request) -> GameStore:
    """
    FastAPI dependency：提供 GameStore

    GameStore 在 create_app() 建立一次並掛在 app.state 上，
    所有請求共用同一個實例
    """
    return request.app.state.store
