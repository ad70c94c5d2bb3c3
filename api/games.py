"""
Game API Endpoints

職責：
1. 建立遊戲
2. 列出所有遊戲（摘要）
3. 透過 ID 或 Join Code 查詢遊戲
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from api.dependencies import get_store
from core.game_manager import GameStore
from core.exceptions import ValidationError
from schemas import GameCreate, GameResponse, GameListResponse

router = APIRouter(prefix="/api/games", tags=["games"])
logger = logging.getLogger(__name__)


@router.get("", response_model=GameListResponse)
def list_games(store: GameStore = Depends(get_store)):
    """列出所有遊戲（依建立順序）"""
    return GameListResponse(games=store.list_games().to_list())


@router.post("", response_model=GameResponse, status_code=201)
def create_game(game_data: GameCreate, store: GameStore = Depends(get_store)):
    """
    建立遊戲

    規則：
    - name 必填（trim 後不可為空）
    - startingBalance 非有限數字或負數時使用預設值 1500
    - currency 省略時使用預設符號 M$
    """
    try:
        game = store.create_game(
            game_data.name,
            starting_balance=game_data.starting_balance,
            currency=game_data.currency
        )
        return GameResponse(game=game)

    except ValidationError as e:
        logger.info(f"Rejected game creation: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create game: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")


@router.get("/code/{code}", response_model=GameResponse)
def get_game_by_code(code: str, store: GameStore = Depends(get_store)):
    """透過 6 位 Join Code 查詢遊戲（不分大小寫）"""
    game = store.get_game_by_code(code)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return GameResponse(game=game)


@router.get("/{game_id}", response_model=GameResponse)
def get_game(game_id: str, store: GameStore = Depends(get_store)):
    """透過 ID 查詢遊戲（含玩家與交易紀錄）"""
    game = store.get_game(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    return GameResponse(game=game)
