"""
Player API Endpoints

職責：
1. 玩家加入遊戲
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from api.dependencies import get_store
from core.game_manager import GameStore
from core.exceptions import GameNotFound, ValidationError
from schemas import PlayerCreate, GameResponse

router = APIRouter(prefix="/api/games", tags=["players"])
logger = logging.getLogger(__name__)


@router.post("/{game_id}/players", response_model=GameResponse, status_code=201)
def add_player(game_id: str, player_data: PlayerCreate,
               store: GameStore = Depends(get_store)):
    """
    加入玩家

    前置條件：
    - 遊戲必須存在
    - name trim 後不可為空

    流程：
    1. 建立 Player（餘額 = 起始餘額，顏色依加入順序）
    2. 返回更新後的遊戲
    """
    try:
        game = store.add_player(game_id, player_data.name)
        return GameResponse(game=game)

    except GameNotFound:
        raise HTTPException(status_code=404, detail="Game not found.")
    except ValidationError as e:
        logger.info(f"Rejected player for game {game_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to add player: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
