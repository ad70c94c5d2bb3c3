"""
Transaction API Endpoints

職責：
1. 套用交易（deposit / withdraw / transfer）

錯誤對應：
- 遊戲不存在 → 404
- 輸入不合法（類型、金額、玩家）→ 400
- 餘額不足 → 400（訊息包含玩家名稱）
"""
from fastapi import APIRouter, Depends, HTTPException
import logging

from api.dependencies import get_store
from core.game_manager import GameStore
from core.exceptions import GameNotFound, ValidationError, InsufficientFunds
from schemas import TransactionCreate, GameResponse

router = APIRouter(prefix="/api/games", tags=["transactions"])
logger = logging.getLogger(__name__)


@router.post("/{game_id}/transactions", response_model=GameResponse, status_code=201)
def apply_transaction(game_id: str, transaction_data: TransactionCreate,
                      store: GameStore = Depends(get_store)):
    """
    套用一筆交易

    參數：
        game_id: 遊戲 ID
        transaction_data: type, amount, fromPlayerId, toPlayerId, note

    返回：
        更新後的遊戲（最新的交易在 transactions[0]）
    """
    try:
        game = store.apply_transaction(
            game_id,
            transaction_data.type,
            transaction_data.amount,
            from_player_id=transaction_data.from_player_id,
            to_player_id=transaction_data.to_player_id,
            note=transaction_data.note
        )
        return GameResponse(game=game)

    except GameNotFound:
        raise HTTPException(status_code=404, detail="Game not found.")
    except (ValidationError, InsufficientFunds) as e:
        logger.info(f"Rejected transaction for game {game_id}: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to apply transaction: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal error")
