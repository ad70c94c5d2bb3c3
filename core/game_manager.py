"""
Game Manager：管理 Game 的完整生命週期與帳本操作

職責：
1. 建立 Game
2. 加入 Player
3. 套用交易（deposit / withdraw / transfer）
4. 查詢與序列化 Game

原則：
- 單一入口：所有餘額變更都經過 apply_transaction
- 先驗證再修改：services.ledger_service 先算出結果，驗證全部通過才寫入
- 沒有全域狀態：GameStore 由程式進入點建立一次，再傳給 API 層
"""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional
import logging
import threading

from config import Settings, get_settings
from models import Game, Player, Transaction
from core.locks import GameLockRegistry
from core.exceptions import GameNotFound, ValidationError
from services.naming_service import (
    generate_id,
    generate_join_code,
    assign_player_color,
    GAME_ID_SIZE,
    PLAYER_ID_SIZE,
    TRANSACTION_ID_SIZE
)
from services.ledger_service import coerce_starting_balance, plan_transaction
from services.snapshot_service import GameSummaries, serialize_game

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _unique(generate: Callable[[], str], taken: Callable[[str], bool], label: str) -> str:
    """重複生成直到不與既有值碰撞"""
    value = generate()
    while taken(value):
        logger.warning(f"{label} collision detected, regenerating: {value}")
        value = generate()
    return value


class GameStore:
    """記憶體內的帳本（Ledger Engine）"""

    def __init__(self, settings: Optional[Settings] = None,
                 clock: Callable[[], datetime] = utc_now):
        self.settings = settings or get_settings()
        self._clock = clock
        self._games: Dict[str, Game] = {}
        self._codes: Dict[str, str] = {}
        self._store_lock = threading.Lock()
        self._locks = GameLockRegistry()

    # ------------------------------------------------------------------
    # 內部工具
    # ------------------------------------------------------------------

    def _touch(self, game: Game) -> datetime:
        """更新 updated_at，時鐘倒退時也不會早於原本的值"""
        now = max(self._clock(), game.updated_at)
        game.updated_at = now
        return now

    def _require_game(self, game_id: str) -> Game:
        game = self._games.get(game_id)
        if game is None:
            raise GameNotFound(game_id)
        return game

    def _snapshot(self) -> List[Game]:
        with self._store_lock:
            return list(self._games.values())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_game(self, name: Any, starting_balance: Any = None,
                    currency: Any = None) -> Dict[str, Any]:
        """
        建立新遊戲

        流程：
        1. 驗證名稱（trim 後不可為空）
        2. 套用預設值（起始餘額、幣別）
        3. 生成唯一的 ID 與 Join Code
        4. 建立 Game

        參數：
            name: 遊戲名稱
            starting_balance: 起始餘額；非有限數字或負數時使用預設值
            currency: 幣別符號；空值時使用預設值

        返回：
            序列化後的 Game

        異常：
            ValidationError: 名稱為空
        """
        trimmed_name = str(name).strip() if name is not None else ""
        if not trimmed_name:
            raise ValidationError("Game name is required.")

        balance = coerce_starting_balance(
            starting_balance, self.settings.default_starting_balance
        )
        symbol = (str(currency).strip() if currency is not None else "") \
            or self.settings.default_currency

        with self._store_lock:
            game_id = _unique(
                lambda: generate_id(GAME_ID_SIZE), self._games.__contains__, "Game id"
            )
            code = _unique(generate_join_code, self._codes.__contains__, "Join code")
            now = self._clock()
            game = Game(
                id=game_id,
                join_code=code,
                name=trimmed_name,
                starting_balance=balance,
                currency=symbol,
                created_at=now,
                updated_at=now
            )
            self._games[game_id] = game
            self._codes[code] = game_id

        logger.info(f"Created game {game_id} ({trimmed_name}) with code {code}")
        return serialize_game(game)

    def list_games(self) -> GameSummaries:
        """取得所有遊戲的摘要（依建立順序，lazy 且可重複迭代）"""
        return GameSummaries(self._snapshot)

    def get_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        """透過 ID 取得 Game；不存在時返回 None"""
        game = self._games.get(game_id)
        if game is None:
            return None
        with self._locks.with_game_lock(game_id):
            return serialize_game(game)

    def get_game_by_code(self, code: str) -> Optional[Dict[str, Any]]:
        """透過 Join Code 取得 Game（不分大小寫）；不存在時返回 None"""
        game_id = self._codes.get((code or "").strip().upper())
        if game_id is None:
            return None
        return self.get_game(game_id)

    def add_player(self, game_id: str, name: Any) -> Dict[str, Any]:
        """
        加入玩家

        前置條件：
        1. Game 必須存在
        2. 名稱 trim 後不可為空

        流程：
        1. 分配 Player ID 與顏色（依加入順序輪流）
        2. 餘額 = 遊戲的起始餘額
        3. 更新 Game 的 updated_at

        異常：
            GameNotFound: Game 不存在
            ValidationError: 名稱為空
        """
        game = self._require_game(game_id)
        trimmed_name = str(name).strip() if name is not None else ""
        if not trimmed_name:
            raise ValidationError("Player name is required.")

        with self._locks.with_game_lock(game_id):
            player_id = _unique(
                lambda: generate_id(PLAYER_ID_SIZE), game.players.__contains__, "Player id"
            )
            now = self._touch(game)
            player = Player(
                id=player_id,
                name=trimmed_name,
                balance=game.starting_balance,
                color=assign_player_color(len(game.players)),
                created_at=now
            )
            game.players[player_id] = player

            logger.info(
                f"Player {player_id} ({trimmed_name}) joined game {game_id} "
                f"with balance {player.balance}"
            )
            return serialize_game(game)

    def apply_transaction(
        self,
        game_id: str,
        tx_type: Any,
        amount: Any,
        from_player_id: Any = None,
        to_player_id: Any = None,
        note: Any = None
    ) -> Dict[str, Any]:
        """
        套用一筆交易（核心！）

        流程：
        1. 取得並鎖定 Game
        2. 驗證交易並計算結果（ledger_service，不修改任何資料）
        3. 寫入玩家餘額（transfer 的兩邊一起寫入）
        4. 建立 Transaction 並放在交易列表最前面
        5. 更新 Game 的 updated_at

        參數：
            game_id: Game ID
            tx_type: deposit / withdraw / transfer（不分大小寫）
            amount: 金額，必須是大於 0 的有限數字
            from_player_id: 來源玩家（withdraw / transfer）
            to_player_id: 目標玩家（deposit / transfer）
            note: 備註（可省略）

        返回：
            序列化後的 Game

        異常：
            GameNotFound: Game 不存在
            ValidationError: 交易類型、金額或玩家不合法
            InsufficientFunds: 來源玩家餘額不足

        注意：
            - 步驟 2 失敗時 Game 完全不會被修改
            - 步驟 3-5 在同一把鎖內完成，其他請求看不到只做一半的交易
        """
        game = self._require_game(game_id)
        with self._locks.with_game_lock(game_id):
            plan = plan_transaction(game, tx_type, amount, from_player_id, to_player_id)
            transaction_id = _unique(
                lambda: generate_id(TRANSACTION_ID_SIZE),
                game.transaction_ids.__contains__,
                "Transaction id"
            )

            for player_id, balance in plan.balances.items():
                game.players[player_id].balance = balance

            now = self._touch(game)
            transaction = Transaction(
                id=transaction_id,
                type=plan.type,
                amount=plan.amount,
                note=str(note).strip() if note is not None else "",
                created_at=now,
                actors=plan.actors,
                results=dict(plan.balances)
            )
            game.transactions.insert(0, transaction)
            game.transaction_ids.add(transaction_id)

            logger.info(
                f"Applied {plan.type.value} {plan.amount} in game {game_id}: {plan.balances}"
            )
            return serialize_game(game)

    def serialize(self, game: Game) -> Dict[str, Any]:
        """將 Game 轉成回傳給 API 的資料結構"""
        return serialize_game(game)
