"""
Entity model：Game、Player、Transaction

純資料結構，不包含驗證或狀態轉換邏輯：
- 驗證與餘額計算在 services.ledger_service
- 狀態變更只由 core.game_manager.GameStore 執行
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Union

Number = Union[int, float]

# 玩家顏色依加入順序輪流分配（第 7 位玩家與第 1 位同色）
PLAYER_COLORS = (
    "#f59f00",
    "#0ea5e9",
    "#f97316",
    "#22c55e",
    "#a855f7",
    "#ef4444",
)


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER = "transfer"


@dataclass
class Player:
    id: str
    name: str
    balance: Number
    color: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """
    一筆已套用的交易（建立後不可修改）

    actors: 以角色（"from" / "to"）為 key 的玩家快照，只含 id 與 name
    results: 受影響玩家 id -> 交易後餘額
    """
    id: str
    type: TransactionType
    amount: Number
    note: str
    created_at: datetime
    actors: Dict[str, Dict[str, str]]
    results: Dict[str, Number]


@dataclass
class Game:
    id: str
    join_code: str
    name: str
    starting_balance: Number
    currency: str
    created_at: datetime
    updated_at: datetime
    # dict 保留插入順序，也就是玩家加入順序
    players: Dict[str, Player] = field(default_factory=dict)
    # 最新的交易在最前面；transaction_ids 用於檢查 ID 碰撞
    transactions: List[Transaction] = field(default_factory=list)
    transaction_ids: Set[str] = field(default_factory=set)

    def find_player(self, player_id: Any) -> Optional[Player]:
        if not player_id:
            return None
        return self.players.get(str(player_id))
