"""
API schemas（pydantic）

Request 欄位刻意寬鬆（全部是 Any）：型別轉換與驗證由 GameStore 負責，
錯誤訊息才會一致。Response 欄位使用 camelCase（與前端約定的格式）。
"""
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Number = Union[int, float]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============ Requests ============

class GameCreate(CamelModel):
    name: Any = None
    starting_balance: Any = None
    currency: Any = None


class PlayerCreate(CamelModel):
    name: Any = None


class TransactionCreate(CamelModel):
    type: Any = None
    amount: Any = None
    from_player_id: Any = None
    to_player_id: Any = None
    note: Any = None


# ============ Responses ============

class ActorSchema(CamelModel):
    id: str
    name: str


class PlayerSchema(CamelModel):
    id: str
    name: str
    balance: Number
    color: str
    created_at: str


class TransactionSchema(CamelModel):
    id: str
    type: str
    amount: Number
    note: str = ""
    created_at: str
    actors: Dict[str, ActorSchema]
    results: Dict[str, Number]


class GameSummarySchema(CamelModel):
    id: str
    join_code: str
    name: str
    starting_balance: Number
    currency: str
    created_at: str
    updated_at: str
    player_count: int
    transaction_count: int


class GameSchema(CamelModel):
    id: str
    join_code: str
    name: str
    starting_balance: Number
    currency: str
    created_at: str
    updated_at: str
    players: List[PlayerSchema] = Field(default_factory=list)
    transactions: List[TransactionSchema] = Field(default_factory=list)


class GameResponse(BaseModel):
    game: GameSchema


class GameListResponse(BaseModel):
    games: List[GameSummarySchema]
