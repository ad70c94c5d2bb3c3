"""
Snapshot service.

Builds the read model returned to every query: plain dicts with the wire's
camelCase keys. Players are rendered as an ordered list (join order), never as
the internal id -> Player mapping.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List

from models import Game, Player, Transaction


def format_timestamp(value: datetime) -> str:
    """ISO-8601, millisecond precision, ``Z`` suffix (2024-01-01T12:00:00.000Z)."""
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def serialize_player(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "balance": player.balance,
        "color": player.color,
        "createdAt": format_timestamp(player.created_at),
    }


def serialize_transaction(transaction: Transaction) -> Dict[str, Any]:
    return {
        "id": transaction.id,
        "type": transaction.type.value,
        "amount": transaction.amount,
        "note": transaction.note,
        "createdAt": format_timestamp(transaction.created_at),
        "actors": {role: dict(actor) for role, actor in transaction.actors.items()},
        "results": dict(transaction.results),
    }


def serialize_game(game: Game) -> Dict[str, Any]:
    return {
        "id": game.id,
        "joinCode": game.join_code,
        "name": game.name,
        "startingBalance": game.starting_balance,
        "currency": game.currency,
        "createdAt": format_timestamp(game.created_at),
        "updatedAt": format_timestamp(game.updated_at),
        "players": [serialize_player(p) for p in game.players.values()],
        "transactions": [serialize_transaction(t) for t in game.transactions],
    }


def summarize_game(game: Game) -> Dict[str, Any]:
    return {
        "id": game.id,
        "joinCode": game.join_code,
        "name": game.name,
        "startingBalance": game.starting_balance,
        "currency": game.currency,
        "createdAt": format_timestamp(game.created_at),
        "updatedAt": format_timestamp(game.updated_at),
        "playerCount": len(game.players),
        "transactionCount": len(game.transactions),
    }


class GameSummaries:
    """
    Lazy, restartable view over the stored games.

    Each iteration asks *snapshot* for the current games and builds summaries
    one at a time, so iterating twice reflects the store at the time of each
    pass.
    """

    def __init__(self, snapshot: Callable[[], List[Game]]) -> None:
        self._snapshot = snapshot

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        for game in self._snapshot():
            yield summarize_game(game)

    def __len__(self) -> int:
        return len(self._snapshot())

    def to_list(self) -> List[Dict[str, Any]]:
        return list(self)
