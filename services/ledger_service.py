"""
Ledger service: validation and balance computation for transactions.

Pure calculation logic. Nothing here mutates a Game; the functions return a
``TransactionPlan`` describing the balances a transaction *would* produce, and
``GameStore`` applies the plan under the game's lock. Because every check runs
before any balance is touched, a rejected transaction never leaves a game
half-updated.

Money model:

    deposit   bank -> to        sum of balances +amount
    withdraw  from -> bank      sum of balances -amount
    transfer  from -> to        sum of balances unchanged
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
import math

from models import Game, Number, Player, TransactionType
from core.exceptions import (
    ValidationError,
    PlayerNotFound,
    SamePlayerTransfer,
    InsufficientFunds
)

_REQUIRED_MESSAGES = {
    ("to", TransactionType.DEPOSIT): "Recipient player is required for deposits.",
    ("from", TransactionType.WITHDRAW): "Source player is required for withdrawals.",
    ("from", TransactionType.TRANSFER): "Source player is required for transfers.",
    ("to", TransactionType.TRANSFER): "Recipient player is required for transfers.",
}


@dataclass
class TransactionPlan:
    type: TransactionType
    amount: Number
    actors: Dict[str, Dict[str, str]]
    # player id -> balance after the transaction, source first
    balances: Dict[str, Number]


def normalize_number(value: float) -> Number:
    """Keep integral values as ``int`` so 1500.0 is stored (and rendered) as 1500."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _to_finite_number(value: Any) -> Optional[Number]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return normalize_number(number)


def coerce_starting_balance(value: Any, default: Number) -> Number:
    """
    Coerce a requested starting balance.

    Anything that is not a finite number >= 0 falls back to *default*.
    """
    number = _to_finite_number(value)
    if number is None or number < 0:
        return normalize_number(float(default))
    return number


def coerce_amount(value: Any) -> Number:
    """Return *value* as a finite, strictly positive number or raise ``ValidationError``."""
    number = _to_finite_number(value)
    if number is None or number <= 0:
        raise ValidationError("Amount must be a positive number.")
    return number


def normalize_type(value: Any) -> TransactionType:
    """Case-insensitive lookup of the transaction type."""
    normalized = str(value).lower() if value is not None else ""
    try:
        return TransactionType(normalized)
    except ValueError:
        raise ValidationError(
            "Transaction type must be deposit, withdraw, or transfer."
        )


def player_snapshot(player: Player) -> Dict[str, str]:
    """Freeze the actor's identity (id + name only) at transaction time."""
    return {"id": player.id, "name": player.name}


def require_player(game: Game, player_id: Any, role: str,
                   tx_type: TransactionType) -> Player:
    if not player_id:
        raise PlayerNotFound(player_id, _REQUIRED_MESSAGES[(role, tx_type)])
    player = game.find_player(player_id)
    if player is None:
        raise PlayerNotFound(player_id, f"Player {player_id} not found in this game.")
    return player


def _ensure_funds(source: Player, amount: Number, action: str) -> None:
    if source.balance < amount:
        raise InsufficientFunds(
            source.id, source.name, source.balance, amount, action=action
        )


def plan_transaction(
    game: Game,
    tx_type: Any,
    amount: Any,
    from_player_id: Any = None,
    to_player_id: Any = None
) -> TransactionPlan:
    """
    Validate a transaction request against *game* and compute its effect.

    Checks run in this order: type, amount, player references, same-player
    transfer, available funds.

    Raises:
        ValidationError: bad type or amount, missing or unknown player,
            transfer to self.
        InsufficientFunds: the source player cannot cover *amount*.
    """
    normalized_type = normalize_type(tx_type)
    numeric_amount = coerce_amount(amount)

    if normalized_type == TransactionType.DEPOSIT:
        target = require_player(game, to_player_id, "to", normalized_type)
        return TransactionPlan(
            type=normalized_type,
            amount=numeric_amount,
            actors={"to": player_snapshot(target)},
            balances={target.id: normalize_number(target.balance + numeric_amount)}
        )

    if normalized_type == TransactionType.WITHDRAW:
        source = require_player(game, from_player_id, "from", normalized_type)
        _ensure_funds(source, numeric_amount, "withdrawal")
        return TransactionPlan(
            type=normalized_type,
            amount=numeric_amount,
            actors={"from": player_snapshot(source)},
            balances={source.id: normalize_number(source.balance - numeric_amount)}
        )

    # transfer
    source = require_player(game, from_player_id, "from", normalized_type)
    target = require_player(game, to_player_id, "to", normalized_type)
    if source.id == target.id:
        raise SamePlayerTransfer(source.id)
    _ensure_funds(source, numeric_amount, "transfer")
    return TransactionPlan(
        type=normalized_type,
        amount=numeric_amount,
        actors={
            "from": player_snapshot(source),
            "to": player_snapshot(target),
        },
        balances={
            source.id: normalize_number(source.balance - numeric_amount),
            target.id: normalize_number(target.balance + numeric_amount),
        }
    )
