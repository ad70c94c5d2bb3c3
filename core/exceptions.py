"""
自定義異常類別

集中管理所有業務邏輯異常，方便 API 層統一處理：
- ValidationError → 400
- GameNotFound → 404
- InsufficientFunds → 400
"""


class BoardBankException(Exception):
    """所有帳本異常的基類"""
    pass


# ============ 輸入驗證異常 ============

class ValidationError(BoardBankException):
    """輸入資料格式錯誤或缺少必要欄位"""
    pass


class PlayerNotFound(ValidationError):
    """交易引用的玩家不存在（或未提供）"""
    def __init__(self, player_id, message=None):
        self.player_id = player_id
        super().__init__(message or f"Player {player_id} not found")


class SamePlayerTransfer(ValidationError):
    """轉帳的來源與目標是同一位玩家"""
    def __init__(self, player_id):
        self.player_id = player_id
        super().__init__("Cannot transfer to the same player.")


# ============ Game 相關異常 ============

class GameNotFound(BoardBankException):
    """遊戲不存在"""
    def __init__(self, game_id):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found")


# ============ 餘額相關異常 ============

class InsufficientFunds(BoardBankException):
    """提款或轉帳金額超過來源玩家餘額"""
    def __init__(self, player_id, player_name, balance, amount, action="withdrawal"):
        self.player_id = player_id
        self.player_name = player_name
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"{player_name} does not have enough balance for this {action}."
        )
