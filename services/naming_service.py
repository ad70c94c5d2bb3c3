"""
命名服務：生成 ID、Join Code 與玩家顏色

純計算邏輯，不涉及狀態轉換
"""
import random
import string

from models import PLAYER_COLORS

ID_ALPHABET = string.ascii_letters + string.digits + "_-"

GAME_ID_SIZE = 10
PLAYER_ID_SIZE = 8
TRANSACTION_ID_SIZE = 10
JOIN_CODE_SIZE = 6


def generate_id(size: int) -> str:
    """
    生成隨機的 URL-safe ID

    範例：V1StGXR8_Z, 4f90d13a

    注意：
    - 不檢查唯一性（由呼叫者負責）
    - 64^8 以上種可能，碰撞機率極低
    """
    return ''.join(random.choices(ID_ALPHABET, k=size))


def generate_join_code() -> str:
    """
    生成隨機的 6 位大寫字母 Join Code，方便玩家口頭分享

    範例：ABCDEF, XYZABC

    注意：
    - 不檢查唯一性（由呼叫者負責）
    """
    return ''.join(random.choices(string.ascii_uppercase, k=JOIN_CODE_SIZE))


def assign_player_color(player_count: int) -> str:
    """
    為遊戲內的新玩家分配顏色

    邏輯：
    - 有 6 種顏色
    - 玩家按照加入順序分配顏色
    - 超過 6 人後從頭循環

    參數：
        player_count: 遊戲內現有玩家數量

    範例：
        第 1 位玩家: #f59f00
        第 7 位玩家: #f59f00
    """
    return PLAYER_COLORS[player_count % len(PLAYER_COLORS)]
