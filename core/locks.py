"""
並發控制工具

提供 Game-level 的鎖定機制，防止競態條件（Race Condition）

每個 Game 一把 threading.RLock：
- 同一個 Game 的 add_player / apply_transaction 會序列化
- 不同 Game 之間的操作互不阻塞
"""
from contextlib import contextmanager
from typing import Dict, Iterator
import threading


class GameLockRegistry:
    """Game 鎖的登記表（lazy 建立）"""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def lock_for(self, game_id: str) -> threading.RLock:
        """
        取得某個 Game 的鎖，不存在時建立

        注意：
            - 建立過程本身由 _guard 保護，兩個執行緒不會拿到不同的鎖
        """
        with self._guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[game_id] = lock
            return lock

    @contextmanager
    def with_game_lock(self, game_id: str) -> Iterator[None]:
        """
        鎖定一個 Game，直到 with 區塊結束

        使用場景：
        - 驗證 → 修改餘額 → 寫入交易紀錄 必須在同一個區塊內完成
        - 其他請求不會看到只套用一半的交易

        範例：
            with locks.with_game_lock(game_id):
                game = self._games.get(game_id)
                ...
        """
        lock = self.lock_for(game_id)
        with lock:
            yield
