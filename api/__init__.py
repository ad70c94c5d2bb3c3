"""
HTTP 層（FastAPI routers）

只負責解析 request、呼叫 GameStore、把異常轉成 HTTP status：
- games：建立 / 列出 / 查詢遊戲
- players：加入玩家
- transactions：套用交易
"""
