"""
服務層

這個 package 包含純計算邏輯，不負責狀態轉換：
- NamingService：ID、Join Code、玩家顏色生成
- LedgerService：交易驗證與餘額計算
- SnapshotService：序列化與遊戲摘要
"""
