"""
核心業務邏輯層

這個 package 包含所有核心業務邏輯，包括：
- GameStore：管理 Game、Player、Transaction 的生命週期（帳本）
- Exceptions：所有業務異常
- Locks：並發控制工具
"""
