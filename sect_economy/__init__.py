"""Sect economy: 문파 퀘스트 수명주기 + 문파 상점"""
