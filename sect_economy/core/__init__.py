"""Core 패키지: 순수 Python, DB/HTTP 의존 없음"""
