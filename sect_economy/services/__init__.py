"""Service 계층: Core↔store 연결, EventBus 통신"""
