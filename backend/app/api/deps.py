# backend/app/api/deps.py
from fastapi import Request

from backend.app.store import RecordStore


def get_store(request: Request) -> RecordStore:
    return request.app.state.store
