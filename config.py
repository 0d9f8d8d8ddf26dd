"""
Project: Cafe POS
Date: October 2026

Description:
Configuration objects. `Config` is loaded into Flask with
`app.config.from_object(Config)`; `ClientConfig` feeds the client-side
data layer (API client, real-time channel, local storage).
"""

import os
from pathlib import Path


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-me")
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///cafe_pos.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # eventlet in production, threading is enough for tests
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "eventlet")
    CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "*")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")  # optional, stdout only when unset

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "5000"))

    DEFAULT_STORE_NAME = os.environ.get("STORE_NAME", "Cafe POS")


class ClientConfig:
    API_BASE_URL = os.environ.get("POS_API_URL", "http://localhost:5000")
    SOCKET_URL = os.environ.get("POS_SOCKET_URL", API_BASE_URL)
    STORAGE_PATH = os.environ.get("POS_STORAGE_PATH", str(Path.home() / ".cafe_pos_storage.json"))
    # No client-side timeout unless one is configured explicitly
    REQUEST_TIMEOUT = float(os.environ["POS_REQUEST_TIMEOUT"]) if os.environ.get("POS_REQUEST_TIMEOUT") else None
