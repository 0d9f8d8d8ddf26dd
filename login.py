"""
Project: Cafe POS
Date: October 2026

Description:
Login flow for the client. Callers depend on one `authenticate`
capability; whether credentials travel over REST or over the Socket.IO
channel is decided by which authenticator is plugged in.
"""

import json
import logging
from typing import Optional, Protocol

import socketio
from socketio.exceptions import SocketIOError

from api_client import ApiClient
from errors import ApiError, AuthenticationError, NetworkError, get_error_message
from local_storage import LocalStorage
from schemas import User

log = logging.getLogger(__name__)

USER_STORAGE_KEY = "user"

LOGIN_SCREEN = "login"
POS_SCREEN = "pos"
ADMIN_SCREEN = "admin"


class Authenticator(Protocol):
    def authenticate(self, username: str, password: str) -> User:
        """Returns the user, or raises AuthenticationError / NetworkError."""
        ...


class RestAuthenticator:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def authenticate(self, username: str, password: str) -> User:
        try:
            data = self.api.post("/api/login", json={"username": username, "password": password})
        except ApiError as e:
            raise AuthenticationError(e.message) from e
        return User.model_validate(data)


class SocketAuthenticator:
    def __init__(self, sio: socketio.Client, timeout: int = 60) -> None:
        self.sio = sio
        self.timeout = timeout

    def authenticate(self, username: str, password: str) -> User:
        try:
            response = self.sio.call("loginUser", {"username": username, "password": password}, timeout=self.timeout)
        except SocketIOError as e:
            raise NetworkError(str(e)) from e
        if not isinstance(response, dict) or not response.get("success"):
            message = response.get("error") if isinstance(response, dict) else None
            raise AuthenticationError(message)
        return User.model_validate(response["user"])


def _screen_for(user: Optional[User]) -> str:
    if user is None:
        return LOGIN_SCREEN
    return ADMIN_SCREEN if user.role == "admin" else POS_SCREEN


class LoginResult:
    def __init__(self, user: Optional[User] = None, error: Optional[str] = None) -> None:
        self.user = user
        self.error = error

    @property
    def ok(self) -> bool:
        return self.user is not None


class LoginFlow:
    """
    Exchanges credentials for a user once, without retrying. On success the
    user is stored and the flow moves off the login screen; on failure the
    stored user and the screen are left as they were.
    """

    def __init__(self, authenticator: Authenticator, storage: LocalStorage) -> None:
        self.authenticator = authenticator
        self.storage = storage
        self.screen = _screen_for(self.current_user())

    def current_user(self) -> Optional[User]:
        raw = self.storage.get_item(USER_STORAGE_KEY)
        if not raw:
            return None
        try:
            return User.model_validate_json(raw)
        except ValueError as e:
            log.error("Stored user is unreadable, ignoring it: %s", e)
            return None

    def login(self, username: str, password: str) -> LoginResult:
        if not username or not password:
            return LoginResult(error="Please enter a username and password")
        try:
            user = self.authenticator.authenticate(username, password)
        except (AuthenticationError, NetworkError) as e:
            return LoginResult(error=get_error_message(e))

        self.storage.set_item(USER_STORAGE_KEY, json.dumps(user.model_dump(), ensure_ascii=False))
        self.screen = _screen_for(user)
        log.info("Logged in as %s (%s)", user.username, user.role)
        return LoginResult(user=user)

    def logout(self) -> None:
        self.storage.remove_item(USER_STORAGE_KEY)
        self.screen = LOGIN_SCREEN
