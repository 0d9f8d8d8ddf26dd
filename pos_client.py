"""
Project: Cafe POS
Date: October 2026

Description:
Wires the client-side pieces together: API client, query cache, local
storage, cart, orders, theme channel and login flow.
"""

import logging
from typing import Optional

import httpx
import socketio

from api_client import ApiClient
from cart import CartStore
from config import ClientConfig
from local_storage import LocalStorage
from login import LoginFlow, RestAuthenticator, SocketAuthenticator
from orders import OrderService
from query_cache import QueryCache
from theme import StoreSettings, ThemeChannel, ThemeState

log = logging.getLogger(__name__)


class PosClient:
    def __init__(self, config=ClientConfig, transport: Optional[httpx.BaseTransport] = None, sio: Optional[socketio.Client] = None, login_over_socket: bool = False) -> None:
        self.config = config
        self.api = ApiClient(config.API_BASE_URL, transport=transport, timeout=config.REQUEST_TIMEOUT)
        self.cache = QueryCache()
        self.storage = LocalStorage(config.STORAGE_PATH)
        self.cart = CartStore(self.storage)
        self.orders = OrderService(self.api, self.cache)
        self.settings = StoreSettings(self.api, self.cache)

        self.sio = sio or socketio.Client(reconnection=True)
        self.theme = ThemeState()
        self.theme_channel = ThemeChannel(self.sio, self.theme)
        self.theme_channel.start()

        authenticator = SocketAuthenticator(self.sio) if login_over_socket else RestAuthenticator(self.api)
        self.login_flow = LoginFlow(authenticator, self.storage)

    def connect(self) -> None:
        """Opens the real-time channel; reconnects are handled by the Socket.IO client."""
        log.info("Connecting to %s", self.config.SOCKET_URL)
        self.sio.connect(self.config.SOCKET_URL)

    def close(self) -> None:
        if self.sio.connected:
            self.sio.disconnect()
        self.api.close()
