"""
Project: Cafe POS
Date: October 2026

Description:
Theme and store branding on the client. The server pushes theme changes
over Socket.IO; `ThemeState` is the one place they land, and whatever
renders the UI subscribes to it.
"""

import logging
import re
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

import socketio
from pydantic import ValidationError
from socketio.exceptions import SocketIOError

from api_client import ApiClient
from query_cache import QueryCache, QueryResult
from schemas import Theme

log = logging.getLogger(__name__)

THEME_EVENT = "themeUpdated"
FALLBACK_HSL = "30 35% 33%"

_HSL_RE = re.compile(r"hsl\(([^)]+)\)")


def extract_hsl_values(hsl_string: str) -> str:
    """
    'hsl(142, 71%, 45%)' -> '142, 71%, 45%'. A bare comma-separated triple
    is returned unchanged; anything else falls back to the default brown.
    """
    if not isinstance(hsl_string, str):
        log.warning("Unusable color value %r, using fallback", hsl_string)
        return FALLBACK_HSL
    match = _HSL_RE.search(hsl_string)
    if match and match.group(1):
        return match.group(1)
    if "," in hsl_string:
        return hsl_string
    log.warning("Color %r is not an hsl() value, using fallback", hsl_string)
    return FALLBACK_HSL


class ThemeState:
    """Current theme plus the style variables derived from it."""

    def __init__(self, theme: Optional[Theme] = None) -> None:
        theme = theme or Theme()
        self._lock = threading.Lock()
        self._current: Tuple[Theme, Dict[str, str]] = (theme, self._variables_for(theme))
        self._consumers: List[Callable[["ThemeState"], None]] = []

    @property
    def theme(self) -> Theme:
        return self._current[0]

    @property
    def variables(self) -> Dict[str, str]:
        return dict(self._current[1])

    def snapshot(self) -> Tuple[Theme, Dict[str, str]]:
        """Theme and its variables as one consistent pair."""
        theme, variables = self._current
        return theme, dict(variables)

    @staticmethod
    def _variables_for(theme: Theme) -> Dict[str, str]:
        hsl = extract_hsl_values(theme.primary)
        return {"--primary": hsl, "--coffee-primary": theme.primary, "--ring": hsl}

    def subscribe(self, consumer: Callable[["ThemeState"], None]) -> Callable[[], None]:
        self._consumers.append(consumer)
        consumer(self)

        def unsubscribe() -> None:
            if consumer in self._consumers:
                self._consumers.remove(consumer)

        return unsubscribe

    def apply(self, payload: Dict[str, Any]) -> bool:
        """
        Merges a theme payload. Payloads without a primary color, or with
        fields that do not validate, are ignored and the current theme stays.
        """
        if not isinstance(payload, dict) or not payload.get("primary"):
            return False
        with self._lock:
            merged = self._current[0].model_dump()
            merged.update({k: v for k, v in payload.items() if k in merged and v is not None})
            try:
                theme = Theme.model_validate(merged)
            except ValidationError as e:
                log.warning("Rejected theme payload %r: %s", payload, e)
                return False
            self._current = (theme, self._variables_for(theme))
        log.info("Theme updated: %s", theme.primary)
        for consumer in list(self._consumers):
            consumer(self)
        return True


class ThemeChannel:
    """
    Feeds `themeUpdated` pushes into a `ThemeState`. There is no ack and no
    retry: a missed push is picked up by the next one, or by the `getTheme`
    request sent on every (re)connect.
    """

    def __init__(self, sio: socketio.Client, state: ThemeState, event: str = THEME_EVENT) -> None:
        self.sio = sio
        self.state = state
        self.event = event

    def start(self) -> None:
        self.sio.on(self.event, self.handle_update)
        self.sio.on("connect", self._on_connect)

    def handle_update(self, payload: Any) -> None:
        if not self.state.apply(payload):
            log.debug("Ignoring theme payload: %r", payload)

    def _on_connect(self) -> None:
        # acks are read on the event thread, so ask from a separate task
        self.sio.start_background_task(self.refresh)

    def refresh(self) -> bool:
        try:
            response = self.sio.call("getTheme", {})
        except SocketIOError as e:
            log.warning("Could not fetch theme: %s", e)
            return False
        if isinstance(response, dict) and response.get("success"):
            return self.state.apply(response.get("data") or {})
        log.warning("getTheme returned %r", response)
        return False


STORE_NAME_KEY = ("/api/settings", "store_name")


class StoreSettings:
    def __init__(self, api: ApiClient, cache: QueryCache) -> None:
        self.api = api
        self.cache = cache

    def store_name(self) -> QueryResult:
        return self.cache.query(STORE_NAME_KEY, lambda: self.api.get("/api/settings/store_name").get("value"))
