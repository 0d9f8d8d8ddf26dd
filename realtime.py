"""
Project: Cafe POS
Date: October 2026

Description:
Socket.IO event handlers and broadcast helpers. Theme changes and order
status changes are pushed to every connected client; nothing is
acknowledged back by the receivers.
"""

import json
import logging
from datetime import datetime

from flask import request
from flask_socketio import join_room, leave_room

from auth import AuthError, authenticate
from models import Setting

log = logging.getLogger(__name__)

ROLES = ("admin", "staff", "customer")

THEME_EVENT = "themeUpdated"
ORDER_STATUS_EVENT = "orderStatusUpdated"
NEW_ORDER_EVENT = "newOrderNotification"

DEFAULT_THEME = {"variant": "professional", "primary": "hsl(30, 35%, 33%)", "appearance": "light", "radius": 0.5}


def load_theme():
    """Stored theme merged over the defaults; a corrupt value falls back to the defaults."""
    raw = Setting.get_value("theme")
    if not raw:
        return dict(DEFAULT_THEME)
    try:
        stored = json.loads(raw)
    except ValueError:
        log.error("Stored theme is not valid JSON, using defaults")
        return dict(DEFAULT_THEME)
    theme = dict(DEFAULT_THEME)
    if isinstance(stored, dict):
        theme.update({k: v for k, v in stored.items() if k in DEFAULT_THEME})
    return theme


def broadcast_theme(socketio, theme):
    log.info("Broadcasting theme update: %s", theme.get("primary"))
    socketio.emit(THEME_EVENT, theme)


def broadcast_order_status(socketio, order):
    socketio.emit(
        ORDER_STATUS_EVENT,
        {"order_id": order.id, "status": order.status, "updated_at": datetime.utcnow().isoformat()},
    )


def notify_new_order(socketio, order):
    # only staff screens care about incoming orders
    for role in ("admin", "staff"):
        socketio.emit(NEW_ORDER_EVENT, {"order": order.to_dict()}, to=role)


def register_socket_handlers(socketio):
    # socket id -> role, for logging and cleanup
    roles_by_sid = {}

    @socketio.on("connect")
    def on_connect(auth=None):
        log.info("Socket.IO client connected: %s", request.sid)

    @socketio.on("disconnect")
    def on_disconnect(*args):
        role = roles_by_sid.pop(request.sid, None)
        if role:
            leave_room(role)
        log.info("Socket.IO client disconnected: %s (role=%s)", request.sid, role)

    @socketio.on("register")
    def on_register(data):
        role = (data or {}).get("role")
        if role not in ROLES:
            log.warning("Invalid role registered: %r", role)
            return {"success": False, "error": "invalid_role"}
        roles_by_sid[request.sid] = role
        join_room(role)
        log.info("Socket %s registered as %s", request.sid, role)
        return {"success": True, "role": role}

    @socketio.on("loginUser")
    def on_login_user(data):
        data = data or {}
        try:
            user = authenticate(data.get("username"), data.get("password"))
        except AuthError as e:
            return {"success": False, "error": e.message}
        if user.role in ROLES:
            roles_by_sid[request.sid] = user.role
            join_room(user.role)
        return {"success": True, "user": user.to_dict()}

    @socketio.on("getTheme")
    def on_get_theme(data=None):
        return {"success": True, "data": load_theme()}
