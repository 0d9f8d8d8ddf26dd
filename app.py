"""
Project: Cafe POS
Date: October 2026

Description:
Main application entry point. Initializes Flask, the database and Socket.IO,
registers the REST routes for login, catalog, orders, sales reports, settings
and theme, and launches the app.
"""

import json
import logging
from datetime import datetime, timedelta

from flask import Flask, abort, jsonify, request, session
from flask_socketio import SocketIO
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from auth import AuthError, authenticate
from config import Config
from logging_config import setup_logging
from models import ORDER_STATUSES, PAYMENT_METHODS, CustomizationOption, Order, OrderItem, Product, Setting, User, db
from realtime import (
    DEFAULT_THEME,
    broadcast_order_status,
    broadcast_theme,
    load_theme,
    notify_new_order,
    register_socket_handlers,
)
from schemas import Theme

log = logging.getLogger(__name__)

# Create SocketIO once (no app yet), then bind inside factory
socketio = SocketIO()
register_socket_handlers(socketio)

# Settings the client asks for before anyone has saved them
COMMON_SETTINGS = ("store_name", "store_theme", "phone_number", "address", "custom_logo")

SINGLE_OPTION_FIELDS = ("temperature", "sugar_level", "milk_type")
MULTI_OPTION_FIELDS = ("toppings", "extras")


def _option_price(opt):
    """Price delta of one selected option; catalog price wins over the submitted one."""
    if not isinstance(opt, dict):
        return 0
    if opt.get("id") is not None:
        known = db.session.get(CustomizationOption, opt["id"])
        if known is not None:
            return known.price or 0
    try:
        return int(opt.get("price") or 0)
    except (TypeError, ValueError):
        return 0


def customization_delta(customizations):
    if not isinstance(customizations, dict):
        return 0
    total = 0
    for field in SINGLE_OPTION_FIELDS:
        total += _option_price(customizations.get(field))
    for field in MULTI_OPTION_FIELDS:
        total += sum(_option_price(o) for o in customizations.get(field) or [])
    for opts in (customizations.get("extra_options") or {}).values():
        total += sum(_option_price(o) for o in opts or [])
    return total


def parse_day(value):
    """'YYYY-MM-DD' -> datetime at midnight, None when missing or malformed."""
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError):
        return None


def next_order_code(now=None):
    """YYYYMMDD-NNN, numbered per day."""
    now = now or datetime.utcnow()
    prefix = now.strftime("%Y%m%d")
    count = Order.query.filter(Order.order_code.like(f"{prefix}-%")).count()
    return f"{prefix}-{count + 1:03d}"


def create_app(testing: bool = False):
    app = Flask(__name__)
    app.config.from_object(Config)

    if testing:
        app.config["TESTING"] = True
        app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite:///:memory:"
        app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
        app.config["SOCKETIO_ASYNC_MODE"] = "threading"

    setup_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    db.init_app(app)
    socketio.init_app(
        app,
        async_mode=app.config["SOCKETIO_ASYNC_MODE"],
        cors_allowed_origins=app.config["CORS_ALLOWED_ORIGINS"],
    )

    # --------- helpers ---------
    def require_login():
        if not session.get("user_id"):
            return jsonify({"error": "login_required"}), 401

    def require_admin():
        if not session.get("user_id"):
            return jsonify({"error": "login_required"}), 401
        u = db.session.get(User, session["user_id"])
        if not u or getattr(u, "role", "") != "admin":
            return jsonify({"error": "admin_only"}), 403

    # --------- errors ---------
    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({"error": e.description}), e.code

    @app.errorhandler(500)
    def server_error(e):
        log.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500

    # ---------- AUTH ----------
    @app.post("/api/login")
    def login():
        data = request.get_json(silent=True) or request.form or {}
        try:
            user = authenticate(data.get("username"), data.get("password"))
        except AuthError as e:
            return jsonify({"error": e.message}), e.status
        session["user_id"] = user.id
        session["role"] = user.role
        return jsonify(user.to_dict())

    @app.post("/api/logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    # ---------- CATALOG ----------
    @app.get("/api/products")
    def list_products():
        items = Product.query.order_by(Product.id).all()
        return jsonify([p.to_dict() for p in items])

    @app.get("/api/products/category/<category>")
    def list_products_by_category(category):
        items = Product.query.filter_by(category=category, active=True).order_by(Product.id).all()
        return jsonify([p.to_dict() for p in items])

    @app.get("/api/products/<int:product_id>")
    def get_product(product_id):
        p = db.get_or_404(Product, product_id, description="Product not found")
        return jsonify(p.to_dict())

    @app.get("/api/customization-options")
    def list_customization_options():
        opts = CustomizationOption.query.order_by(CustomizationOption.id).all()
        return jsonify([o.to_dict() for o in opts])

    # ---------- ORDERS ----------
    @app.get("/api/orders")
    def list_orders():
        orders = Order.query.order_by(Order.id.desc()).all()
        return jsonify([o.to_dict() for o in orders])

    @app.get("/api/orders/date-range")
    def list_orders_by_date_range():
        start_raw, end_raw = request.args.get("start_date"), request.args.get("end_date")
        if not start_raw or not end_raw:
            return jsonify({"error": "start_date and end_date are required"}), 400
        start, end = parse_day(start_raw), parse_day(end_raw)
        if start is None or end is None:
            return jsonify({"error": "Dates must be YYYY-MM-DD"}), 400
        if start > end:
            return jsonify({"error": "start_date must not be after end_date"}), 400
        # end day is inclusive
        orders = (
            Order.query.filter(Order.created_at >= start, Order.created_at < end + timedelta(days=1))
            .order_by(Order.id.desc())
            .all()
        )
        log.debug("Found %d order(s) between %s and %s", len(orders), start_raw, end_raw)
        return jsonify([o.to_dict() for o in orders])

    @app.get("/api/orders/<int:order_id>")
    def get_order(order_id):
        o = db.get_or_404(Order, order_id, description="Order not found")
        return jsonify(o.to_dict(with_items=True))

    @app.post("/api/orders")
    def create_order():
        data = request.get_json(silent=True) or {}
        items = data.get("items")
        if not isinstance(items, list) or not items:
            return jsonify({"error": "Order must contain at least one item"}), 400
        method = data.get("payment_method", "cash")
        if method not in PAYMENT_METHODS:
            return jsonify({"error": f"Unknown payment method: {method}"}), 400

        try:
            discount = max(0, int(data.get("discount") or 0))
        except (TypeError, ValueError):
            return jsonify({"error": "Discount must be a whole number"}), 400

        o = Order(
            order_code=next_order_code(),
            staff_id=session.get("user_id"),
            payment_method=method,
            discount=discount,
        )
        db.session.add(o)
        db.session.flush()
        for it in items:
            product = db.session.get(Product, it.get("product_id")) if isinstance(it, dict) else None
            if product is None:
                db.session.rollback()
                return jsonify({"error": "Unknown product in order"}), 400
            try:
                quantity = int(it.get("quantity", 1))
            except (TypeError, ValueError):
                db.session.rollback()
                return jsonify({"error": "Quantity must be a whole number"}), 400
            if quantity < 1:
                db.session.rollback()
                return jsonify({"error": "Quantity must be at least 1"}), 400
            customizations = it.get("customizations") or {}
            db.session.add(
                OrderItem(
                    order_id=o.id,
                    product_id=product.id,
                    name=product.name,
                    price=product.price + customization_delta(customizations),
                    quantity=quantity,
                    customizations=customizations,
                )
            )
        db.session.commit()
        log.info("Order %s created with %d item(s)", o.order_code, len(items))
        notify_new_order(socketio, o)
        return jsonify(o.to_dict(with_items=True)), 201

    @app.put("/api/orders/<int:order_id>/status")
    def update_order_status(order_id):
        resp = require_login()
        if resp:
            return resp
        data = request.get_json(silent=True) or {}
        status = data.get("status")
        if status not in ORDER_STATUSES:
            return jsonify({"error": f"Invalid status: {status}"}), 400
        o = db.get_or_404(Order, order_id, description="Order not found")
        o.status = status
        if status == "cancelled":
            o.cancel_reason = data.get("cancel_reason")
        db.session.commit()
        log.info("Order %s status -> %s", o.id, status)
        broadcast_order_status(socketio, o)
        return jsonify(o.to_dict())

    # ---------- ANALYTICS ----------
    @app.get("/api/analytics/daily-sales")
    def daily_sales():
        day_raw = request.args.get("date")
        day = parse_day(day_raw) if day_raw else datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        if day is None:
            return jsonify({"error": "Dates must be YYYY-MM-DD"}), 400
        rows = Order.query.filter(
            Order.created_at >= day,
            Order.created_at < day + timedelta(days=1),
            Order.status != "cancelled",
        ).all()
        return jsonify({"date": day.date().isoformat(), "sales": sum(o.total() for o in rows), "orders": len(rows)})

    @app.get("/api/analytics/sales")
    def sales_by_day():
        by_day = {}
        for o in Order.query.filter(Order.status != "cancelled").all():
            day = o.created_at.date().isoformat()
            by_day.setdefault(day, {"date": day, "sales": 0, "orders": 0})
            by_day[day]["sales"] += o.total()
            by_day[day]["orders"] += 1
        return jsonify(sorted(by_day.values(), key=lambda x: x["date"], reverse=True))

    @app.get("/api/analytics/popular-products")
    def popular_products():
        limit = request.args.get("limit", 5, type=int)
        if limit < 1:
            limit = 5
        sold = db.func.sum(OrderItem.quantity)
        rows = (
            db.session.query(OrderItem.product_id, db.func.max(OrderItem.name), sold)
            .join(Order, OrderItem.order_id == Order.id)
            .filter(Order.status != "cancelled")
            .group_by(OrderItem.product_id)
            .order_by(sold.desc(), OrderItem.product_id)
            .limit(limit)
            .all()
        )
        return jsonify([{"product_id": pid, "product_name": name, "count": int(count)} for pid, name, count in rows])

    # ---------- SETTINGS ----------
    @app.get("/api/settings")
    def list_settings():
        return jsonify([s.to_dict() for s in Setting.query.order_by(Setting.key).all()])

    @app.get("/api/settings/<key>")
    def get_setting(key):
        s = Setting.query.filter_by(key=key).first()
        if s:
            return jsonify(s.to_dict())
        if key == "store_name":
            return jsonify({"key": key, "value": app.config["DEFAULT_STORE_NAME"], "description": None})
        if key in COMMON_SETTINGS:
            return jsonify({"key": key, "value": None, "description": None})
        abort(404, description="Setting not found")

    @app.post("/api/settings")
    def save_setting():
        resp = require_login()
        if resp:
            return resp
        data = request.get_json(silent=True) or {}
        key = (data.get("key") or "").strip()
        if not key or data.get("value") is None:
            return jsonify({"error": "key and value are required"}), 400
        s = Setting.put(key, str(data["value"]), data.get("description"))
        db.session.commit()
        return jsonify(s.to_dict())

    # ---------- THEME ----------
    @app.get("/api/theme")
    def get_theme():
        return jsonify(load_theme())

    @app.put("/api/theme")
    def update_theme():
        resp = require_admin()
        if resp:
            return resp
        data = request.get_json(silent=True) or {}
        theme = load_theme()
        theme.update({k: data[k] for k in DEFAULT_THEME if k in data})
        if not isinstance(theme.get("primary"), str) or not theme["primary"].strip():
            return jsonify({"error": "primary color is required"}), 400
        try:
            theme = Theme.model_validate(theme).model_dump()
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            return jsonify({"error": f"Invalid theme field: {fields}"}), 400
        Setting.put("theme", json.dumps(theme), "Store theme")
        db.session.commit()
        broadcast_theme(socketio, theme)
        return jsonify(theme)

    # ---------- HEALTH ----------
    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    app = create_app()
    # Create tables on startup
    with app.app_context():
        db.create_all()
    socketio.run(app, host=app.config["HOST"], port=app.config["PORT"])
