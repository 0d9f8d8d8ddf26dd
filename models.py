"""
Project: Cafe POS
Date: October 2026

Description:
Database models for staff users, the product catalog, customization options,
orders with their line-item snapshots, and key/value store settings.
"""

from flask_sqlalchemy import SQLAlchemy
from datetime import datetime

db = SQLAlchemy()

ORDER_STATUSES = ("pending", "preparing", "ready", "completed", "cancelled")
PAYMENT_METHODS = ("cash", "qr_code")


class User(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120), nullable=False, default="")
    role = db.Column(db.String(20), default="staff")
    active = db.Column(db.Boolean, default=True)

    def to_dict(self):
        # never expose the password hash
        return {"id": self.id, "username": self.username, "name": self.name, "role": self.role, "active": self.active}


class Product(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    category = db.Column(db.String(80), nullable=False)
    price = db.Column(db.Integer, nullable=False)
    image = db.Column(db.String(500), nullable=False, default="")
    description = db.Column(db.Text, nullable=True)
    active = db.Column(db.Boolean, default=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "image": self.image,
            "description": self.description,
            "active": self.active,
        }


class CustomizationOption(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False)
    type = db.Column(db.String(40), nullable=False)
    price = db.Column(db.Integer, default=0)
    is_default = db.Column(db.Boolean, default=False)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "type": self.type, "price": self.price or 0, "is_default": self.is_default}


class Order(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    order_code = db.Column(db.String(20), nullable=True)
    staff_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=True)
    status = db.Column(db.String(20), default="pending")
    payment_method = db.Column(db.String(20), default="cash")
    discount = db.Column(db.Integer, default=0)
    cancel_reason = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    items = db.relationship("OrderItem", backref="order", cascade="all, delete-orphan", lazy=True, order_by="OrderItem.id")

    def subtotal(self):
        return sum(oi.quantity * oi.price for oi in self.items)

    def total(self):
        return max(0, self.subtotal() - (self.discount or 0))

    def to_dict(self, with_items=False):
        data = {
            "id": self.id,
            "order_code": self.order_code,
            "staff_id": self.staff_id,
            "status": self.status,
            "payment_method": self.payment_method,
            "discount": self.discount or 0,
            "total": self.total(),
            "cancel_reason": self.cancel_reason,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if with_items:
            data["items"] = [i.to_dict() for i in self.items]
        return data


class OrderItem(db.Model):
    """Snapshot of a cart line at order time; later catalog edits do not touch it."""

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("order.id"), nullable=False)
    product_id = db.Column(db.Integer, db.ForeignKey("product.id"), nullable=True)
    name = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Integer, nullable=False)  # unit price incl. customizations
    quantity = db.Column(db.Integer, default=1)
    customizations = db.Column(db.JSON, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "customizations": self.customizations or {},
            "subtotal": self.price * self.quantity,
        }


class Setting(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(80), unique=True, nullable=False)
    value = db.Column(db.Text, nullable=False)
    description = db.Column(db.String(255), nullable=True)

    def to_dict(self):
        return {"key": self.key, "value": self.value, "description": self.description}

    @classmethod
    def get_value(cls, key, default=None):
        s = cls.query.filter_by(key=key).first()
        return s.value if s else default

    @classmethod
    def put(cls, key, value, description=None):
        s = cls.query.filter_by(key=key).first()
        if s is None:
            s = cls(key=key, value=value, description=description)
            db.session.add(s)
        else:
            s.value = value
            if description is not None:
                s.description = description
        return s
