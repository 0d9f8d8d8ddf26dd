import json

from app import create_app
from auth import hash_password
from catalog import SAMPLE_CUSTOMIZATION_OPTIONS, SAMPLE_PRODUCTS
from models import CustomizationOption, Product, Setting, User, db
from realtime import DEFAULT_THEME


def seed():
    if not User.query.filter_by(username="admin").first():
        db.session.add(User(username="admin", password_hash=hash_password("admin123"), name="Administrator", role="admin"))
    if not User.query.filter_by(username="staff").first():
        db.session.add(User(username="staff", password_hash=hash_password("staff123"), name="Barista", role="staff"))

    if Product.query.count() == 0:
        db.session.add_all([Product(**p.model_dump(exclude={"id"})) for p in SAMPLE_PRODUCTS])

    if CustomizationOption.query.count() == 0:
        db.session.add_all([CustomizationOption(**o.model_dump(exclude={"id"})) for o in SAMPLE_CUSTOMIZATION_OPTIONS])

    if Setting.get_value("store_name") is None:
        Setting.put("store_name", "Cafe POS", "Name shown in the header")
    if Setting.get_value("theme") is None:
        Setting.put("theme", json.dumps(DEFAULT_THEME), "Store theme")

    db.session.commit()


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        seed()
    print("Seeded. Username=admin, Password=admin123")
