import json

import pytest
from pydantic import ValidationError

from cart import CART_STORAGE_KEY, CartItem, CartItemCustomizations, CartStore, SelectedOption, new_cart_item
from catalog import SAMPLE_CUSTOMIZATION_OPTIONS, find_product
from local_storage import LocalStorage


def _item(item_id, price=45, quantity=1, **customizations):
    return CartItem(id=item_id, product_id=1, name="เอสเปรสโซ่", price=price, quantity=quantity,
                    customizations=CartItemCustomizations(**customizations))


def test_total_price_includes_customizations():
    item = _item("a", price=45, quantity=2, temperature=SelectedOption(id=2, name="เย็น", price=10))
    assert item.total_price == 110


def test_total_price_follows_quantity_and_customization_changes():
    item = _item("a", price=45)
    assert item.total_price == 45
    item.quantity = 3
    assert item.total_price == 135
    item.customizations = CartItemCustomizations(
        toppings=[SelectedOption(name="วิปครีม", price=10)],
        extra_options={"syrup": [SelectedOption(name="vanilla", price=5)]},
    )
    assert item.total_price == (45 + 15) * 3


def test_quantity_must_be_positive():
    with pytest.raises(ValidationError):
        _item("a", quantity=0)


def test_new_cart_item_gets_fresh_ids():
    product = find_product(1)
    a = new_cart_item(product)
    b = new_cart_item(product)
    assert a.id != b.id
    assert a.product_id == b.product_id == 1


def test_selected_option_from_catalog_option():
    opt = SelectedOption.from_option(SAMPLE_CUSTOMIZATION_OPTIONS[8])
    assert (opt.id, opt.price) == (9, 15)


def test_add_replaces_existing_id(storage):
    cart = CartStore(storage)
    cart.add_to_cart(_item("a"))
    cart.add_to_cart(_item("b"))
    cart.add_to_cart(_item("a", quantity=4))
    assert [i.id for i in cart.items] == ["a", "b"]
    assert cart.items[0].quantity == 4


def test_update_replaces_in_place(storage):
    cart = CartStore(storage)
    for i in ("a", "b", "c"):
        cart.add_to_cart(_item(i))
    assert cart.update_cart_item("b", _item("b", quantity=5)) is True
    assert [i.id for i in cart.items] == ["a", "b", "c"]
    assert cart.items[1].quantity == 5


def test_update_unknown_id_is_a_no_op(storage):
    cart = CartStore(storage)
    cart.add_to_cart(_item("a"))
    before = storage.get_item(CART_STORAGE_KEY)
    assert cart.update_cart_item("zzz", _item("zzz")) is False
    assert [i.id for i in cart.items] == ["a"]
    assert storage.get_item(CART_STORAGE_KEY) == before


def test_update_without_item_changes_nothing(storage):
    cart = CartStore(storage)
    cart.add_to_cart(_item("a"))
    assert cart.update_cart_item("a") is False
    assert cart.items[0].quantity == 1


def test_update_with_new_id_keeps_ids_unique(storage):
    cart = CartStore(storage)
    cart.add_to_cart(_item("a"))
    cart.add_to_cart(_item("b"))
    cart.update_cart_item("a", _item("b", quantity=2))
    assert [(i.id, i.quantity) for i in cart.items] == [("b", 2)]


def test_remove_and_clear(storage):
    cart = CartStore(storage)
    cart.add_to_cart(_item("a"))
    cart.add_to_cart(_item("b"))
    cart.remove_from_cart("a")
    cart.remove_from_cart("missing")
    assert [i.id for i in cart.items] == ["b"]
    cart.clear_cart()
    assert cart.is_empty()
    assert json.loads(storage.get_item(CART_STORAGE_KEY)) == []


def test_mixed_operations_never_duplicate_and_survive_reload(tmp_path):
    path = str(tmp_path / "s.json")
    cart = CartStore(LocalStorage(path))
    ops = [("add", "a"), ("add", "b"), ("add", "a"), ("update", "c"), ("update", "b"),
           ("remove", "a"), ("add", "c"), ("add", "a"), ("update", "a")]
    for op, item_id in ops:
        if op == "add":
            cart.add_to_cart(_item(item_id))
        elif op == "update":
            cart.update_cart_item(item_id, _item(item_id, quantity=2))
        else:
            cart.remove_from_cart(item_id)
        ids = [i.id for i in cart.items]
        assert len(ids) == len(set(ids))

    reloaded = CartStore(LocalStorage(path))
    assert [i.model_dump() for i in reloaded.items] == [i.model_dump() for i in cart.items]
    assert [i.id for i in reloaded.items] == ["b", "c", "a"]


def test_corrupt_storage_gives_empty_cart(storage, caplog):
    storage.set_item(CART_STORAGE_KEY, "{not json")
    cart = CartStore(storage)
    assert cart.items == []
    assert "Failed to parse cart" in caplog.text


def test_totals_and_order_payload(storage):
    cart = CartStore(storage)
    cart.add_to_cart(_item("a", price=45, quantity=2, toppings=[SelectedOption(id=10, name="วิปครีม", price=10)]))
    cart.add_to_cart(_item("b", price=60))
    assert cart.total() == 170
    assert cart.item_count() == 3
    payload = cart.to_order_payload()
    assert payload[0]["quantity"] == 2
    assert payload[0]["customizations"]["toppings"][0]["id"] == 10
