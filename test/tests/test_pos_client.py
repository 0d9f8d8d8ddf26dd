import httpx

from cart import new_cart_item
from catalog import find_product
from conftest import STAFF
from pos_client import PosClient


def _config(tmp_path):
    class Cfg:
        API_BASE_URL = "http://testserver"
        SOCKET_URL = "http://testserver"
        STORAGE_PATH = str(tmp_path / "pos.json")
        REQUEST_TIMEOUT = None

    return Cfg


def test_end_to_end(app, admin_client, sio_bridge, tmp_path):
    pos = PosClient(_config(tmp_path), transport=httpx.WSGITransport(app=app), sio=sio_bridge)

    assert pos.login_flow.login(**STAFF).ok
    assert pos.settings.store_name().data == "Cafe POS"

    pos.cart.add_to_cart(new_cart_item(find_product(3), quantity=2))
    placed = pos.orders.place_order(pos.cart)
    assert placed.ok and pos.cart.is_empty()

    assert pos.orders.update_order_status(placed.data.id, "completed").ok
    assert pos.orders.list_orders().data[0].status == "completed"

    admin_client.put("/api/theme", json={"primary": "hsl(5, 60%, 40%)"})
    sio_bridge.pump()
    assert pos.theme.variables["--primary"] == "5, 60%, 40%"
    pos.api.close()
