from query_cache import QueryCache
from schemas import Theme
from socketio.exceptions import TimeoutError as SocketTimeout
from theme import FALLBACK_HSL, StoreSettings, ThemeChannel, ThemeState, extract_hsl_values


def test_extract_hsl_values():
    assert extract_hsl_values("hsl(142, 71%, 45%)") == "142, 71%, 45%"
    assert extract_hsl_values("142, 71%, 45%") == "142, 71%, 45%"
    assert extract_hsl_values("red") == "30 35% 33%"
    assert extract_hsl_values(None) == FALLBACK_HSL


def test_theme_state_derives_variables():
    state = ThemeState()
    rendered = []
    state.subscribe(lambda s: rendered.append(dict(s.variables)))

    assert state.apply({"primary": "hsl(142, 71%, 45%)", "radius": 1}) is True
    assert state.variables == {"--primary": "142, 71%, 45%", "--coffee-primary": "hsl(142, 71%, 45%)", "--ring": "142, 71%, 45%"}
    assert state.theme.radius == 1
    assert state.theme.variant == "professional"
    assert len(rendered) == 2


def test_theme_state_ignores_payload_without_primary():
    state = ThemeState(Theme(primary="hsl(10, 10%, 10%)"))
    assert state.apply({"primary": "", "variant": "vibrant"}) is False
    assert state.apply("garbage") is False
    assert state.theme.variant == "professional"
    assert state.variables["--primary"] == "10, 10%, 10%"


class FakeSio:
    def __init__(self, response=None, error=None):
        self.handlers = {}
        self.response = response
        self.error = error

    def on(self, event, handler):
        self.handlers[event] = handler

    def call(self, event, data=None, timeout=60):
        if self.error:
            raise self.error
        return self.response

    def start_background_task(self, target, *args):
        return target(*args)


def test_channel_applies_pushes():
    sio = FakeSio()
    state = ThemeState()
    ThemeChannel(sio, state).start()
    sio.handlers["themeUpdated"]({"primary": "hsl(200, 50%, 50%)"})
    assert state.variables["--ring"] == "200, 50%, 50%"
    sio.handlers["themeUpdated"]({"variant": "tint"})
    assert state.theme.variant == "professional"


def test_channel_rejects_invalid_fields():
    sio = FakeSio()
    state = ThemeState(Theme(primary="hsl(10, 10%, 10%)"))
    rendered = []
    state.subscribe(lambda s: rendered.append(s.theme))
    before = state.snapshot()
    ThemeChannel(sio, state).start()

    sio.handlers["themeUpdated"]({"primary": 123})
    sio.handlers["themeUpdated"]({"primary": "hsl(1, 2%, 3%)", "radius": "big"})

    assert state.apply({"primary": 123}) is False
    assert state.snapshot() == before
    assert state.variables["--primary"] == "10, 10%, 10%"
    assert len(rendered) == 1


def test_snapshot_pairs_theme_with_variables():
    state = ThemeState()
    state.apply({"primary": "hsl(142, 71%, 45%)"})
    theme, variables = state.snapshot()
    assert variables["--coffee-primary"] == theme.primary
    variables["--primary"] = "changed"
    assert state.variables["--primary"] == "142, 71%, 45%"


def test_channel_resyncs_on_connect():
    sio = FakeSio(response={"success": True, "data": {"primary": "hsl(1, 2%, 3%)", "appearance": "dark"}})
    state = ThemeState()
    ThemeChannel(sio, state).start()
    sio.handlers["connect"]()
    assert state.theme.appearance == "dark"


def test_channel_refresh_failure_keeps_state():
    sio = FakeSio(error=SocketTimeout())
    state = ThemeState()
    channel = ThemeChannel(sio, state)
    assert channel.refresh() is False
    assert state.theme == Theme()


def test_admin_theme_change_reaches_subscriber(admin_client, sio_bridge):
    state = ThemeState()
    ThemeChannel(sio_bridge, state).start()
    admin_client.put("/api/theme", json={"primary": "hsl(142, 71%, 45%)"})
    sio_bridge.pump()
    assert state.variables["--primary"] == "142, 71%, 45%"


def test_refresh_over_socket(sio_bridge):
    state = ThemeState(Theme(primary="hsl(0, 0%, 0%)"))
    assert ThemeChannel(sio_bridge, state).refresh() is True
    assert state.theme.primary == "hsl(30, 35%, 33%)"


def test_store_name(api):
    settings = StoreSettings(api, QueryCache())
    result = settings.store_name()
    assert result.is_success
    assert result.data == "Cafe POS"
