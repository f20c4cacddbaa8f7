import pytest

from clipboard_store import server
from clipboard_store.store import ValueStore


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CLIPBOARD_HOST", "CLIPBOARD_PORT", "CLIPBOARD_TTL_SECONDS",
                 "CLIPBOARD_SWEEP_INTERVAL_SECONDS", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("CLIPBOARD_PORT", "9000")
    monkeypatch.setenv("CLIPBOARD_TTL_SECONDS", "100")
    s = server.resolve_settings(["--port", "9100", "--sweep-interval", "7"])
    assert s.port == 9100
    assert s.ttl_seconds == 100
    assert s.sweep_interval_seconds == 7


@pytest.mark.parametrize("argv", [
    ["--ttl", "0"],
    ["--ttl", "nan"],
    ["--sweep-interval", "inf"],
])
def test_invalid_flag_value_exits_with_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        server.resolve_settings(argv)
    assert exc.value.code == 2


def test_invalid_environment_exits_with_usage_error(monkeypatch):
    monkeypatch.setenv("CLIPBOARD_PORT", "nope")
    with pytest.raises(SystemExit) as exc:
        server.resolve_settings([])
    assert exc.value.code == 2


def test_main_serves_injected_store_and_closes_it(monkeypatch):
    seen = {}

    def fake_run(app, host, port, **kwargs):
        seen["store"] = app.state.store
        seen["addr"] = (host, port)
        assert seen["store"].running

    monkeypatch.setattr(server.uvicorn, "run", fake_run)
    monkeypatch.setattr(server, "setup_logging", lambda *a, **kw: None)

    assert server.main(["--host", "127.0.0.1", "--port", "8123", "--ttl", "90"]) == 0
    assert isinstance(seen["store"], ValueStore)
    assert seen["store"].ttl == 90
    assert seen["addr"] == ("127.0.0.1", 8123)
    assert not seen["store"].running
