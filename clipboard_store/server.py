# clipboard_store/server.py — CLI entrypoint: serve the clipboard over HTTP
from __future__ import annotations
import argparse
import dataclasses

import structlog
import uvicorn

from clipboard_store.api import create_app
from clipboard_store.config import ConfigError, Settings
from clipboard_store.logs import setup_logging
from clipboard_store.store import ValueStore

logger = structlog.get_logger(__name__)


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="clipboard-store", description="Ephemeral in-memory clipboard over HTTP")
    p.add_argument("--host", default=defaults.host)
    p.add_argument("--port", type=int, default=defaults.port)
    p.add_argument("--ttl", type=float, default=defaults.ttl_seconds, help="Seconds a clip stays readable after it is written")
    p.add_argument("--sweep-interval", type=float, default=defaults.sweep_interval_seconds,
                   help="Seconds between background passes that drop expired clips")
    p.add_argument("--log-level", default=defaults.log_level)
    p.add_argument("--json-logs", action="store_true", default=defaults.log_json)
    return p


def resolve_settings(argv=None) -> Settings:
    try:
        env = Settings.from_env()
    except ConfigError as e:
        # defaults come from env, so there is no configured parser yet
        argparse.ArgumentParser(prog="clipboard-store").error(str(e))
    parser = build_parser(env)
    args = parser.parse_args(argv)
    try:
        return dataclasses.replace(
            env,
            host=args.host,
            port=args.port,
            ttl_seconds=args.ttl,
            sweep_interval_seconds=args.sweep_interval,
            log_level=args.log_level.upper(),
            log_json=args.json_logs,
        )
    except ConfigError as e:
        parser.error(str(e))


def main(argv=None) -> int:
    settings = resolve_settings(argv)
    setup_logging(settings.log_level, settings.log_json)

    store = ValueStore(ttl=settings.ttl_seconds, sweep_interval=settings.sweep_interval_seconds)
    app = create_app(store=store, settings=settings)
    logger.info(
        "clipboard_server_starting",
        host=settings.host,
        port=settings.port,
        ttl_seconds=settings.ttl_seconds,
        sweep_interval_seconds=settings.sweep_interval_seconds,
    )
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None, log_level=settings.log_level.lower())
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
