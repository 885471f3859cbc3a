"""Entry point for serving the Portfolio API.

Configuration such as the database path, log level and CORS origins
is read from environment variables (see
``portfolio_api/app/core/config.py``).  Host and port are read from
``HOST`` and ``PORT``; defaults are ``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import logging
import os

from uvicorn import Config, Server

from portfolio_api.app.main import app


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    logging.getLogger(__name__).info("Serving Portfolio API on %s:%s", host, port)
    server.run()


if __name__ == "__main__":
    try:
        main()
    except (KeyboardInterrupt, SystemExit):
        pass
