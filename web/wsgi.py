"""
WSGI entrypoint for production (gunicorn/systemd).

This module should have no side effects beyond creating the Flask app (which starts the
printer resume watcher when WATCH_PRINTERS is set).
"""
from settings import Settings, configure_logging
from web.app import create_app

settings = Settings.from_env()
configure_logging(settings.log_level)

app = create_app(settings=settings)
