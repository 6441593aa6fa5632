"""Production entry point: ``gunicorn wsgi:application``."""
from portfolio.config import Config
from portfolio.utils.logging_setup import setup_logging

setup_logging(Config.LOG_DIR, Config.LOG_LEVEL)

from ui.app import app as application  # noqa: E402

if __name__ == "__main__":
    application.run(debug=Config.is_development())
