import logging

from . import create_app
from .config import load_settings
from .logging_setup import setup_logging

logger = logging.getLogger("ratboard")


def main():
    settings = load_settings()
    setup_logging(level=settings['LOG_LEVEL'], log_dir=settings['LOG_DIR'] or None)
    app = create_app(settings)
    host, port = app.config['HOST'], app.config['PORT']
    logger.info("Running %s on http://%s:%s (database %s)", app.config['APP_NAME'], host, port, app.config['DATABASE'])
    app.run(host=host, port=port)


if __name__ == '__main__':
    main()
