import eventlet
eventlet.monkey_patch()

import logging

from lowest_unique.config import Settings
from lowest_unique.server import create_app


settings = Settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app, socketio = create_app(settings)


if __name__ == "__main__":
    logger.info("Server listening on http://%s:%s", settings.host, settings.port)
    socketio.run(app, host=settings.host, port=settings.port)
