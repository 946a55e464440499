"""Run the users API under uvicorn.

Usage:
    python -m user_service.serve
"""
import logging

import uvicorn

from user_service.core import config

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    config.validate_runtime_config()
    port = config.get_port()
    logger.info('Starting server on %s:%s', config.APP_HOST, port)
    uvicorn.run(
        'user_service.main:app',
        host=config.APP_HOST,
        port=port,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == '__main__':
    main()
