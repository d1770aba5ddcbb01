"""
Product Catalog Backend
Application Entry Point

This file serves as the entry point for the Flask application.
It uses the application factory pattern defined in the catalog package.
A missing or unreachable database stops the process.
"""

import logging
import sys

from catalog import create_app

logger = logging.getLogger('catalog')

try:
    app = create_app()
except Exception:
    logger.critical('Could not initialize the database', exc_info=True)
    sys.exit(1)

if __name__ == '__main__':
    port = app.config['PORT']
    logger.info('Server started on port %s', port)
    logger.info('Application available at http://localhost:%s', port)
    app.run(host='0.0.0.0', port=port)
