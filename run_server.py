#!/usr/bin/env python3
"""
SkyBook Server - HTTP launcher
Runs the FastAPI chat/reservation API under uvicorn
"""
import os
import sys

# Fix encoding issues on servers with ASCII locale
os.environ.setdefault('PYTHONIOENCODING', 'utf-8')
os.environ.setdefault('LANG', 'en_US.UTF-8')
os.environ.setdefault('LC_ALL', 'en_US.UTF-8')

import logging
import uvicorn
from skybook.config import settings, check_secret_key, log_config

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    check_secret_key()
    log_config()
    logger.info("Starting SkyBook server...")
    logger.info(f"Python {sys.version}, encoding={sys.getdefaultencoding()}")
    logger.info(f"HTTP server will run on http://{settings.http_host}:{settings.http_port}")
    uvicorn.run(
        "skybook.main:app",
        host=settings.http_host,
        port=settings.http_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
