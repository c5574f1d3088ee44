# arab_insights/middlewares/logging.py

import logging
import sys
import requests
from arab_insights.core.config import Settings, settings as default_settings

BETTERSTACK_INGEST_URL = "https://in.logs.betterstack.com"


class LogtailHandler(logging.Handler):
    """Ships formatted records to BetterStack. Never raises into the caller."""

    def __init__(self, api_key: str, url: str = BETTERSTACK_INGEST_URL):
        super().__init__()
        self.api_key = api_key
        self.url = url

    def emit(self, record):
        log_entry = self.format(record)
        try:
            response = requests.post(
                self.url,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json={
                    "dt": record.created,
                    "message": log_entry,
                },
                timeout=3,
            )
            if response.status_code not in (200, 202):
                sys.stderr.write(f"❌ BetterStack logging failed: {response.text}\n")
        except requests.RequestException as e:
            sys.stderr.write(f"❌ Exception while logging to BetterStack: {e}\n")


def setup_logging(settings: Settings = default_settings):
    logger = logging.getLogger()
    logger.setLevel(settings.LOG_LEVEL.upper())
    logger.handlers = []

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.ENV == "production" and settings.BETTERSTACK_API_KEY:
        logtail_handler = LogtailHandler(settings.BETTERSTACK_API_KEY)
        logtail_handler.setFormatter(formatter)
        logger.addHandler(logtail_handler)

    logger.info("✅ Logging system initialized")
