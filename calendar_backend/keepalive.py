"""
keepalive.py — Keep a free-tier deployment awake
Pings the backend every PING_INTERVAL_SECONDS on one of its health endpoints.

    python -m calendar_backend.keepalive
"""

import logging
import random
import time

import httpx

from calendar_backend.config import API_PREFIX, BACKEND_URL, PING_INTERVAL_SECONDS

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

PING_ENDPOINTS = [f"{API_PREFIX}/health", f"{API_PREFIX}/debug/status"]


def ping_once(client: httpx.Client, base_url: str = BACKEND_URL, endpoint: str | None = None) -> int | None:
    """Ping one endpoint. Returns the HTTP status, or None when the request failed."""
    endpoint = endpoint or random.choice(PING_ENDPOINTS)
    url = f"{base_url.rstrip('/')}{endpoint}"
    logger.info(f"Pinging {url}")
    try:
        resp = client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Error pinging backend: {e!r}")
        return None

    try:
        connected = resp.json().get("databaseConnected")
        logger.info(f"Backend responded with status {resp.status_code}, database connected: {connected}")
    except ValueError:
        logger.info(f"Backend responded with status {resp.status_code} (raw response)")
    return resp.status_code


def run(base_url: str = BACKEND_URL, interval: int = PING_INTERVAL_SECONDS):
    logger.info(f"Ping service started. Will ping {base_url} every {interval / 60:g} minutes.")
    with httpx.Client(timeout=30) as client:
        try:
            while True:
                ping_once(client, base_url)
                time.sleep(interval)
        except KeyboardInterrupt:
            logger.info("Ping service stopped.")


if __name__ == "__main__":
    run()
