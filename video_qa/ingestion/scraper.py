"""Trigger a Bright Data scrape for a YouTube video.

The scraper delivers its result asynchronously to the ingest webhook
(``POST /api/videos/ingest``); this module only starts the collection.
"""

from __future__ import annotations

import logging

import httpx

from video_qa.config import Settings, settings

logger = logging.getLogger(__name__)


def trigger_scrape(url: str, config: Settings = settings) -> str | None:
    """Ask the scraper to collect *url*.

    Returns:
        The scraper's snapshot ID, when it reports one.

    Raises:
        ValueError: If scraping is not configured.
        httpx.HTTPStatusError: If the scraper rejects the request.
    """
    if not config.brightdata_api_key or not config.brightdata_dataset_id:
        raise ValueError("Scraping is not configured (set BRIGHTDATA_API_KEY and BRIGHTDATA_DATASET_ID).")

    params = {"dataset_id": config.brightdata_dataset_id, "include_errors": "true"}
    if config.brightdata_webhook_url:
        params["endpoint"] = config.brightdata_webhook_url
        params["format"] = "json"

    r = httpx.post(
        config.brightdata_trigger_url,
        params=params,
        headers={"Authorization": f"Bearer {config.brightdata_api_key}"},
        json=[{"url": url}],
        timeout=30.0,
    )
    r.raise_for_status()
    snapshot_id = r.json().get("snapshot_id")
    logger.info("Triggered scrape for %s (snapshot %s)", url, snapshot_id)
    return snapshot_id  # type: ignore[no-any-return]
