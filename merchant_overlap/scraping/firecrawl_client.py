"""
Minimal Firecrawl batch scrape client.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import requests

from merchant_overlap.config.models import FirecrawlSettings
from merchant_overlap.logging_utils import log_event
from merchant_overlap.scraping.errors import FirecrawlError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
BATCH_SCRAPE_PATH = "/v1/batch/scrape"


@dataclass(frozen=True)
class ScrapedPage:
    """
    One page returned by a batch scrape.
    """

    source_url: str | None
    html: str | None = None
    links: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ScrapedPage":
        metadata = payload.get("metadata") or {}
        links = payload.get("links") or []
        return cls(
            source_url=metadata.get("sourceURL") or metadata.get("url"),
            html=payload.get("html") or payload.get("rawHtml"),
            links=[link for link in links if isinstance(link, str)],
        )


class FirecrawlClient:
    """
    Submits batch scrape jobs and polls them to completion.
    """

    def __init__(
        self,
        *,
        settings: FirecrawlSettings,
        session: requests.Session | None = None,
    ) -> None:
        if not settings.api_key:
            raise FirecrawlError("FIRECRAWL_API_KEY is not set.")
        self.settings = settings
        self.session = session or requests.Session()
        self.request_headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        }

    def batch_scrape(self, urls: Sequence[str], *, formats: Sequence[str]) -> list[ScrapedPage]:
        """
        Scrape `urls` in one job and return every page the job produced.
        """

        if not urls:
            return []

        started = self._request_with_retry(
            "POST",
            f"{self.settings.api_url}{BATCH_SCRAPE_PATH}",
            payload={"urls": list(urls), "formats": list(formats)},
        )
        if not started.get("success") or not started.get("id"):
            raise FirecrawlError(f"Batch scrape was not accepted: {started}")

        job_id = str(started["id"])
        log_event(
            logger,
            logging.INFO,
            "batch_scrape_started",
            job_id=job_id,
            urls=len(urls),
            formats=list(formats),
        )
        pages = self._collect_results(job_id)
        log_event(
            logger,
            logging.INFO,
            "batch_scrape_completed",
            job_id=job_id,
            pages=len(pages),
        )
        return pages

    def _collect_results(self, job_id: str) -> list[ScrapedPage]:
        status_url = f"{self.settings.api_url}{BATCH_SCRAPE_PATH}/{job_id}"
        deadline = time.monotonic() + self.settings.poll_timeout_seconds

        while True:
            status_payload = self._request_with_retry("GET", status_url)
            status = status_payload.get("status")
            if status == "completed":
                break
            if status in {"failed", "cancelled"}:
                raise FirecrawlError(f"Batch scrape job {job_id} ended with status={status}")
            if time.monotonic() >= deadline:
                raise FirecrawlError(f"Batch scrape job {job_id} did not finish in time")
            time.sleep(self.settings.poll_interval_seconds)

        pages = [ScrapedPage.from_payload(item) for item in status_payload.get("data") or []]
        next_url = status_payload.get("next")
        while next_url:
            page_payload = self._request_with_retry("GET", str(next_url))
            pages.extend(ScrapedPage.from_payload(item) for item in page_payload.get("data") or [])
            next_url = page_payload.get("next")
        return pages

    def _request_with_retry(
        self,
        method: str,
        url: str,
        *,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        last_error: Exception | None = None

        for attempt in range(self.settings.max_retries + 1):
            try:
                response = self.session.request(
                    method,
                    url,
                    json=payload,
                    headers=self.request_headers,
                    timeout=self.settings.timeout_seconds,
                )
                if response.status_code in RETRYABLE_STATUS_CODES:
                    raise requests.HTTPError(
                        f"Retryable status={response.status_code}",
                        response=response,
                    )
                response.raise_for_status()
                return response.json()
            except (requests.Timeout, requests.ConnectionError, requests.HTTPError) as exc:
                last_error = exc
                if isinstance(exc, requests.HTTPError):
                    status_code = exc.response.status_code if exc.response is not None else None
                    if status_code not in RETRYABLE_STATUS_CODES:
                        raise FirecrawlError(f"{method} {url} failed: {exc}") from exc
            except ValueError as exc:
                raise FirecrawlError(f"{method} {url} returned invalid JSON: {exc}") from exc

            if attempt >= self.settings.max_retries:
                break

            backoff_seconds = self.settings.backoff_initial_seconds * (
                self.settings.backoff_multiplier**attempt
            )
            log_event(
                logger,
                logging.WARNING,
                "firecrawl_request_retry",
                method=method,
                url=url,
                attempt=attempt + 1,
                backoff_seconds=backoff_seconds,
                error=str(last_error),
            )
            time.sleep(backoff_seconds)

        raise FirecrawlError(f"Failed to call {url} after retries: {last_error}")
