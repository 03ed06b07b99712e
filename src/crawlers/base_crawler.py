"""
src/crawlers/base_crawler.py
Abstract base crawler with retry logic and validation.
"""
from __future__ import annotations

import random
import time
from abc import ABC, abstractmethod

import requests

from src.models.types import DrawRecord
from src.utils.config import PRIMARY_PICK, PRIMARY_RANGE, SECONDARY_RANGE
from src.utils.logger import get_logger

log = get_logger("crawler")


class BaseCrawler(ABC):
    """Abstract base class for draw-feed crawlers."""

    def __init__(self, max_retries: int = 3, timeout: int = 30):
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": (
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
                "AppleWebKit/537.36 (KHTML, like Gecko) "
                "Chrome/121.0.0.0 Safari/537.36"
            ),
            "Accept-Language": "zh-CN,zh;q=0.9,en-US;q=0.8,en;q=0.7",
        })

    # ── HTTP helpers ──────────────────────────────────────────────

    def _get(self, url: str, params: dict | None = None) -> requests.Response | None:
        """GET with retry + exponential backoff."""
        for attempt in range(1, self.max_retries + 1):
            try:
                log.debug(f"GET {url} params={params} (attempt {attempt})")
                resp = self.session.get(url, params=params, timeout=self.timeout)
                resp.raise_for_status()
                return resp
            except requests.RequestException as exc:
                log.warning(f"Request failed (attempt {attempt}/{self.max_retries}): {exc}")
                if attempt < self.max_retries:
                    time.sleep(2 ** attempt + random.uniform(0, 1))
        log.error(f"All {self.max_retries} attempts failed for {url}")
        return None

    # ── Validation ────────────────────────────────────────────────

    def validate_draw(self, record: DrawRecord) -> bool:
        """Validate a draw record before inserting into DB."""
        nums = record.primary
        lo, hi = PRIMARY_RANGE
        s_lo, s_hi = SECONDARY_RANGE

        if len(nums) != PRIMARY_PICK:
            log.error(f"[{record.issue}] Expected {PRIMARY_PICK} numbers, got {len(nums)}: {nums}")
            return False
        if len(set(nums)) != PRIMARY_PICK:
            log.error(f"[{record.issue}] Duplicate numbers: {nums}")
            return False
        if not all(lo <= n <= hi for n in nums):
            log.error(f"[{record.issue}] Numbers out of range [{lo},{hi}]: {nums}")
            return False
        if list(nums) != sorted(nums):
            log.error(f"[{record.issue}] Numbers not ascending: {nums}")
            return False
        if not s_lo <= record.secondary <= s_hi:
            log.error(f"[{record.issue}] Secondary out of range [{s_lo},{s_hi}]: {record.secondary}")
            return False

        return True

    # ── Abstract interface ────────────────────────────────────────

    @abstractmethod
    def fetch_all(self) -> list[DrawRecord]:
        """Fetch the full draw history, ascending by issue."""
        ...

    @abstractmethod
    def fetch_latest(self, count: int = 1) -> list[DrawRecord]:
        """Fetch the `count` most recent draws, ascending by issue."""
        ...
