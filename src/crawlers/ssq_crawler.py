"""
src/crawlers/ssq_crawler.py
Crawler for the Double Color Ball plain-text history feed.
Draw schedule: Tuesday, Thursday, Sunday at 21:15 CST.
Numbers: 6 from 1–33 plus 1 secondary from 1–16.
"""
from __future__ import annotations

from src.crawlers.base_crawler import BaseCrawler
from src.crawlers.feed_parser import parse_feed
from src.models.types import DrawRecord
from src.utils.config import FEED_URL
from src.utils.logger import get_logger

log = get_logger("crawler.ssq")


class SsqCrawler(BaseCrawler):
    def __init__(self, feed_url: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.feed_url = feed_url or FEED_URL

    def fetch_all(self) -> list[DrawRecord]:
        resp = self._get(self.feed_url)
        if resp is None:
            return []
        records = [r for r in parse_feed(resp.text) if self.validate_draw(r)]
        log.info(f"Fetched {len(records)} draws from {self.feed_url}")
        return records

    def fetch_latest(self, count: int = 1) -> list[DrawRecord]:
        records = self.fetch_all()
        return records[-count:] if count > 0 else []
