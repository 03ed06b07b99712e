"""
src/suggestion/deepseek_client.py
External suggestion service backed by the DeepSeek chat-completions API.
Every failure surfaces as SuggestionServiceError; the pipeline treats that
as zero suggestions.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

import requests

from src.models.statistical.distribution import round_half_up
from src.models.statistical.frequency_analyzer import classify, frequency, sort_by_frequency
from src.models.types import DrawRecord, MethodResult, PredictionTuple
from src.utils.config import (
    DEEPSEEK_API_KEY,
    DEEPSEEK_API_URL,
    DEEPSEEK_MODEL,
    LOTTERY_LABEL,
    SUGGESTION_TIMEOUT,
    get_engine_config,
)
from src.utils.errors import SuggestionServiceError
from src.utils.logger import get_logger

log = get_logger("suggestion.deepseek")

DEFAULT_CONFIDENCE = 80
MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100
DEFAULT_STRATEGY = "suggested"

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass
class SuggestionContext:
    """Everything the suggestion service sees about the current run."""

    method_results: list[MethodResult]
    last_record: DrawRecord
    hot_primary: list[int]
    cold_primary: list[int]
    hot_secondary: list[int]
    sum_mean: int
    sum_low: int
    sum_high: int
    month: int
    target_issue: str = "next"
    target_date: str = "TBD"

    @property
    def sum_range(self) -> str:
        return f"{self.sum_low}~{self.sum_high} (mean {self.sum_mean})"


class SuggestionService(Protocol):
    def suggest(self, context: SuggestionContext) -> list[PredictionTuple]:
        ...


def build_context(
    records: list[DrawRecord],
    method_results: list[MethodResult],
    now: datetime,
    config: dict[str, Any] | None = None,
) -> SuggestionContext:
    engine_cfg = config if config is not None else get_engine_config()
    cfg = engine_cfg.get("suggestion_context", {})
    strategy = engine_cfg.get("strategy", {})
    window = cfg.get("window", 50)
    sum_window = cfg.get("sum_window", 100)
    margin = cfg.get("sum_margin", 20)

    recent = records[-window:]
    tiers = classify(
        frequency(recent, "primary"),
        strategy.get("hot_threshold", 10),
        strategy.get("cold_threshold", 4),
    )
    hot_secondary = sort_by_frequency(frequency(recent, "secondary"))[: cfg.get("hot_secondary_top_n", 5)]

    sums = [r.sum for r in records[-sum_window:]]
    mean = round_half_up(sum(sums) / len(sums)) if sums else 0

    return SuggestionContext(
        method_results=method_results,
        last_record=records[-1],
        hot_primary=tiers.hot,
        cold_primary=tiers.cold,
        hot_secondary=hot_secondary,
        sum_mean=mean,
        sum_low=mean - margin,
        sum_high=mean + margin,
        month=now.month,
    )


def build_prompt(context: SuggestionContext) -> str:
    methods_text = "\n\n".join(
        f"[{m.name}]\nPrimary: {', '.join(map(str, m.primary))}\n"
        f"Secondary: {', '.join(map(str, m.secondary_candidates))}\n{m.rationale}"
        for m in context.method_results
    )
    last = context.last_record
    return (
        f"You are a {LOTTERY_LABEL} data analyst. Generate 10 prediction tuples.\n\n"
        f"## Current\n"
        f"- Target issue: {context.target_issue}\n"
        f"- Draw date: {context.target_date}\n"
        f"- Month: {context.month}\n\n"
        f"## Previous draw\n"
        f"- Issue: {last.issue}\n"
        f"- Primary: {', '.join(map(str, last.primary))}\n"
        f"- Secondary: {last.secondary}\n\n"
        f"## Method outputs\n{methods_text}\n\n"
        f"## Statistics\n"
        f"- Hot primary (>=10 hits in 50 draws): {', '.join(map(str, context.hot_primary))}\n"
        f"- Cold primary (<=4 hits in 50 draws): {', '.join(map(str, context.cold_primary))}\n"
        f"- Hot secondary: {', '.join(map(str, context.hot_secondary))}\n"
        f"- Common sum range: {context.sum_range}\n\n"
        f"## Rules\n"
        f"- Each tuple: 6 distinct primary numbers in 1-33 ascending, 1 secondary number in 1-16\n"
        f"- Tuples 1-3 consensus (confidence 85-95), 4-6 balanced (75-85), "
        f"7-8 trend (65-75), 9-10 exploratory (55-65)\n"
        f"- No two tuples identical\n\n"
        f"Output JSON only:\n"
        f'{{"predictions":[{{"primary":[1,5,12,18,25,33],"secondary":7,"confidence":92,"strategy":"consensus"}}]}}'
    )


def extract_json(content: str) -> Any:
    """Parse the reply, unwrapping a markdown code fence if present."""
    match = _FENCE_RE.search(content)
    text = match.group(1).strip() if match else content.strip()
    return json.loads(text)


def _whole_number(value: Any) -> int:
    """Integer value of `value`; bools and fractional numbers are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"boolean is not a number: {value}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not a whole number: {value}")
        return int(value)
    return int(value)


def parse_predictions(payload: Any) -> list[PredictionTuple]:
    """
    Convert `{"predictions": [...]}` into tuples, skipping malformed items.
    Numbers must be whole; confidence is clamped to 0..100.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("predictions"), list):
        raise SuggestionServiceError("Response has no 'predictions' list")

    parsed: list[PredictionTuple] = []
    for item in payload["predictions"]:
        if not isinstance(item, dict):
            continue
        primary = item.get("primary", item.get("red"))
        secondary = item.get("secondary", item.get("blue"))
        confidence = item.get("confidence")
        try:
            confidence = DEFAULT_CONFIDENCE if confidence is None else _whole_number(confidence)
            parsed.append(
                PredictionTuple(
                    primary=sorted(_whole_number(n) for n in primary),
                    secondary=_whole_number(secondary),
                    confidence=min(max(confidence, MIN_CONFIDENCE), MAX_CONFIDENCE),
                    strategy=str(item.get("strategy") or DEFAULT_STRATEGY),
                )
            )
        except (TypeError, ValueError):
            log.debug(f"[SUGGEST] skipping malformed item: {item}")
    return parsed


class DeepSeekSuggestionService:
    """Chat-completion client. One POST per call, bounded by `timeout`."""

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.api_key = DEEPSEEK_API_KEY if api_key is None else api_key
        self.api_url = api_url or DEEPSEEK_API_URL
        self.model = model or DEEPSEEK_MODEL
        self.timeout = SUGGESTION_TIMEOUT if timeout is None else timeout
        self.session = session or requests.Session()

    def _request(self, prompt: str) -> str:
        if not self.api_key:
            raise SuggestionServiceError("DEEPSEEK_API_KEY is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": "You are a lottery data analyst. Reply with JSON prediction results only.",
                },
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.8,
            "max_tokens": 2000,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            resp = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise SuggestionServiceError(f"DeepSeek request failed: {exc}") from exc

        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise SuggestionServiceError(f"Unexpected DeepSeek response shape: {exc}") from exc

    def suggest(self, context: SuggestionContext) -> list[PredictionTuple]:
        log.info(f"[SUGGEST] Requesting suggestions from {self.model}")
        content = self._request(build_prompt(context))
        try:
            payload = extract_json(content)
        except ValueError as exc:
            raise SuggestionServiceError(f"Could not parse suggestion JSON: {exc}") from exc

        predictions = parse_predictions(payload)
        log.info(f"[SUGGEST] Received {len(predictions)} suggestion(s)")
        return predictions
