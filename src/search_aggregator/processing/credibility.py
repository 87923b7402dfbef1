"""
Credibility scoring.

Heuristic 0-100 trust estimate for web results, derived from the domain,
transport scheme and publication date. Pure and deterministic for a given
reference time.
"""

from dataclasses import replace
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

from dateutil import parser as date_parser

from ..types import ResultRecord

BASE_SCORE = 50

ACADEMIC_SUFFIX = ".edu"
ACADEMIC_BONUS = 25

GOVERNMENT_SUFFIX = ".gov"
GOVERNMENT_BONUS = 30

TRUSTED_NEWS_DOMAINS = (
    "nytimes.com",
    "bbc.com",
    "reuters.com",
    "apnews.com",
    "theguardian.com",
    "wsj.com",
)
TRUSTED_NEWS_BONUS = 20

ENCYCLOPEDIA_DOMAIN = "wikipedia.org"
ENCYCLOPEDIA_BONUS = 15

SECURE_TRANSPORT_BONUS = 5

RECENT_BONUS = 10  # published less than 30 days ago
FAIRLY_RECENT_BONUS = 5  # published less than 90 days ago


def _matches_domain(domain: str, site: str) -> bool:
    return domain == site or domain.endswith("." + site)


def _parse_isoformat(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def _parse_email_datetime(text: str) -> datetime | None:
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return None


def _parse_free_form(text: str) -> datetime | None:
    try:
        return date_parser.parse(text)
    except (ValueError, OverflowError):
        return None


def parse_published_date(value: str | None) -> datetime | None:
    """
    Parse a publication date, returning None if it is unusable.

    Accepts ISO-8601, RFC-2822 (e.g. "Mon, 12 Oct 2026 10:00:00 GMT") and
    long-form dates (e.g. "October 12, 2026"). Naive values are read as UTC.
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    for parse in (_parse_isoformat, _parse_email_datetime, _parse_free_form):
        published = parse(text)
        if published is not None:
            break
    else:
        return None
    if published.tzinfo is None:
        return published.replace(tzinfo=timezone.utc)
    return published


def calculate_credibility_score(
    result: ResultRecord, now: datetime | None = None
) -> int:
    """
    Score a web result.

    Args:
        result: The result to score
        now: Reference time for the recency bonus (default: current UTC time)

    Returns:
        Integer score clamped to [0, 100]
    """
    score = BASE_SCORE
    domain = result.display_link.lower().strip()

    if domain.endswith(ACADEMIC_SUFFIX):
        score += ACADEMIC_BONUS

    if domain.endswith(GOVERNMENT_SUFFIX):
        score += GOVERNMENT_BONUS

    if any(_matches_domain(domain, site) for site in TRUSTED_NEWS_DOMAINS):
        score += TRUSTED_NEWS_BONUS

    if _matches_domain(domain, ENCYCLOPEDIA_DOMAIN):
        score += ENCYCLOPEDIA_BONUS

    if result.link.startswith("https://"):
        score += SECURE_TRANSPORT_BONUS

    published = parse_published_date(result.published_date)
    if published is not None:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        days_since = (now - published).total_seconds() / 86400
        if days_since < 30:
            score += RECENT_BONUS
        elif days_since < 90:
            score += FAIRLY_RECENT_BONUS

    return min(100, max(0, score))


def score_results(
    results: list[ResultRecord], now: datetime | None = None
) -> list[ResultRecord]:
    """Return scored copies of the results, in the same order."""
    now = now or datetime.now(timezone.utc)
    return [
        replace(result, credibility_score=calculate_credibility_score(result, now))
        for result in results
    ]
