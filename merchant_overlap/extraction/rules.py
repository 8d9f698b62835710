"""
Ordered domain extraction rules.

Each rule inspects a split catalog URL and returns a `Domain`, a `Rejected`
outcome, or `None` to let the next rule decide. Site-specific carve-outs run
before the generic path scans; the hostname fallback runs last.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property

from merchant_overlap.domain.overlap import (
    REJECT_AGGREGATOR_COUPONS_NON_DOMAIN,
    REJECT_AGGREGATOR_NON_DOMAIN,
    Domain,
    ExtractionOutcome,
    Rejected,
)


@dataclass(frozen=True)
class ExtractionRules:
    """
    Hostnames and path vocabulary driving the extraction cascade.
    """

    primary_aggregator_host: str = "capitaloneshopping.com"
    primary_aggregator_marker: str = "s"
    primary_aggregator_skip_tokens: tuple[str, ...] = ("all",)
    coupon_aggregator_host: str = "goodsearch.com"
    coupon_aggregator_marker: str = "coupons"
    marker_segments: tuple[str, ...] = (
        "promo-codes",
        "store",
        "coupons",
        "site",
        "coupon-codes",
        "s",
        "view",
    )
    domain_pattern: str = r"^[a-zA-Z0-9][-a-zA-Z0-9]*(\.[a-zA-Z0-9][-a-zA-Z0-9]*)+$"

    @cached_property
    def compiled_domain_pattern(self) -> re.Pattern[str]:
        return re.compile(self.domain_pattern)


DEFAULT_EXTRACTION_RULES = ExtractionRules()


@dataclass(frozen=True)
class SplitUrl:
    """
    The parts of a catalog URL the rules look at.
    """

    url: str
    hostname: str
    segments: tuple[str, ...]


Rule = Callable[[SplitUrl, ExtractionRules], ExtractionOutcome | None]


def _same_token(token: str) -> Domain:
    return Domain(full=token, name=token)


def primary_aggregator_rule(target: SplitUrl, rules: ExtractionRules) -> ExtractionOutcome | None:
    """
    `/s/<segment>` on the primary aggregator: the segment is the domain when dotted.
    """

    if rules.primary_aggregator_host not in target.hostname:
        return None
    segments = target.segments
    if len(segments) < 2 or segments[0] != rules.primary_aggregator_marker:
        return None

    candidate = segments[1]
    if candidate in rules.primary_aggregator_skip_tokens or "." not in candidate:
        return Rejected(url=target.url, reason=REJECT_AGGREGATOR_NON_DOMAIN)
    return _same_token(candidate)


def embedded_domain_rule(target: SplitUrl, rules: ExtractionRules) -> ExtractionOutcome | None:
    """
    First path segment shaped like a hostname.
    """

    pattern = rules.compiled_domain_pattern
    for segment in target.segments:
        if pattern.fullmatch(segment):
            return _same_token(segment)
    return None


def marker_segment_rule(target: SplitUrl, rules: ExtractionRules) -> ExtractionOutcome | None:
    """
    Dotted segment that directly follows a known marker word.

    Every marker in the path is tried; a marker followed by a dotless
    segment does not stop the scan.
    """

    segments = target.segments
    markers = set(rules.marker_segments)
    for index in range(len(segments) - 1):
        if segments[index] not in markers:
            continue
        following = segments[index + 1]
        if "." in following:
            return _same_token(following)
    return None


def coupon_aggregator_rule(target: SplitUrl, rules: ExtractionRules) -> ExtractionOutcome | None:
    """
    Stop `/coupons/<slug>` pages on the coupon aggregator from reaching the
    hostname fallback.
    """

    if rules.coupon_aggregator_host not in target.hostname:
        return None
    segments = target.segments
    if len(segments) < 2 or rules.coupon_aggregator_marker not in segments:
        return None

    marker_index = segments.index(rules.coupon_aggregator_marker)
    if marker_index + 1 >= len(segments):
        return None
    if "." not in segments[marker_index + 1]:
        return Rejected(url=target.url, reason=REJECT_AGGREGATOR_COUPONS_NON_DOMAIN)
    return None


def hostname_rule(target: SplitUrl, rules: ExtractionRules) -> ExtractionOutcome | None:
    """
    Root URLs name the merchant through their own hostname.
    """

    if target.segments or "." not in target.hostname:
        return None
    return Domain(full=target.hostname, name=target.hostname.removeprefix("www."))


DEFAULT_RULE_CHAIN: tuple[Rule, ...] = (
    primary_aggregator_rule,
    embedded_domain_rule,
    marker_segment_rule,
    coupon_aggregator_rule,
    hostname_rule,
)
