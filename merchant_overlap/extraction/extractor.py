"""
Catalog URL to merchant domain extraction.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from urllib.parse import urlsplit

from merchant_overlap.domain.overlap import (
    REJECT_MALFORMED_URL,
    REJECT_NO_DOMAIN_FOUND,
    Domain,
    ExtractionOutcome,
    Rejected,
)
from merchant_overlap.extraction.rules import (
    DEFAULT_EXTRACTION_RULES,
    DEFAULT_RULE_CHAIN,
    ExtractionRules,
    Rule,
    SplitUrl,
)
from merchant_overlap.logging_utils import log_event

logger = logging.getLogger(__name__)


class DomainExtractor:
    """
    Applies the ordered rule chain to a URL; the first decisive rule wins.
    """

    def __init__(
        self,
        rules: ExtractionRules | None = None,
        *,
        rule_chain: Sequence[Rule] = DEFAULT_RULE_CHAIN,
    ) -> None:
        self.rules = rules or DEFAULT_EXTRACTION_RULES
        self.rule_chain = tuple(rule_chain)

    def extract(self, url: str) -> ExtractionOutcome:
        """
        Return the merchant domain encoded in `url`, or why there is none.
        """

        target = self._split(url)
        if target is None:
            log_event(
                logger,
                logging.WARNING,
                "url_malformed",
                url=url,
            )
            return Rejected(url=url, reason=REJECT_MALFORMED_URL)

        for rule in self.rule_chain:
            outcome = rule(target, self.rules)
            if outcome is not None:
                return outcome
        return Rejected(url=url, reason=REJECT_NO_DOMAIN_FOUND)

    def extract_name(self, url: str) -> str | None:
        outcome = self.extract(url)
        if isinstance(outcome, Domain):
            return outcome.name
        return None

    @staticmethod
    def _split(url: str) -> SplitUrl | None:
        if not isinstance(url, str) or not url.strip():
            return None
        try:
            parts = urlsplit(url.strip())
            hostname = parts.hostname or ""
            # Accessing .port validates the netloc.
            parts.port
        except ValueError:
            return None
        if not parts.scheme or not hostname:
            return None

        segments = tuple(segment for segment in parts.path.split("/") if segment)
        return SplitUrl(url=url, hostname=hostname, segments=segments)
