"""
BeautifulSoup parsing of merchant coupon pages.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

STORE_HEADER_ID = "storeHeader"
MARKER_SELECTOR = "li.rel-merch"
STORE_NAME_REGEX = re.compile(r"^(.*?)(Promo Codes|Discount Codes|Coupons|$)")
DIGIT_REGEX = re.compile(r"\d")


@dataclass(frozen=True)
class MerchantPageAttributes:
    """
    Attributes read from one merchant page.
    """

    store_name: str | None
    has_marker: bool
    data_id: str | None


def extract_store_name(header_text: str) -> str | None:
    """
    Store name is the header text before its "Promo Codes"-style suffix,
    or before the first digit when no suffix is present.
    """

    text = header_text.strip()
    match = STORE_NAME_REGEX.match(text)
    if match is not None and match.group(1):
        return match.group(1).strip() or None
    return DIGIT_REGEX.split(text, maxsplit=1)[0].strip() or None


def parse_merchant_page(html: str) -> MerchantPageAttributes:
    soup = BeautifulSoup(html, "html.parser")

    store_name: str | None = None
    header = soup.find(id=STORE_HEADER_ID)
    if header is not None:
        store_name = extract_store_name(header.get_text())

    markers = soup.select(MARKER_SELECTOR)
    data_id: str | None = None
    if markers:
        raw_id = markers[0].get("data-id")
        data_id = str(raw_id) if raw_id else None

    return MerchantPageAttributes(
        store_name=store_name,
        has_marker=bool(markers),
        data_id=data_id,
    )
