"""Display helpers: retailer links and rupiah formatting."""

from __future__ import annotations

from urllib.parse import quote

from .schemas import Marketplace, MarketplaceLinks

SEARCH_URLS = {
    "shopee": "https://shopee.co.id/search?keyword={q}",
    "tokopedia": "https://www.tokopedia.com/search?q={q}",
    "lazada": "https://www.lazada.co.id/catalog/?q={q}",
}


def marketplace_url(
    name: str,
    links: MarketplaceLinks | None,
    platform: Marketplace,
) -> str:
    """Explicit retailer link when set, otherwise that retailer's search page for ``name``."""
    explicit = getattr(links, platform, None) if links is not None else None
    if explicit:
        return explicit
    return SEARCH_URLS[platform].format(q=quote(name))


def format_idr(amount: float) -> str:
    """``6800000`` -> ``"Rp 6.800.000"`` (no decimals, dot as thousands separator)."""
    rounded = int(round(amount))
    sign = "-" if rounded < 0 else ""
    return f"{sign}Rp {abs(rounded):,}".replace(",", ".")
