# transactions/currency.py
"""
FX rate lookup.

Rates come from a Frankfurter-compatible HTTP API configured with
FX_RATES_API_URL and are cached per currency pair and day.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import requests
from django.conf import settings
from django.core.cache import cache

from transactions.exceptions import FxRateUnavailable

logger = logging.getLogger(__name__)


def _rate_day(at) -> str:
    if at is None:
        return "latest"
    if isinstance(at, datetime):
        return at.date().isoformat()
    if isinstance(at, date):
        return at.isoformat()
    raise TypeError(f"Unsupported date for FX rate lookup: {at!r}")


def get_fx_rate(from_currency: str, to_currency: str, at=None) -> Decimal:
    """
    Rate to convert `from_currency` into `to_currency`.

    Args:
        from_currency: ISO 4217 source currency
        to_currency: ISO 4217 target currency
        at: date/datetime of the rate; None for the latest published rate

    Raises:
        FxRateUnavailable: If the provider fails or returns no usable rate
    """
    if from_currency == to_currency:
        return Decimal(1)

    day = _rate_day(at)
    cache_key = f"fx_rate:{from_currency}:{to_currency}:{day}"
    cached = cache.get(cache_key)
    if cached is not None:
        return Decimal(cached)

    url = f"{settings.FX_RATES_API_URL.rstrip('/')}/{day}"
    params = {"from": from_currency, "to": to_currency}
    logger.debug("Fetching FX rate %s -> %s (%s)", from_currency, to_currency, day)

    try:
        response = requests.get(url, params=params, timeout=settings.FX_RATES_TIMEOUT)
        response.raise_for_status()
        payload = response.json()
        rate = Decimal(str(payload["rates"][to_currency]))
    except requests.RequestException as e:
        logger.warning("FX rate request failed for %s -> %s: %s", from_currency, to_currency, e)
        raise FxRateUnavailable(from_currency, to_currency, str(e)) from e
    except (ValueError, KeyError, TypeError, InvalidOperation) as e:
        logger.warning("Malformed FX rate response for %s -> %s", from_currency, to_currency)
        raise FxRateUnavailable(from_currency, to_currency, "malformed response") from e

    if not rate.is_finite() or rate <= 0:
        raise FxRateUnavailable(from_currency, to_currency, f"invalid rate {rate}")

    cache.set(cache_key, str(rate), settings.FX_RATES_CACHE_TIMEOUT)
    return rate
