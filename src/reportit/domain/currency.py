"""Currency normalization for reports."""

from decimal import Decimal
from typing import Iterable, Optional

from reportit.database.base import Database
from reportit.domain.entities import ExchangeRate
from reportit.domain.expansion import ExpandedUnit
from reportit.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CURRENCY = "USD"

RateMap = dict[tuple[str, str], Decimal]


def build_rate_map(rates: Iterable[ExchangeRate]) -> RateMap:
    """Index exchange rates by (from_currency, to_currency)."""
    return {
        (rate.from_currency, rate.to_currency): Decimal(str(rate.rate))
        for rate in rates
    }


def has_rate(from_currency: str, to_currency: str, rate_map: RateMap) -> bool:
    """Whether a usable direct or inverse rate exists. Zero rates are unusable."""
    return bool(
        rate_map.get((from_currency, to_currency))
        or rate_map.get((to_currency, from_currency))
    )


def convert_amount(
    amount: Decimal, from_currency: str, to_currency: str, rate_map: RateMap
) -> Decimal:
    """Convert an amount between currencies.

    Uses the direct rate if present, otherwise divides by the inverse pair's
    rate. Amounts pass through unchanged when currencies match, when the
    source currency is unknown, or when no usable rate exists for the pair.
    """
    if not from_currency or from_currency == to_currency:
        return amount

    direct = rate_map.get((from_currency, to_currency))
    if direct:
        return amount * direct

    inverse = rate_map.get((to_currency, from_currency))
    if inverse:
        return amount / inverse

    return amount


class CurrencyNormalizer:
    """Converts expanded units into one target currency."""

    def __init__(self, target_currency: str, rate_map: Optional[RateMap] = None):
        """Initialize normalizer.

        Args:
            target_currency: Reporting currency
            rate_map: Exchange rates keyed by currency pair
        """
        self.target_currency = target_currency
        self.rate_map = rate_map or {}
        self._missing_pairs: set[tuple[str, str]] = set()

    def convert(self, amount: Decimal, currency_code: str) -> Decimal:
        """Convert an amount from ``currency_code`` into the target currency."""
        if (
            currency_code
            and currency_code != self.target_currency
            and not has_rate(currency_code, self.target_currency, self.rate_map)
        ):
            pair = (currency_code, self.target_currency)
            if pair not in self._missing_pairs:
                self._missing_pairs.add(pair)
                logger.warning(
                    "No exchange rate for %s->%s, using amounts unconverted",
                    currency_code,
                    self.target_currency,
                )
        return convert_amount(amount, currency_code, self.target_currency, self.rate_map)

    def normalize(self, unit: ExpandedUnit) -> Decimal:
        """Converted absolute amount of a unit."""
        return abs(self.convert(unit.amount, unit.currency_code))


class ReportCurrencyService:
    """Looks up the reporting currency and current exchange rates."""

    def __init__(self, db: Database):
        """Initialize currency service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_default_currency(self, owner_id: str) -> str:
        """Owner's preferred reporting currency, USD if unset."""
        currency = self.db.get_default_currency(owner_id)
        return currency or DEFAULT_CURRENCY

    def build_rate_map(self) -> RateMap:
        """Rate map from the latest known exchange rates."""
        return build_rate_map(self.db.get_latest_exchange_rates())

    def normalizer_for(
        self, owner_id: str, units: Iterable[ExpandedUnit]
    ) -> CurrencyNormalizer:
        """Build a normalizer, fetching rates only if some unit needs them."""
        target = self.get_default_currency(owner_id)
        needs_rates = any(
            unit.currency_code and unit.currency_code != target for unit in units
        )
        rate_map = self.build_rate_map() if needs_rates else {}
        logger.debug(
            "Reporting currency %s for owner %s (rates loaded: %s)",
            target,
            owner_id,
            needs_rates,
        )
        return CurrencyNormalizer(target, rate_map)
