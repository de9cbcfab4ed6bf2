import logging
import re
from typing import Optional

from sqlalchemy.orm import Session

from rocketfist.config import config
from rocketfist.crud import payment as payment_crud
from rocketfist.errors.base_errors import InvalidInputError
from rocketfist.schemas.stats import CurrencyRevenue, RevenueStatsResponse
from rocketfist.services.gym import require_gym
from rocketfist.utils.timeutils import local_day_window, parse_date_range

logger = logging.getLogger(__name__)

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")


class RevenueService:
    def __init__(self, db: Session):
        self.db = db

    def get_revenue_stats(
        self,
        gym_id: str,
        date_from: str,
        date_to: str,
        currency: Optional[str] = None,
    ) -> RevenueStatsResponse:
        """
        Sums succeeded payments paid within the full local days [from, to].

        Totals are grouped by currency. The headline figure is for the requested
        currency, or the only currency present, or zero in DEFAULT_CURRENCY when
        nothing matched. Several currencies with no currency requested is an
        input error, since they cannot be added together.
        """
        start_d, end_d = parse_date_range(date_from, date_to, "from", "to")
        if currency is not None:
            currency = currency.strip().upper()
            if not CURRENCY_PATTERN.match(currency):
                raise InvalidInputError("currency must be a three-letter ISO code")

        gym = require_gym(self.db, gym_id)
        lower, upper = local_day_window(start_d, end_d, gym.timezone)

        totals = payment_crud.sum_succeeded_by_currency(self.db, gym.id, lower, upper, currency)
        by_currency = [CurrencyRevenue(currency=c, total_revenue_cents=total) for c, total in totals]
        logger.debug(f"Revenue for gym {gym.id} {start_d}..{end_d}: {totals}")

        if currency is not None:
            headline_currency = currency
            headline_total = sum(total for _, total in totals)
        elif len(totals) == 1:
            headline_currency, headline_total = totals[0]
        elif not totals:
            headline_currency, headline_total = config.DEFAULT_CURRENCY, 0
        else:
            raise InvalidInputError(
                "Payments span several currencies ({}); pass the currency parameter".format(
                    ", ".join(c for c, _ in totals)
                )
            )

        return RevenueStatsResponse(
            total_revenue_cents=headline_total,
            currency=headline_currency,
            by_currency=by_currency,
        )
