"""Order scorer: total, contact name, order date, then status."""

import logging
from datetime import timezone
from decimal import Decimal

from record_dedupe.models import Order
from record_dedupe.scoring.base import FieldTally, Similarity, amount_credit, fuzzy_credit
from record_dedupe.scoring.similarity import similarity
from record_dedupe.values import is_blank, to_datetime, to_decimal

logger = logging.getLogger(__name__)

TOTAL_EXACT_CREDIT = 100
TOTAL_WITHIN_CENT_CREDIT = 95
TOTAL_CLOSE_PERCENT = Decimal("5")
TOTAL_CLOSE_CREDIT = 85
TOTAL_NEAR_PERCENT = Decimal("10")
TOTAL_NEAR_CREDIT = 70

CONTACT_EXACT_CREDIT = 100
CONTACT_VERY_SIMILAR_MIN = 85
CONTACT_VERY_SIMILAR_FACTOR = 0.9
CONTACT_SIMILAR_MIN = 70
CONTACT_SIMILAR_FACTOR = 0.7

# (maximum days apart, credit, reason)
DATE_TIERS = (
    (0, 80, "Same order date"),
    (1, 70, "Order dates within 1 day"),
    (7, 60, "Order dates within 1 week"),
    (30, 40, "Order dates within 30 days"),
)
DATE_EXACT_CREDIT = DATE_TIERS[0][1]

STATUS_EXACT_CREDIT = 60
STATUS_SIMILAR_MIN = 80
STATUS_SIMILAR_FACTOR = 0.5


class OrderScorer:
    """Score two orders.

    The order date participates whenever both dates parse, even when they are
    too far apart to earn credit. A total only participates when the amounts
    are within the percent tiers.
    """

    entity_type = "order"
    categories = ("total", "contact", "date", "status")

    def score(self, a: Order, b: Order) -> Similarity[Order]:
        tally = FieldTally()

        total_a = to_decimal(a.total)
        total_b = to_decimal(b.total)
        if total_a and total_b:
            match = amount_credit(
                total_a, total_b,
                exact=(TOTAL_EXACT_CREDIT, "Exact total match"),
                within_cent=(TOTAL_WITHIN_CENT_CREDIT, "Nearly identical total"),
                tiers=[
                    (TOTAL_CLOSE_PERCENT, TOTAL_CLOSE_CREDIT, "Similar total"),
                    (TOTAL_NEAR_PERCENT, TOTAL_NEAR_CREDIT, "Similar total"),
                ],
            )
            if match is not None:
                credit, reason = match
                tally.add(credit, TOTAL_EXACT_CREDIT, reason)

        if not is_blank(a.contact_name) and not is_blank(b.contact_name):
            credit, reason = fuzzy_credit(
                similarity(a.contact_name, b.contact_name),
                CONTACT_EXACT_CREDIT, "Exact contact match",
                [
                    (CONTACT_VERY_SIMILAR_MIN, CONTACT_VERY_SIMILAR_FACTOR, "Similar contact name"),
                    (CONTACT_SIMILAR_MIN, CONTACT_SIMILAR_FACTOR, "Similar contact name"),
                ],
            )
            tally.add(credit, CONTACT_EXACT_CREDIT, reason)

        date_a = to_datetime(a.order_date)
        date_b = to_datetime(b.order_date)
        if date_a is not None and date_b is not None:
            # Calendar days in UTC so equal instants with different offsets agree
            day_a = date_a.astimezone(timezone.utc).date()
            day_b = date_b.astimezone(timezone.utc).date()
            days_apart = abs((day_a - day_b).days)
            credit, reason = 0, None
            for max_days, tier_credit, tier_reason in DATE_TIERS:
                if days_apart <= max_days:
                    credit, reason = tier_credit, tier_reason
                    break
            tally.add(credit, DATE_EXACT_CREDIT, reason)

        if not is_blank(a.status) and not is_blank(b.status):
            credit, reason = fuzzy_credit(
                similarity(a.status, b.status),
                STATUS_EXACT_CREDIT, "Same status",
                [(STATUS_SIMILAR_MIN, STATUS_SIMILAR_FACTOR, "Similar status")],
            )
            tally.add(credit, STATUS_EXACT_CREDIT, reason)

        logger.debug(f"Order {a.id} vs {b.id}: {tally.score} {tally.reasons}")
        return Similarity[Order](
            record_a=a,
            record_b=b,
            similarity_score=tally.score,
            match_reasons=tally.reasons,
        )
