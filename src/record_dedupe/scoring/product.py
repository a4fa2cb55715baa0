"""Product scorer: SKU, name, price, then description."""

import logging
from decimal import Decimal

from record_dedupe.models import Product
from record_dedupe.scoring.base import FieldTally, Similarity, amount_credit, fuzzy_credit
from record_dedupe.scoring.similarity import similarity
from record_dedupe.values import is_blank, to_decimal

logger = logging.getLogger(__name__)

SKU_EXACT_CREDIT = 100
SKU_VERY_SIMILAR_MIN = 90
SKU_VERY_SIMILAR_FACTOR = 1.0
SKU_SIMILAR_MIN = 80
SKU_SIMILAR_FACTOR = 0.9

NAME_EXACT_CREDIT = 95
NAME_VERY_SIMILAR_MIN = 90
NAME_VERY_SIMILAR_FACTOR = 0.9
NAME_CLOSE_MIN = 80
NAME_CLOSE_FACTOR = 0.8
NAME_SIMILAR_MIN = 70
NAME_SIMILAR_FACTOR = 0.6

PRICE_EXACT_CREDIT = 85
PRICE_WITHIN_CENT_CREDIT = 80
PRICE_CLOSE_PERCENT = Decimal("5")
PRICE_CLOSE_CREDIT = 75
PRICE_NEAR_PERCENT = Decimal("10")
PRICE_NEAR_CREDIT = 65

DESCRIPTION_EXACT_CREDIT = 70
DESCRIPTION_VERY_SIMILAR_MIN = 85
DESCRIPTION_VERY_SIMILAR_FACTOR = 0.6
DESCRIPTION_SIMILAR_MIN = 70
DESCRIPTION_SIMILAR_FACTOR = 0.4


class ProductScorer:
    """Score two products. An identical SKU carries the most weight.

    Name and price only count once they reach a tier, so a shared SKU still
    groups products that were renamed and repriced.
    """

    entity_type = "product"
    categories = ("sku", "name", "price", "description")

    def score(self, a: Product, b: Product) -> Similarity[Product]:
        tally = FieldTally()

        if not is_blank(a.sku) and not is_blank(b.sku):
            credit, reason = fuzzy_credit(
                similarity(a.sku, b.sku),
                SKU_EXACT_CREDIT, "Exact SKU match",
                [
                    (SKU_VERY_SIMILAR_MIN, SKU_VERY_SIMILAR_FACTOR, "Similar SKU"),
                    (SKU_SIMILAR_MIN, SKU_SIMILAR_FACTOR, "Similar SKU"),
                ],
            )
            tally.add(credit, SKU_EXACT_CREDIT, reason)

        if not (is_blank(a.name) and is_blank(b.name)):
            credit, reason = fuzzy_credit(
                similarity(a.name, b.name),
                NAME_EXACT_CREDIT, "Exact name match",
                [
                    (NAME_VERY_SIMILAR_MIN, NAME_VERY_SIMILAR_FACTOR, "Very similar name"),
                    (NAME_CLOSE_MIN, NAME_CLOSE_FACTOR, "Similar name"),
                    (NAME_SIMILAR_MIN, NAME_SIMILAR_FACTOR, "Similar name"),
                ],
            )
            # Names below every tier are left out so an exact SKU can carry the pair
            if reason is not None:
                tally.add(credit, NAME_EXACT_CREDIT, reason)

        price_a = to_decimal(a.price)
        price_b = to_decimal(b.price)
        if price_a and price_b:
            match = amount_credit(
                price_a, price_b,
                exact=(PRICE_EXACT_CREDIT, "Same price"),
                within_cent=(PRICE_WITHIN_CENT_CREDIT, "Nearly identical price"),
                tiers=[
                    (PRICE_CLOSE_PERCENT, PRICE_CLOSE_CREDIT, "Similar price"),
                    (PRICE_NEAR_PERCENT, PRICE_NEAR_CREDIT, "Similar price"),
                ],
            )
            if match is not None:
                credit, reason = match
                tally.add(credit, PRICE_EXACT_CREDIT, reason)

        if not is_blank(a.description) and not is_blank(b.description):
            credit, reason = fuzzy_credit(
                similarity(a.description, b.description),
                DESCRIPTION_EXACT_CREDIT, "Same description",
                [
                    (DESCRIPTION_VERY_SIMILAR_MIN, DESCRIPTION_VERY_SIMILAR_FACTOR, "Similar description"),
                    (DESCRIPTION_SIMILAR_MIN, DESCRIPTION_SIMILAR_FACTOR, "Similar description"),
                ],
            )
            tally.add(credit, DESCRIPTION_EXACT_CREDIT, reason)

        logger.debug(f"Product {a.id} vs {b.id}: {tally.score} {tally.reasons}")
        return Similarity[Product](
            record_a=a,
            record_b=b,
            similarity_score=tally.score,
            match_reasons=tally.reasons,
        )
