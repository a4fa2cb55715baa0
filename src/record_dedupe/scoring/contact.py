"""Contact scorer: email, phone, name, then address."""

import logging

from record_dedupe.models import Contact
from record_dedupe.scoring.base import FieldTally, Similarity, fuzzy_credit
from record_dedupe.scoring.similarity import similarity
from record_dedupe.values import digits_only, is_blank

logger = logging.getLogger(__name__)

EMAIL_EXACT_CREDIT = 100
EMAIL_SIMILAR_MIN = 80
EMAIL_SIMILAR_FACTOR = 1.0

PHONE_EXACT_CREDIT = 95
PHONE_SIMILAR_MIN = 80
PHONE_SIMILAR_FACTOR = 0.9

NAME_EXACT_CREDIT = 80
NAME_VERY_SIMILAR_MIN = 85
NAME_VERY_SIMILAR_FACTOR = 0.8
NAME_SIMILAR_MIN = 70
NAME_SIMILAR_FACTOR = 0.6

ADDRESS_MIN = 90
ADDRESS_FACTOR = 0.5


class ContactScorer:
    """Score two contacts.

    Email and phone participate when both sides have a value; name always
    participates; address plus city only counts when it is a near match.
    """

    entity_type = "contact"
    categories = ("email", "phone", "name")

    def score(self, a: Contact, b: Contact) -> Similarity[Contact]:
        tally = FieldTally()

        if not is_blank(a.email) and not is_blank(b.email):
            credit, reason = fuzzy_credit(
                similarity(a.email, b.email),
                EMAIL_EXACT_CREDIT, "Exact email match",
                [(EMAIL_SIMILAR_MIN, EMAIL_SIMILAR_FACTOR, "Similar email")],
            )
            tally.add(credit, EMAIL_EXACT_CREDIT, reason)

        phone_a = digits_only(a.phone)
        phone_b = digits_only(b.phone)
        if phone_a and phone_b:
            credit, reason = fuzzy_credit(
                similarity(phone_a, phone_b),
                PHONE_EXACT_CREDIT, "Exact phone match",
                [(PHONE_SIMILAR_MIN, PHONE_SIMILAR_FACTOR, "Similar phone")],
            )
            tally.add(credit, PHONE_EXACT_CREDIT, reason)

        if not (is_blank(a.name) and is_blank(b.name)):
            credit, reason = fuzzy_credit(
                similarity(a.name, b.name),
                NAME_EXACT_CREDIT, "Exact name match",
                [
                    (NAME_VERY_SIMILAR_MIN, NAME_VERY_SIMILAR_FACTOR, "Very similar name"),
                    (NAME_SIMILAR_MIN, NAME_SIMILAR_FACTOR, "Similar name"),
                ],
            )
            tally.add(credit, NAME_EXACT_CREDIT, reason)

        if not any(is_blank(v) for v in (a.address, a.city, b.address, b.city)):
            address_score = similarity(f"{a.address} {a.city}", f"{b.address} {b.city}")
            if address_score >= ADDRESS_MIN:
                tally.add(address_score * ADDRESS_FACTOR, 100 * ADDRESS_FACTOR, "Same address")

        logger.debug(f"Contact {a.id} vs {b.id}: {tally.score} {tally.reasons}")
        return Similarity[Contact](
            record_a=a,
            record_b=b,
            similarity_score=tally.score,
            match_reasons=tally.reasons,
        )
