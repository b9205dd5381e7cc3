"""Pure functions computing derived record fields.

These run explicitly before a write instead of living on the models as
save hooks.
"""

from __future__ import annotations

import re
import secrets
import string
import unicodedata
from decimal import ROUND_HALF_UP, Decimal

from enrollflow.record_store.models import AccountRole

EXTERNAL_ID_PREFIXES = {
    AccountRole.LEARNER: "TST",
    AccountRole.INSTRUCTOR: "TIN",
    AccountRole.ADMIN: "TAD",
}
EXTERNAL_ID_SUFFIX_LENGTH = 4
_EXTERNAL_ID_ALPHABET = string.ascii_uppercase + string.digits


def round_half_up(value: float, places: int = 0) -> float:
    """Round halves away from zero (2.5 -> 3, 4.25 -> 4.3).

    Python's built-in round() uses banker's rounding, which would turn a
    4.25 average into 4.2.

    Args:
        value: Number to round.
        places: Number of decimal places to keep.

    Returns:
        The rounded value.
    """
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def slugify(title: str) -> str:
    """Build a URL slug from a course title.

    >>> slugify("Full-Stack Web Development (2024)")
    'full-stack-web-development-2024'
    """
    normalized = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug or "course"


def generate_external_id(role: AccountRole) -> str:
    """Generate a public account ID such as ``TST4X9M``.

    The external ID doubles as the account's referral code.
    """
    suffix = "".join(
        secrets.choice(_EXTERNAL_ID_ALPHABET) for _ in range(EXTERNAL_ID_SUFFIX_LENGTH)
    )
    return f"{EXTERNAL_ID_PREFIXES[role]}{suffix}"
