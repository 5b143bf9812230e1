"""Invoice number generation

Format: INV-YYYYMM-RRR, where RRR is a random suffix in [0, 999].
Numbers are not checked against existing invoices; two invoices created in
the same month can collide.
"""

import random
import re
from datetime import datetime
from typing import Optional

INVOICE_NUMBER_PATTERN = re.compile(r"^INV-(?P<year>\d{4})(?P<month>\d{2})-(?P<suffix>\d{3})$")

_system_random = random.SystemRandom()


def generate_invoice_number(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a human readable invoice number

    Args:
        now: Creation time (defaults to the current local time)
        rng: Source of randomness for the suffix

    Returns:
        Invoice number such as INV-202405-042
    """
    now = now or datetime.now()
    suffix = (rng or _system_random).randint(0, 999)
    return f"INV-{now.year:04d}{now.month:02d}-{suffix:03d}"
