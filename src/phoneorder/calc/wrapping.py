"""Gift-wrap fee per order line.

Standard noshi and full wrap are each 305, but a single line never pays more
than 305 in total. Simple wrap waives the charge entirely.
"""

NOSHI_NONE = "none"
NOSHI_STICKER = "sticker"
NOSHI_STANDARD = "standard"
NOSHI_TYPES: tuple[str, ...] = (NOSHI_NONE, NOSHI_STICKER, NOSHI_STANDARD)

WRAPPING_NONE = "none"
WRAPPING_SIMPLE = "simple"
WRAPPING_FULL = "full"
WRAPPING_TYPES: tuple[str, ...] = (WRAPPING_NONE, WRAPPING_SIMPLE, WRAPPING_FULL)

NOSHI_FEE = 305
FULL_WRAPPING_FEE = 305
MAX_WRAPPING_FEE_PER_LINE = 305


def calculate_wrapping_fee(noshi_type: str | None, wrapping_type: str | None) -> int:
    """Return the capped wrapping fee for one line."""
    if wrapping_type == WRAPPING_SIMPLE:
        return 0

    fee = 0
    if noshi_type == NOSHI_STANDARD:
        fee += NOSHI_FEE
    if wrapping_type == WRAPPING_FULL:
        fee += FULL_WRAPPING_FEE

    return min(fee, MAX_WRAPPING_FEE_PER_LINE)
