"""Money helpers. All amounts are integer cents."""
from typing import Dict, Sequence


def split_evenly(amount_cents: int, participants: Sequence[str]) -> Dict[str, int]:
    """
    Split ``amount_cents`` equally among ``participants``.

    Every participant gets ``amount_cents // n``. The ``amount_cents % n``
    leftover cents go one each to participants in ascending id order, so the
    shares always sum to ``amount_cents`` and the result does not depend on
    how the participant list was ordered.

    Returns {user_id: share_cents} in the participants' input order.
    Raises ValueError for an empty participant list.
    """
    members = list(dict.fromkeys(participants))
    if not members:
        raise ValueError("Cannot split an amount among zero participants")

    per_member, remainder = divmod(amount_cents, len(members))
    extra = set(sorted(members)[:remainder])

    return {
        user_id: per_member + (1 if user_id in extra else 0)
        for user_id in members
    }


def format_cents(amount_cents: int, currency: str = "$") -> str:
    """Format cents as an unsigned currency string, e.g. 1234 -> '$12.34'."""
    whole, cents = divmod(abs(amount_cents), 100)
    return f"{currency}{whole:,}.{cents:02d}"
