"""Line-level split of a prorated header discount."""

from __future__ import annotations

from collections.abc import Sequence

from erp_ledger.proration.entities import ReturnLine


def allocate_header_discount(
    lines: Sequence[ReturnLine],
    header_discount_prorated: float,
) -> list[float]:
    """Split a header discount across return lines by net value.

    Works in cents with the largest remainder method so the shares sum
    exactly to the rounded header discount.

    Args:
        lines: Return lines receiving a share
        header_discount_prorated: Document-level discount for this return

    Returns:
        One share per line, in input order
    """
    if not lines:
        return []

    total_cents = max(0, round(header_discount_prorated * 100))
    weights = [max(0, round(line.net_line_total * 100)) for line in lines]
    total_weight = sum(weights)

    if total_weight == 0:
        # Nothing to weight by - split evenly
        per_line = total_cents // len(lines)
        remainder = total_cents % len(lines)
        cents = [per_line] * len(lines)
        cents[-1] += remainder
    else:
        cents = _allocate_proportionally(total_cents, weights, total_weight)

    return [c / 100 for c in cents]


def _allocate_proportionally(
    total_amount: int,
    weights: list[int],
    total_weight: int,
) -> list[int]:
    """Allocate total_amount proportionally to integer weights.

    Args:
        total_amount: Amount to allocate (in cents)
        weights: Per-line weights
        total_weight: Sum of all weights

    Returns:
        Allocated amounts that sum exactly to total_amount
    """
    n = len(weights)

    shares = [(weight / total_weight) * total_amount for weight in weights]

    floored = [int(share) for share in shares]
    remainders = [(shares[i] - floored[i], i) for i in range(n)]

    to_distribute = total_amount - sum(floored)

    remainders.sort(reverse=True)
    for i in range(to_distribute):
        idx = remainders[i % n][1]
        floored[idx] += 1

    return floored
