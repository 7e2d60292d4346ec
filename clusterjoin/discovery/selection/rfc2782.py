"""
RFC 2782 ordering of SRV candidates.

Clients contact targets in ascending priority. Within a priority tier a
target is picked at random with probability proportional to its weight,
removed, and the draw repeats over what is left. Running that selection
to exhaustion yields the full preference order used for probing.
"""

import random
from itertools import groupby
from typing import Sequence, TypeVar

from clusterjoin.discovery.models.srv_record import SRVRecord


T = TypeVar("T")


def weighted_shuffle(
    weighted: Sequence[tuple[int, T]],
    rng: random.Random,
) -> list[T]:
    """
    Return a weighted random permutation of the given items.

    The algorithm (RFC 2782, "Usage rules"):
    1. Sum the weights of the remaining items
    2. Draw n uniformly in [0, sum)
    3. Walk the remaining items, accumulating weights, and select the
       first one whose running sum exceeds n
    4. Move it to the output and repeat with the rest

    Zero-weight items are never drawn while positive weight remains, so
    they land at the end. Once the remaining weight is zero (including a
    tier where every weight is zero) the rest is shuffled uniformly.

    Args:
        weighted: (weight, item) pairs. Weights must be >= 0.
        rng: Random source; pass a seeded random.Random for reproducible output

    Returns:
        Every item exactly once, in selection order
    """
    remaining = list(weighted)
    total = 0
    for weight, _ in remaining:
        if weight < 0:
            raise ValueError(f"Weight must be non-negative, got {weight}")
        total += weight

    ordered: list[T] = []

    while total > 0 and len(remaining) > 1:
        draw = rng.randrange(total)
        running = 0

        for idx, (weight, item) in enumerate(remaining):
            running += weight
            if running > draw:
                ordered.append(item)
                total -= weight
                del remaining[idx]
                break

    tail = [item for _, item in remaining]
    if total == 0:
        rng.shuffle(tail)

    ordered.extend(tail)
    return ordered


def order_candidates(
    records: Sequence[SRVRecord],
    rng: random.Random | None = None,
) -> list[SRVRecord]:
    """
    Order SRV candidates as specified in RFC 2782.

    Records are sorted by (priority, weight) to fix tier boundaries and
    make the pre-shuffle order deterministic, then each run of equal
    priority is replaced by its weighted shuffle. Tiers stay in ascending
    priority order. Duplicate records are kept.

    Args:
        records: Candidates merged from every resolved SRV name
        rng: Random source, a fresh random.Random() if not given

    Returns:
        A new list; the input is left untouched
    """
    if rng is None:
        rng = random.Random()

    by_priority_weight = sorted(
        records,
        key=lambda record: (record.priority, record.weight),
    )

    ordered: list[SRVRecord] = []
    for _, tier in groupby(by_priority_weight, key=lambda record: record.priority):
        ordered.extend(
            weighted_shuffle(
                [(record.weight, record) for record in tier],
                rng,
            )
        )

    return ordered
