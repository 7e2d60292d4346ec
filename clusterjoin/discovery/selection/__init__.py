from .rfc2782 import (
    order_candidates as order_candidates,
    weighted_shuffle as weighted_shuffle,
)
