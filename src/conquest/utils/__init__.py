"""Utility functions for the conquest engine."""

from conquest.utils.locks import KeyedLocks
from conquest.utils.rng import (
    check_chance,
    generate_seed,
    random_choice,
    random_float,
    weighted_choice,
)

__all__ = [
    "KeyedLocks",
    "check_chance",
    "generate_seed",
    "random_choice",
    "random_float",
    "weighted_choice",
]
