"""Deterministic random number generation for the conquest engine.

Power composition and outcome resolution never use randomness.  The few
rolls that do exist (item drops, injuries) are seeded from game state so a
resolved battle can be replayed exactly:

* Reproducibility: same seed always produces the same result
* Audit trail: every roll returns the seed it used

Examples:
    >>> seed = generate_seed("player-1", 7, "item_drop")
    >>> result = random_float(seed)
    >>> 0.0 <= result["value"] < 1.0
    True
"""

import hashlib
import random
from collections.abc import Sequence
from typing import Any


def generate_seed(subject_id: str, sequence: int, context: str) -> str:
    """Generate a deterministic seed from game state.

    Format: ``"subject_id:sequence:context"``

    Args:
        subject_id: Entity the roll belongs to (usually the player id)
        sequence: Monotonic counter for that entity (e.g. battles fought)
        context: What the roll is for (e.g. ``"item_drop"``, ``"injury"``)

    Returns:
        Seed string

    Raises:
        ValueError: If subject_id is empty or sequence is negative
    """
    if not subject_id:
        raise ValueError("subject_id must be non-empty")
    if sequence < 0:
        raise ValueError(f"sequence must be non-negative, got {sequence}")

    return f"{subject_id}:{sequence}:{context}"


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random()."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


def random_float(seed: str) -> dict[str, Any]:
    """Uniform float in ``[0, 1)`` for the given seed.

    Returns:
        Dictionary containing ``value`` and ``seed``
    """
    rng = random.Random(_seed_to_int(seed))
    return {"value": rng.random(), "seed": seed}


def random_choice(seed: str, options: Sequence[Any]) -> dict[str, Any]:
    """Choose one option with a deterministic seed.

    Returns:
        Dictionary containing ``choice``, ``index`` and ``seed``

    Raises:
        ValueError: If options is empty
    """
    if not options:
        raise ValueError("options list cannot be empty")

    rng = random.Random(_seed_to_int(seed))
    index = rng.randint(0, len(options) - 1)

    return {"choice": options[index], "index": index, "seed": seed}


def check_chance(seed: str, probability: float) -> dict[str, Any]:
    """Succeed with the given probability.

    Returns:
        Dictionary containing ``success``, ``roll``, ``probability`` and ``seed``

    Raises:
        ValueError: If probability is not in ``[0.0, 1.0]``
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"probability must be between 0.0 and 1.0, got {probability}")

    roll = random_float(seed)["value"]
    return {
        "success": roll < probability,
        "roll": roll,
        "probability": probability,
        "seed": seed,
    }


def weighted_choice(seed: str, options: Sequence[Any], weights: Sequence[float]) -> dict[str, Any]:
    """Pick one option using cumulative weights.

    The final option absorbs any rounding slack so the call always returns.

    Raises:
        ValueError: If options is empty or lengths differ
    """
    if not options:
        raise ValueError("options list cannot be empty")
    if len(options) != len(weights):
        raise ValueError("options and weights must have the same length")

    roll = random_float(seed)["value"]
    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if roll < cumulative:
            return {"choice": options[index], "index": index, "roll": roll, "seed": seed}
    index = len(options) - 1
    return {"choice": options[index], "index": index, "roll": roll, "seed": seed}
