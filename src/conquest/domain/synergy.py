"""Officer synergy pairs.

Two deployed officers with a shared history fight better together.  Each
matched pair multiplies the synergy bonus; unlike officer stacking this one
does compound.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SynergyPair:
    officers: tuple[str, str]
    multiplier: float
    name: str


SYNERGY_PAIRS: tuple[SynergyPair, ...] = (
    # Shu Han
    SynergyPair(("Guan Yu", "Zhang Fei"), 1.20, "Oath Brothers of Peach Garden"),
    SynergyPair(("Liu Bei", "Guan Yu"), 1.15, "Lord and Vanguard"),
    SynergyPair(("Liu Bei", "Zhang Fei"), 1.15, "Lord and Fury"),
    SynergyPair(("Zhao Yun", "Liu Bei"), 1.18, "Eternal Guardian"),
    SynergyPair(("Zhao Yun", "Ma Chao"), 1.10, "Shu Vanguard"),
    SynergyPair(("Zhuge Liang", "Liu Bei"), 1.15, "Fish and Water"),
    SynergyPair(("Zhuge Liang", "Zhao Yun"), 1.12, "Mind and Spear"),
    # Cao Wei
    SynergyPair(("Cao Cao", "Xiahou Dun"), 1.18, "Iron Lord and His Iron Arm"),
    SynergyPair(("Sima Yi", "Zhang Liao"), 1.10, "Wei Strategists"),
    SynergyPair(("Xiahou Dun", "Xu Chu"), 1.10, "Wei Vanguard"),
    SynergyPair(("Zhang Liao", "Xu Huang"), 1.08, "Wei Blade Commanders"),
    # Eastern Wu
    SynergyPair(("Zhou Yu", "Lu Xun"), 1.15, "Wu Fire Masters"),
    SynergyPair(("Sun Quan", "Zhou Yu"), 1.15, "Tiger and Phoenix"),
    SynergyPair(("Lu Meng", "Gan Ning"), 1.10, "Wu Marines"),
    SynergyPair(("Sun Jian", "Sun Ce"), 1.18, "Lions of Jiangdong"),
)


def calculate_synergy_bonus(
    officer_names: Iterable[str],
    pairs: Sequence[SynergyPair] = SYNERGY_PAIRS,
) -> tuple[float, list[SynergyPair]]:
    """Return the product of all matched pair multipliers and the matched pairs."""

    present = set(officer_names)
    total = 1.0
    active: list[SynergyPair] = []
    for pair in pairs:
        first, second = pair.officers
        if first in present and second in present:
            total *= pair.multiplier
            active.append(pair)
    return total, active
