"""Pure rules for combat resolution and conquest.

Everything in this package operates on in-memory dataclasses and plain
values; persistence lives behind the repository adapter and the services.
"""

from . import (
    battle,
    campaign,
    court,
    enums,
    exhaustion,
    injury,
    loyalty,
    models,
    opposition,
    power,
    rounding,
    rules_config,
    stats,
    succession,
    synergy,
    territory,
    timeline,
)

__all__ = [
    "battle",
    "campaign",
    "court",
    "enums",
    "exhaustion",
    "injury",
    "loyalty",
    "models",
    "opposition",
    "power",
    "rounding",
    "rules_config",
    "stats",
    "succession",
    "synergy",
    "territory",
    "timeline",
]
