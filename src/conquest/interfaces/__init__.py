"""Protocol-based interfaces for conquest services.

The orchestrator depends on these contracts rather than on concrete
services, so tests can hand it small fakes.
"""

from conquest.interfaces.campaign import ICampaignService
from conquest.interfaces.loyalty import ILoyaltyService
from conquest.interfaces.power import IPowerService
from conquest.interfaces.succession import ISuccessionService
from conquest.interfaces.timeline import ITimelineService

__all__ = [
    "ICampaignService",
    "ILoyaltyService",
    "IPowerService",
    "ISuccessionService",
    "ITimelineService",
]
