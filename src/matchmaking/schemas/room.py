"""
Room Listing Schema Definitions
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RoomAvailable:
    """
    A joinable room with its occupancy.

    Attributes:
        room_id: Identifier usable with join_by_id
        clients: Current number of players
        max_clients: Capacity
        metadata: Arbitrary data attached by the service
    """

    room_id: str
    clients: int
    max_clients: int
    name: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
