"""
Cell occupancy registry.

Tracks which holder (usually an item id or article) occupies which storage
location. The registry is an ordinary object owned by the caller; create one
per counting session and pass it to whatever reserves cells.
"""

from typing import Dict, Iterator, Optional, Tuple

from stockcheck.models import StorageLocation


class CellRegistry:

    def __init__(self) -> None:
        self._occupied: Dict[StorageLocation, str] = {}

    def holder_of(self, location: StorageLocation) -> Optional[str]:
        return self._occupied.get(location)

    def is_available(self, location: StorageLocation, exclude_holder: Optional[str] = None) -> bool:
        """True when the cell is free, or held by *exclude_holder* itself."""
        holder = self._occupied.get(location)
        return holder is None or holder == exclude_holder

    def occupy(self, location: StorageLocation, holder: str) -> None:
        self._occupied[location] = holder

    def release(self, location: StorageLocation) -> None:
        self._occupied.pop(location, None)

    def __len__(self) -> int:
        return len(self._occupied)

    def __iter__(self) -> Iterator[Tuple[StorageLocation, str]]:
        return iter(list(self._occupied.items()))
