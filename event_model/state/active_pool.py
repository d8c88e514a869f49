# event_model/state/active_pool.py
"""
Indexable, removable set of currently employed IDs.

Members are stored in a dense list with a position map, so uniform random
selection and removal are both O(1): the removed slot is filled with the last
element (swap-remove).
"""

from typing import Dict, Iterator, List, Optional

import numpy as np


class ActivePool:
    def __init__(self):
        self._members: List[str] = []
        self._positions: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, emp_id: object) -> bool:
        return emp_id in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._members))

    def add(self, emp_id: str) -> None:
        if emp_id in self._positions:
            raise ValueError(f"Employee {emp_id} is already in the active pool")
        self._positions[emp_id] = len(self._members)
        self._members.append(emp_id)

    def discard(self, emp_id: str) -> bool:
        """Remove emp_id if present. Returns True when something was removed."""
        pos = self._positions.pop(emp_id, None)
        if pos is None:
            return False
        last = self._members.pop()
        if pos < len(self._members):
            self._members[pos] = last
            self._positions[last] = pos
        return True

    def choose(self, rng: np.random.Generator) -> Optional[str]:
        """Pick a member uniformly at random without removing it."""
        if not self._members:
            return None
        return self._members[int(rng.integers(0, len(self._members)))]

    def pop_random(self, rng: np.random.Generator) -> Optional[str]:
        """Remove and return a member chosen uniformly at random, or None if empty."""
        emp_id = self.choose(rng)
        if emp_id is not None:
            self.discard(emp_id)
        return emp_id
