"""Lens collection state.

``LensCollection`` is an immutable snapshot of the bench: the lenses in
optical-axis order, the gaps between neighbours and the id counter. Every
operation returns a new snapshot, or the same one when the request is
rejected. Invalid requests never raise.

``LensBench`` owns the current snapshot, commits the result of each
operation and publishes changed snapshots to subscribers.

Invariants:
    len(lenses) <= settings.max_lenses
    len(distances) == max(len(lenses) - 1, 0)
    every lens index >= settings.min_index
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

import numpy as np

from ..core.config import BenchSettings
from ..core.logging import get_logger
from ..core.types import Distances, LensId, Listener, Unsubscribe
from .lenses import Lens, LensType

logger = get_logger(__name__)


def is_number(value: object) -> bool:
    """True for finite real numbers, numpy scalars included, bools excluded."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


@dataclass(frozen=True, slots=True)
class LensCollection:
    """Snapshot of the lenses and inter-lens distances on the bench."""

    lenses: tuple[Lens, ...] = ()
    distances: Distances = ()
    next_id: int = 1
    settings: BenchSettings = field(default_factory=BenchSettings, compare=False, repr=False)

    def __len__(self) -> int:
        return len(self.lenses)

    def __iter__(self) -> Iterator[Lens]:
        return iter(self.lenses)

    def lens(self, lens_id: LensId) -> Lens | None:
        for lens in self.lenses:
            if lens.id == lens_id:
                return lens
        return None

    def position(self, lens_id: LensId) -> int | None:
        """Sequence index of a lens along the axis."""
        for k, lens in enumerate(self.lenses):
            if lens.id == lens_id:
                return k
        return None

    @property
    def is_full(self) -> bool:
        return len(self.lenses) >= self.settings.max_lenses

    def add_lens(self, lens_type: LensType = LensType.BICONVEX) -> LensCollection:
        """Append a lens with default power and index.

        A default gap is appended when the bench already holds a lens. At
        the lens cap the snapshot is returned unchanged.
        """
        try:
            lens_type = LensType(lens_type)
        except ValueError:
            logger.debug("add rejected: unknown lens type", {"type": lens_type})
            return self
        if self.is_full:
            logger.debug("add rejected: bench full", {"count": len(self.lenses)})
            return self

        s = self.settings
        lens = Lens.create(self.next_id, s.default_power, s.default_index, lens_type)
        distances = self.distances
        if self.lenses:
            distances = distances + (s.default_distance_m,)

        logger.debug("lens added", {"id": lens.id, "type": lens.type.value})
        return replace(
            self,
            lenses=self.lenses + (lens,),
            distances=distances,
            next_id=self.next_id + 1,
        )

    def remove_lens(self, lens_id: LensId) -> LensCollection:
        """Remove a lens and the gap it leaves dangling.

        The gap following the removed lens goes, so its neighbours connect
        through the gap that preceded it. Removing the last lens drops the
        last gap instead.
        """
        k = self.position(lens_id)
        if k is None:
            logger.debug("remove rejected: unknown lens", {"id": lens_id})
            return self

        distances = list(self.distances)
        if distances:
            if k < len(self.lenses) - 1:
                del distances[k]
            else:
                distances.pop()

        logger.debug("lens removed", {"id": lens_id, "position": k})
        return replace(
            self,
            lenses=self.lenses[:k] + self.lenses[k + 1 :],
            distances=tuple(distances),
        )

    def update_power(self, lens_id: LensId, power: float) -> LensCollection:
        """Set a lens power and recompute its radius."""
        if not is_number(power) or power == 0 or power <= self.settings.min_power:
            logger.debug("power rejected", {"id": lens_id, "power": power})
            return self
        return self._map_lens(lens_id, lambda lens: lens.with_power(float(power)))

    def update_index(self, lens_id: LensId, index: float) -> LensCollection:
        """Set a lens refractive index and recompute its radius."""
        if not is_number(index) or index < self.settings.min_index:
            logger.debug("index rejected", {"id": lens_id, "index": index})
            return self
        return self._map_lens(lens_id, lambda lens: lens.with_index(float(index)))

    def update_distance(self, position: int, distance: float) -> LensCollection:
        """Replace the gap between lens ``position`` and the next one."""
        if (
            not is_number(distance)
            or distance < self.settings.min_distance_m
            or not isinstance(position, numbers.Integral)
            or isinstance(position, bool)
            or not 0 <= position < len(self.distances)
        ):
            logger.debug("distance rejected", {"position": position, "distance": distance})
            return self

        distances = list(self.distances)
        distances[int(position)] = float(distance)
        logger.debug("distance updated", {"position": position, "distance": distance})
        return replace(self, distances=tuple(distances))

    def _map_lens(self, lens_id: LensId, update) -> LensCollection:
        if self.position(lens_id) is None:
            logger.debug("update rejected: unknown lens", {"id": lens_id})
            return self

        lenses = tuple(update(lens) if lens.id == lens_id else lens for lens in self.lenses)
        logger.debug("lens updated", {"id": lens_id})
        return replace(self, lenses=lenses)

    def to_dict(self) -> dict:
        return {
            "lenses": [lens.to_dict() for lens in self.lenses],
            "distances": list(self.distances),
        }


class LensBench:
    """Single writer of the current lens collection.

    Each mutating call commits a whole new snapshot; subscribers are called
    with it only when it differs from the previous one. A subscriber that
    raises is logged and the rest are still called.
    """

    def __init__(self, settings: BenchSettings | None = None):
        self.settings = settings or BenchSettings()
        self._snapshot = LensCollection(settings=self.settings)
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> LensCollection:
        return self._snapshot

    @property
    def lenses(self) -> tuple[Lens, ...]:
        return self._snapshot.lenses

    @property
    def distances(self) -> Distances:
        return self._snapshot.distances

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register a callback for committed snapshots.

        Returns:
            Function removing the callback
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, snapshot: LensCollection) -> LensCollection:
        if snapshot == self._snapshot:
            return self._snapshot
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:  # noqa: BLE001
                logger.error(
                    "listener failed",
                    {"listener": repr(listener), "error": repr(e), "lenses": len(snapshot)},
                )
        return snapshot

    def add_lens(self, lens_type: LensType = LensType.BICONVEX) -> LensCollection:
        return self._commit(self._snapshot.add_lens(lens_type))

    def remove_lens(self, lens_id: LensId) -> LensCollection:
        return self._commit(self._snapshot.remove_lens(lens_id))

    def update_power(self, lens_id: LensId, power: float) -> LensCollection:
        return self._commit(self._snapshot.update_power(lens_id, power))

    def update_index(self, lens_id: LensId, index: float) -> LensCollection:
        return self._commit(self._snapshot.update_index(lens_id, index))

    def update_distance(self, position: int, distance: float) -> LensCollection:
        return self._commit(self._snapshot.update_distance(position, distance))


__all__ = [
    "is_number",
    "LensCollection",
    "LensBench",
]
