"""
Movement classification from GPS speed.

Speeds arrive in m/s. Readings above MAX_PLAUSIBLE_KMH are GPS spikes and
count as zero.
"""

from collections import deque
from typing import Iterable, Optional

from src.domain.entities import LocationSample, MovementStatus

MAX_PLAUSIBLE_KMH = 200.0
STOPPED_BELOW_KMH = 1.0
WALKING_UP_TO_KMH = 15.0

NOISE_KMH = 2.0
MIN_ACCURACY_M = 30.0
BUFFER_SIZE = 3
HYSTERESIS_READINGS = 2


def speed_kmh(speed_ms: Optional[float]) -> float:
    if speed_ms is None or speed_ms < 0:
        return 0.0
    kmh = speed_ms * 3.6
    if kmh > MAX_PLAUSIBLE_KMH:
        return 0.0
    return kmh


def classify_kmh(kmh: float) -> MovementStatus:
    if kmh < STOPPED_BELOW_KMH:
        return MovementStatus.parado
    if kmh <= WALKING_UP_TO_KMH:
        return MovementStatus.caminhando
    return MovementStatus.veiculo


def classify_speed(speed_ms: Optional[float]) -> MovementStatus:
    return classify_kmh(speed_kmh(speed_ms))


class MovementClassifier:
    """
    Smoothed classifier: moving average over the last readings, noise floor
    for poor fixes, and a change must repeat before it is confirmed.

    Starts at parado; the first readings go through the same confirmation
    as any later change.
    """

    def __init__(self):
        self._speeds = deque(maxlen=BUFFER_SIZE)
        self.status = MovementStatus.parado
        self.readings = 0
        self._pending: Optional[MovementStatus] = None
        self._pending_count = 0

    def update(self, speed_ms: Optional[float], accuracy_m: Optional[float] = None) -> MovementStatus:
        self.readings += 1
        self._speeds.append(speed_kmh(speed_ms))
        average = sum(self._speeds) / len(self._speeds)

        poor_fix = accuracy_m is None or accuracy_m > MIN_ACCURACY_M
        if average <= NOISE_KMH and poor_fix:
            average = 0.0

        candidate = classify_kmh(average)
        if candidate == self.status:
            self._pending, self._pending_count = None, 0
        else:
            if candidate == self._pending:
                self._pending_count += 1
            else:
                self._pending, self._pending_count = candidate, 1
            if self._pending_count >= HYSTERESIS_READINGS:
                self.status = candidate
                self._pending, self._pending_count = None, 0

        return self.status

    @property
    def average_kmh(self) -> float:
        if not self._speeds:
            return 0.0
        return sum(self._speeds) / len(self._speeds)


def classify_samples(samples: Iterable[LocationSample]) -> Optional[MovementStatus]:
    """Replay chronological samples through a fresh classifier; None without samples."""
    classifier = MovementClassifier()
    for sample in samples:
        classifier.update(sample.speed, sample.accuracy_m)
    if not classifier.readings:
        return None
    return classifier.status
