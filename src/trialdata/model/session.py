from typing import Any
from dataclasses import dataclass, field

from trialdata.model.events import NumericEventList
from trialdata.model.signals import SignalChunk


@dataclass
class SessionData():
    """In-memory view of one recording session, as consumed by the standard extraction routines.

    This is the "raw source" handed to spike and continuous routines.
    How it gets populated from disk is up to the caller.
    """

    meta: dict[str, Any] = field(default_factory=dict)
    """Session-level info like monkey, date, and task, copied into every trial."""

    units: dict[str, NumericEventList] = field(default_factory=dict)
    """Spike trains per recording array, one spike per row: [spike_time, unit_id]."""

    continuous: SignalChunk = None
    """Continuous and EMG samples for the whole session, with channel_ids that are signal labels."""

    trial_table: list[dict[str, Any]] = field(default_factory=list)
    """One row per behavioral trial, with at least "startTime" and "endTime", plus event times and meta columns."""

    def array_names(self) -> list[str]:
        return list(self.units.keys())
