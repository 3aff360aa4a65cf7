from typing import Any
import logging
import numpy as np

from trialdata.model.model import DynamicImport, InvalidArgument
from trialdata.model.events import NumericEventList
from trialdata.model.signals import SignalChunk
from trialdata.model.session import SessionData


TIMING_COLUMNS = ("startTime", "endTime")


class SpikeRoutine(DynamicImport):
    """Interface for getting one array's spike trains out of a raw session source.

    A trial table builder calls extract() once per spike descriptor.
    """

    def extract(self, source: Any, params: dict[str, Any]) -> NumericEventList:
        """Get spikes for the array named by params["source_id"], one spike per row: [spike_time, unit_id].

        params also contains "array_name", the descriptor's own array name, for use when source_id is empty.
        """
        raise NotImplementedError  # pragma: no cover


class ContinuousRoutine(DynamicImport):
    """Interface for getting continuous samples and the trial table out of a raw session source.

    A trial table builder calls extract() once, for the combined continuous / EMG / event descriptor.
    """

    def extract(self, source: Any, params: dict[str, Any]) -> tuple[SignalChunk, list[dict[str, Any]]]:
        """Get continuous samples labeled by channel, and trial table rows.

        Trial table rows must include the "startTime" and "endTime" of each trial,
        any event time columns, and the meta columns listed in params["trial_meta"].
        """
        raise NotImplementedError  # pragma: no cover


class SessionSpikeRoutine(SpikeRoutine):
    """Get spikes from an in-memory SessionData."""

    def __eq__(self, other: object) -> bool:
        """Compare routines just by type, to support use of this class in tests."""
        return isinstance(other, self.__class__)

    def extract(self, source: SessionData, params: dict[str, Any]) -> NumericEventList:
        source_id = params.get("source_id", "")
        array_name = params.get("array_name", "")

        if source_id:
            if source_id not in source.units:
                raise InvalidArgument(f"Session has no spikes for array {source_id}, only {source.array_names()}")
            return source.units[source_id]

        if array_name in source.units:
            return source.units[array_name]

        if len(source.units) == 1:
            only_name = source.array_names()[0]
            logging.info(f"Using session's only array {only_name} for spikes named {array_name}.")
            return source.units[only_name]

        raise InvalidArgument(
            f"Can't choose session spikes for array {array_name} from {source.array_names()}, "
            "please provide source_array_names."
        )


class SessionContinuousRoutine(ContinuousRoutine):
    """Get continuous samples and trial table rows from an in-memory SessionData."""

    def __eq__(self, other: object) -> bool:
        """Compare routines just by type, to support use of this class in tests."""
        return isinstance(other, self.__class__)

    def extract(self, source: SessionData, params: dict[str, Any]) -> tuple[SignalChunk, list[dict[str, Any]]]:
        trial_meta = params.get("trial_meta", [])
        event_names = params.get("event_names", [])
        for meta_name in trial_meta:
            if source.trial_table and meta_name not in source.trial_table[0]:
                raise InvalidArgument(f"Session trial table has no column {meta_name}")

        # Only the columns that were asked for, plus timing.
        wanted = [*TIMING_COLUMNS, *event_names, *trial_meta]
        trial_rows = [
            {name: row[name] for name in wanted if name in row}
            for row in source.trial_table
        ]

        if source.continuous is None:
            continuous = SignalChunk(np.empty([0, 0]), 1.0, 0.0, [])
        else:
            continuous = source.continuous
        return (continuous, trial_rows)
