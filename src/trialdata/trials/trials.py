from typing import Any
from collections.abc import Iterator
from dataclasses import dataclass, field
from numbers import Real
import copy
import logging
import numpy as np

from trialdata.model.model import DynamicImport, InvalidArgument
from trialdata.model.descriptors import SignalDescriptor, SignalKind, LabelGroup
from trialdata.model.events import NumericEventList
from trialdata.model.signals import SignalChunk


@dataclass
class Trial():
    """One behavioral trial, with all signals binned to a common time base."""

    trial_id: int
    """Index of the trial within its session trial table."""

    start_time: float
    """The begining of the trial in session time, the left edge of its first bin."""

    end_time: float
    """The end of the trial in session time."""

    bin_size: float
    """Width in seconds of each bin."""

    meta: dict[str, Any] = field(default_factory=dict)
    """Name-value pairs describing the trial or session, like "monkey", "tgtDir", or "marker_names"."""

    events: dict[str, int | None] = field(default_factory=dict)
    """Bin index of each named event within the trial, or None where the event didn't happen."""

    signals: dict[str, np.ndarray] = field(default_factory=dict)
    """Named binned signals, each with shape (bin_count, channel_count)."""

    labels: dict[str, list] = field(default_factory=dict)
    """Channel labels for each of the named signals -- unit ids for spikes."""

    def __eq__(self, other: object) -> bool:
        """Compare signal arrays as-a-whole instead of element-wise."""
        if isinstance(other, self.__class__):
            signals_equal = (
                self.signals.keys() == other.signals.keys()
                and all(np.array_equal(value, other.signals[name], equal_nan=True) for name, value in self.signals.items())
            )
            return (
                signals_equal
                and self.trial_id == other.trial_id
                and self.start_time == other.start_time
                and self.end_time == other.end_time
                and self.bin_size == other.bin_size
                and self.meta == other.meta
                and self.events == other.events
                and self.labels == other.labels
            )
        else:  # pragma: no cover
            return False

    def bin_count(self) -> int:
        return int(round((self.end_time - self.start_time) / self.bin_size))

    def bin_edges(self) -> np.ndarray:
        """Get the times of all bin edges, from start_time through the end of the last bin."""
        return self.start_time + self.bin_size * np.arange(self.bin_count() + 1)

    def add_signal(self, name: str, data: np.ndarray, labels: list) -> None:
        self.signals[name] = data
        self.labels[name] = labels

    def field_names(self) -> list[str]:
        return [*self.meta.keys(), *self.events.keys(), *self.signals.keys()]

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a named field of the trial, whether it's meta, an event, or a signal."""
        for fields in (self.meta, self.events, self.signals):
            if name in fields:
                return fields[name]
        return default


@dataclass
class TrialData():
    """A trial-indexed dataset: one Trial per behavioral trial, in session order."""

    trials: list[Trial] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.trials)

    def __iter__(self) -> Iterator[Trial]:
        return iter(self.trials)

    def __getitem__(self, index: int) -> Trial:
        return self.trials[index]

    def append(self, trial: Trial) -> None:
        self.trials.append(trial)

    def set_meta(self, name: str, value: Any) -> None:
        """Set the same named meta value on every trial, giving each trial its own copy."""
        for trial in self.trials:
            trial.meta[name] = copy.deepcopy(value)

    def get_meta(self, name: str) -> list[Any]:
        """Get a named meta value from each trial."""
        return [trial.meta.get(name) for trial in self.trials]

    def field_names(self) -> list[str]:
        """All field names found in any trial, in first-seen order."""
        names = {}
        for trial in self.trials:
            names.update(dict.fromkeys(trial.field_names()))
        return list(names.keys())


class TrialTableBuilder(DynamicImport):
    """Interface for turning an ordered list of signal descriptors into trial data."""

    def build(self, source: Any, descriptors: list[SignalDescriptor], params: dict[str, Any]) -> TrialData:
        """Extract, bin, and align all described signals, per trial.

        params contains "bin_size" in seconds, and optional "meta" to add to each trial.
        Implementations should produce one trial field per descriptor output name,
        using descriptor labels to select and name channels.
        """
        raise NotImplementedError  # pragma: no cover


class BinnedTrialTableBuilder(TrialTableBuilder):
    """Bin spikes into counts and sample continuous signals at bin starts, for each trial in the trial table.

    Each trial covers the half open interval [startTime, endTime) from the trial table.
    Spikes are counted per unit and bin.
    Continuous and EMG signals are linearly interpolated at the start time of each bin.
    Events become the index of the bin that contains them.
    """

    def __eq__(self, other: object) -> bool:
        """Compare builders just by type, to support use of this class in tests."""
        return isinstance(other, self.__class__)

    def build(self, source: Any, descriptors: list[SignalDescriptor], params: dict[str, Any]) -> TrialData:
        bin_size = params["bin_size"]
        extra_meta = params.get("meta", None) or {}

        spike_descriptors = [descriptor for descriptor in descriptors if descriptor.kind is SignalKind.SPIKES]
        other_descriptors = [descriptor for descriptor in descriptors if descriptor.kind is not SignalKind.SPIKES]
        if len(other_descriptors) != 1:
            raise InvalidArgument(f"Expected exactly one combined signal descriptor, got {len(other_descriptors)}")
        combined = other_descriptors[0]

        event_names = [name for (name, _, tag) in combined.iter_outputs() if tag is SignalKind.EVENT]
        routine_params = {**combined.params, "event_names": event_names}
        (continuous, trial_rows) = combined.routine.extract(source, routine_params)
        trial_meta = combined.params.get("trial_meta", [])

        spikes = {}
        for descriptor in spike_descriptors:
            spike_list = descriptor.routine.extract(source, descriptor.params)
            spikes[descriptor.output_names[0]] = (spike_list, spike_list.get_unique_values())

        channel_indexes = {}
        for (name, label_group, tag) in combined.iter_outputs():
            if tag is SignalKind.EVENT:
                continue
            if not label_group:
                logging.warning(f"Skipping signal {name} because it has no channel labels.")
                continue
            channel_indexes[name] = self.channel_indexes(continuous, label_group)

        session_meta = getattr(source, "meta", None) or {}
        trial_data = TrialData()
        for trial_id, row in enumerate(trial_rows):
            start_time = row.get("startTime")
            end_time = row.get("endTime")
            if not is_time(start_time) or not is_time(end_time):
                logging.warning(f"Skipping trial {trial_id} because it has no start or end time.")
                continue
            if end_time < start_time:
                logging.warning(f"Skipping trial {trial_id} because it ends at {end_time}, before it starts at {start_time}.")
                continue

            trial = Trial(trial_id=trial_id, start_time=start_time, end_time=end_time, bin_size=bin_size)
            trial.meta.update(session_meta)
            trial.meta["trial_id"] = trial_id
            trial.meta["bin_size"] = bin_size
            trial.meta.update({name: row.get(name) for name in trial_meta})
            trial.meta.update(extra_meta)

            edges = trial.bin_edges()
            for name, (spike_list, unit_ids) in spikes.items():
                trial.add_signal(name, self.bin_spikes(spike_list, unit_ids, edges), unit_ids)

            for (name, label_group, tag) in combined.iter_outputs():
                if tag is SignalKind.EVENT:
                    trial.events[name] = self.event_bin(row.get(name), start_time, bin_size, trial.bin_count())
                elif name in channel_indexes:
                    indexes = channel_indexes[name]
                    samples = continuous.sample_at(edges[:-1], indexes)
                    trial.add_signal(name, samples, [continuous.channel_ids[index] for index in indexes])

            trial_data.append(trial)

        logging.info(f"Built {len(trial_data)} trials from {len(trial_rows)} trial table rows.")
        return trial_data

    def channel_indexes(self, continuous: SignalChunk, label_group: LabelGroup) -> list[int]:
        """Locate channels by label, or take an explicit (start, stop) column range as-is."""
        if isinstance(label_group, tuple) and all(isinstance(index, int) for index in label_group):
            (start, stop) = label_group
            if not 0 <= start < stop <= continuous.channel_count():
                raise InvalidArgument(f"Column range {label_group} is outside {continuous.channel_count()} channels")
            return list(range(start, stop))
        return [continuous.get_channel_index(label) for label in label_group]

    def bin_spikes(self, spike_list: NumericEventList, unit_ids: list[float], edges: np.ndarray) -> np.ndarray:
        """Count spikes per bin (rows) and unit (columns), in half open bins [edge, next_edge)."""
        bin_count = edges.size - 1
        counts = np.zeros([bin_count, len(unit_ids)])
        if bin_count < 1:
            return counts

        in_trial = spike_list.copy_time_range(edges[0], edges[-1])
        for column, unit_id in enumerate(unit_ids):
            (counts[:, column], _) = np.histogram(in_trial.get_times_of(unit_id), bins=edges)
        return counts

    def event_bin(self, event_time: Any, start_time: float, bin_size: float, bin_count: int) -> int | None:
        if not is_time(event_time):
            return None
        # Round away float noise before floor, so 0.03 / 0.01 lands in bin 3 not 2.
        bin_index = int(np.floor(np.round((event_time - start_time) / bin_size, 9)))
        if bin_index < 0 or bin_index > bin_count:
            logging.warning(f"Event at {event_time} is outside its trial, starting at {start_time}.")
        return bin_index


def is_time(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and bool(np.isfinite(value))


# Meta fields that identify a trial, shown before all others.
LEADING_META = ("monkey", "date", "task", "trial_id", "bin_size")


def reorder_fields(trial_data: TrialData) -> TrialData:
    """Put fields of each trial in a canonical order for display, in place.

    Meta starts with identifying fields like monkey, date, and task, then the rest alphabetically.
    Events are in order of occurrence, with missing events last.
    Signals start with spikes, then the rest alphabetically.
    """
    for trial in trial_data:
        leading = [name for name in LEADING_META if name in trial.meta]
        trailing = sorted(name for name in trial.meta.keys() if name not in LEADING_META)
        trial.meta = {name: trial.meta[name] for name in [*leading, *trailing]}

        trial.events = dict(
            sorted(trial.events.items(), key=lambda item: (item[1] is None, item[1] or 0))
        )

        signal_names = sorted(trial.signals.keys(), key=lambda name: (not name.endswith("_spikes"), name))
        trial.signals = {name: trial.signals[name] for name in signal_names}
        trial.labels = {name: trial.labels[name] for name in signal_names if name in trial.labels}
    return trial_data
