from typing import Any
from dataclasses import dataclass, field
from enum import Enum


class SignalKind(str, Enum):
    """How a trial table builder should treat a signal: bin spikes, sample continuous data, or index events."""

    SPIKES = "spikes"
    GENERIC = "generic"
    EMG = "emg"
    EVENT = "event"


LabelGroup = list[str] | tuple[int, int]
"""Channel labels for one output name, or an explicit (start, stop) column range for pass-through."""


@dataclass
class SignalDescriptor():
    """Specify one unit of signal extraction for a trial table builder.

    The builder calls the routine with the source data and params, then stores results
    in trial fields named by output_names, using labels to pick and name channels.
    """

    source_id: str
    """Which array or data source to read from, or "" to let the routine use its default."""

    kind: SignalKind
    """SPIKES for an array's spikes, GENERIC for the combined continuous / EMG / event unit."""

    output_names: list[str]
    """Trial field names to produce, in order."""

    labels: list[LabelGroup] = field(default_factory=list)
    """Channel labels for each of the output_names, positionally aligned (empty for spikes)."""

    category_tags: list[SignalKind] = field(default_factory=list)
    """Kind of each of the output_names, positionally aligned (only for the combined unit)."""

    routine: Any = None
    """The SpikeRoutine or ContinuousRoutine that extracts raw data for this descriptor."""

    params: dict[str, Any] = field(default_factory=dict)
    """Parameters to pass to the routine."""

    def flat_labels(self) -> list[str | int]:
        """Concatenate label groups, in order."""
        return [label for group in self.labels for label in group]

    def iter_outputs(self):
        """Yield (output_name, label_group, category_tag) triples, in order."""
        return zip(self.output_names, self.labels, self.category_tags, strict=True)
