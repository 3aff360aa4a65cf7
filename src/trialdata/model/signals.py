from typing import Self
from dataclasses import dataclass
import numpy as np

from trialdata.model.model import InvalidArgument


@dataclass
class SignalChunk():
    """Wrap a 2D array with a chunk of signal data where rows are samples and columns are channels."""

    sample_data: np.ndarray
    """2D array backing the signal chunk.

    sample_data must have shape (n, m) where:
     - n is the number of samples (evenly spaced in time)
     - m is the number of channels
    """

    sample_frequency: float
    """Frequency in Hz of the samples in sample_data."""

    first_sample_time: float
    """Time in seconds of the first sample in sample_data."""

    channel_ids: list[str]
    """Labels for the channels represented in this signal chunk, like "x", "vx", or "EMG_BiMed".

    channel_ids should have m elements, where m is the number of columns in sample_data.
    """

    def __eq__(self, other: object) -> bool:
        """Compare sample_data arrays as-a-whole instead of element-wise."""
        if isinstance(other, self.__class__):
            arrays_equal = (
                (self.sample_data.size == 0 and other.sample_data.size == 0)
                or np.array_equal(self.sample_data, other.sample_data)
            )
            return (
                arrays_equal
                and self.sample_frequency == other.sample_frequency
                and self.first_sample_time == other.first_sample_time
                and self.channel_ids == other.channel_ids
            )
        else:
            return False

    def copy(self) -> Self:
        return SignalChunk(
            self.sample_data.copy(),
            self.sample_frequency,
            self.first_sample_time,
            list(self.channel_ids)
        )

    def sample_count(self) -> int:
        """Get the number of samples in the chunk."""
        return self.sample_data.shape[0]

    def channel_count(self) -> int:
        """Get the number of channels in the chunk."""
        return self.sample_data.shape[1]

    def get_times(self) -> np.ndarray:
        """Get all the sample times, ignoring channel values."""
        return self.first_sample_time + np.arange(self.sample_count()) / self.sample_frequency

    def get_channel_index(self, channel_id: str) -> int:
        try:
            return self.channel_ids.index(channel_id)
        except ValueError:
            raise InvalidArgument(f"Signal chunk has no channel {channel_id}, only {self.channel_ids}") from None

    def get_channel_values(self, channel_id: str) -> np.ndarray:
        """Get sample values from one channel, by id."""
        return self.sample_data[:, self.get_channel_index(channel_id)]

    def sample_at(self, times: np.ndarray, channel_indexes: list[int]) -> np.ndarray:
        """Linearly interpolate the given channels at arbitrary times.

        Returns an array with shape (len(times), len(channel_indexes)).
        Times outside the chunk take the value of the nearest edge sample.
        """
        sample_times = self.get_times()
        samples = np.empty([len(times), len(channel_indexes)])
        if sample_times.size == 0:
            samples.fill(np.nan)
            return samples

        for column, channel_index in enumerate(channel_indexes):
            samples[:, column] = np.interp(times, sample_times, self.sample_data[:, channel_index])
        return samples
