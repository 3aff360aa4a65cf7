from typing import Self
from dataclasses import dataclass
import numpy as np


@dataclass
class NumericEventList():
    """Wrap a 2D array listing one event per row: [timestamp, value [, value ...]].

    Spike trains use this with one spike per row: [spike_time, unit_id].
    """

    event_data: np.ndarray
    """2D array backing the event list.

    event_data must have shape (n, m>=2) where:
     - n is the number of events (one event per row)
     - m is at least 2 (timestamps and values in columns):
       - column 0 holds the event timestamps
       - columns 1+ hold one or more values per event
    """

    def __eq__(self, other: object) -> bool:
        """Compare event_data arrays as-a-whole instead of element-wise."""
        if isinstance(other, self.__class__):
            return (self.event_data.size == 0 and other.event_data.size == 0) or np.array_equal(self.event_data, other.event_data)
        else:
            return False

    def copy(self) -> Self:
        return NumericEventList(self.event_data.copy())

    def event_count(self) -> int:
        """Get the number of events in the list."""
        return self.event_data.shape[0]

    def get_times(self) -> np.ndarray:
        """Get just the event times, ignoring event values."""
        return self.event_data[:, 0]

    def get_values(self, value_index: int = 0) -> np.ndarray:
        """Get just the event values, ignoring event times.

        By default this gets only the first value per event, which for spike trains is the unit id.
        Pass in value_index>0 to get a different value.
        """
        return self.event_data[:, 1 + value_index]

    def get_unique_values(self, value_index: int = 0) -> list[float]:
        """Get the distinct event values, in ascending order -- for spike trains, the sorted unit ids."""
        return np.unique(self.get_values(value_index)).tolist()

    def get_times_of(self, event_value: float, value_index: int = 0) -> np.ndarray:
        """Get times of any events matching the given event_value."""
        value_column = value_index + 1
        matching_rows = (self.event_data[:, value_column] == event_value)
        return self.event_data[matching_rows, 0]

    def copy_time_range(self, start_time: float = None, end_time: float = None) -> Self:
        """Make a new list containing only events with times in half open interval [start_time, end_time).

        Omit start_time to copy all events strictly before end_time.
        Omit end_time to copy all events at and after start_time.
        """
        times = self.get_times()
        rows_in_range = np.ones(times.shape, dtype=bool)
        if start_time is not None:
            rows_in_range &= times >= start_time

        if end_time is not None:
            rows_in_range &= times < end_time

        range_event_data = self.event_data[rows_in_range, :]
        return NumericEventList(range_event_data)
