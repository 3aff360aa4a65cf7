import numpy as np

from pytest import fixture

from trialdata.model.events import NumericEventList
from trialdata.model.signals import SignalChunk
from trialdata.model.session import SessionData
from trialdata.signals.categories import SignalCategory
from trialdata.signals.labels import get_emg_names


def make_continuous(sample_frequency: float = 100.0, duration: float = 3.0) -> SignalChunk:
    """Continuous samples for every known category plus EMG, with easy-to-check values.

    "x" and "y" ramp with time as t and 2t, EMG channel i is the constant i, everything else is -1.
    """
    channel_ids = []
    for category in SignalCategory:
        channel_ids.extend(label for label in category.labels() if label not in channel_ids)
    channel_ids.extend("EMG_" + name for name in get_emg_names())

    times = np.arange(int(duration * sample_frequency)) / sample_frequency
    sample_data = np.full([times.size, len(channel_ids)], -1.0)
    sample_data[:, channel_ids.index("x")] = times
    sample_data[:, channel_ids.index("y")] = 2 * times
    for index, name in enumerate(get_emg_names()):
        sample_data[:, channel_ids.index("EMG_" + name)] = index

    return SignalChunk(sample_data, sample_frequency, 0.0, channel_ids)


@fixture
def session() -> SessionData:
    left_spikes = [
        [0.05, 1],
        [0.15, 1],
        [0.15, 1],
        [1.05, 1],
        [2.95, 2],
    ]
    right_spikes = [
        [0.55, 7],
        [1.55, 7],
    ]
    trial_table = [
        {"startTime": 0.0, "endTime": 1.0, "goCueTime": 0.5, "tgtDir": 0, "result": "R"},
        {"startTime": 1.0, "endTime": 2.0, "goCueTime": 1.25, "tgtDir": 90, "result": "R"},
        {"startTime": 2.0, "endTime": 3.0, "goCueTime": np.nan, "tgtDir": 180, "result": "A"},
    ]
    return SessionData(
        meta={"monkey": "Han", "date": "2026-01-01", "task": "CO"},
        units={
            "LeftS1": NumericEventList(np.array(left_spikes)),
            "RightCN": NumericEventList(np.array(right_spikes)),
        },
        continuous=make_continuous(),
        trial_table=trial_table
    )
