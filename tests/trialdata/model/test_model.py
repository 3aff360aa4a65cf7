import numpy as np

from pytest import raises

from trialdata.model.model import DynamicImport, InvalidArgument, ArityMismatch, UnresolvedCategory, TrialDataError
from trialdata.model.events import NumericEventList
from trialdata.model.signals import SignalChunk
from trialdata.trials.routines import SessionSpikeRoutine


def test_error_taxonomy():
    for error_class in [InvalidArgument, ArityMismatch, UnresolvedCategory]:
        assert issubclass(error_class, TrialDataError)
        assert issubclass(error_class, ValueError)


def test_dynamic_import():
    routine = DynamicImport.from_dynamic_import("trialdata.trials.routines.SessionSpikeRoutine")
    assert routine == SessionSpikeRoutine()


def test_dynamic_import_external_package(tmp_path):
    module_file = tmp_path / "lab_routines.py"
    module_file.write_text(
        "class LabThing():\n"
        "    def __init__(self, value=0):\n"
        "        self.value = value\n"
    )
    thing = DynamicImport.from_dynamic_import("lab_routines.LabThing", external_package_path=tmp_path.as_posix(), value=7)
    assert thing.value == 7


def test_dynamic_import_bad_spec():
    with raises(InvalidArgument):
        DynamicImport.from_dynamic_import("NoModule")


def test_numeric_event_list():
    raw_data = [[t / 10, t % 3] for t in range(100)]
    event_list = NumericEventList(np.array(raw_data))

    assert event_list.event_count() == 100
    assert np.array_equal(event_list.get_times(), np.array(range(100)) / 10)
    assert event_list.get_unique_values() == [0.0, 1.0, 2.0]
    assert np.array_equal(event_list.get_times_of(1), np.array(range(1, 100, 3)) / 10)

    in_range = event_list.copy_time_range(1.0, 2.0)
    assert in_range.event_count() == 10
    assert in_range.get_times().min() == 1.0
    assert in_range.get_times().max() < 2.0

    assert event_list.copy_time_range().event_count() == 100
    assert event_list.copy_time_range(start_time=9.0).event_count() == 10
    assert event_list.copy_time_range(end_time=1.0).event_count() == 10


def test_empty_numeric_event_list():
    event_list = NumericEventList(np.empty([0, 2]))
    assert event_list.event_count() == 0
    assert event_list.get_unique_values() == []
    assert event_list.copy_time_range(0, 1) == event_list
    assert event_list.copy() == event_list


def test_signal_chunk():
    sample_data = np.array([[v, 10 * v] for v in range(100)], dtype=float)
    signal_chunk = SignalChunk(sample_data, sample_frequency=10, first_sample_time=1.0, channel_ids=["a", "b"])

    assert signal_chunk.sample_count() == 100
    assert signal_chunk.channel_count() == 2
    assert signal_chunk.get_times()[0] == 1.0
    assert np.isclose(signal_chunk.get_times()[-1], 10.9)
    assert np.array_equal(signal_chunk.get_channel_values("b"), 10 * np.arange(100))

    samples = signal_chunk.sample_at(np.array([1.0, 1.05, 2.0]), [1, 0])
    assert samples.shape == (3, 2)
    assert np.allclose(samples[:, 0], [0.0, 5.0, 100.0])
    assert np.allclose(samples[:, 1], [0.0, 0.5, 10.0])

    assert signal_chunk.copy() == signal_chunk

    with raises(InvalidArgument):
        signal_chunk.get_channel_index("c")


def test_empty_signal_chunk_samples_nan():
    signal_chunk = SignalChunk(np.empty([0, 1]), sample_frequency=10, first_sample_time=0.0, channel_ids=["a"])
    samples = signal_chunk.sample_at(np.array([0.0, 0.1]), [0])
    assert samples.shape == (2, 1)
    assert np.all(np.isnan(samples))
