import numpy as np

from pytest import raises

from trialdata.config import SignalRequest
from trialdata.model.descriptors import SignalKind
from trialdata.model.model import UnresolvedCategory
from trialdata.signals.labels import get_emg_names, get_marker_labels, get_joint_labels, get_muscle_labels
from trialdata.trials.assembly import assemble_descriptors, attach_name_lists, derive_name_lists, describe
from trialdata.trials.routines import SessionSpikeRoutine, SessionContinuousRoutine
from trialdata.trials.trials import Trial, TrialData


def assemble(**params):
    request = SignalRequest.from_dict(params)
    return assemble_descriptors(request, SessionSpikeRoutine(), SessionContinuousRoutine())


def test_pos_vel_scenario():
    descriptors = assemble(array_names=["S1"], continuous_names=["pos", "vel"], extract_emg=False)
    assert len(descriptors) == 2

    spikes = descriptors[0]
    assert spikes.kind is SignalKind.SPIKES
    assert spikes.source_id == ""
    assert spikes.output_names == ["S1_spikes"]
    assert spikes.labels == []
    assert spikes.params == {"source_id": "", "array_name": "S1"}
    assert spikes.routine == SessionSpikeRoutine()

    combined = descriptors[-1]
    assert combined.kind is SignalKind.GENERIC
    assert combined.output_names == ["pos", "vel", "startTime", "endTime"]
    assert combined.flat_labels() == ["x", "y", "vx", "vy", "startTime", "endTime"]
    assert combined.labels == [["x", "y"], ["vx", "vy"], ["startTime"], ["endTime"]]
    assert combined.category_tags == [SignalKind.GENERIC, SignalKind.GENERIC, SignalKind.EVENT, SignalKind.EVENT]
    assert combined.params == {"trial_meta": []}
    assert combined.routine == SessionContinuousRoutine()


def test_one_descriptor_per_array_plus_combined():
    for array_count in range(1, 5):
        array_names = [f"array_{index}" for index in range(array_count)]
        source_array_names = [f"source_{index}" for index in range(array_count)]
        descriptors = assemble(array_names=array_names, source_array_names=source_array_names)
        assert len(descriptors) == array_count + 1
        assert all(descriptor.kind is SignalKind.SPIKES for descriptor in descriptors[:-1])
        assert descriptors[-1].kind is SignalKind.GENERIC
        assert [descriptor.source_id for descriptor in descriptors[:-1]] == source_array_names
        assert [descriptor.output_names[0] for descriptor in descriptors[:-1]] == [name + "_spikes" for name in array_names]


def test_emg_names_and_order():
    descriptors = assemble(
        array_names="S1",
        continuous_names=["force"],
        extract_emg=True,
        event_names=["goCueTime"],
        trial_meta_fields=["tgtDir"]
    )
    combined = descriptors[-1]
    emg_names = ["EMG_" + name for name in get_emg_names()]
    assert combined.output_names == ["force", *emg_names, "goCueTime"]
    assert combined.flat_labels() == ["fx", "fy", "fz", "mx", "my", "mz", *emg_names, "goCueTime"]
    assert combined.category_tags == [SignalKind.GENERIC, *[SignalKind.EMG] * 22, SignalKind.EVENT]
    assert combined.params == {"trial_meta": ["tgtDir"]}


def test_combined_descriptor_alignment():
    descriptors = assemble(
        array_names="S1",
        continuous_names=["markers", "joint_ang", "muscle_vel", "opensim_hand_pos"],
        extract_emg=True
    )
    combined = descriptors[-1]
    expected_length = 4 + 22 + 2
    assert len(combined.output_names) == expected_length
    assert len(combined.labels) == expected_length
    assert len(combined.category_tags) == expected_length
    assert combined.labels[0] == get_marker_labels()
    assert len(combined.flat_labels()) == 30 + 7 + 39 + 3 + 22 + 2

    triples = list(combined.iter_outputs())
    assert triples[0] == ("markers", get_marker_labels(), SignalKind.GENERIC)
    assert triples[-1] == ("endTime", ["endTime"], SignalKind.EVENT)


def test_unknown_category_lenient_and_strict():
    descriptors = assemble(array_names="S1", continuous_names=["pos", "nonsense"])
    assert descriptors[-1].labels[:2] == [["x", "y"], []]

    with raises(UnresolvedCategory):
        assemble(array_names="S1", continuous_names=["pos", "nonsense"], strict_categories=True)

    with raises(UnresolvedCategory):
        assemble(array_names="S1", event_names=["start"], strict_categories=True)


def test_derive_name_lists():
    assert derive_name_lists([]) == {}
    assert derive_name_lists(["pos", "vel"]) == {}
    assert derive_name_lists(["Markers"]) == {"marker_names": get_marker_labels()}
    assert derive_name_lists(["joint_vel"]) == {"joint_names": get_joint_labels()}
    assert derive_name_lists(["muscle_len", "muscle_vel"]) == {"muscle_names": get_muscle_labels()}
    assert derive_name_lists(["MOTOR_CONTROL"]) == {"motorcontrol_names": ["MotorControlSho", "MotorControlElb"]}

    all_lists = derive_name_lists(["motor_control", "muscle_len", "joint_ang", "markers"])
    assert list(all_lists.keys()) == ["marker_names", "joint_names", "muscle_names", "motorcontrol_names"]


def make_trial_data(trial_count: int = 3) -> TrialData:
    trial_data = TrialData()
    for trial_id in range(trial_count):
        trial = Trial(trial_id=trial_id, start_time=trial_id, end_time=trial_id + 1, bin_size=0.1)
        trial.add_signal("pos", np.zeros([10, 2]), ["x", "y"])
        trial_data.append(trial)
    return trial_data


def test_attach_name_lists_idempotent():
    continuous_names = ["markers", "joint_ang", "muscle_len", "motor_control"]
    trial_data = make_trial_data()
    attach_name_lists(trial_data, continuous_names)
    once = [dict(trial.meta) for trial in trial_data]

    attach_name_lists(trial_data, continuous_names)
    twice = [dict(trial.meta) for trial in trial_data]

    assert once == twice
    assert trial_data.get_meta("marker_names") == [get_marker_labels()] * 3
    assert trial_data.get_meta("joint_names") == [get_joint_labels()] * 3
    assert trial_data.get_meta("muscle_names") == [get_muscle_labels()] * 3
    assert trial_data.get_meta("motorcontrol_names") == [["MotorControlSho", "MotorControlElb"]] * 3


def test_attached_lists_are_independent():
    trial_data = make_trial_data()
    attach_name_lists(trial_data, ["markers"])
    trial_data[0].meta["marker_names"].clear()
    assert trial_data[1].meta["marker_names"] == get_marker_labels()
    assert len(get_marker_labels()) == 30


def test_describe():
    descriptors = assemble(array_names="S1", source_array_names="LeftS1", continuous_names=["pos"])
    assert describe(descriptors) == [
        {"source_id": "LeftS1", "kind": "spikes", "output_names": ["S1_spikes"]},
        {"source_id": "", "kind": "generic", "output_names": ["pos", "startTime", "endTime"]},
    ]
