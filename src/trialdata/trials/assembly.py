"""Turn a validated SignalRequest into an ordered list of SignalDescriptor, and annotate loaded trial data.

Descriptor order matters: one spike descriptor per array, in array order,
then a single combined descriptor for continuous, EMG, and event signals, last.
Within the combined descriptor, continuous signals come first, then EMG, then events.
"""

from typing import Any

from trialdata.config import SignalRequest
from trialdata.model.descriptors import SignalDescriptor, SignalKind
from trialdata.signals.categories import resolve_all, check_event_name
from trialdata.signals.labels import get_emg_names, get_joint_labels, get_marker_labels, get_muscle_labels, get_motor_control_labels
from trialdata.trials.routines import SpikeRoutine, ContinuousRoutine
from trialdata.trials.trials import TrialData


def spike_output_name(array_name: str) -> str:
    return array_name + "_spikes"


def emg_output_name(emg_name: str) -> str:
    return "EMG_" + emg_name


def assemble_descriptors(
    request: SignalRequest,
    spike_routine: SpikeRoutine,
    continuous_routine: ContinuousRoutine
) -> list[SignalDescriptor]:
    """Build one spike descriptor per array, plus the combined continuous / EMG / event descriptor."""
    descriptors = []
    for array_name, source_array_name in zip(request.array_names, request.source_array_names, strict=True):
        descriptors.append(
            SignalDescriptor(
                source_id=source_array_name,
                kind=SignalKind.SPIKES,
                output_names=[spike_output_name(array_name)],
                routine=spike_routine,
                params={"source_id": source_array_name, "array_name": array_name}
            )
        )

    continuous_labels = resolve_all(request.continuous_names, request.strict_categories)

    if request.extract_emg:
        emg_names = [emg_output_name(name) for name in get_emg_names()]
    else:
        emg_names = []

    for event_name in request.event_names:
        check_event_name(event_name, request.strict_categories)

    combined = SignalDescriptor(
        source_id="",
        kind=SignalKind.GENERIC,
        output_names=[*request.continuous_names, *emg_names, *request.event_names],
        labels=[
            *continuous_labels,
            *[[name] for name in emg_names],
            *[[name] for name in request.event_names],
        ],
        category_tags=[
            *[SignalKind.GENERIC] * len(request.continuous_names),
            *[SignalKind.EMG] * len(emg_names),
            *[SignalKind.EVENT] * len(request.event_names),
        ],
        routine=continuous_routine,
        params={"trial_meta": list(request.trial_meta_fields)}
    )
    descriptors.append(combined)
    return descriptors


def derive_name_lists(continuous_names: list[str]) -> dict[str, list[str]]:
    """Choose channel name lists to attach to loaded trial data, based on which categories were requested."""
    lowered = [name.lower() for name in continuous_names]
    name_lists = {}
    if "markers" in lowered:
        name_lists["marker_names"] = get_marker_labels()
    if any("joint" in name for name in continuous_names):
        name_lists["joint_names"] = get_joint_labels()
    if any("muscle" in name for name in continuous_names):
        name_lists["muscle_names"] = get_muscle_labels()
    if "motor_control" in lowered:
        name_lists["motorcontrol_names"] = get_motor_control_labels()
    return name_lists


def attach_name_lists(trial_data: TrialData, continuous_names: list[str]) -> TrialData:
    """Set derived channel name lists on every trial, in place.  Attaching twice gives the same result."""
    for name, name_list in derive_name_lists(continuous_names).items():
        trial_data.set_meta(name, name_list)
    return trial_data


def describe(descriptors: list[SignalDescriptor]) -> list[dict[str, Any]]:
    """Summarize descriptors as plain dicts, for logging."""
    return [
        {
            "source_id": descriptor.source_id,
            "kind": descriptor.kind.value,
            "output_names": descriptor.output_names,
        }
        for descriptor in descriptors
    ]
