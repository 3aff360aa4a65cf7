from typing import Any
from collections.abc import Mapping
import logging

from trialdata.__about__ import __version__ as trialdata_version
from trialdata.config import SignalRequest, LoaderConfig
from trialdata.trials.assembly import assemble_descriptors, attach_name_lists, describe
from trialdata.trials.routines import SpikeRoutine, ContinuousRoutine, SessionSpikeRoutine, SessionContinuousRoutine
from trialdata.trials.trials import TrialData, TrialTableBuilder, BinnedTrialTableBuilder, reorder_fields


def load_trial_data(
    source: Any,
    params: Mapping[str, Any] | SignalRequest,
    spike_routine: SpikeRoutine = None,
    continuous_routine: ContinuousRoutine = None,
    builder: TrialTableBuilder = None
) -> TrialData:
    """Load trial data from a session source, with the signals described by params.

    params can be a SignalRequest or a dict of raw load parameters for SignalRequest.from_dict(), like:

        {
            "array_names": ["S1", "cuneate"],
            "source_array_names": ["LeftS1", "RightCN"],
            "continuous_names": ["pos", "vel", "markers"],
            "extract_emg": True,
            "event_names": ["startTime", "goCueTime", "endTime"],
            "bin_size": 0.01,
            "trial_meta_fields": ["tgtDir", "result"],
            "extra_meta": {"epoch": "BL"},
        }

    Parameters are all validated before any data are extracted.

    By default this reads from an in-memory SessionData using the standard session routines
    and bins with BinnedTrialTableBuilder.  Pass in other routines or builder to read other sources.

    Returns trial data with one field per requested signal, plus channel name lists for
    markers, joints, muscles, and motor control, when those were requested.
    """
    if isinstance(params, SignalRequest):
        request = params
    else:
        request = SignalRequest.from_dict(params)

    spike_routine = spike_routine or SessionSpikeRoutine()
    continuous_routine = continuous_routine or SessionContinuousRoutine()
    builder = builder or BinnedTrialTableBuilder()

    descriptors = assemble_descriptors(request, spike_routine, continuous_routine)
    logging.info(f"Loading trial data ({trialdata_version}) with {len(descriptors)} signal descriptors.")
    for summary in describe(descriptors):
        logging.info(f"  {summary}")

    if request.extra_meta:
        builder_params = {"bin_size": request.bin_size, "meta": request.extra_meta}
    else:
        builder_params = {"bin_size": request.bin_size}
    trial_data = builder.build(source, descriptors, builder_params)

    attach_name_lists(trial_data, request.continuous_names)
    return reorder_fields(trial_data)


def load_trial_data_from_yaml(source: Any, config_yaml: str) -> TrialData:
    """Load trial data with the signal request, routines, and builder configured in a YAML file."""
    loader_config = LoaderConfig.from_yaml(config_yaml)
    return load_trial_data(
        source,
        loader_config.request,
        spike_routine=loader_config.spike_routine,
        continuous_routine=loader_config.continuous_routine,
        builder=loader_config.builder
    )
