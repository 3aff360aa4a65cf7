from typing import Any, Self
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from numbers import Real
import logging
import yaml

from trialdata.model.model import InvalidArgument, ArityMismatch
from trialdata.signals.categories import resolve_all, check_event_name
from trialdata.trials.routines import SpikeRoutine, ContinuousRoutine, SessionSpikeRoutine, SessionContinuousRoutine
from trialdata.trials.trials import TrialTableBuilder, BinnedTrialTableBuilder


DEFAULT_EVENT_NAMES = ("startTime", "endTime")


@dataclass
class SignalRequest():
    """Which signals to load into trial data, validated and in canonical form.

    Build these with from_dict() or from_yaml() rather than directly, so that each field gets checked.
    """

    array_names: list[str]
    """Names to store spikes under, one per recording array, like ["S1"] or ["S1", "cuneate"]."""

    source_array_names: list[str]
    """Names of the arrays in the session data, paired with array_names ("" means same as array_names)."""

    continuous_names: list[str] = field(default_factory=list)
    """Continuous signal categories to load, like "pos", "vel", "force", or "markers"."""

    extract_emg: bool = False
    """Whether to load all EMG channels."""

    event_names: list[str] = field(default_factory=lambda: list(DEFAULT_EVENT_NAMES))
    """Trial table event time columns to convert to bin indexes."""

    bin_size: float = 0.01
    """Bin size in seconds that all signals get binned or sampled at."""

    trial_meta_fields: list[str] = field(default_factory=list)
    """Trial table columns to copy into each trial, like "tgtDir" or "result"."""

    extra_meta: dict[str, Any] = field(default_factory=dict)
    """Extra info to put in each trial, like an epoch name."""

    strict_categories: bool = False
    """Whether unknown signal categories and event names are errors, rather than warnings."""

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> Self:
        """Validate and normalize raw load parameters.

        array_names may be a single name or a list of names.
        source_array_names may be omitted, a single name, or a list with the same length as array_names.

        Raises InvalidArgument for missing or mistyped parameters and
        ArityMismatch when array_names and source_array_names don't pair up.
        With strict_categories, unknown continuous categories and event names raise UnresolvedCategory.
        """
        if not isinstance(params, Mapping):
            raise InvalidArgument(f"Load parameters must be a mapping, got {type(params).__name__}")

        known_names = {f.name for f in fields(cls)}
        unknown_names = [name for name in params.keys() if name not in known_names]
        if unknown_names:
            raise InvalidArgument(f"Unknown load parameters: {unknown_names}")

        array_names = as_name_list(params.get("array_names"))
        if not array_names:
            raise InvalidArgument("array_names is missing")
        if not all(isinstance(name, str) and name for name in array_names):
            raise InvalidArgument(f"array_names must contain non-empty strings, got {array_names}")
        if len(set(array_names)) != len(array_names):
            raise InvalidArgument(f"array_names must be distinct, got {array_names}")

        source_array_names = as_name_list(params.get("source_array_names"))
        if source_array_names:
            if not isinstance(source_array_names[0], str):
                raise InvalidArgument(f"source_array_names must contain strings, got {source_array_names}")
            if len(source_array_names) != len(array_names):
                raise ArityMismatch(
                    f"Length of array_names ({len(array_names)}) must match "
                    f"length of source_array_names ({len(source_array_names)})"
                )
        else:
            logging.warning("Source array names not provided, each array will be read using its own name.")
            source_array_names = [""] * len(array_names)

        continuous_names = require_list(params, "continuous_names", [])
        event_names = require_list(params, "event_names", list(DEFAULT_EVENT_NAMES))
        trial_meta_fields = require_list(params, "trial_meta_fields", [])

        extract_emg = params.get("extract_emg", False)
        if not isinstance(extract_emg, bool):
            raise InvalidArgument(f"extract_emg must be a bool, got {extract_emg!r}")

        strict_categories = params.get("strict_categories", False)
        if not isinstance(strict_categories, bool):
            raise InvalidArgument(f"strict_categories must be a bool, got {strict_categories!r}")
        if strict_categories:
            resolve_all(continuous_names, strict=True)
            for event_name in event_names:
                check_event_name(event_name, strict=True)

        bin_size = params.get("bin_size", 0.01)
        if isinstance(bin_size, bool) or not isinstance(bin_size, Real):
            raise InvalidArgument(f"bin_size must be a number, got {bin_size!r}")
        if not bin_size > 0:
            raise InvalidArgument(f"bin_size must be positive, got {bin_size}")

        extra_meta = params.get("extra_meta", None)
        if not extra_meta:
            extra_meta = {}
        elif not isinstance(extra_meta, Mapping):
            raise InvalidArgument(f"extra_meta must be a mapping, got {type(extra_meta).__name__}")

        return cls(
            array_names=array_names,
            source_array_names=source_array_names,
            continuous_names=continuous_names,
            extract_emg=extract_emg,
            event_names=event_names,
            bin_size=float(bin_size),
            trial_meta_fields=trial_meta_fields,
            extra_meta=dict(extra_meta),
            strict_categories=strict_categories
        )

    @classmethod
    def from_yaml(cls, request_yaml: str) -> Self:
        """Read load parameters from a YAML file, either at the top level or nested under "signals"."""
        with open(request_yaml) as f:
            config = yaml.safe_load(f)
        if isinstance(config, Mapping) and "signals" in config:
            config = config["signals"]
        return cls.from_dict(config)


def as_name_list(value: Any) -> list:
    """Accept a single name or a list of names, and return a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str) and not value:
        return []
    return [value]


def require_list(params: Mapping[str, Any], name: str, default: list) -> list:
    value = params.get(name, default)
    if not isinstance(value, (list, tuple)):
        raise InvalidArgument(f"{name} must be a list, got {value!r}")
    if not all(isinstance(element, str) for element in value):
        raise InvalidArgument(f"{name} must contain strings, got {value!r}")
    return list(value)


@dataclass
class LoaderConfig():
    """Everything needed for one load: the signal request plus the routines and builder to use."""

    request: SignalRequest
    spike_routine: SpikeRoutine
    continuous_routine: ContinuousRoutine
    builder: TrialTableBuilder

    @classmethod
    def from_yaml(cls, config_yaml: str) -> Self:
        with open(config_yaml) as f:
            config = yaml.safe_load(f)
        return cls.from_dict(config)

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> Self:
        """Configure a load from a dict like:

            signals:
              array_names: S1
              continuous_names: [pos, vel]
            builder:
              class: trialdata.trials.trials.BinnedTrialTableBuilder
            spike_routine:
              class: my_lab.routines.MySpikeRoutine
              args: {...}
              package_path: path/to/my_lab

        The "builder", "spike_routine", and "continuous_routine" are optional and default to the standard ones.
        """
        if not isinstance(config, Mapping):
            raise InvalidArgument(f"Loader config must be a mapping, got {type(config).__name__}")

        request = SignalRequest.from_dict(config.get("signals", {}))
        spike_routine = configure_instance(config.get("spike_routine"), SpikeRoutine, SessionSpikeRoutine)
        continuous_routine = configure_instance(
            config.get("continuous_routine"),
            ContinuousRoutine,
            SessionContinuousRoutine
        )
        builder = configure_instance(config.get("builder"), TrialTableBuilder, BinnedTrialTableBuilder)
        return LoaderConfig(request, spike_routine, continuous_routine, builder)


def configure_instance(instance_config: Mapping[str, Any], base_class: type, default_class: type) -> Any:
    """Instantiate a configured class by dynamic import, or the default class when not configured."""
    if not instance_config:
        return default_class()

    instance_class = instance_config.get("class", None)
    if not instance_class:
        raise InvalidArgument(f"Config for {base_class.__name__} is missing its class: {instance_config}")
    instance_args = instance_config.get("args", {})
    package_path = instance_config.get("package_path", None)
    logging.info(f"Using {base_class.__name__}: {instance_class}")
    instance = base_class.from_dynamic_import(instance_class, external_package_path=package_path, **instance_args)
    if not isinstance(instance, base_class):
        raise InvalidArgument(f"Configured class {instance_class} is not a {base_class.__name__}")
    return instance
