import sys
from importlib import import_module
from typing import Self


class TrialDataError(ValueError):
    """Base class for problems with a trial data load request."""


class InvalidArgument(TrialDataError):
    """A load parameter was missing, empty, or of the wrong type."""


class ArityMismatch(TrialDataError):
    """Two parameter lists that must be paired element-wise have different lengths."""


class UnresolvedCategory(TrialDataError):
    """A signal category or event name has no known label expansion."""


class DynamicImport():
    """Utility for creating routines and builders from a dynamically imported module and class."""

    @classmethod
    def from_dynamic_import(cls, import_spec: str, external_package_path: str = None, **kwargs) -> Self:
        """Create a class instance from a dynamically imported module and class.

        The given import_spec should be of the form "package.subpackage.module.ClassName",
        for example "trialdata.trials.routines.SessionSpikeRoutine".
        The "package.subpackage.module" will be imported dynamically via importlib.
        Then "ClassName" from the imported module will be invoked as a class constructor with the given kwargs.

        Provide external_package_path in order to import a lab-specific routine or builder that was not
        installed by the usual means, eg conda or pip.  The external_package_path will
        be added temporarily to the Python import search path, then removed when done here.
        """
        last_dot = import_spec.rfind(".")
        if last_dot < 1:
            raise InvalidArgument(f"Import spec must look like module.ClassName, got: {import_spec}")
        module_spec = import_spec[0:last_dot]

        try:
            original_sys_path = sys.path
            if external_package_path:
                sys.path = original_sys_path.copy()
                sys.path.append(external_package_path)
            imported_module = import_module(module_spec, package=None)
        finally:
            sys.path = original_sys_path

        class_name = import_spec[last_dot+1:]
        imported_class = getattr(imported_module, class_name)
        instance = imported_class(**kwargs)
        return instance
