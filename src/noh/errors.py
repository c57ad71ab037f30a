"""Errors raised by the Noh boundary kernel."""


class NohBoundaryError(RuntimeError):
    """Base class for fatal Noh boundary conditions."""


class NohConfigurationError(NohBoundaryError, ValueError):
    """The mesh geometry breaks an assumption of the analytic boundary."""


class UnsupportedFeatureError(NohBoundaryError):
    """A simulation feature the analytic boundary cannot seed is enabled."""
