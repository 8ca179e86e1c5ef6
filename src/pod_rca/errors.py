"""Exceptions raised by the RCA agent."""


class PodRcaError(Exception):
    """Base class for pod-rca errors."""


class ReasoningOutputError(PodRcaError):
    """A reasoning capability returned output that could not be used."""
