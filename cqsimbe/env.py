"""Initialisation and finalisation of the backend library."""

from __future__ import annotations

from dataclasses import dataclass

from cqsimbe import comms
from cqsimbe.datatypes import CqStatus, CQError


@dataclass
class CqEnvironment:
    """Lifecycle flags of the library."""

    initialised: bool = False
    finalised: bool = False


cq_env = CqEnvironment()


def cq_init(verbosity: int = 0) -> CqStatus:
    """Start the device.

    Returns WARNING if already initialised; raises CQError once finalised.
    """
    if cq_env.finalised:
        raise CQError("the backend cannot be reinitialised once finalised")
    if cq_env.initialised:
        if verbosity > 0:
            print("The backend is already initialised. No need to do it again.")
        return CqStatus.WARNING
    if verbosity > 0:
        print("Initialising CQ simulated backend library.\n")
    comms.initialise_device(verbosity)
    cq_env.initialised = True
    return CqStatus.SUCCESS


def cq_finalise(verbosity: int = 0) -> CqStatus:
    """Stop the device. Returns WARNING if already finalised."""
    if cq_env.finalised:
        if verbosity > 0:
            print("The backend is already finalised. No need to do it again.")
        return CqStatus.WARNING
    if verbosity > 0:
        print("Host finalising")
    comms.finalise_device(verbosity)
    cq_env.finalised = True
    return CqStatus.SUCCESS