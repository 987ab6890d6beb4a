"""
The Supervisor package.
Stops helper processes started by another component.

It contains the TerminationSupervisor class and its helper modules, which
together probe liveness, deliver stop signals and wait for the process to exit
with exponential backoff.
"""
from .errors import ObservationFailure, SignalDeliveryFailure, SupervisorError, TerminationTimeout
from .process_utils import Liveness, ProcessControl, get_process_control
from .supervisor import TerminationSupervisor

__all__ = [
    'TerminationSupervisor',
    'ProcessControl',
    'Liveness',
    'get_process_control',
    'SupervisorError',
    'ObservationFailure',
    'SignalDeliveryFailure',
    'TerminationTimeout',
]
