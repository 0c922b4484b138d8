"""Rest cycle detection.

A :class:`TimeWindowFilter` gates each sample by its time of day and a
:class:`CycleStateMachine` turns the remaining samples into finished
:class:`pyrestcycle.models.RestCycle` events. :class:`RestCycleDetector` wires
both to a telemetry source and an output sink.
"""

from pyrestcycle.cycles.detector import RestCycleDetector
from pyrestcycle.cycles.machine import CycleState, CycleStateMachine
from pyrestcycle.cycles.window import TimeWindowFilter

__all__ = [
    "CycleState",
    "CycleStateMachine",
    "RestCycleDetector",
    "TimeWindowFilter",
]
