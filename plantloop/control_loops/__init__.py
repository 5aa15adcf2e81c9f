"""
Control Loops Package
=====================

    ProcessSupervisor
         │  sample every sensor, check range
         ▼
    ControlLogic  ── PI correction per routing-table entry
         │
         ▼
    ActuatorEntity.adjust_power      EventLog.record / notify
"""

from plantloop.control_loops.control_logic import ControlLogic
from plantloop.control_loops.process_supervisor import ProcessSupervisor

__all__ = ["ControlLogic", "ProcessSupervisor"]
