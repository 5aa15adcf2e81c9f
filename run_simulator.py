"""Run the control loop simulator from a source checkout.

Usage::

    python run_simulator.py --cycles 20 --interval 0.5
    PLANTLOOP_SEED=42 python run_simulator.py --target WaterLevel=6
"""

import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

from plantloop.workers.simulator_cli import main

if __name__ == "__main__":
    raise SystemExit(main())
