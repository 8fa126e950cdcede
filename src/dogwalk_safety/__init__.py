"""DogWalk Safety - heat risk checks and a walk log for dog owners.

Architecture::

    heat_index.py   Heat index formula and risk tiers (pure)
    walk_times.py   Suggested walking windows by air temperature (pure)
    paw_check.py    Timed hold test state machine + thermometer readings
    acquire.py      Weather acquisition chain: geo -> postal code -> synthetic
    walk_log.py     Last 50 walk decisions, persisted via store.py
    datasources/    External sources (OpenWeatherMap, device location)
    services/       Shared utilities (HTTP session with timeout)
    session.py      Operations for a front end; cli.py is the one shipped

Data flow: datasources -> acquire (+ heat_index, walk_times) -> snapshot
           -> paw_check -> walk_log
"""

__version__ = "0.1.0"

from dogwalk_safety.acquire import WeatherAcquirer
from dogwalk_safety.config import Settings
from dogwalk_safety.paw_check import PawCheckEvaluator
from dogwalk_safety.walk_log import WalkLogStore

__all__ = [
    "PawCheckEvaluator",
    "Settings",
    "WalkLogStore",
    "WeatherAcquirer",
    "__version__",
]
