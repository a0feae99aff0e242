"""
Simulator configuration.

Defaults for the web app's inputs, optionally overridden by a YAML file:

    simulator:
      memory_size_kb: 256
      block_sizes: "40,60,100,56"
      default_strategy: best-fit
      event_log_limit: 30
      log_level: DEBUG

The file is looked up at the path passed to load_config(), then at
$MEMSIM_CONFIG, then at ./memsim.yaml.
"""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from errors import UnknownStrategy
from strategies import Strategy

CONFIG_ENV_VAR = "MEMSIM_CONFIG"
DEFAULT_CONFIG_FILE = "memsim.yaml"

MIN_EVENT_LOG_LIMIT = 1
MAX_EVENT_LOG_LIMIT = 500

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SimulatorConfig:
    """Configuration for the simulator front end.

    Attributes:
        memory_size_kb: Initial memory size shown in the sidebar
        block_sizes: Initial comma separated block sizes
        default_strategy: Strategy tag preselected in the sidebar
        event_log_limit: Number of recent events displayed
        log_level: Root logging level name
    """

    memory_size_kb: int = 100
    block_sizes: str = "20,30,50"
    default_strategy: str = Strategy.FIRST_FIT.value
    event_log_limit: int = 20
    log_level: str = "INFO"

    @property
    def strategy(self) -> Strategy:
        return Strategy.parse(self.default_strategy)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def _resolve_path(path: Optional[Union[str, Path]]) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_config(path: Optional[Union[str, Path]] = None) -> SimulatorConfig:
    """Load simulator configuration from YAML.

    Args:
        path: Explicit config file; see module docstring for fallbacks

    Returns:
        SimulatorConfig with settings from the file or defaults
    """
    config_path = _resolve_path(path)

    if not config_path.exists():
        return SimulatorConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError, UnicodeDecodeError):
        return SimulatorConfig()

    section = data.get("simulator", {}) if isinstance(data, dict) else {}
    if not isinstance(section, dict):
        section = {}
    defaults = SimulatorConfig()

    memory_size_kb = section.get("memory_size_kb", defaults.memory_size_kb)
    if isinstance(memory_size_kb, bool) or not isinstance(memory_size_kb, int) or memory_size_kb <= 0:
        memory_size_kb = defaults.memory_size_kb

    block_sizes = section.get("block_sizes", defaults.block_sizes)
    if isinstance(block_sizes, list):
        block_sizes = ",".join(str(s) for s in block_sizes)
    elif not isinstance(block_sizes, str):
        block_sizes = defaults.block_sizes

    try:
        default_strategy = Strategy.parse(section.get("default_strategy", defaults.default_strategy)).value
    except UnknownStrategy:
        default_strategy = defaults.default_strategy

    raw_limit = section.get("event_log_limit", defaults.event_log_limit)
    if isinstance(raw_limit, bool) or not isinstance(raw_limit, (int, float)) or not math.isfinite(raw_limit):
        raw_limit = defaults.event_log_limit
    event_log_limit = max(MIN_EVENT_LOG_LIMIT, min(int(raw_limit), MAX_EVENT_LOG_LIMIT))

    log_level = str(section.get("log_level", defaults.log_level)).upper()
    if log_level not in LOG_LEVELS:
        log_level = defaults.log_level

    return SimulatorConfig(
        memory_size_kb=memory_size_kb,
        block_sizes=block_sizes,
        default_strategy=default_strategy,
        event_log_limit=event_log_limit,
        log_level=log_level,
    )
