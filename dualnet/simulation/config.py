"""Run-time configuration handed to the steppers each tick.

Usage:
    cfg = SimulationConfig(speed=2.0, noise=True)
    cfg = load_config("run.yaml")   # same keys as the dataclass fields
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from dualnet.simulation.constants import MAX_DT


@dataclass(frozen=True)
class SimulationConfig:
    """Controls shared by both steppers and the driver.

    Parameters
    ----------
    speed : float
        Multiplier on pulse transit (biological) or the input phase
        clock (artificial). Must be >= 0.
    noise : bool
        Inject uniform random input into every biological node each tick.
    auto_play : bool
        The driver only steps while this is True.
    max_dt : float
        Largest elapsed time a single tick integrates (s). Must be > 0.
    seed : int, optional
        Seed for the driver's noise generator. None = unseeded.
    """
    speed: float = 1.0
    noise: bool = False
    auto_play: bool = True
    max_dt: float = MAX_DT
    seed: Optional[int] = None

    def __post_init__(self):
        if not self.speed >= 0:
            raise ValueError(f"speed must be >= 0, got {self.speed}")
        if not self.max_dt > 0:
            raise ValueError(f"max_dt must be > 0, got {self.max_dt}")
        for name in ("noise", "auto_play"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be True or False, "
                                 f"got {getattr(self, name)!r}")

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build a config from a mapping, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys {unknown}. "
                             f"Choose from: {sorted(known)}")
        return cls(**data)


def load_config(path):
    """Read a SimulationConfig from a YAML file.

    An empty file yields the defaults.
    """
    with open(Path(path), "r") as f:
        data = yaml.safe_load(f)
    return SimulationConfig.from_dict(data)
