"""Tick driver: owns the current network and steps it once per frame.

The driver holds the mode ("biological" or "artificial"), the
SimulationConfig and the current SimulationState. Each tick it clamps
the frame delta, picks the stepper for the mode, and replaces its state
with the stepper's output. Switching mode throws the state away and
starts again from the mode's topology.

Usage:
    sim = Simulator(mode="biological", config=SimulationConfig(seed=1))
    states = sim.run(600)             # ten seconds at 60 fps
    sim.update_edge("e4", -1.5)       # strengthen inhibition
    sim.set_mode("artificial")
"""

from dataclasses import replace

import numpy as np

from dualnet.network.nodes import BIOLOGICAL, ARTIFICIAL
from dualnet.network.state import update_edge, update_node
from dualnet.network.topologies import TOPOLOGY_DB
from dualnet.simulation.artificial import step_artificial
from dualnet.simulation.biological import step_biological
from dualnet.simulation.config import SimulationConfig
from dualnet.simulation.constants import TIMESTEP
from dualnet.utils import get_logger

LOG = get_logger("simulation.driver")


STEPPERS = {
    BIOLOGICAL: step_biological,
    ARTIFICIAL: step_artificial,
}


def step(state, dt, config, rng=None):
    """Step state with the stepper matching its node kind."""
    kind = state.kind
    if kind is None:
        return replace(state, nodes={}, time=state.time + dt,
                       n_steps=state.n_steps + 1, fired=())
    return STEPPERS[kind](state, dt, config, rng=rng)


def clamp_dt(delta, max_dt):
    """Clamp a frame delta to [0, max_dt]; a non-finite delta counts as 0."""
    if not np.isfinite(delta):
        return 0.0
    return min(max(delta, 0.0), max_dt)


class Simulator:
    """Drives one network at a time, one stepper call per tick.

    Parameters
    ----------
    mode : str
        "biological" or "artificial"; names the topology to load.
    config : SimulationConfig, optional
        Defaults to SimulationConfig().
    topologies : TopologyDB, optional
        Where mode topologies are looked up. Defaults to TOPOLOGY_DB.
    """

    def __init__(self, mode=BIOLOGICAL, config=None, topologies=None):
        if mode not in STEPPERS:
            raise ValueError(f"Unknown mode '{mode}'. Choose from: {list(STEPPERS)}")
        self.config = config if config is not None else SimulationConfig()
        self.topologies = topologies if topologies is not None else TOPOLOGY_DB
        self.rng = np.random.RandomState(self.config.seed)
        self.mode = mode
        self.state = self._fresh_state()

    def _fresh_state(self):
        topology = self.topologies.get(self.mode)
        if topology.kind != self.mode:
            raise ValueError(f"Topology '{topology.name}' is {topology.kind}, "
                             f"cannot drive it in {self.mode} mode")
        return topology.initial_state()

    def tick(self, delta):
        """Advance by one frame of delta seconds.

        Does nothing while auto_play is off. Returns the current state.
        """
        if not self.config.auto_play:
            return self.state
        dt = clamp_dt(delta, self.config.max_dt)
        self.state = STEPPERS[self.mode](self.state, dt, self.config, rng=self.rng)
        return self.state

    def run(self, n_ticks, delta=TIMESTEP):
        """Tick n_ticks times.

        Returns
        -------
        list of SimulationState
            The snapshot before the first tick followed by one per tick.
        """
        states = [self.state]
        for _ in range(n_ticks):
            states.append(self.tick(delta))
        LOG.debug("Ran %d ticks in %s mode, clock at %.3f s",
                  n_ticks, self.mode, self.state.time)
        return states

    def set_mode(self, mode):
        """Switch model, discarding the current network state."""
        if mode not in STEPPERS:
            raise ValueError(f"Unknown mode '{mode}'. Choose from: {list(STEPPERS)}")
        if mode == self.mode:
            return self.state
        LOG.info("Switching mode %s -> %s", self.mode, mode)
        self.mode = mode
        self.state = self._fresh_state()
        return self.state

    def reset(self):
        """Restart the current mode from its topology."""
        LOG.info("Resetting %s network", self.mode)
        self.state = self._fresh_state()
        return self.state

    def configure(self, **fields):
        """Replace config fields; a new seed reseeds the noise generator."""
        self.config = replace(self.config, **fields)
        if "seed" in fields:
            self.rng = np.random.RandomState(self.config.seed)
        return self.config

    def update_node(self, node_id, **fields):
        """Edit one node's parameters; unknown ids are ignored."""
        self.state = update_node(self.state, node_id, **fields)
        return self.state

    def update_edge(self, edge_id, weight):
        """Set one edge's weight; unknown ids are ignored."""
        self.state = update_edge(self.state, edge_id, weight)
        return self.state
