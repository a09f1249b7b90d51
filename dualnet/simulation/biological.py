"""Spiking (LIF) stepper with travelling pulses.

One call advances a biological network by one tick:

1. Pulses advance by PULSE_SPEED * dt * speed edge lengths. A pulse whose
   progress reaches 1 arrives and is dropped from the live set.
2. Each arrival adds its edge weight to the edge target's input. With
   noise enabled every node also gets uniform input in
   [-NOISE_AMPLITUDE, NOISE_AMPLITUDE].
3. Leaky integration: v <- v * BIO_DECAY + input.
4. v >= threshold fires: v is reset to HYPERPOLARIZATION and a pulse
   with progress 0 starts down every outgoing edge.
5. Otherwise a negative v recovers by the node's constant recovery step.
6. The clock advances by dt (transit speed does not scale the clock) and
   the ids of the nodes that fired are recorded on the new snapshot.

Pulse transit time is fixed per edge regardless of its geometric length.
"""

from dataclasses import replace

import numpy as np

from dualnet.network.nodes import BIOLOGICAL, Pulse
from dualnet.simulation.constants import (
    BIO_DECAY,
    HYPERPOLARIZATION,
    NOISE_AMPLITUDE,
    PULSE_SPEED,
)


def advance_pulses(pulses, dt, speed):
    """Move pulses along their edges.

    Returns
    -------
    live : list of Pulse
        Pulses still in transit, with updated progress.
    arrived : list of Pulse
        Pulses whose progress reached 1 this tick.
    """
    increment = PULSE_SPEED * dt * speed
    live, arrived = [], []
    for pulse in pulses:
        progress = pulse.progress + increment
        if progress >= 1.0:
            arrived.append(pulse)
        else:
            live.append(replace(pulse, progress=progress))
    return live, arrived


def synaptic_input(arrived, edges_by_id, nodes):
    """Sum arriving edge weights per target node.

    An arrival on an edge that is not in the network, or whose target is
    not a node, is a broken topology and raises KeyError.
    """
    inputs = {}
    for pulse in arrived:
        edge = edges_by_id[pulse.edge_id]
        if edge.target not in nodes:
            raise KeyError(f"Edge '{edge.id}' targets missing node '{edge.target}'")
        inputs[edge.target] = inputs.get(edge.target, 0.0) + edge.weight
    return inputs


def step_biological(state, dt, config, rng=None):
    """Advance a spiking network by one tick.

    Parameters
    ----------
    state : SimulationState
        Snapshot of a biological network.
    dt : float
        Elapsed time (s), >= 0. The caller clamps large gaps.
    config : SimulationConfig
        Uses speed and noise.
    rng : np.random.RandomState, optional
        Source of the noise input. If None and noise is on, an unseeded
        generator is used.

    Returns
    -------
    SimulationState
        A new snapshot; state itself is not modified.
    """
    if dt < 0:
        raise ValueError(f"dt must be >= 0, got {dt}")
    if state.kind not in (BIOLOGICAL, None):
        raise ValueError(f"step_biological cannot step a {state.kind} network")
    if config.noise and rng is None:
        rng = np.random.RandomState()

    live, arrived = advance_pulses(state.pulses, dt, config.speed)
    inputs = synaptic_input(arrived, state.edges_by_id(), state.nodes)

    outgoing = {}
    for edge in state.edges:
        outgoing.setdefault(edge.source, []).append(edge)

    fired = []
    nodes = {}
    for node_id, node in state.nodes.items():
        drive = inputs.get(node_id, 0.0)
        if config.noise:
            drive += float(rng.uniform(-NOISE_AMPLITUDE, NOISE_AMPLITUDE))

        v = node.value * BIO_DECAY + drive

        if v >= node.threshold:
            v = HYPERPOLARIZATION
            fired.append(node_id)
            for edge in outgoing.get(node_id, ()):
                live.append(Pulse(id=f"{edge.id}:{state.n_steps}", edge_id=edge.id))
        elif v < 0:
            v += node.recovery

        nodes[node_id] = replace(node, value=v)

    return replace(
        state,
        nodes=nodes,
        pulses=tuple(live),
        fired=tuple(fired),
        time=state.time + dt,
        n_steps=state.n_steps + 1,
    )
