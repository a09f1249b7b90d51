"""Feed-forward stepper for layered perceptron networks.

One call advances the phase clock by dt * speed, drives the input layer
with phase-shifted sinusoids, then propagates through the hidden layer
(ReLU) and the output layer (sigmoid) within the same tick.

Layers are updated in place, in order input -> hidden -> output, so a
hidden unit reads this tick's inputs and an output unit reads this tick's
hidden values. Edges that break the layering (hidden -> hidden, output ->
hidden) are not detected; they read whatever value the source holds at
that point of the pass, which for a later layer is last tick's value.
"""

from dataclasses import replace

import numpy as np

from dualnet.network.nodes import ARTIFICIAL, INPUT, HIDDEN, OUTPUT
from dualnet.simulation.constants import INPUT_FREQUENCY


# ---------------------------------------------------------------------------
# Transfer functions
# ---------------------------------------------------------------------------

def relu(x):
    """Rectified linear activation.

    relu(x) = max(0, x)
    """
    return np.maximum(x, 0.0)


def sigmoid(x):
    """Logistic activation, 1 / (1 + e^-x).

    Saturates to 0 or 1 for extreme inputs instead of raising on
    overflow of the exponent.
    """
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=np.float64)))


def input_drive(time, index):
    """Sinusoidal input in [0, 1] for the index-th input unit.

    (sin(INPUT_FREQUENCY * time + index) + 1) / 2
    """
    return (np.sin(time * INPUT_FREQUENCY + index) + 1.0) / 2.0


TRANSFER = {
    HIDDEN: relu,
    OUTPUT: sigmoid,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------

def weighted_sum(node_id, incoming, nodes):
    """Sum of source value * weight over the edges into node_id."""
    total = 0.0
    for edge in incoming.get(node_id, ()):
        total += nodes[edge.source].value * edge.weight
    return total


def step_artificial(state, dt, config, rng=None):
    """Advance a feed-forward network by one tick.

    Parameters
    ----------
    state : SimulationState
        Snapshot of an artificial network.
    dt : float
        Elapsed time (s), >= 0.
    config : SimulationConfig
        Uses speed, which scales the phase clock.
    rng : ignored
        Accepted so both steppers share one call signature.

    Returns
    -------
    SimulationState
        A new snapshot with clock time + dt * speed.
    """
    if dt < 0:
        raise ValueError(f"dt must be >= 0, got {dt}")
    if state.kind not in (ARTIFICIAL, None):
        raise ValueError(f"step_artificial cannot step a {state.kind} network")

    time = state.time + dt * config.speed
    nodes = dict(state.nodes)

    inputs = [n for n in nodes.values() if n.layer == INPUT]
    for index, node in enumerate(inputs):
        nodes[node.id] = replace(node, value=float(input_drive(time, index)))

    incoming = {}
    for edge in state.edges:
        incoming.setdefault(edge.target, []).append(edge)

    for layer in (HIDDEN, OUTPUT):
        transfer = TRANSFER[layer]
        for node in [n for n in nodes.values() if n.layer == layer]:
            total = weighted_sum(node.id, incoming, nodes)
            nodes[node.id] = replace(node, value=float(transfer(total)))

    return replace(
        state,
        nodes=nodes,
        time=time,
        fired=(),
        n_steps=state.n_steps + 1,
    )
