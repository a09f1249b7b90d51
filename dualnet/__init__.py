"""dualnet — Spiking and feed-forward network simulation, one tick at a time.

Computes the time evolution of two small directed graphs: a leaky
integrate-and-fire network whose spikes travel along edges as pulses,
and a layered perceptron re-evaluated every frame. Rendering is left to
the caller, which receives a fresh state snapshot after each tick.

Subpackages:
    network     Node records, the state container, initial topologies
    simulation  Steppers, configuration, tick driver and run analysis
    utils       Print-based logging
"""

__version__ = "0.1.0"
