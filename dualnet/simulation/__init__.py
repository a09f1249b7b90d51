"""simulation — Per-tick steppers for the spiking and feed-forward models.

Both steppers are pure: they take a SimulationState, an elapsed time and
a SimulationConfig, and return a new SimulationState. The Simulator
driver owns the current state and calls one stepper per tick.
"""

from .constants import (
    BIO_DECAY,
    PULSE_SPEED,
    HYPERPOLARIZATION,
    NOISE_AMPLITUDE,
    INPUT_FREQUENCY,
    TIMESTEP,
    MAX_DT,
)
from .config import (
    SimulationConfig,
    load_config,
)
from .biological import step_biological
from .artificial import (
    step_artificial,
    relu,
    sigmoid,
    input_drive,
)
from .driver import (
    Simulator,
    STEPPERS,
    step,
    clamp_dt,
)
from .analysis import (
    node_trace,
    pulse_trace,
    firing_events,
    firing_counts,
)
