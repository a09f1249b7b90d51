"""Fixed constants of the two network models.

Time is in seconds; values are in the arbitrary units of the node model.
"""

# Biological (LIF) model
BIO_DECAY = 0.95           # membrane potential retained per tick
PULSE_SPEED = 2.5          # edge lengths per second at speed 1
HYPERPOLARIZATION = -0.2   # value a node is reset to after firing
NOISE_AMPLITUDE = 0.05     # half-width of the uniform noise input

# Artificial (feed-forward) model
INPUT_FREQUENCY = 2.0      # angular frequency of the input drive (rad/s)

# Driver
TIMESTEP = 0.016           # nominal frame interval (~60 fps)
MAX_DT = 0.1               # largest delta a single tick integrates
