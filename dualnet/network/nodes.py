"""Node, edge and pulse records for the two network models.

Two node variants:
  - BiologicalNode: leaky integrate-and-fire neuron (spiking model)
  - ArtificialNode: perceptron unit tagged with its layer (feed-forward model)

All records are frozen dataclasses. Kind-specific parameters live only on
their own variant, so a biological node cannot carry a layer and an
artificial node cannot carry a threshold.
"""

from dataclasses import dataclass


BIOLOGICAL = "biological"
ARTIFICIAL = "artificial"
KINDS = (BIOLOGICAL, ARTIFICIAL)

INPUT = "input"
HIDDEN = "hidden"
OUTPUT = "output"
LAYERS = (INPUT, HIDDEN, OUTPUT)


def _as_position(position):
    position = tuple(float(x) for x in position)
    if len(position) != 3:
        raise ValueError(f"Position must have three coordinates, got {position}")
    return position


@dataclass(frozen=True)
class BiologicalNode:
    """Leaky integrate-and-fire neuron.

    Parameters
    ----------
    id : str
        Unique key within a network.
    position : tuple of float
        (x, y, z) layout coordinate, kept for the renderer.
    value : float
        Membrane potential (arbitrary units, unbounded).
    threshold : float
        Spike trigger level. Must be > 0.
    recovery : float
        Constant per-tick relaxation toward 0 while hyperpolarized. Must be > 0.
    label : str
        Human-readable name.
    description : str
        Free-text role of the neuron.
    """
    id: str
    position: tuple = (0.0, 0.0, 0.0)
    value: float = 0.0
    threshold: float = 1.0
    recovery: float = 0.05
    label: str = ""
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "position", _as_position(self.position))
        if not self.threshold > 0:
            raise ValueError(f"Node '{self.id}': threshold must be > 0, "
                             f"got {self.threshold}")
        if not self.recovery > 0:
            raise ValueError(f"Node '{self.id}': recovery must be > 0, "
                             f"got {self.recovery}")

    @property
    def kind(self):
        return BIOLOGICAL

    def to_dict(self):
        return {
            "id": self.id,
            "kind": self.kind,
            "position": list(self.position),
            "value": self.value,
            "threshold": self.threshold,
            "recovery": self.recovery,
            "label": self.label,
            "description": self.description,
        }


@dataclass(frozen=True)
class ArtificialNode:
    """Feed-forward perceptron unit.

    Parameters
    ----------
    id : str
        Unique key within a network.
    layer : str
        One of "input", "hidden", "output".
    position : tuple of float
        (x, y, z) layout coordinate, kept for the renderer.
    value : float
        Activation; in [0, 1] once a nonlinearity has been applied.
    label : str
        Human-readable name.
    description : str
        Free-text role of the unit.
    """
    id: str
    layer: str
    position: tuple = (0.0, 0.0, 0.0)
    value: float = 0.0
    label: str = ""
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "position", _as_position(self.position))
        if self.layer not in LAYERS:
            raise ValueError(f"Node '{self.id}': unknown layer '{self.layer}'. "
                             f"Choose from: {list(LAYERS)}")

    @property
    def kind(self):
        return ARTIFICIAL

    def to_dict(self):
        return {
            "id": self.id,
            "kind": self.kind,
            "layer": self.layer,
            "position": list(self.position),
            "value": self.value,
            "label": self.label,
            "description": self.description,
        }


@dataclass(frozen=True)
class Edge:
    """Directed, weighted connection between two nodes.

    Only the weight is meant to change after construction.
    """
    id: str
    source: str
    target: str
    weight: float = 1.0

    def to_dict(self):
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class Pulse:
    """A spike in transit along an edge.

    progress is the fraction of the edge already travelled, in [0, 1).
    value is always 1.0 for now; graded pulses are not modelled.
    """
    id: str
    edge_id: str
    progress: float = 0.0
    value: float = 1.0

    def to_dict(self):
        return {
            "id": self.id,
            "edge_id": self.edge_id,
            "progress": self.progress,
            "value": self.value,
        }


NODE_TYPES = {
    BIOLOGICAL: BiologicalNode,
    ARTIFICIAL: ArtificialNode,
}
