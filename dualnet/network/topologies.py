"""Initial topologies for the two network models.

A Topology bundles the node and edge descriptors that seed a fresh
SimulationState. The demo networks shown by the visualizer are
registered in TOPOLOGY_DB under their kind; further topologies can be
registered at runtime or read from YAML/JSON files.

File format (YAML shown, JSON is the same structure)::

    name: two_cell
    kind: biological
    description: A sensory neuron driving a motor neuron.
    nodes:
      - {id: b1, position: [-1, 0, 0], threshold: 0.8, recovery: 0.05}
      - {id: b2, position: [1, 0, 0]}
    edges:
      - {id: e1, source: b1, target: b2, weight: 0.9}
"""

from dataclasses import dataclass
from pathlib import Path

from dualnet.network.nodes import (
    ArtificialNode,
    BiologicalNode,
    Edge,
    NODE_TYPES,
    BIOLOGICAL, ARTIFICIAL,
    INPUT, HIDDEN, OUTPUT,
)
from dualnet.network.state import TopologyError, create_initial_state
from dualnet.utils import get_logger

LOG = get_logger("network.topologies")


@dataclass(frozen=True)
class Topology:
    """Node and edge descriptors for one network.

    Parameters
    ----------
    name : str
        Registry key.
    kind : str
        "biological" or "artificial"; every node must be of this kind.
    nodes : tuple
        Node descriptors, in the order the steppers will iterate them.
    edges : tuple of Edge
        Edge descriptors.
    description : str
        What the network demonstrates.
    """
    name: str
    kind: str
    nodes: tuple
    edges: tuple
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        if self.kind not in NODE_TYPES:
            raise TopologyError(f"Topology '{self.name}': unknown kind '{self.kind}'")
        for node in self.nodes:
            if node.kind != self.kind:
                raise TopologyError(f"Topology '{self.name}' is {self.kind} but node "
                                    f"'{node.id}' is {node.kind}")

    def initial_state(self):
        """A fresh SimulationState with every node at rest."""
        return create_initial_state(self.nodes, self.edges)

    def to_dict(self):
        return {
            "name": self.name,
            "kind": self.kind,
            "description": self.description,
            "n_nodes": len(self.nodes),
            "n_edges": len(self.edges),
        }


class TopologyDB:
    """Registry of named topologies."""

    def __init__(self):
        self._topologies = {}

    def register(self, topology):
        self._topologies[topology.name] = topology

    def get(self, name):
        """Get a topology by name."""
        if name not in self._topologies:
            raise KeyError(f"Unknown topology '{name}'. "
                           f"Available: {list(self._topologies.keys())}")
        return self._topologies[name]

    def list_topologies(self):
        return [t.to_dict() for t in self._topologies.values()]

    def __len__(self):
        return len(self._topologies)

    def __contains__(self, name):
        return name in self._topologies


# ---------------------------------------------------------------------------
# Building topologies from plain records
# ---------------------------------------------------------------------------

def node_from_record(kind, record):
    """Build a node of the given kind from a dict of its fields."""
    record = dict(record)
    record.pop("kind", None)
    try:
        return NODE_TYPES[kind](**record)
    except TypeError as err:
        raise TopologyError(f"Bad {kind} node record {record}: {err}") from err


def edge_from_record(record):
    try:
        return Edge(**record)
    except TypeError as err:
        raise TopologyError(f"Bad edge record {record}: {err}") from err


def topology_from_records(name, kind, node_records, edge_records, description=""):
    """Build a Topology from lists of dicts (e.g. parsed YAML).

    Returns
    -------
    Topology
    """
    nodes = [node_from_record(kind, r) for r in node_records]
    edges = [edge_from_record(r) for r in edge_records]
    return Topology(name=name, kind=kind, nodes=nodes, edges=edges,
                    description=description)


def _default_loaders():
    """File-type -> loader function mapping."""
    import json
    import yaml

    def load_json(path):
        with open(path, "r") as f:
            return json.load(f)

    def load_yaml(path):
        with open(path, "r") as f:
            return yaml.safe_load(f)

    return {
        "json": load_json,
        "yaml": load_yaml,
        "yml": load_yaml,
    }


def load_topology(path):
    """Read a topology from a YAML or JSON file.

    Parameters
    ----------
    path : str or Path
        File with keys name, kind, nodes, edges and optionally description.

    Returns
    -------
    Topology
    """
    path = Path(path)
    loader = _default_loaders().get(path.suffix.lstrip(".").lower())
    if loader is None:
        raise ValueError(f"Cannot load topology from '{path.name}': "
                         f"expected one of {list(_default_loaders())}")

    data = loader(path) or {}
    missing = [k for k in ("kind", "nodes") if k not in data]
    if missing:
        raise TopologyError(f"{path.name} lacks required keys {missing}")

    topology = topology_from_records(
        name=data.get("name", path.stem),
        kind=data["kind"],
        node_records=data["nodes"],
        edge_records=data.get("edges") or [],
        description=data.get("description", ""),
    )
    LOG.info("Loaded topology '%s' from %s: %d nodes, %d edges",
             topology.name, path, len(topology.nodes), len(topology.edges))
    return topology


# ---------------------------------------------------------------------------
# Demo networks
# ---------------------------------------------------------------------------

BIO_NODES = (
    BiologicalNode(
        id="b1", position=(-2, 1, 0), threshold=0.8, recovery=0.05,
        label="Sensory Neuron",
        description="Receives external stimulus. High sensitivity.",
    ),
    BiologicalNode(
        id="b2", position=(0, 0, 0), threshold=1.0, recovery=0.1,
        label="Interneuron",
        description="Processes signal relay. Modulates firing rate.",
    ),
    BiologicalNode(
        id="b3", position=(2, 0.5, 0), threshold=0.9, recovery=0.08,
        label="Motor Neuron",
        description="Drives output response. Integrates signals.",
    ),
    BiologicalNode(
        id="b4", position=(0, -2, 1), threshold=1.1, recovery=0.02,
        label="Inhibitory Neuron",
        description="Suppresses activity in connected neighbors.",
    ),
)

BIO_EDGES = (
    Edge(id="e1", source="b1", target="b2", weight=0.8),
    Edge(id="e2", source="b2", target="b3", weight=0.7),
    Edge(id="e3", source="b1", target="b4", weight=0.5),
    Edge(id="e4", source="b4", target="b2", weight=-0.9),  # inhibitory
)

ART_NODES = (
    ArtificialNode(id="a1", layer=INPUT, position=(-3, 1.5, 0),
                   label="Input A", description="Feature X1"),
    ArtificialNode(id="a2", layer=INPUT, position=(-3, -1.5, 0),
                   label="Input B", description="Feature X2"),
    ArtificialNode(id="h1", layer=HIDDEN, position=(0, 2, 0),
                   label="Hidden 1", description="ReLU activation"),
    ArtificialNode(id="h2", layer=HIDDEN, position=(0, 0, 0),
                   label="Hidden 2", description="ReLU activation"),
    ArtificialNode(id="h3", layer=HIDDEN, position=(0, -2, 0),
                   label="Hidden 3", description="ReLU activation"),
    ArtificialNode(id="o1", layer=OUTPUT, position=(3, 0, 0),
                   label="Output", description="Sigmoid probability"),
)

ART_EDGES = (
    Edge(id="ae1", source="a1", target="h1", weight=0.5),
    Edge(id="ae2", source="a1", target="h2", weight=-0.2),
    Edge(id="ae3", source="a2", target="h2", weight=0.8),
    Edge(id="ae4", source="a2", target="h3", weight=0.4),
    Edge(id="ae5", source="h1", target="o1", weight=0.6),
    Edge(id="ae6", source="h2", target="o1", weight=0.9),
    Edge(id="ae7", source="h3", target="o1", weight=-0.5),
)

TOPOLOGY_DB = TopologyDB()

TOPOLOGY_DB.register(
    Topology(
        name=BIOLOGICAL, kind=BIOLOGICAL, nodes=BIO_NODES, edges=BIO_EDGES,
        description="Sensory neuron feeding an interneuron and a motor neuron, "
                    "with feedback inhibition onto the interneuron.",
    ),
)

TOPOLOGY_DB.register(
    Topology(
        name=ARTIFICIAL, kind=ARTIFICIAL, nodes=ART_NODES, edges=ART_EDGES,
        description="2-3-1 perceptron: ReLU hidden layer, sigmoid output.",
    ),
)
