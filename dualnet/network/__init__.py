"""network — Node records, the state container and initial topologies."""

from .nodes import (
    BiologicalNode,
    ArtificialNode,
    Edge,
    Pulse,
    BIOLOGICAL, ARTIFICIAL, KINDS,
    INPUT, HIDDEN, OUTPUT, LAYERS,
)
from .state import (
    SimulationState,
    TopologyError,
    create_initial_state,
    update_node,
    update_edge,
)
from .topologies import (
    Topology,
    TopologyDB,
    TOPOLOGY_DB,
    topology_from_records,
    load_topology,
)
