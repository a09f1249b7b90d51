"""The simulation state container and its edit entry points.

A SimulationState is an immutable snapshot: steppers and edits return a
new container and never modify the one they were given. Nodes are keyed
by id in topology insertion order; edges and live pulses are tuples.
"""

from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from dualnet.network.nodes import Edge, Pulse
from dualnet.utils import get_logger

LOG = get_logger("network.state")


class TopologyError(ValueError):
    """A topology that cannot form a valid network.

    Raised for duplicate ids, edges pointing at missing nodes, and
    networks that mix node kinds.
    """


@dataclass(frozen=True)
class SimulationState:
    """One snapshot of a simulated network.

    Attributes
    ----------
    nodes : dict
        Node id -> BiologicalNode or ArtificialNode.
    edges : tuple of Edge
        In creation order.
    pulses : tuple of Pulse
        Live pulses (biological networks only).
    time : float
        Simulation clock (s).
    n_steps : int
        Number of stepper calls that produced this snapshot.
    fired : tuple of str
        Ids of the nodes that fired on the step that produced this
        snapshot, in node order.
    """
    nodes: Dict[str, object]
    edges: Tuple[Edge, ...]
    pulses: Tuple[Pulse, ...] = ()
    time: float = 0.0
    n_steps: int = 0
    fired: Tuple[str, ...] = ()

    @property
    def n_nodes(self):
        return len(self.nodes)

    @property
    def n_edges(self):
        return len(self.edges)

    @property
    def kind(self) -> Optional[str]:
        """Kind shared by every node, or None for an empty network."""
        for node in self.nodes.values():
            return node.kind
        return None

    def node(self, node_id):
        return self.nodes[node_id]

    def edge(self, edge_id):
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        raise KeyError(edge_id)

    def edges_by_id(self):
        return {edge.id: edge for edge in self.edges}

    def outgoing(self, node_id):
        """Edges leaving node_id, in creation order."""
        return [edge for edge in self.edges if edge.source == node_id]

    def incoming(self, node_id):
        """Edges arriving at node_id, in creation order."""
        return [edge for edge in self.edges if edge.target == node_id]

    def values(self):
        """Node id -> current value."""
        return {node_id: node.value for node_id, node in self.nodes.items()}

    def summary(self):
        """Return a summary string."""
        lines = [
            f"SimulationState: {self.n_nodes} {self.kind or 'empty'} nodes, "
            f"{self.n_edges} edges",
            f"  time: {self.time:.3f} s after {self.n_steps} steps",
            f"  live pulses: {len(self.pulses)}",
        ]
        return "\n".join(lines)

    def to_dict(self):
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges],
            "pulses": [pulse.to_dict() for pulse in self.pulses],
            "time": self.time,
            "n_steps": self.n_steps,
            "fired": list(self.fired),
        }


def create_initial_state(nodes, edges):
    """Build the first snapshot of a network from its topology.

    Every node starts at value 0, whatever value its descriptor carries.

    Parameters
    ----------
    nodes : sequence of BiologicalNode or ArtificialNode
        All nodes, of a single kind.
    edges : sequence of Edge
        Connections between those nodes.

    Returns
    -------
    SimulationState

    Raises
    ------
    TopologyError
        On duplicate node or edge ids, mixed node kinds, or an edge whose
        source or target is not among the nodes.
    """
    state_nodes = {}
    for node in nodes:
        if node.id in state_nodes:
            raise TopologyError(f"Duplicate node id '{node.id}'")
        state_nodes[node.id] = replace(node, value=0.0)

    kinds = {node.kind for node in state_nodes.values()}
    if len(kinds) > 1:
        raise TopologyError(f"A network holds a single node kind, got {sorted(kinds)}")

    edge_ids = set()
    for edge in edges:
        if edge.id in edge_ids:
            raise TopologyError(f"Duplicate edge id '{edge.id}'")
        edge_ids.add(edge.id)
        for end in (edge.source, edge.target):
            if end not in state_nodes:
                raise TopologyError(f"Edge '{edge.id}' references missing node '{end}'")

    state = SimulationState(nodes=state_nodes, edges=tuple(edges))
    LOG.debug("Built state: %d nodes, %d edges", state.n_nodes, state.n_edges)
    return state


def update_node(state, node_id, **fields):
    """Copy state with fields merged into one node.

    Unknown ids are a silent no-op: the same state object is returned.
    Fields that the node's kind does not have raise TypeError, and the
    node id itself cannot be changed.
    """
    if node_id not in state.nodes:
        return state
    if "id" in fields and fields["id"] != node_id:
        raise ValueError(f"Node id '{node_id}' cannot be changed")

    nodes = dict(state.nodes)
    nodes[node_id] = replace(state.nodes[node_id], **fields)
    LOG.debug("Updated node %s: %s", node_id, fields)
    return replace(state, nodes=nodes)


def update_edge(state, edge_id, weight):
    """Copy state with a new weight on one edge.

    Unknown ids are a silent no-op: the same state object is returned.
    """
    edges = list(state.edges)
    for i, edge in enumerate(edges):
        if edge.id == edge_id:
            edges[i] = replace(edge, weight=float(weight))
            LOG.debug("Updated edge %s: weight=%.3f", edge_id, weight)
            return replace(state, nodes=dict(state.nodes), edges=tuple(edges))
    return state
