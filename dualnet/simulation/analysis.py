"""Post-run analysis tools.

Functions that turn a list of SimulationState snapshots (as returned by
Simulator.run) into pandas tables for plotting and inspection.
"""

import pandas as pd


def node_trace(states):
    """Node values over time.

    Parameters
    ----------
    states : list of SimulationState
        Consecutive snapshots of one network.

    Returns
    -------
    pd.DataFrame
        Index "time", one column per node id in topology order.
    """
    if not states:
        return pd.DataFrame()
    columns = list(states[0].nodes)
    rows = [[s.nodes[c].value for c in columns] for s in states]
    index = pd.Index([s.time for s in states], name="time")
    return pd.DataFrame(rows, index=index, columns=columns)


def pulse_trace(states):
    """Every live pulse in every snapshot, in long format.

    Returns
    -------
    pd.DataFrame
        Columns: time, pulse_id, edge_id, progress.
    """
    rows = [
        {"time": s.time, "pulse_id": p.id, "edge_id": p.edge_id,
         "progress": p.progress}
        for s in states
        for p in s.pulses
    ]
    return pd.DataFrame(rows, columns=["time", "pulse_id", "edge_id", "progress"])


def firing_events(states):
    """Spikes recorded on each snapshot after the first.

    The first snapshot is the starting point of the run; the nodes it
    lists as fired belong to an earlier tick and are not counted. A
    snapshot repeated by a paused driver (same n_steps as its
    predecessor) is not counted again.

    Returns
    -------
    pd.DataFrame
        Columns: time, node_id. One row per firing node per tick.
    """
    rows = [
        {"time": curr.time, "node_id": node_id}
        for prev, curr in zip(states[:-1], states[1:])
        if curr.n_steps != prev.n_steps
        for node_id in curr.fired
    ]
    return pd.DataFrame(rows, columns=["time", "node_id"])


def firing_counts(states):
    """Number of spikes per node over the run, zero-filled.

    Returns
    -------
    pd.Series
        Indexed by node id, in topology order.
    """
    if not states:
        return pd.Series(dtype=int)
    events = firing_events(states)
    counts = events["node_id"].value_counts()
    return counts.reindex(list(states[0].nodes), fill_value=0).astype(int)
