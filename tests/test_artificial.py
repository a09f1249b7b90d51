"""Tests for the feed-forward stepper and its transfer functions."""

import math
import warnings
from dataclasses import replace

import numpy as np
import pytest

from dualnet.network.nodes import ArtificialNode, Edge, Pulse, INPUT, HIDDEN, OUTPUT
from dualnet.network.state import SimulationState, create_initial_state, update_edge
from dualnet.network.topologies import TOPOLOGY_DB
from dualnet.simulation.artificial import (
    input_drive,
    relu,
    sigmoid,
    step_artificial,
)
from dualnet.simulation.config import SimulationConfig

DT = 0.016
CONFIG = SimulationConfig()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def perceptron():
    """The 2-3-1 demo network."""
    return TOPOLOGY_DB.get("artificial").initial_state()


@pytest.fixture
def misordered():
    """Hidden unit hb feeds hidden unit ha, which is evaluated first."""
    return create_initial_state(
        [
            ArtificialNode(id="i", layer=INPUT),
            ArtificialNode(id="ha", layer=HIDDEN),
            ArtificialNode(id="hb", layer=HIDDEN),
        ],
        [
            Edge(id="ib", source="i", target="hb", weight=1.0),
            Edge(id="ba", source="hb", target="ha", weight=1.0),
        ],
    )


def _expected_outputs(time):
    a1 = (math.sin(time * 2) + 1) / 2
    a2 = (math.sin(time * 2 + 1) + 1) / 2
    h1 = max(0.0, a1 * 0.5)
    h2 = max(0.0, a1 * -0.2 + a2 * 0.8)
    h3 = max(0.0, a2 * 0.4)
    o1 = 1 / (1 + math.exp(-(h1 * 0.6 + h2 * 0.9 + h3 * -0.5)))
    return {"a1": a1, "a2": a2, "h1": h1, "h2": h2, "h3": h3, "o1": o1}


# ---------------------------------------------------------------------------
# Transfer functions
# ---------------------------------------------------------------------------

class TestTransferFunctions:
    def test_relu(self):
        assert relu(-3.0) == 0.0
        assert relu(0.0) == 0.0
        assert relu(2.5) == 2.5

    def test_relu_array(self):
        np.testing.assert_array_equal(relu(np.array([-1.0, 0.5])), [0.0, 0.5])

    def test_sigmoid_midpoint(self):
        assert sigmoid(0.0) == 0.5

    def test_sigmoid_symmetry(self):
        assert sigmoid(2.0) + sigmoid(-2.0) == pytest.approx(1.0)

    def test_sigmoid_saturates_without_warning(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert sigmoid(-1000.0) == 0.0
            assert sigmoid(1000.0) == 1.0

    def test_input_drive_range_and_phase(self):
        assert input_drive(0.0, 0) == pytest.approx(0.5)
        assert input_drive(math.pi / 4, 0) == pytest.approx(1.0)
        values = [input_drive(t, i) for t in np.linspace(0, 10, 50) for i in range(3)]
        assert min(values) >= 0.0
        assert max(values) <= 1.0

    def test_input_drive_offset_per_index(self):
        assert input_drive(0.3, 0) != input_drive(0.3, 1)


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------

class TestStepArtificial:
    def test_full_forward_pass_in_one_tick(self, perceptron):
        new = step_artificial(perceptron, DT, CONFIG)
        expected = _expected_outputs(DT)
        for node_id, value in expected.items():
            assert new.node(node_id).value == pytest.approx(value, abs=1e-12)

    def test_deterministic(self, perceptron):
        a = step_artificial(perceptron, DT, CONFIG)
        b = step_artificial(perceptron, DT, CONFIG)
        assert a.values() == b.values()

    def test_ranges(self, perceptron):
        state = perceptron
        for _ in range(200):
            state = step_artificial(state, DT, CONFIG)
            for node in state.nodes.values():
                if node.layer == HIDDEN:
                    assert node.value >= 0.0
                elif node.layer == OUTPUT:
                    assert 0.0 < node.value < 1.0
                else:
                    assert 0.0 <= node.value <= 1.0

    def test_inputs_phase_offset(self, perceptron):
        new = step_artificial(perceptron, DT, CONFIG)
        assert new.node("a1").value != new.node("a2").value

    def test_speed_scales_clock(self, perceptron):
        new = step_artificial(perceptron, 0.1, SimulationConfig(speed=2.0))
        assert new.time == pytest.approx(0.2)
        assert new.node("a1").value == pytest.approx(input_drive(0.2, 0))

    def test_zero_speed_freezes_phase(self, perceptron):
        new = step_artificial(perceptron, 0.1, SimulationConfig(speed=0.0))
        assert new.time == 0.0
        assert new.node("a2").value == pytest.approx((math.sin(1) + 1) / 2)

    def test_clock_accumulates(self, perceptron):
        state = perceptron
        for _ in range(10):
            state = step_artificial(state, 0.05, CONFIG)
        assert state.time == pytest.approx(0.5)
        assert state.n_steps == 10

    def test_weight_edit_takes_effect(self, perceptron):
        muted = update_edge(perceptron, "ae1", 0.0)
        assert step_artificial(muted, DT, CONFIG).node("h1").value == 0.0

    def test_extreme_weights_saturate(self, perceptron):
        state = perceptron
        for edge_id in ("ae5", "ae6"):
            state = update_edge(state, edge_id, -1e6)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            new = step_artificial(state, DT, CONFIG)
        assert new.node("o1").value == 0.0

    def test_hidden_without_inputs_is_zero(self):
        state = create_initial_state(
            [ArtificialNode(id="h", layer=HIDDEN), ArtificialNode(id="o", layer=OUTPUT)],
            [],
        )
        new = step_artificial(state, DT, CONFIG)
        assert new.node("h").value == 0.0
        assert new.node("o").value == 0.5

    def test_misordered_layers_read_stale_values(self, misordered):
        first = step_artificial(misordered, DT, CONFIG)
        assert first.node("ha").value == 0.0
        assert first.node("hb").value == pytest.approx(first.node("i").value)

        second = step_artificial(first, DT, CONFIG)
        assert second.node("ha").value == pytest.approx(first.node("hb").value)

    def test_pulses_untouched(self, perceptron):
        state = replace(perceptron, pulses=(Pulse(id="p", edge_id="ae1", progress=0.3),))
        assert step_artificial(state, DT, CONFIG).pulses == state.pulses

    def test_input_state_untouched(self, perceptron):
        step_artificial(perceptron, DT, CONFIG)
        assert all(v == 0.0 for v in perceptron.values().values())
        assert perceptron.time == 0.0

    def test_negative_dt(self, perceptron):
        with pytest.raises(ValueError):
            step_artificial(perceptron, -1.0, CONFIG)

    def test_dangling_source_fails_fast(self):
        state = SimulationState(
            nodes={"h": ArtificialNode(id="h", layer=HIDDEN)},
            edges=(Edge(id="xh", source="x", target="h"),),
        )
        with pytest.raises(KeyError):
            step_artificial(state, DT, CONFIG)

    def test_nothing_recorded_as_fired(self, perceptron):
        assert step_artificial(perceptron, DT, CONFIG).fired == ()

    def test_rejects_biological_network(self):
        state = TOPOLOGY_DB.get("biological").initial_state()
        with pytest.raises(ValueError):
            step_artificial(state, DT, CONFIG)
