"""Tests for the containment simulation kernel."""

import pytest
from unittest.mock import MagicMock

from firecalc.models.contain import ContainSim
from firecalc.utilities.data_classes import ContainParams, ContainResource
from firecalc.utilities.fire_util import ContainStatus, ContainTactic
from firecalc.utilities.unit_conversions import ac_to_ch2


def _params(**kwargs):
    base = dict(report_size=1., report_rate=5., lw_ratio=2., tactic=ContainTactic.HEAD)
    base.update(kwargs)
    return ContainParams(**base)


def _crew(arrival=30., production=100., duration=480., **kwargs):
    return ContainResource(arrival=arrival, production=production, duration=duration, **kwargs)


class TestContainResource:
    """Tests for resource timing and cost."""

    def test_activity_window(self):
        """A resource works from arrival until arrival plus duration."""
        r = _crew(arrival=10., duration=20.)
        assert r.departure() == 30.
        assert not r.active_at(5.)
        assert r.active_at(10.)
        assert not r.active_at(30.)

    def test_cost(self):
        """Cost is the base cost plus hourly cost for time worked."""
        r = _crew(arrival=0., duration=120., base_cost=100., hour_cost=60.)
        assert r.cost(60.) == pytest.approx(160.)
        assert r.cost(500.) == pytest.approx(220.)
        assert _crew(arrival=30.).cost(10.) == 0.


class TestFireGeometry:
    """Tests for the double ellipse used by the kernel."""

    def test_report_area_matches(self):
        """The fire at report time has the reported area."""
        sim = ContainSim(_params(report_size=3.), [])
        assert sim.fire_area_at(0.) == pytest.approx(ac_to_ch2(3.))

    def test_backing_slower_than_head(self):
        """An elongated fire backs slower than it heads."""
        sim = ContainSim(_params(), [])
        assert sim.back_rate < sim.head_rate
        assert sim.head_at(60.) - sim.head_at(0.) == pytest.approx(5.)

    def test_circular_fire(self):
        """A length-to-width of one spreads equally in every direction."""
        sim = ContainSim(_params(lw_ratio=1.), [])
        assert sim.back_rate == pytest.approx(sim.head_rate)


class TestContainSim:
    """Tests for terminal states of a containment run."""

    def test_unreported(self):
        """A fire without a reported size is not simulated."""
        result = ContainSim(_params(report_size=0.), [_crew()]).run()
        assert result.status == ContainStatus.UNREPORTED

    def test_no_resources(self):
        """Without resources the fire is reported but never attacked."""
        result = ContainSim(_params(), []).run()
        assert result.status == ContainStatus.REPORTED
        assert result.final_line == 0.

    def test_no_resources_without_report_size(self):
        """An empty resource list is reported even before the fire has a size."""
        result = ContainSim(_params(report_size=0.), []).run()
        assert result.status == ContainStatus.REPORTED

    def test_unproductive_resources(self):
        """Resources that build no line attack without effect."""
        result = ContainSim(_params(), [_crew(production=0.)]).run()
        assert result.status == ContainStatus.ATTACKED

    def test_contained(self):
        """A strong crew contains a small slow fire."""
        result = ContainSim(_params(), [_crew()]).run()
        assert result.status == ContainStatus.CONTAINED
        assert result.final_size > 1.
        assert result.final_line > 0.
        assert result.final_time > 30.
        assert result.resources_used == 1
        assert len(result.trace) >= 3
        assert result.trace[-1][1] == pytest.approx(0., abs=1e-9)

    def test_rear_attack_contains(self):
        """Rear attack also closes the line."""
        result = ContainSim(_params(tactic=ContainTactic.REAR), [_crew()]).run()
        assert result.status == ContainStatus.CONTAINED

    def test_more_production_contains_sooner(self):
        """Doubling production shortens the containment time."""
        slow = ContainSim(_params(), [_crew(production=60.)]).run()
        fast = ContainSim(_params(), [_crew(production=120.)]).run()
        assert fast.final_time < slow.final_time

    def test_overrun(self):
        """A crew slower than the head fire is overrun."""
        result = ContainSim(_params(report_rate=50.), [_crew(production=1.)]).run()
        assert result.status == ContainStatus.OVERRUN
        assert result.final_line == 0.

    def test_spread_limit(self):
        """A fire already past the distance limit is not attacked."""
        result = ContainSim(_params(dist_limit=0.1), [_crew()]).run()
        assert result.status == ContainStatus.SPREAD_LIMIT

    def test_step_overflow(self):
        """Exceeding the step bound without retry reports an overflow."""
        result = ContainSim(_params(max_steps=1, retry=False), [_crew()]).run()
        assert result.status == ContainStatus.OVERFLOW

    def test_resources_sorted_by_arrival(self):
        """Resources are handled in arrival order."""
        sim = ContainSim(_params(), [_crew(arrival=90., name="b"), _crew(arrival=30., name="a")])
        assert [r.name for r in sim.resources] == ["a", "b"]

    def test_cost(self):
        """Final cost sums the cost of every resource."""
        result = ContainSim(_params(), [_crew(base_cost=500., hour_cost=0.)]).run()
        assert result.final_cost == pytest.approx(500.)

    def test_step_callback(self):
        """on_step is called for every simulated point of the line."""
        on_step = MagicMock()
        result = ContainSim(_params(), [_crew()], on_step=on_step).run()
        assert on_step.call_count == len(result.trace)
        first_step = on_step.call_args_list[0][0][0]
        assert first_step == 0
