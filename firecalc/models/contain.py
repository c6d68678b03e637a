"""Discrete-step simulation of initial attack on an elliptical fire.

The fire grows as a double ellipse with its origin at the ignition point and
the head running along +x. Distances are chains, times are minutes since the
fire was reported and production rates are chains per hour. Only the upper
flank (y >= 0) is simulated; line building is symmetric so the lower flank
is its mirror image.

Classes:
    - ContainSim: one containment run over a resource list.

References:
    - Fried, J. S. and Fried, B. D. (1996). Simulating wildfire containment
      with realistic tactics. Forest Science 42(3).
"""

from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString, Polygon

from firecalc.utilities.data_classes import ContainParams, ContainResource, ContainResult
from firecalc.utilities.fire_util import SMIDGEN, ContainStatus, ContainTactic
from firecalc.utilities.unit_conversions import ac_to_ch2, ch2_to_ac


class ContainSim:
    """Containment of a single fire by a list of resources.

    Args:
        params (ContainParams): fire at report time and run controls
        resources (Sequence[ContainResource]): resources in any order
        on_step (Callable, optional): called with (step, x, y) for each
            simulated point of the line head
    """
    def __init__(self, params: ContainParams, resources: Sequence[ContainResource],
                 on_step: Optional[Callable[[int, float, float], None]] = None):
        self.params = params
        self.resources = sorted(resources, key=lambda r: r.arrival)
        self.on_step = on_step

        lw = max(1., params.lw_ratio)
        self.lw = lw
        self.ecc = np.sqrt(lw * lw - 1.) / lw

        # Spread rates in ch/min
        self.head_rate = max(0., params.report_rate) / 60.
        self.back_rate = self.head_rate * (1. - self.ecc) / (1. + self.ecc)

        # Fire length at report from the ellipse area
        area = ac_to_ch2(max(0., params.report_size))
        length = np.sqrt(4. * area * lw / np.pi)
        total = self.head_rate + self.back_rate
        if total > SMIDGEN:
            self.head0 = length * self.head_rate / total
        else:
            self.head0 = length / 2.
        self.back0 = length - self.head0

    # ==========================================================================
    # Fire geometry
    # ==========================================================================

    def head_at(self, t: float) -> float:
        return self.head0 + self.head_rate * t

    def back_at(self, t: float) -> float:
        return self.back0 + self.back_rate * t

    def ellipse_at(self, t: float) -> Tuple[float, float, float]:
        """Semi-major axis, centre offset and semi-minor axis at time t."""
        head = self.head_at(t)
        back = self.back_at(t)
        a = (head + back) / 2.
        return a, (head - back) / 2., a / self.lw

    def fire_area_at(self, t: float) -> float:
        """Uncontained fire area (ch2) at time t."""
        a, _, b = self.ellipse_at(t)
        return np.pi * a * b

    def line_point(self, phi: float, t: float) -> Tuple[float, float]:
        a, cx, b = self.ellipse_at(t)
        d = self.params.attack_dist
        return cx + (a + d) * np.cos(phi), (b + d) * np.sin(phi)

    def _line_speed(self, phi: float, t: float) -> float:
        # Arc length of the line ellipse per radian of phi
        a, _, b = self.ellipse_at(t)
        d = self.params.attack_dist
        return np.hypot((a + d) * np.sin(phi), (b + d) * np.cos(phi))

    def _normal_velocity(self, phi: float) -> float:
        # Rate at which the fire front moves along its outward normal
        a_dot = (self.head_rate + self.back_rate) / 2.
        cx_dot = (self.head_rate - self.back_rate) / 2.
        b_dot = a_dot / self.lw

        nx = np.cos(phi) / self.lw
        ny = np.sin(phi)
        norm = np.hypot(nx, ny)
        if norm < SMIDGEN:
            return 0.
        vx = cx_dot + a_dot * np.cos(phi)
        vy = b_dot * np.sin(phi)
        return max(0., (vx * nx + vy * ny) / norm)

    # ==========================================================================
    # Simulation
    # ==========================================================================

    def _flank_production(self, t: float, productive: List[ContainResource]) -> float:
        # Half of the total production builds each flank, in ch/min
        total = sum(r.production for r in productive if r.active_at(t))
        return total / 2. / 60.

    def run(self) -> ContainResult:
        """Runs the simulation, retrying once at a coarser step if the step
        bound is exceeded and the retry flag is set.

        Returns:
            ContainResult: terminal state and derived outputs
        """
        result = self._simulate(self.params.min_steps)
        if result.status == ContainStatus.OVERFLOW and self.params.retry:
            coarse = max(1, self.params.max_steps // 2)
            if coarse < self.params.min_steps:
                result = self._simulate(coarse)
        return result

    def _simulate(self, min_steps: int) -> ContainResult:
        p = self.params
        result = ContainResult()
        result.report_head = self.head0
        result.report_back = self.back0

        if not self.resources:
            return self._unattacked(result, ContainStatus.REPORTED)

        if p.report_size < SMIDGEN:
            result.status = ContainStatus.UNREPORTED
            return result

        first = self.resources[0].arrival
        result.initial_attack_head = self.head_at(first)
        result.initial_attack_back = self.back_at(first)

        productive = [r for r in self.resources if r.production > 0.]
        if not productive:
            return self._unattacked(result, ContainStatus.ATTACKED)

        t_attack = productive[0].arrival
        result.attack_head = self.head_at(t_attack)
        result.attack_back = self.back_at(t_attack)

        last_departure = max(r.departure() for r in productive)
        if self.head_rate > SMIDGEN:
            t_limit = (p.dist_limit - self.head0) / self.head_rate
        else:
            t_limit = np.inf
        if self.head0 > p.dist_limit or t_limit <= t_attack:
            result.status = ContainStatus.SPREAD_LIMIT
            return self._finish(result, max(0., min(t_limit, t_attack)), [])

        horizon = min(last_departure, t_limit) - t_attack
        dt = max(horizon, SMIDGEN) / max(1, min_steps)

        if p.tactic == ContainTactic.HEAD:
            phi, target, sign = 0., np.pi, 1.
        else:
            phi, target, sign = np.pi, 0., -1.

        t = t_attack
        step = 0
        trace = [self.line_point(phi, t)]
        self._emit(step, trace[-1])

        while True:
            if step >= p.max_steps:
                result.status = ContainStatus.OVERFLOW
                break

            prod = self._flank_production(t, productive)
            vn = self._normal_velocity(phi)
            if prod <= vn:
                if not any(r.arrival > t for r in productive):
                    if any(r.active_at(t) for r in productive):
                        result.status = ContainStatus.OVERRUN
                    else:
                        result.status = ContainStatus.EXHAUSTED
                    break

            dphi = max(0., prod - vn) * dt / max(self._line_speed(phi, t), SMIDGEN)
            remaining = abs(target - phi)
            step += 1
            if dphi >= remaining:
                t += dt * remaining / dphi if dphi > 0. else dt
                phi = target
                trace.append(self.line_point(phi, t))
                self._emit(step, trace[-1])
                result.status = ContainStatus.CONTAINED
                break

            phi += sign * dphi
            t += dt
            trace.append(self.line_point(phi, t))
            self._emit(step, trace[-1])

            if self.head_at(t) > p.dist_limit:
                result.status = ContainStatus.SPREAD_LIMIT
                break
            if t >= last_departure:
                result.status = ContainStatus.EXHAUSTED
                break

        result.step = step
        return self._finish(result, t, trace)

    def _emit(self, step: int, point: Tuple[float, float]):
        if self.on_step is not None:
            self.on_step(step, point[0], point[1])

    def _unattacked(self, result: ContainResult, status: int) -> ContainResult:
        result.status = status
        return self._finish(result, 0., [])

    def _finish(self, result: ContainResult, t_final: float,
                trace: List[Tuple[float, float]]) -> ContainResult:
        result.final_time = t_final
        result.trace = trace

        if len(trace) >= 2:
            result.final_line = 2. * LineString(trace).length

        if result.status == ContainStatus.CONTAINED and len(trace) >= 3:
            mirrored = [(x, -y) for x, y in reversed(trace)]
            shape = Polygon(trace + mirrored)
            area = abs(shape.area) if shape.is_valid else abs(shape.buffer(0).area)
            result.final_size = ch2_to_ac(area)
        else:
            result.final_size = ch2_to_ac(self.fire_area_at(t_final))

        if trace:
            xs = [x for x, _ in trace]
            result.x_min = min(xs)
            result.x_max = max(xs)
            result.y_max = max(y for _, y in trace)
        else:
            a, cx, b = self.ellipse_at(t_final)
            result.x_min = cx - a
            result.x_max = cx + a
            result.y_max = b

        result.final_cost = sum(r.cost(t_final) for r in self.resources)
        result.resources_used = sum(1 for r in self.resources if r.arrival <= t_final)
        return result
