"""Expected spread rate through a random two-fuel landscape.

The landscape is a strip of square cells, ``depth`` rows long in the spread
direction and ``2 * laterals + 1`` columns wide. Each cell is the primary
fuel with probability equal to its coverage. Fire enters the centre of the
first row and may step from any cell to a cell in the next row up to
``laterals`` columns to either side; the spread rate along a step follows the
elliptical fire shape of the fuel being entered. The expected rate is the strip
depth over the mean fastest arrival time across ``samples`` random
landscapes.
"""

from typing import Optional

import numpy as np

from firecalc.utilities.fire_util import SMIDGEN


def _eccentricity(lw_ratio: float) -> float:
    if lw_ratio > 1.:
        return float(np.sqrt(lw_ratio * lw_ratio - 1.) / lw_ratio)
    return 0.


class ExpectedSpreadSampler:
    """Monte Carlo expected spread rate of two interleaved fuels.

    Args:
        samples (int): number of random landscapes
        depth (int): rows per landscape
        laterals (int): columns reachable to each side in one row step
        seed (int): random seed, so a worksheet recalculates reproducibly
    """
    def __init__(self, samples: int = 100, depth: int = 20, laterals: int = 2, seed: int = 1):
        self.samples = max(1, int(samples))
        self.depth = max(1, int(depth))
        self.laterals = max(0, int(laterals))
        self.seed = seed

        width = 2 * self.laterals + 1
        offsets = np.arange(-self.laterals, self.laterals + 1)
        self._step_len = np.sqrt(1. + offsets.astype(float) ** 2)
        self._step_cos = 1. / self._step_len
        self._offsets = offsets
        self._width = width

    def _step_rates(self, ros_head: float, eccentricity: float) -> np.ndarray:
        # Elliptical spread rate along each lateral step direction
        if ros_head < SMIDGEN:
            return np.zeros_like(self._step_cos)
        return ros_head * (1. - eccentricity) / (1. - eccentricity * self._step_cos)

    def expected_rate(self, ros0: float, ros1: float, coverage: float,
                      lw0: float, lw1: Optional[float] = None) -> float:
        """Expected spread rate (same units as the inputs).

        Args:
            ros0 (float): spread rate of the primary fuel
            ros1 (float): spread rate of the secondary fuel
            coverage (float): primary fuel coverage (fraction)
            lw0 (float): length-to-width ratio of the primary fuel
            lw1 (float, optional): length-to-width ratio of the secondary
                fuel; the primary ratio when not given
        """
        if lw1 is None:
            lw1 = lw0
        rates = np.vstack([self._step_rates(ros0, _eccentricity(lw0)),
                           self._step_rates(ros1, _eccentricity(lw1))])
        with np.errstate(divide="ignore"):
            step_time = np.where(rates > SMIDGEN, self._step_len / np.maximum(rates, SMIDGEN),
                                 np.inf)

        rng = np.random.default_rng(self.seed)
        times = np.empty(self.samples)
        w = self._width
        centre = self.laterals

        for s in range(self.samples):
            # 0 marks the primary fuel
            grid = (rng.random((self.depth, w)) >= coverage).astype(int)

            arrival = np.full(w, np.inf)
            arrival[centre] = 0.
            for row in range(self.depth):
                nxt = np.full(w, np.inf)
                fuel = grid[row]
                for j, off in enumerate(self._offsets):
                    src = np.arange(w)
                    dst = src + off
                    ok = (dst >= 0) & (dst < w)
                    cand = arrival[src[ok]] + step_time[fuel[dst[ok]], j]
                    np.minimum.at(nxt, dst[ok], cand)
                arrival = nxt
            times[s] = arrival.min()

        mean_time = times.mean()
        if not np.isfinite(mean_time) or mean_time < SMIDGEN:
            return 0.
        return float(self.depth / mean_time)
