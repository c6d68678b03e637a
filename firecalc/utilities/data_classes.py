from dataclasses import dataclass, field
from typing import List, Tuple

from firecalc.utilities.fire_util import ContainFlank, ContainStatus

@dataclass
class ContainResource:
    """One fire-fighting resource assigned to a containment run.

    Times are minutes since the fire was reported, production is chains of
    fireline per hour.
    """
    arrival: float
    production: float
    duration: float
    name: str = ""
    flank: int = ContainFlank.LEFT
    base_cost: float = 0.
    hour_cost: float = 0.

    def departure(self) -> float:
        return self.arrival + self.duration

    def active_at(self, t: float) -> bool:
        return self.arrival <= t < self.departure()

    def cost(self, t_end: float) -> float:
        """Base cost plus hourly cost for the time worked up to t_end."""
        if t_end < self.arrival:
            return 0.
        minutes = min(t_end, self.departure()) - self.arrival
        return self.base_cost + self.hour_cost * minutes / 60.


@dataclass
class ContainParams:
    report_size: float       # ac
    report_rate: float       # ch/h
    lw_ratio: float
    tactic: int
    attack_dist: float = 0.  # ch
    dist_limit: float = 1000000.  # ch
    retry: bool = True
    min_steps: int = 250
    max_steps: int = 1000

@dataclass
class ContainResult:
    status: int = ContainStatus.UNREPORTED
    final_size: float = 0.      # ac
    final_line: float = 0.      # ch, both flanks
    final_time: float = 0.      # min since report
    final_cost: float = 0.
    resources_used: int = 0
    step: int = 0
    report_head: float = 0.     # ch
    report_back: float = 0.     # ch
    initial_attack_head: float = 0.
    initial_attack_back: float = 0.
    attack_head: float = 0.
    attack_back: float = 0.
    x_min: float = 0.
    x_max: float = 0.
    y_max: float = 0.
    trace: List[Tuple[float, float]] = field(default_factory=list)
