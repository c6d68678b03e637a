from dataclasses import dataclass, asdict
from typing import Literal, Union

@dataclass
class TraceEntry:
    pass_id: int
    function: str
    direction: Literal['i', 'o']
    name: str
    value: Union[float, int, str]
    decimals: int
    units: str

    def to_dict(self):
        d = asdict(self)
        # Parquet columns need a single type; discrete and text values are
        # stored in their string form
        d["value"] = str(self.value) if not isinstance(self.value, float) else repr(self.value)
        return d

    def format(self) -> str:
        if isinstance(self.value, float):
            val = f"{self.value:.{self.decimals}f}"
        else:
            val = str(self.value)
        return f"  {self.direction} {self.name} {val} {self.units}".rstrip()

@dataclass
class ContainStepEntry:
    pass_id: int
    step: int
    x: float
    y: float

    def to_dict(self):
        return asdict(self)
