from typing import Callable, Iterable, Optional, Tuple

from firecalc.utilities.config import PropertyDict


class FunctionNode:
    """A named computation reading some cells and writing others.

    The read and write sets are declared up front so the graph can order
    functions with a topological sort instead of relying on call order.
    Functions whose read or write set depends on the configuration (the
    two-fuel compositor reads wind inputs according to the wind option)
    supply ``config_reads`` / ``config_writes`` callables that are given the
    current PropertyDict and return the extra names.

    Args:
        name (str): unique name, e.g. ``fSurfaceFireSpreadAtHead``
        procedure (Callable): ``procedure(calc)`` reads and writes cells
            through the calculator facade
        reads (Iterable[str]): names of cells read on every call
        writes (Iterable[str]): names of cells written on every call
        config_reads (Callable, optional): extra reads given the properties
        config_writes (Callable, optional): extra writes given the properties
    """
    def __init__(self, name: str, procedure: Callable, reads: Iterable[str],
                 writes: Iterable[str],
                 config_reads: Optional[Callable[[PropertyDict], Iterable[str]]] = None,
                 config_writes: Optional[Callable[[PropertyDict], Iterable[str]]] = None):
        self.name = name
        self.procedure = procedure
        self.reads: Tuple[str, ...] = tuple(reads)
        self.writes: Tuple[str, ...] = tuple(writes)
        self.config_reads = config_reads
        self.config_writes = config_writes

    def effective_reads(self, prop: PropertyDict) -> Tuple[str, ...]:
        if self.config_reads is None:
            return self.reads
        extra = [n for n in self.config_reads(prop) if n not in self.reads]
        return self.reads + tuple(extra)

    def effective_writes(self, prop: PropertyDict) -> Tuple[str, ...]:
        if self.config_writes is None:
            return self.writes
        extra = [n for n in self.config_writes(prop) if n not in self.writes]
        return self.writes + tuple(extra)

    def all_names(self) -> Tuple[str, ...]:
        return self.reads + self.writes

    def __call__(self, calc):
        return self.procedure(calc)

    def __repr__(self) -> str:
        return f"FunctionNode({self.name})"
