"""Containment functions.

The report-time feeders convert surface fire outputs into the units of the
containment kernel. ``fContainFF`` (many resources) and
``fContainFFSingle`` (one resource) differ only in how they build the
resource list; both hand it to :func:`run_containment`.
"""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.exceptions import ValidationError
from firecalc.models.contain import ContainSim
from firecalc.models.rothermel import calc_fire_area, calc_fire_perimeter, calc_fire_width
from firecalc.utilities.data_classes import ContainParams, ContainResource, ContainResult
from firecalc.utilities.fire_util import ContainDerivedStatus, ContainFlank, ContainStatus
from firecalc.utilities.logger_schemas import ContainStepEntry
from firecalc.utilities.unit_conversions import ch2_to_ac

# Final size reported when the fire was not contained
NO_SIZE = -1.

# Distance limit used when the limit option is off (ch)
UNLIMITED_DIST = 1000000.

RESOURCE_LISTS = (
    "vContainResourceArrival", "vContainResourceBaseCost", "vContainResourceDuration",
    "vContainResourceHourCost", "vContainResourceName", "vContainResourceProd",
)

CONTAIN_READS = (
    "vContainAttackDist", "vContainAttackTactic", "vContainReportRatio",
    "vContainReportSize", "vContainReportSpread", "vContainLimitDist",
) + RESOURCE_LISTS

CONTAIN_WRITES = (
    "vContainAttackBack", "vContainAttackHead", "vContainAttackPerimeter",
    "vContainAttackSize", "vContainCost", "vContainLine", "vContainPoints",
    "vContainReportBack", "vContainReportHead", "vContainResourcesUsed", "vContainSize",
    "vContainStatus", "vContainTime", "vContainXMax", "vContainXMin", "vContainYMax",
)


# ==============================================================================
# Report-time feeders
# ==============================================================================

def contain_report_spread(calc):
    # ft/min to ch/h
    calc.set("vContainReportSpread", calc.get("vSurfaceFireSpreadAtHead") * 60. / 66.)


def contain_report_ratio(calc):
    calc.set("vContainReportRatio", calc.get("vSurfaceFireLengthToWidth"))


def contain_report_size(calc):
    calc.set("vContainReportSize", calc.get("vSurfaceFireArea"))


def contain_diagram(calc):
    calc.set("vContainDiagram", calc.get("vContainDiagram") + 1.)


# ==============================================================================
# Resource lists
# ==============================================================================

def _padded(values: List[float], count: int, field: str) -> List[float]:
    if not values:
        return [0.] * count
    if len(values) != count:
        raise ValidationError(f"Expected {count} entries, found {len(values)}", field,
                              len(values))
    return values


def build_resources(calc, single: bool = False) -> List[ContainResource]:
    """Parses the resource list cells into ContainResource records.

    The arrival list fixes the number of resources; production and duration
    lists must match it. The name list may be shorter, in which case missing
    names default to ResourceN, but never longer. Cost lists are only read
    when the cost is an output. With ``single`` set only the first entry of
    every list is used.

    Args:
        calc: calculator facade holding the resource list cells
        single (bool): use only the first resource

    Raises:
        ValidationError: if a list holds a non-numeric entry, its length
            does not match the arrival list, or more names than resources
            are given
    """
    arrival = calc.cell("vContainResourceArrival").numbers()
    if single:
        arrival = arrival[:1]
    count = len(arrival)
    if count == 0:
        return []

    def numbers(name: str, required: bool = True) -> List[float]:
        vals = calc.cell(name).numbers()
        if single:
            vals = vals[:1]
        if required and len(vals) != count:
            raise ValidationError(f"Expected {count} entries, found {len(vals)}", name,
                                  calc.text(name))
        return _padded(vals, count, name)

    prod = numbers("vContainResourceProd")
    duration = numbers("vContainResourceDuration")

    if calc.is_output("vContainCost"):
        base_cost = numbers("vContainResourceBaseCost", required=False)
        hour_cost = numbers("vContainResourceHourCost", required=False)
    else:
        base_cost = [0.] * count
        hour_cost = [0.] * count

    names = calc.cell("vContainResourceName").tokens()
    if single:
        names = names[:1]
    if len(names) > count:
        raise ValidationError(f"Expected at most {count} names, found {len(names)}",
                              "vContainResourceName", calc.text("vContainResourceName"))
    names = names + [f"Resource{i + 1}" for i in range(len(names), count)]

    return [
        ContainResource(arrival=arrival[i], production=prod[i], duration=duration[i],
                        name=names[i], flank=ContainFlank.LEFT, base_cost=base_cost[i],
                        hour_cost=hour_cost[i])
        for i in range(count)
    ]


# ==============================================================================
# Kernel invocation
# ==============================================================================

def derive_status(result: ContainResult) -> int:
    """Maps the kernel's terminal state onto the worksheet status, replacing
    the final size with NO_SIZE when the fire was not contained.
    """
    status = ContainDerivedStatus.crosswalk[result.status]
    if status != ContainDerivedStatus.CONTAINED and result.status != ContainStatus.CONTAINED:
        result.final_size = NO_SIZE
        if result.final_line > 0.:
            status = ContainDerivedStatus.WITHDRAWN
        else:
            status = ContainDerivedStatus.ESCAPED
    return status


def run_containment(calc, resources: List[ContainResource]):
    """Runs the containment kernel and stores its outputs."""
    prop = calc.prop
    if prop.boolean("containConfLimitDistOn"):
        dist_limit = calc.get("vContainLimitDist")
    else:
        dist_limit = UNLIMITED_DIST

    params = ContainParams(
        report_size=calc.get("vContainReportSize"),
        report_rate=calc.get("vContainReportSpread"),
        lw_ratio=calc.get("vContainReportRatio"),
        tactic=calc.get("vContainAttackTactic"),
        attack_dist=calc.get("vContainAttackDist"),
        dist_limit=dist_limit,
        retry=prop.boolean("containConfRetry"),
        min_steps=prop.integer("containConfMinSteps"),
        max_steps=prop.integer("containConfMaxSteps"),
    )

    sink = calc.sink
    on_step = None
    if sink is not None:
        def on_step(step, x, y):
            sink.record_contain_step(ContainStepEntry(sink.pass_id, step, x, y))

    result = ContainSim(params, resources, on_step=on_step).run()
    status = derive_status(result)

    if sink is not None:
        sink.log_message(f"Containment ended {ContainStatus.names[result.status]} "
                         f"after {result.step} steps")

    # Fire at the first resource's arrival
    lw = max(1., params.lw_ratio)
    length = result.initial_attack_back + result.initial_attack_head
    width = calc_fire_width(length, lw)

    calc.set("vContainStatus", status)
    calc.set("vContainSize", result.final_size)
    calc.set("vContainLine", result.final_line)
    calc.set("vContainTime", result.final_time)
    calc.set("vContainCost", result.final_cost)
    calc.set("vContainResourcesUsed", float(result.resources_used))
    calc.set("vContainPoints", float(len(result.trace)))
    calc.set("vContainReportHead", result.report_head)
    calc.set("vContainReportBack", result.report_back)
    calc.set("vContainAttackHead", result.initial_attack_head)
    calc.set("vContainAttackBack", result.initial_attack_back)
    calc.set("vContainAttackPerimeter", calc_fire_perimeter(length, width))
    calc.set("vContainAttackSize", ch2_to_ac(calc_fire_area(length, width)))
    calc.set("vContainXMin", result.x_min)
    calc.set("vContainXMax", result.x_max)
    calc.set("vContainYMax", result.y_max)


def contain_ff(calc):
    run_containment(calc, build_resources(calc))


def contain_ff_single(calc):
    run_containment(calc, build_resources(calc, single=True))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fContainFFReportSpread", contain_report_spread,
                     reads=("vSurfaceFireSpreadAtHead",), writes=("vContainReportSpread",)),
        FunctionNode("fContainFFReportRatio", contain_report_ratio,
                     reads=("vSurfaceFireLengthToWidth",), writes=("vContainReportRatio",)),
        FunctionNode("fContainFFReportSize", contain_report_size,
                     reads=("vSurfaceFireArea",), writes=("vContainReportSize",)),
        FunctionNode("fContainFF", contain_ff, reads=CONTAIN_READS, writes=CONTAIN_WRITES),
        FunctionNode("fContainFFSingle", contain_ff_single, reads=CONTAIN_READS,
                     writes=CONTAIN_WRITES),
        FunctionNode("fContainDiagram", contain_diagram,
                     reads=("vContainDiagram", "vContainXMin", "vContainXMax", "vContainYMax",
                            "vContainStatus"),
                     writes=("vContainDiagram",)),
    ]
