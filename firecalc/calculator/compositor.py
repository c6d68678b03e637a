"""Two fuel model compositor.

When fuel is specified as two blended fuel models the usual surface fire
functions are switched off and ``fSurfaceFuelBedWeighted`` runs the whole
single fuel model pipeline once per model, then merges the two result sets.
Spread rates are merged by the selected weighting policy; every other output
follows a fixed per-output rule (maximum, minimum, logical or, or the primary
model's value) listed in ``MERGE_RULES``.

Classes:
    - SiteConditions, WindInputs, FuelMoistures: pipeline inputs.
    - PipelineResult: outputs of one single fuel model pipeline run.

Functions:
    - single_fuel_pipeline: runs the surface fire pipeline for one model.
    - composite: merges two pipeline results under a weighting policy.
"""

from dataclasses import dataclass, fields, replace
from typing import Dict, List, Optional

from firecalc.base_classes.function_node import FunctionNode
from firecalc.calculator.functions.surface_fuel import MOISTURE_CLASSES
from firecalc.exceptions import ConfigurationError
from firecalc.models import rothermel, wind
from firecalc.models.expected_spread import ExpectedSpreadSampler
from firecalc.models.fuel_models import (FuelModel, FuelModelCatalog, MoistureScenarioCatalog,
                                         calc_cured_herb_fraction, calc_time_lag_moisture,
                                         model_particles)
from firecalc.utilities.config import PropertyDict
from firecalc.utilities.fire_util import WindAdjMethod

AREA_WEIGHTED = "area"
HARMONIC_MEAN = "harmonic"
TWO_DIMENSIONAL = "2d"

# Property selecting each weighting policy
POLICY_PROPERTIES = {
    "surfaceConfFuelAreaWeighted": AREA_WEIGHTED,
    "surfaceConfFuelHarmonicMean": HARMONIC_MEAN,
    "surfaceConfFuel2Dimensional": TWO_DIMENSIONAL,
}

# Coverage band outside which the dominant model is copied unmerged
COVERAGE_MAX = 0.999
COVERAGE_MIN = 0.001

HARMONIC_MIN_RATE = 1.e-6


@dataclass
class SiteConditions:
    slope_fraction: float = 0.
    wind_dir_from_upslope: float = 0.
    vector_dir_from_upslope: float = 0.
    spread_dir_max: bool = True


@dataclass
class WindInputs:
    """Wind as the worksheet specifies it.

    ``mode`` is the selected member of the wind speed option group without
    its ``surfaceConfWindSpeed`` prefix: AtMidflame, At20Ft, At20FtCalc,
    At10M or At10MCalc.
    """
    mode: str = "AtMidflame"
    midflame: float = 0.
    at_20ft: float = 0.
    at_10m: float = 0.
    waf: float = 1.
    canopy_cover: float = 0.
    cover_ht: float = 0.
    crown_ratio: float = 0.

    @property
    def calculates_waf(self) -> bool:
        return self.mode.endswith("Calc")


@dataclass
class FuelMoistures:
    dead1: float = 0.06
    dead10: float = 0.07
    dead100: float = 0.08
    dead1000: float = 0.20
    live_herb: float = 1.0
    live_wood: float = 1.0

    def as_tuple(self):
        return (self.dead1, self.dead10, self.dead100, self.dead1000, self.live_herb,
                self.live_wood)


@dataclass
class PipelineResult:
    spread_at_head: float = 0.
    spread_at_vector: float = 0.
    reaction_int: float = 0.
    heat_per_unit_area: float = 0.
    line_int_at_head: float = 0.
    line_int_at_vector: float = 0.
    flame_leng_at_head: float = 0.
    flame_leng_at_vector: float = 0.
    depth: float = 0.
    max_dir_from_upslope: float = 0.
    waf: float = 1.
    midflame: float = 0.
    wind_20ft: float = 0.
    adj_method: int = WindAdjMethod.INPUT
    crown_fill: float = 0.
    eff_wind_at_head: float = 0.
    eff_wind_at_vector: float = 0.
    length_to_width: float = 1.
    eccentricity: float = 0.
    wind_speed_limit: float = 0.
    wind_speed_flag: bool = False


# Per-output merge rule; spread rates follow the weighting policy
MERGE_RULES: Dict[str, str] = {
    "spread_at_head": "policy",
    "spread_at_vector": "policy",
    "reaction_int": "max",
    "heat_per_unit_area": "max",
    "line_int_at_head": "max",
    "line_int_at_vector": "max",
    "flame_leng_at_head": "max",
    "flame_leng_at_vector": "max",
    "depth": "max",
    "max_dir_from_upslope": "primary",
    "waf": "primary",
    "midflame": "primary",
    "wind_20ft": "primary",
    "adj_method": "primary",
    "crown_fill": "primary",
    "eff_wind_at_head": "primary",
    "eff_wind_at_vector": "primary",
    "length_to_width": "primary",
    "eccentricity": "primary",
    "wind_speed_limit": "min",
    "wind_speed_flag": "or",
}


# ==============================================================================
# Single fuel model pipeline
# ==============================================================================

def _wind_profile(model: FuelModel, w: WindInputs):
    # Returns (20-ft wind, waf, adjustment method, crown fill, midflame)
    if w.mode == "AtMidflame":
        return w.at_20ft, w.waf, WindAdjMethod.INPUT, 0., w.midflame

    wind_20ft = wind.calc_wind_speed_at_20ft(w.at_10m) if w.mode.startswith("At10M") \
        else w.at_20ft

    if w.calculates_waf:
        adj = wind.calc_wind_adj_factor(w.canopy_cover, w.cover_ht, w.crown_ratio, model.depth)
        waf, method, fill = adj.factor, adj.method, adj.crown_fill
    else:
        waf, method, fill = w.waf, WindAdjMethod.INPUT, 0.

    return wind_20ft, waf, method, fill, wind.calc_midflame_wind_speed(wind_20ft, waf)


def single_fuel_pipeline(model: FuelModel, mois: FuelMoistures, site: SiteConditions,
                         w: WindInputs, transfer_fraction: Optional[float] = None,
                         apply_limit: bool = True) -> PipelineResult:
    """Surface fire behavior of one fuel model.

    Args:
        model (FuelModel): fuel model
        mois (FuelMoistures): moisture of each time-lag and live class
        site (SiteConditions): slope and directions
        w (WindInputs): wind as specified on the worksheet
        transfer_fraction (float, optional): herbaceous load transfer
            fraction; derived from the live herb moisture for dynamic models
            when not given
        apply_limit (bool): cap the effective wind speed

    Returns:
        PipelineResult: fire behavior outputs of the model
    """
    parts = model_particles(model)
    if transfer_fraction is None:
        transfer_fraction = calc_cured_herb_fraction(mois.live_herb) if model.transfer else 0.

    bed = rothermel.FuelBed(model.depth, model.mext_dead, parts.life, parts.load, parts.savr,
                            parts.heat, parts.dens, parts.stot, parts.seff,
                            transfer_fraction=transfer_fraction)
    particle_mois = calc_time_lag_moisture(bed.life, bed.savr, *mois.as_tuple())

    hs = rothermel.calc_heat_sink(bed, particle_mois)
    rxi, _, _ = rothermel.calc_reaction_intensity(bed, hs.dead_mois, hs.live_mois, hs.live_mext)
    flux = rothermel.calc_propagating_flux(bed.sigma, bed.packing_ratio)
    tau = rothermel.calc_residence_time(bed.sigma)
    ros0 = rothermel.calc_no_wind_rate(rxi, flux, hs.heat_sink)

    wind_20ft, waf, method, fill, midflame = _wind_profile(model, w)

    head = rothermel.calc_spread_at_head(ros0, rxi, site.slope_fraction, midflame,
                                         site.wind_dir_from_upslope, bed.sigma,
                                         bed.packing_ratio, bed.beta_ratio,
                                         apply_limit=apply_limit)
    lw = rothermel.calc_length_to_width(head.eff_wind)
    ecc = rothermel.calc_eccentricity(lw)

    if site.spread_dir_max:
        beta = 0.
    else:
        beta = rothermel.calc_vector_beta(head.dir_max, site.vector_dir_from_upslope)
    ros_vector = rothermel.calc_spread_at_beta(head.ros, ecc, beta)
    eff_vector = rothermel.calc_eff_wind_at_vector(ros0, ros_vector, bed.sigma, bed.beta_ratio)

    fli_head = rothermel.calc_fireline_intensity(head.ros, rxi, tau)
    fli_vector = rothermel.calc_fireline_intensity(ros_vector, rxi, tau)

    return PipelineResult(
        spread_at_head=head.ros,
        spread_at_vector=ros_vector,
        reaction_int=rxi,
        heat_per_unit_area=rothermel.calc_heat_per_unit_area(rxi, tau),
        line_int_at_head=fli_head,
        line_int_at_vector=fli_vector,
        flame_leng_at_head=rothermel.calc_flame_length(fli_head),
        flame_leng_at_vector=rothermel.calc_flame_length(fli_vector),
        depth=model.depth,
        max_dir_from_upslope=head.dir_max,
        waf=waf,
        midflame=midflame,
        wind_20ft=wind_20ft,
        adj_method=method,
        crown_fill=fill,
        eff_wind_at_head=head.eff_wind,
        eff_wind_at_vector=eff_vector,
        length_to_width=lw,
        eccentricity=ecc,
        wind_speed_limit=head.wind_limit,
        wind_speed_flag=head.wind_flag,
    )


# ==============================================================================
# Merging
# ==============================================================================

def _harmonic(r0: float, r1: float, coverage: float) -> float:
    if r0 <= HARMONIC_MIN_RATE or r1 <= HARMONIC_MIN_RATE:
        return 0.
    return 1. / (coverage / r0 + (1. - coverage) / r1)


def composite(r0: PipelineResult, r1: PipelineResult, coverage: float, policy: str,
              sampler: Optional[ExpectedSpreadSampler] = None) -> PipelineResult:
    """Merges the primary (r0) and secondary (r1) model results.

    Args:
        r0 (PipelineResult): primary model result
        r1 (PipelineResult): secondary model result
        coverage (float): primary model coverage (fraction)
        policy (str): AREA_WEIGHTED, HARMONIC_MEAN or TWO_DIMENSIONAL
        sampler (ExpectedSpreadSampler, optional): required for the
            two-dimensional policy

    Raises:
        ConfigurationError: on an unknown policy

    Returns:
        PipelineResult: merged outputs
    """
    if policy not in (AREA_WEIGHTED, HARMONIC_MEAN, TWO_DIMENSIONAL):
        raise ConfigurationError(f"Unknown fuel weighting policy '{policy}'")

    if coverage > COVERAGE_MAX:
        return replace(r0)
    if coverage < COVERAGE_MIN:
        return replace(r1)

    merged = {}
    for f in fields(PipelineResult):
        a, b = getattr(r0, f.name), getattr(r1, f.name)
        rule = MERGE_RULES[f.name]
        if rule == "max":
            merged[f.name] = max(a, b)
        elif rule == "min":
            merged[f.name] = min(a, b)
        elif rule == "or":
            merged[f.name] = bool(a or b)
        elif rule == "primary":
            merged[f.name] = a

    for key in ("spread_at_head", "spread_at_vector"):
        a, b = getattr(r0, key), getattr(r1, key)
        if policy == AREA_WEIGHTED:
            merged[key] = coverage * a + (1. - coverage) * b
        elif policy == HARMONIC_MEAN:
            merged[key] = _harmonic(a, b, coverage)
        else:
            if sampler is None:
                sampler = ExpectedSpreadSampler()
            merged[key] = sampler.expected_rate(a, b, coverage, r0.length_to_width,
                                                 r1.length_to_width)

    return PipelineResult(**merged)


# ==============================================================================
# Worksheet function
# ==============================================================================

def selected_policy(prop: PropertyDict) -> str:
    for name, policy in POLICY_PROPERTIES.items():
        if prop.boolean(name):
            return policy
    raise ConfigurationError("No fuel weighting policy selected",
                             parameter="surfaceConfFuelAreaWeighted")


def wind_mode(prop: PropertyDict) -> str:
    return prop.select("surfaceWindSpeed")[len("surfaceConfWindSpeed"):]


_CANOPY = ("vTreeCanopyCover", "vTreeCoverHt", "vTreeCrownRatio")
_CALC_WAF = ("vWindAdjFactor", "vWindAdjMethod", "vTreeCanopyCrownFraction")

_WIND_READS = {
    "AtMidflame": ("vWindSpeedAtMidflame",),
    "At20Ft": ("vWindSpeedAt20Ft", "vWindAdjFactor"),
    "At20FtCalc": ("vWindSpeedAt20Ft",) + _CANOPY,
    "At10M": ("vWindSpeedAt10M", "vWindAdjFactor"),
    "At10MCalc": ("vWindSpeedAt10M",) + _CANOPY,
}

_WIND_WRITES = {
    "AtMidflame": (),
    "At20Ft": ("vWindSpeedAtMidflame",),
    "At20FtCalc": ("vWindSpeedAtMidflame",) + _CALC_WAF,
    "At10M": ("vWindSpeedAt20Ft", "vWindSpeedAtMidflame"),
    "At10MCalc": ("vWindSpeedAt20Ft", "vWindSpeedAtMidflame") + _CALC_WAF,
}

WEIGHTED_READS = ("vSurfaceFuelBedModel1", "vSurfaceFuelBedModel2", "vSurfaceFuelBedCoverage1",
                  "vSiteSlopeFraction", "vWindDirFromUpslope")

WEIGHTED_WRITES = (
    "vSurfaceFireReactionInt", "vSurfaceFireSpreadAtHead", "vSurfaceFireSpreadAtVector",
    "vSurfaceFireMaxDirFromUpslope", "vSurfaceFireEffWindAtHead", "vSurfaceFireEffWindAtVector",
    "vSurfaceFireWindSpeedLimit", "vSurfaceFireWindSpeedFlag", "vSurfaceFireHeatPerUnitArea",
    "vSurfaceFireLineIntAtHead", "vSurfaceFireLineIntAtVector", "vSurfaceFireFlameLengAtHead",
    "vSurfaceFireFlameLengAtVector", "vSurfaceFireLengthToWidth", "vSurfaceFireEccentricity",
    "vSurfaceFuelBedDepth",
)


# Cells each moisture option reads; life category and scenario moistures are
# loaded into the time-lag classes before the pipelines run
_MOISTURE_READS = {
    "surfaceConfMoisTimeLag": MOISTURE_CLASSES,
    "surfaceConfMoisLifeCat": ("vSurfaceFuelMoisLifeDead", "vSurfaceFuelMoisLifeLive"),
    "surfaceConfMoisScenario": ("vSurfaceFuelMoisScenario",),
}


def moisture_option(prop: PropertyDict) -> str:
    return prop.select("surfaceMois")


def weighted_reads(prop: PropertyDict) -> List[str]:
    names = list(_WIND_READS[wind_mode(prop)])
    names.extend(_MOISTURE_READS[moisture_option(prop)])
    if prop.boolean("surfaceConfLoadTransferInput"):
        names.append("vSurfaceFuelLoadTransferFraction")
    if not prop.boolean("surfaceConfSpreadDirMax"):
        names.append("vSurfaceFireVectorDirFromUpslope")
    return names


def weighted_writes(prop: PropertyDict) -> List[str]:
    names = list(_WIND_WRITES[wind_mode(prop)])
    if moisture_option(prop) != "surfaceConfMoisTimeLag":
        names.extend(MOISTURE_CLASSES)
    return names


def read_moistures(calc) -> FuelMoistures:
    """Time-lag class moistures under the selected moisture option.

    Life category and scenario moistures are written back to the time-lag
    cells so they report the values the pipelines used.
    """
    option = moisture_option(calc.prop)
    if option == "surfaceConfMoisTimeLag":
        return FuelMoistures(*(calc.get(name) for name in MOISTURE_CLASSES))

    if option == "surfaceConfMoisLifeCat":
        dead = calc.get("vSurfaceFuelMoisLifeDead")
        live = calc.get("vSurfaceFuelMoisLifeLive")
        mois = FuelMoistures(dead, dead, dead, dead, live, live)
    else:
        s = MoistureScenarioCatalog.get(calc.get("vSurfaceFuelMoisScenario").strip())
        mois = FuelMoistures(s.dead1, s.dead10, s.dead100, s.dead1000, s.live_herb, s.live_wood)

    for name, val in zip(MOISTURE_CLASSES, mois.as_tuple()):
        calc.set(name, val)
    return mois


def _sampler(prop: PropertyDict) -> ExpectedSpreadSampler:
    return ExpectedSpreadSampler(samples=prop.integer("surfaceConfFuel2DSamples"),
                                 depth=prop.integer("surfaceConfFuel2DDepth"),
                                 laterals=prop.integer("surfaceConfFuel2DLaterals"),
                                 seed=prop.integer("surfaceConfFuel2DSeed"))


def fuel_bed_weighted(calc):
    prop = calc.prop
    mode = wind_mode(prop)
    policy = selected_policy(prop)

    models = (FuelModelCatalog.get(calc.get("vSurfaceFuelBedModel1").strip()),
              FuelModelCatalog.get(calc.get("vSurfaceFuelBedModel2").strip()))

    mois = read_moistures(calc)
    spread_dir_max = prop.boolean("surfaceConfSpreadDirMax")
    site = SiteConditions(
        slope_fraction=calc.get("vSiteSlopeFraction"),
        wind_dir_from_upslope=calc.get("vWindDirFromUpslope"),
        vector_dir_from_upslope=0. if spread_dir_max
        else calc.get("vSurfaceFireVectorDirFromUpslope"),
        spread_dir_max=spread_dir_max,
    )

    w = WindInputs(mode=mode)
    for name in _WIND_READS[mode]:
        val = calc.get(name)
        if name == "vWindSpeedAtMidflame":
            w.midflame = val
        elif name == "vWindSpeedAt20Ft":
            w.at_20ft = val
        elif name == "vWindSpeedAt10M":
            w.at_10m = val
        elif name == "vWindAdjFactor":
            w.waf = val
        elif name == "vTreeCanopyCover":
            w.canopy_cover = val
        elif name == "vTreeCoverHt":
            w.cover_ht = val
        elif name == "vTreeCrownRatio":
            w.crown_ratio = val

    input_transfer = None
    if prop.boolean("surfaceConfLoadTransferInput"):
        input_transfer = calc.get("vSurfaceFuelLoadTransferFraction")

    def transfer(model):
        # Static models never transfer herbaceous load
        if input_transfer is None:
            return None
        return input_transfer if model.transfer else 0.

    apply_limit = prop.boolean("surfaceConfWindLimitApplied")
    r0, r1 = (single_fuel_pipeline(m, mois, site, w, transfer(m), apply_limit) for m in models)

    sampler = _sampler(prop) if policy == TWO_DIMENSIONAL else None
    res = composite(r0, r1, calc.get("vSurfaceFuelBedCoverage1"), policy, sampler)

    calc.set("vSurfaceFireReactionInt", res.reaction_int)
    calc.set("vSurfaceFireSpreadAtHead", res.spread_at_head)
    calc.set("vSurfaceFireSpreadAtVector", res.spread_at_vector)
    calc.set("vSurfaceFireMaxDirFromUpslope", res.max_dir_from_upslope)
    calc.set("vSurfaceFireEffWindAtHead", res.eff_wind_at_head)
    calc.set("vSurfaceFireEffWindAtVector", res.eff_wind_at_vector)
    calc.set("vSurfaceFireWindSpeedLimit", res.wind_speed_limit)
    calc.set("vSurfaceFireWindSpeedFlag", int(res.wind_speed_flag))
    calc.set("vSurfaceFireHeatPerUnitArea", res.heat_per_unit_area)
    calc.set("vSurfaceFireLineIntAtHead", res.line_int_at_head)
    calc.set("vSurfaceFireLineIntAtVector", res.line_int_at_vector)
    calc.set("vSurfaceFireFlameLengAtHead", res.flame_leng_at_head)
    calc.set("vSurfaceFireFlameLengAtVector", res.flame_leng_at_vector)
    calc.set("vSurfaceFireLengthToWidth", res.length_to_width)
    calc.set("vSurfaceFireEccentricity", res.eccentricity)
    calc.set("vSurfaceFuelBedDepth", res.depth)

    if mode != "AtMidflame":
        calc.set("vWindSpeedAtMidflame", res.midflame)
    if mode.startswith("At10M"):
        calc.set("vWindSpeedAt20Ft", res.wind_20ft)
    if w.calculates_waf:
        calc.set("vWindAdjFactor", res.waf)
        calc.set("vWindAdjMethod", int(res.adj_method))
        calc.set("vTreeCanopyCrownFraction", res.crown_fill)


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fSurfaceFuelBedWeighted", fuel_bed_weighted,
                     reads=WEIGHTED_READS, writes=WEIGHTED_WRITES,
                     config_reads=weighted_reads, config_writes=weighted_writes),
    ]
