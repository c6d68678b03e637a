"""Tree crown, crown scorch, bark thickness and mortality functions."""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import tree_mortality as tm
from firecalc.models.aspen import calc_aspen_mortality


def tree_crown_ratio(calc):
    calc.set("vTreeCrownRatio",
             tm.calc_crown_ratio(calc.get("vTreeCrownBaseHt"), calc.get("vTreeCoverHt")))


def tree_crown_base_ht(calc):
    calc.set("vTreeCrownBaseHt",
             tm.calc_crown_base_ht(calc.get("vTreeCrownRatio"), calc.get("vTreeHt")))


def tree_crown_vol_scorched(calc):
    # The stand cover height stands in for the height of the scorched tree
    leng, frac, vol = tm.calc_crown_scorch(calc.get("vTreeCrownRatio"),
                                           calc.get("vSurfaceFireScorchHtAtVector"),
                                           calc.get("vTreeCoverHt"))
    calc.set("vTreeCrownLengScorchedAtVector", leng)
    calc.set("vTreeCrownLengFractionScorchedAtVector", frac)
    calc.set("vTreeCrownVolScorchedAtVector", vol)


def tree_bark_thickness_fofem(calc):
    species = tm.SpeciesTable.get(calc.get("vTreeSpecies"))
    calc.set("vTreeBarkThickness", tm.calc_bark_thickness(species, calc.get("vTreeDbh")))


def tree_mortality_rate_fofem_hood(calc):
    species = tm.SpeciesTable.get(calc.get("vTreeSpecies"))
    calc.set("vTreeMortalityRateAtVector",
             tm.calc_mortality_fofem_hood(species, calc.get("vTreeDbh"),
                                          calc.get("vTreeBarkThickness"),
                                          calc.get("vTreeCrownLengScorchedAtVector"),
                                          calc.get("vTreeCrownVolScorchedAtVector")))


def tree_mortality_count(calc):
    calc.set("vTreeMortalityCountAtVector",
             tm.calc_mortality_count(calc.get("vTreeMortalityRateAtVector"),
                                     calc.get("vTreeCount")))


def tree_mortality_rate_aspen(calc):
    calc.set("vTreeMortalityRateAspenAtVector",
             calc_aspen_mortality(calc.get("vSurfaceFireSeverityAspen"),
                                  calc.get("vSurfaceFireFlameLengAtVector"),
                                  calc.get("vTreeDbh")))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fTreeCrownRatio", tree_crown_ratio,
                     reads=("vTreeCrownBaseHt", "vTreeCoverHt"), writes=("vTreeCrownRatio",)),
        FunctionNode("fTreeCrownBaseHt", tree_crown_base_ht,
                     reads=("vTreeCrownRatio", "vTreeHt"), writes=("vTreeCrownBaseHt",)),
        FunctionNode("fTreeCrownVolScorchedAtVector", tree_crown_vol_scorched,
                     reads=("vSurfaceFireScorchHtAtVector", "vTreeCrownRatio", "vTreeCoverHt"),
                     writes=("vTreeCrownLengScorchedAtVector",
                             "vTreeCrownLengFractionScorchedAtVector",
                             "vTreeCrownVolScorchedAtVector")),
        FunctionNode("fTreeBarkThicknessFofem", tree_bark_thickness_fofem,
                     reads=("vTreeDbh", "vTreeSpecies"), writes=("vTreeBarkThickness",)),
        FunctionNode("fTreeMortalityRateFofemHoodAtVector", tree_mortality_rate_fofem_hood,
                     reads=("vTreeBarkThickness", "vTreeCrownLengScorchedAtVector",
                            "vTreeCrownVolScorchedAtVector", "vTreeSpecies", "vTreeDbh"),
                     writes=("vTreeMortalityRateAtVector",)),
        FunctionNode("fTreeMortalityCountAtVector", tree_mortality_count,
                     reads=("vTreeMortalityRateAtVector", "vTreeCount"),
                     writes=("vTreeMortalityCountAtVector",)),
        FunctionNode("fTreeMortalityRateAspenAtVector", tree_mortality_rate_aspen,
                     reads=("vTreeDbh", "vSurfaceFireFlameLengAtVector",
                            "vSurfaceFireSeverityAspen"),
                     writes=("vTreeMortalityRateAspenAtVector",)),
    ]
