"""Maximum spotting distance from burning piles, wind-driven surface fires
and torching trees (Albini 1979, 1981, 1983).
"""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import spotting
from firecalc.models.site import calc_map_distance
from firecalc.utilities.unit_conversions import mi_to_ft

_TERRAIN = ("vSpotFireSource", "vSiteRidgeToValleyDist", "vSiteRidgeToValleyElev",
            "vTreeCoverHtDownwind", "vWindSpeedAt20Ft")


def _terrain(calc):
    return (calc.get("vTreeCoverHtDownwind"), calc.get("vWindSpeedAt20Ft"),
            calc.get("vSpotFireSource"), calc.get("vSiteRidgeToValleyDist"),
            calc.get("vSiteRidgeToValleyElev"))


def spot_dist_burning_pile(calc):
    res = spotting.calc_spot_burning_pile(calc.get("vSurfaceFireFlameHtPile"), *_terrain(calc))
    calc.set("vSpotCoverHtBurningPile", res.cover_ht)
    calc.set("vSpotFirebrandHtBurningPile", res.firebrand_ht)
    calc.set("vSpotFlatDistBurningPile", res.flat_dist)
    calc.set("vSpotDistBurningPile", res.dist)


def spot_dist_surface_fire(calc):
    res = spotting.calc_spot_surface_fire(calc.get("vSurfaceFireFlameLengAtHead"),
                                          *_terrain(calc))
    calc.set("vSpotCoverHtSurfaceFire", res.cover_ht)
    calc.set("vSpotFirebrandHtSurfaceFire", res.firebrand_ht)
    calc.set("vSpotFirebrandDriftSurfaceFire", res.drift)
    calc.set("vSpotFlatDistSurfaceFire", res.flat_dist)
    calc.set("vSpotDistSurfaceFire", res.dist)


def spot_dist_torching_trees(calc):
    res = spotting.calc_spot_torching_trees(calc.get("vTreeSpeciesSpot"), calc.get("vTreeDbh"),
                                            calc.get("vTreeHt"), calc.get("vSpotTorchingTrees"),
                                            *_terrain(calc))
    calc.set("vSpotCoverHtTorchingTrees", res.cover_ht)
    calc.set("vSpotFirebrandHtTorchingTrees", res.firebrand_ht)
    calc.set("vSpotFlameHtTorchingTrees", res.flame_ht)
    calc.set("vSpotFlameRatioTorchingTrees", res.flame_ratio)
    calc.set("vSpotFlameDurTorchingTrees", res.flame_dur)
    calc.set("vSpotFlatDistTorchingTrees", res.flat_dist)
    calc.set("vSpotDistTorchingTrees", res.dist)


def _spot_map_dist(dist_cell: str, map_cell: str):
    def procedure(calc):
        calc.set(map_cell, calc_map_distance(mi_to_ft(calc.get(dist_cell)),
                                             calc.get("vMapScale")))
    return procedure


def functions() -> List[FunctionNode]:
    nodes = [
        FunctionNode("fSpotDistBurningPile", spot_dist_burning_pile,
                     reads=_TERRAIN + ("vSurfaceFireFlameHtPile",),
                     writes=("vSpotCoverHtBurningPile", "vSpotDistBurningPile",
                             "vSpotFirebrandHtBurningPile", "vSpotFlatDistBurningPile")),
        FunctionNode("fSpotDistSurfaceFire", spot_dist_surface_fire,
                     reads=_TERRAIN + ("vSurfaceFireFlameLengAtHead",),
                     writes=("vSpotCoverHtSurfaceFire", "vSpotDistSurfaceFire",
                             "vSpotFirebrandDriftSurfaceFire", "vSpotFirebrandHtSurfaceFire",
                             "vSpotFlatDistSurfaceFire")),
        FunctionNode("fSpotDistTorchingTrees", spot_dist_torching_trees,
                     reads=_TERRAIN + ("vSpotTorchingTrees", "vTreeDbh", "vTreeHt",
                                       "vTreeSpeciesSpot"),
                     writes=("vSpotCoverHtTorchingTrees", "vSpotDistTorchingTrees",
                             "vSpotFirebrandHtTorchingTrees", "vSpotFlameDurTorchingTrees",
                             "vSpotFlameHtTorchingTrees", "vSpotFlameRatioTorchingTrees",
                             "vSpotFlatDistTorchingTrees")),
    ]
    for source in ("BurningPile", "SurfaceFire", "TorchingTrees"):
        dist, map_cell = f"vSpotDist{source}", f"vSpotMapDist{source}"
        nodes.append(FunctionNode(f"fSpotMapDist{source}", _spot_map_dist(dist, map_cell),
                                  reads=(dist, "vMapScale"), writes=(map_cell,)))
    return nodes
