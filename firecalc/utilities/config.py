"""Read-only configuration map driving the worksheet reconfiguration.

Configuration properties are named switches following the
``<module>Conf<Option>`` (behavior choice) and ``<module>Calc<Output>``
(output selection) convention. The full default set lives in
``DEFAULT_PROPERTIES``; a ``.cfg`` file may override any of them, one INI
section per module.

Example worksheet.cfg::

    [surface]
    surfaceConfFuelAreaWeighted = yes
    surfaceConfFuelModels = no
    surfaceCalcFireSpread = yes

    [contain]
    containModuleActive = yes
    containConfMaxSteps = 2000
"""

import configparser
import os
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from firecalc.exceptions import ConfigurationError

PropertyValue = Union[bool, int]

# Option groups whose members are mutually exclusive. Exactly one member of
# each group should be true; PropertyDict.select() enforces this when asked.
OPTION_GROUPS = {
    "surfaceFuel": (
        "surfaceConfFuelModels", "surfaceConfFuelParms", "surfaceConfFuelAreaWeighted",
        "surfaceConfFuelHarmonicMean", "surfaceConfFuel2Dimensional",
        "surfaceConfFuelPalmettoGallberry", "surfaceConfFuelAspen",
    ),
    "surfaceMois": ("surfaceConfMoisTimeLag", "surfaceConfMoisLifeCat", "surfaceConfMoisScenario"),
    "surfaceWindSpeed": (
        "surfaceConfWindSpeedAtMidflame", "surfaceConfWindSpeedAt20Ft",
        "surfaceConfWindSpeedAt20FtCalc", "surfaceConfWindSpeedAt10M",
        "surfaceConfWindSpeedAt10MCalc",
    ),
    "surfaceSpreadDir": ("surfaceConfSpreadDirMax", "surfaceConfSpreadDirInput"),
    "surfaceWindDir": ("surfaceConfWindDirUpslope", "surfaceConfWindDirInput"),
    "surfaceDegrees": ("surfaceConfDegreesWrtUpslope", "surfaceConfDegreesWrtNorth"),
    "surfaceSlope": ("surfaceConfSlopeInput", "surfaceConfSlopeDerived"),
    "surfaceSlopeUnits": ("surfaceConfSlopeFraction", "surfaceConfSlopeDegrees"),
    "surfaceLoadTransfer": ("surfaceConfLoadTransferCalc", "surfaceConfLoadTransferInput"),
    "containResources": ("containConfResourcesSingle", "containConfResourcesMultiple"),
    "containLimitDist": ("containConfLimitDistOff", "containConfLimitDistOn"),
    "crownTransition": ("crownConfUseFireLineInt", "crownConfUseFlameLeng"),
    "scorchTransition": ("scorchConfUseFireLineInt", "scorchConfUseFlameLeng"),
    "weatherHumidity": ("weatherConfHumidityFromDewPoint", "weatherConfHumidityFromWetBulbElev"),
}

_CALC_OUTPUTS = {
    "contain": (
        "AttackPerimeter", "AttackSize", "Cost", "Diagram", "Line", "ResourcesUsed",
        "Size", "Status", "Time",
    ),
    "crown": (
        "ActiveCrown", "ActiveRatio", "CriticalCrownSpreadRate", "CriticalSurfaceFlameLeng",
        "CriticalSurfaceIntensity", "CrownFireType", "CrownSpreadDist", "CrownSpreadRate",
        "FireArea", "FireLengthToWidth", "FireLineInt", "FirePerimeter", "FlameLeng",
        "FuelLoad", "HeatPerUnitArea", "HeatPerUnitAreaCanopy", "PowerOfFire",
        "PowerOfWind", "PowerRatio", "TransitionRatio", "TransitionToCrown", "WindDriven",
    ),
    "ignition": ("FuelTemp", "IgnitionFirebrandProb", "IgnitionLightningProb"),
    "mortality": (
        "BarkThickness", "TreeCrownLengScorched", "TreeCrownVolScorched",
        "TreeMortalityCount", "TreeMortalityRate",
    ),
    "safety": ("Radius", "SepDist", "Size"),
    "scorch": ("ScorchHt",),
    "size": (
        "FireArea", "FireDistAtBack", "FireDistAtFront", "FireLengDist", "FireLengToWidth",
        "FirePerimeter", "FireShapeDiagram", "FireWidthDist",
    ),
    "spot": (
        "CoverHtBurningPile", "CoverHtSurfaceFire", "CoverHtTorchingTrees",
        "DistBurningPile", "DistSurfaceFire", "DistTorchingTrees",
        "FirebrandDriftSurfaceFire", "FirebrandHtBurningPile", "FirebrandHtSurfaceFire",
        "FirebrandHtTorchingTrees", "FlameDurTorchingTrees", "FlameHtTorchingTrees",
        "FlameRatioTorchingTrees", "FlatDistBurningPile", "FlatDistSurfaceFire",
        "FlatDistTorchingTrees",
    ),
    "surface": (
        "AspenBedDepth", "AspenLoadDead1", "AspenLoadDead10", "AspenLoadLiveHerb",
        "AspenLoadLiveWoody", "AspenMortality", "AspenSavrDead1", "AspenSavrDead10",
        "AspenSavrLiveHerb", "AspenSavrLiveWoody", "CrownFillPortion", "CrownRatio",
        "FireCharacteristicsDiagram", "FireDist", "FireEffWind", "FireFlameLeng",
        "FireHeatPerUnitArea", "FireHeatSource", "FireLineInt", "FireMaxDirDiagram",
        "FireMaxDirFromUpslope", "FireReactionInt", "FireReactionIntDead",
        "FireReactionIntLive", "FireResidenceTime", "FireSlopeFactor", "FireSpread",
        "FireWindFactor", "FireWindSpeedFlag", "FireWindSpeedLimit", "FuelBedBetaRatio",
        "FuelBedBulkDensity", "FuelBedDeadFraction", "FuelBedHeatSink",
        "FuelBedLiveFraction", "FuelBedMextLive", "FuelBedMoisDead", "FuelBedMoisLive",
        "FuelBedPackingRatio", "FuelBedSigma", "FuelLoadDead", "FuelLoadDeadHerb",
        "FuelLoadLive", "FuelLoadTransferFraction", "FuelLoadUndeadHerb",
        "PalmettoBedDepth", "PalmettoLoadDead1", "PalmettoLoadDead10",
        "PalmettoLoadDeadFoliage", "PalmettoLoadLitter", "PalmettoLoadLive1",
        "PalmettoLoadLive10", "PalmettoLoadLiveFoliage", "SlopeReach", "SlopeRise",
        "SlopeSteepness", "WindAdjFactor", "WindAdjMethod", "WindSpeedAtMidflame",
    ),
    "weather": (
        "WthrCumulusBaseHt", "WthrDewPointTemp", "WthrHeatIndex", "WthrRelativeHumidity",
        "WthrSummerSimmerIndex", "WthrWindChillTemp",
    ),
}


def _default_properties() -> Dict[str, PropertyValue]:
    props: Dict[str, PropertyValue] = {}

    for module, outputs in _CALC_OUTPUTS.items():
        for output in outputs:
            props[f"{module}Calc{output}"] = False

    for group in OPTION_GROUPS.values():
        for i, name in enumerate(group):
            props[name] = (i == 0)

    for module in ("surface", "crown", "size", "contain", "spot", "scorch",
                   "mortality", "ignition", "weather", "safety"):
        props[f"{module}ModuleActive"] = False

    props.update({
        "surfaceModuleActive": True,
        "surfaceCalcFireSpread": True,
        "surfaceConfWindLimitApplied": True,
        "surfaceConfFuel2DSamples": 100,
        "surfaceConfFuel2DDepth": 20,
        "surfaceConfFuel2DLaterals": 2,
        "surfaceConfFuel2DSeed": 1,
        "siteConfDirFromCompass": False,
        "mapCalcDist": False,
        "docDescriptionActive": False,
        "docFireActive": False,
        "docRxActive": False,
        "docTrainingActive": False,
        "containConfResourcesMultiple": True,
        "containConfResourcesSingle": False,
        "containConfRetry": True,
        "containConfMinSteps": 250,
        "containConfMaxSteps": 1000,
        "mortalityConfBarkDerived": True,
    })
    return props


DEFAULT_PROPERTIES: Mapping[str, PropertyValue] = MappingProxyType(_default_properties())


class PropertyDict:
    """Read-only map of configuration property names to bool/int values.

    Lookups of unknown names raise ConfigurationError rather than silently
    defaulting, so a misspelled switch in a reconfiguration rule is caught
    the first time the rule runs.

    Args:
        overrides (Mapping[str, bool | int], optional): values replacing the
            defaults. Every key must already exist in the default set.
        config_path (str, optional): file the overrides came from, used in
            error messages.
    """

    def __init__(self, overrides: Optional[Mapping[str, PropertyValue]] = None,
                 config_path: Optional[str] = None):
        self.config_path = config_path
        values = dict(DEFAULT_PROPERTIES)

        for key, val in (overrides or {}).items():
            if key not in values:
                raise ConfigurationError("Unknown configuration property", config_path, key)
            values[key] = val

        self._values = MappingProxyType(values)

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PropertyDict):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    def _lookup(self, name: str) -> PropertyValue:
        try:
            return self._values[name]
        except KeyError:
            raise ConfigurationError("Unknown configuration property", self.config_path, name) from None

    def boolean(self, name: str) -> bool:
        return bool(self._lookup(name))

    def integer(self, name: str) -> int:
        return int(self._lookup(name))

    def select(self, group: str) -> str:
        """Returns the single true member of a mutually exclusive option group.

        Args:
            group (str): key into OPTION_GROUPS

        Raises:
            ConfigurationError: if the group is unknown or not exactly one
                member is set

        Returns:
            str: name of the selected option
        """
        if group not in OPTION_GROUPS:
            raise ConfigurationError("Unknown option group", self.config_path, group)

        chosen = [name for name in OPTION_GROUPS[group] if self.boolean(name)]
        if len(chosen) != 1:
            raise ConfigurationError(
                f"Option group must have exactly one selection, found {chosen}",
                self.config_path, group
            )
        return chosen[0]

    def replace(self, **changes: PropertyValue) -> "PropertyDict":
        """Returns a new PropertyDict with the given properties changed."""
        values = dict(self._values)
        for key, val in changes.items():
            if key not in values:
                raise ConfigurationError("Unknown configuration property", self.config_path, key)
            values[key] = val

        new = PropertyDict.__new__(PropertyDict)
        new.config_path = self.config_path
        new._values = MappingProxyType(values)
        return new

    def as_dict(self) -> Dict[str, PropertyValue]:
        return dict(self._values)


def load_properties(cfg_path: str) -> PropertyDict:
    """Loads configuration overrides from an INI-style .cfg file.

    Section names are informational; every option in every section is
    treated as a property name. Values are coerced to the type of the
    default (``getboolean`` for switches, ``getint`` for counts).

    Args:
        cfg_path (str): path to the .cfg file

    Raises:
        ConfigurationError: if the file is missing, a name is unknown, or a
            value cannot be coerced

    Returns:
        PropertyDict: defaults with the file's overrides applied
    """
    if not os.path.exists(cfg_path):
        raise ConfigurationError("Configuration file not found", config_path=cfg_path)

    # Property names are case sensitive
    config = configparser.ConfigParser()
    config.optionxform = str
    config.read(cfg_path)

    overrides: Dict[str, PropertyValue] = {}
    for section in config.sections():
        for name in config[section]:
            if name not in DEFAULT_PROPERTIES:
                raise ConfigurationError("Unknown configuration property", cfg_path, name)

            default = DEFAULT_PROPERTIES[name]
            try:
                if isinstance(default, bool):
                    overrides[name] = config[section].getboolean(name)
                else:
                    overrides[name] = config[section].getint(name)
            except ValueError as e:
                raise ConfigurationError(f"Bad value: {e}", cfg_path, name) from e

    return PropertyDict(overrides, config_path=cfg_path)
