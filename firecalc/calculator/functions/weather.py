"""Psychrometric and comfort index functions."""

from typing import List

from firecalc.base_classes.function_node import FunctionNode
from firecalc.models import weather


def wthr_dew_point_temp(calc):
    calc.set("vWthrDewPointTemp",
             weather.calc_dew_point(calc.get("vWthrAirTemp"), calc.get("vWthrWetBulbTemp"),
                                    calc.get("vSiteElevation")))


def wthr_relative_humidity(calc):
    calc.set("vWthrRelativeHumidity",
             weather.calc_relative_humidity(calc.get("vWthrAirTemp"),
                                            calc.get("vWthrDewPointTemp")))


def wthr_cumulus_base_ht(calc):
    calc.set("vWthrCumulusBaseHt",
             weather.calc_cumulus_base_ht(calc.get("vWthrAirTemp"),
                                          calc.get("vWthrDewPointTemp")))


def wthr_heat_index(calc):
    calc.set("vWthrHeatIndex",
             weather.calc_heat_index(calc.get("vWthrAirTemp"),
                                     calc.get("vWthrRelativeHumidity")))


def wthr_summer_simmer_index(calc):
    calc.set("vWthrSummerSimmerIndex",
             weather.calc_summer_simmer_index(calc.get("vWthrAirTemp"),
                                              calc.get("vWthrRelativeHumidity")))


def wthr_wind_chill_temp(calc):
    calc.set("vWthrWindChillTemp",
             weather.calc_wind_chill(calc.get("vWthrAirTemp"),
                                     calc.get("vWindSpeedAtMidflame")))


def functions() -> List[FunctionNode]:
    return [
        FunctionNode("fWthrDewPointTemp", wthr_dew_point_temp,
                     reads=("vWthrAirTemp", "vWthrWetBulbTemp", "vSiteElevation"),
                     writes=("vWthrDewPointTemp",)),
        FunctionNode("fWthrRelativeHumidity", wthr_relative_humidity,
                     reads=("vWthrAirTemp", "vWthrDewPointTemp"),
                     writes=("vWthrRelativeHumidity",)),
        FunctionNode("fWthrCumulusBaseHt", wthr_cumulus_base_ht,
                     reads=("vWthrAirTemp", "vWthrDewPointTemp"), writes=("vWthrCumulusBaseHt",)),
        FunctionNode("fWthrHeatIndex", wthr_heat_index,
                     reads=("vWthrAirTemp", "vWthrRelativeHumidity"), writes=("vWthrHeatIndex",)),
        FunctionNode("fWthrSummerSimmerIndex", wthr_summer_simmer_index,
                     reads=("vWthrAirTemp", "vWthrRelativeHumidity"),
                     writes=("vWthrSummerSimmerIndex",)),
        FunctionNode("fWthrWindChillTemp", wthr_wind_chill_temp,
                     reads=("vWthrAirTemp", "vWindSpeedAtMidflame"),
                     writes=("vWthrWindChillTemp",)),
    ]
