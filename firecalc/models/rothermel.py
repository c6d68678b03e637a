"""Rothermel (1972) surface fire spread with the Albini (1976) fuel bed
weighting, as used by fire-behavior worksheets.

A :class:`FuelBed` is built from the eight particle slots of a fuel
description. The remaining functions are small closed-form steps that the
worksheet exposes one at a time (heat sink, reaction intensity, no-wind rate,
spread at head, ...). Every denominator is guarded: a value below SMIDGEN
yields 0 rather than NaN or infinity.

Units follow the worksheet's native units: lb/ft2 loads, ft2/ft3 surface
area to volume ratios, Btu/lb heat, ft/min spread rates, mi/h wind speeds,
Btu/ft2/min reaction intensity, Btu/ft/s fireline intensity, ft lengths.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire
      spread in wildland fuels. USDA Forest Service Research Paper INT-115.
    - Albini, F. A. (1976). Estimating wildfire behavior and effects. USDA
      Forest Service General Technical Report INT-30.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from firecalc.utilities.fire_util import SMIDGEN, LIVE_HERB, DEAD_HERB, is_dead, wrap_degrees
from firecalc.utilities.unit_conversions import mph_to_ft_min, ft_min_to_mph


class FuelBed:
    """Particle level description of a surface fuel bed and its intermediates.

    Args:
        depth (float): fuel bed depth (ft)
        mext_dead (float): dead fuel moisture of extinction (fraction)
        life (Sequence[int]): life category per particle (LifeCategory)
        load (Sequence[float]): oven-dry load per particle (lb/ft2)
        savr (Sequence[float]): surface area to volume ratio (ft2/ft3)
        heat (Sequence[float]): low heat of combustion (Btu/lb)
        dens (Sequence[float]): particle density (lb/ft3)
        stot (Sequence[float]): total mineral content (fraction)
        seff (Sequence[float]): effective (silica-free) mineral content
        transfer_fraction (float): fraction of the live herbaceous load
            moved to the dead herbaceous slot

    Attributes:
        sigma (float): characteristic surface area to volume ratio (ft2/ft3)
        bulk_density (float): fuel bed bulk density (lb/ft3)
        packing_ratio (float): fuel bed packing ratio
        beta_ratio (float): packing ratio over optimum packing ratio
        dead_load, live_load (float): total dead and live loads (lb/ft2)
        dead_fraction (float): dead load over total load
        dead_herb, undead_herb (float): herbaceous loads after transfer
    """
    def __init__(self, depth: float, mext_dead: float, life: Sequence[int],
                 load: Sequence[float], savr: Sequence[float], heat: Sequence[float],
                 dens: Sequence[float], stot: Sequence[float], seff: Sequence[float],
                 transfer_fraction: float = 0.):
        self.depth = depth
        self.mext_dead = mext_dead
        self.life = np.asarray(life, dtype=int)
        self.load = np.array(load, dtype=float)
        self.savr = np.asarray(savr, dtype=float)
        self.heat = np.asarray(heat, dtype=float)
        self.dens = np.asarray(dens, dtype=float)
        self.stot = np.asarray(stot, dtype=float)
        self.seff = np.asarray(seff, dtype=float)

        self.dead = np.array([is_dead(life) for life in self.life])

        self.dead_load = float(self.load[self.dead].sum())
        self.live_load = float(self.load[~self.dead].sum())

        # Herbaceous load transfer
        if transfer_fraction > 0.00001:
            moved = transfer_fraction * self.load[LIVE_HERB]
            self.load[DEAD_HERB] = moved
            self.load[LIVE_HERB] -= moved
            self.dead_load += moved
            self.live_load -= moved

        self.dead_herb = float(self.load[DEAD_HERB])
        self.undead_herb = float(self.load[LIVE_HERB])

        total_load = self.dead_load + self.live_load
        self.dead_fraction = 0. if total_load < SMIDGEN else self.dead_load / total_load

        self._calc_intermediates()

    def _calc_intermediates(self):
        valid = (self.load > SMIDGEN) & (self.savr > SMIDGEN) & (self.dens > SMIDGEN)
        self.valid = valid

        area = np.zeros_like(self.load)
        area[valid] = self.savr[valid] * self.load[valid] / self.dens[valid]

        self.class_area = np.array([area[self.dead].sum(), area[~self.dead].sum()])
        total_area = self.class_area.sum()

        # Particle weights within their life class
        self.f_ij = np.zeros_like(self.load)
        for c, mask in enumerate((self.dead, ~self.dead)):
            if self.class_area[c] > SMIDGEN:
                self.f_ij[mask] = area[mask] / self.class_area[c]

        # Life class weights
        if total_area > SMIDGEN:
            self.f_i = self.class_area / total_area
        else:
            self.f_i = np.zeros(2)

        self.class_sigma = np.array([
            np.dot(self.f_ij[self.dead], self.savr[self.dead]),
            np.dot(self.f_ij[~self.dead], self.savr[~self.dead]),
        ])
        self.sigma = float(np.dot(self.f_i, self.class_sigma))

        if self.depth > SMIDGEN:
            self.bulk_density = float(self.load.sum() / self.depth)
            packed = np.zeros_like(self.load)
            packed[valid] = self.load[valid] / self.dens[valid]
            self.packing_ratio = float(packed.sum() / self.depth)
        else:
            self.bulk_density = 0.
            self.packing_ratio = 0.

        if self.sigma > SMIDGEN:
            beta_opt = 3.348 * self.sigma ** (-0.8189)
            self.beta_ratio = self.packing_ratio / beta_opt
        else:
            self.beta_ratio = 0.

        # Net load, heat and mineral content of each life class
        net = self.load * (1. - self.stot)
        self.class_net_load = np.array([
            np.dot(self.f_ij[self.dead], net[self.dead]),
            np.dot(self.f_ij[~self.dead], net[~self.dead]),
        ])
        self.class_heat = np.array([
            np.dot(self.f_ij[self.dead], self.heat[self.dead]),
            np.dot(self.f_ij[~self.dead], self.heat[~self.dead]),
        ])
        self.class_seff = np.array([
            np.dot(self.f_ij[self.dead], self.seff[self.dead]),
            np.dot(self.f_ij[~self.dead], self.seff[~self.dead]),
        ])

    def has_live_fuel(self) -> bool:
        return self.class_area[1] > SMIDGEN


@dataclass
class HeatSink:
    dead_mois: float
    live_mois: float
    live_mext: float
    heat_sink: float


@dataclass
class HeadSpread:
    ros: float              # ft/min
    dir_max: float          # degrees clockwise from upslope
    eff_wind: float         # mi/h
    wind_limit: float       # mi/h
    wind_flag: bool
    wind_factor: float
    slope_factor: float


def calc_heat_sink(bed: FuelBed, mois: Sequence[float]) -> HeatSink:
    """Characteristic moistures, live extinction moisture and heat sink.

    Args:
        bed (FuelBed): fuel bed
        mois (Sequence[float]): moisture per particle (fraction)

    Returns:
        HeatSink: dead/live characteristic moisture, live moisture of
        extinction and heat sink (Btu/ft3)
    """
    mois = np.asarray(mois, dtype=float)
    valid = bed.valid

    eps = np.zeros_like(mois)
    eps[valid] = np.exp(-138. / bed.savr[valid])
    q_ig = 250. + 1116. * mois

    dead, live = bed.dead, ~bed.dead
    dead_mois = float(np.dot(bed.f_ij[dead], mois[dead]))
    live_mois = float(np.dot(bed.f_ij[live], mois[live]))

    heat_sink = bed.bulk_density * (
        bed.f_i[0] * np.dot(bed.f_ij[dead], eps[dead] * q_ig[dead])
        + bed.f_i[1] * np.dot(bed.f_ij[live], eps[live] * q_ig[live])
    )

    live_mext = calc_live_mext(bed, mois)

    return HeatSink(dead_mois, live_mois, live_mext, float(heat_sink))


def calc_live_mext(bed: FuelBed, mois: np.ndarray) -> float:
    valid = bed.valid
    dead_fine = np.zeros_like(mois)
    live_fine = np.zeros_like(mois)
    dead_fine[valid & bed.dead] = bed.load[valid & bed.dead] * np.exp(-138. / bed.savr[valid & bed.dead])
    live_fine[valid & ~bed.dead] = bed.load[valid & ~bed.dead] * np.exp(-500. / bed.savr[valid & ~bed.dead])

    fine_dead = dead_fine.sum()
    fine_live = live_fine.sum()

    if fine_live < SMIDGEN or fine_dead < SMIDGEN or bed.mext_dead < SMIDGEN:
        # Live moisture does not apply here
        return bed.mext_dead

    w_ratio = fine_dead / fine_live
    mf_dead = np.dot(dead_fine, mois) / fine_dead

    mx = 2.9 * w_ratio * (1. - mf_dead / bed.mext_dead) - 0.226
    return float(max(mx, bed.mext_dead))


def calc_moisture_damping(m_f: float, m_x: float) -> float:
    if m_x < SMIDGEN:
        return 0.
    r_m = m_f / m_x
    if r_m >= 1.:
        return 0.
    damping = 1 - 2.59 * r_m + 5.11 * r_m**2 - 3.52 * r_m**3
    return max(0., damping)


def calc_mineral_damping(s_e: float = 0.010) -> float:
    if s_e < SMIDGEN:
        return 1.
    return min(1., 0.174 * s_e ** (-0.19))


def calc_reaction_velocity(sigma: float, beta_ratio: float) -> float:
    """Optimum reaction velocity scaled to the bed's packing (1/min)."""
    if sigma < SMIDGEN or beta_ratio < SMIDGEN:
        return 0.
    s15 = sigma ** 1.5
    gamma_max = s15 / (495. + 0.0594 * s15)
    a = 133. * sigma ** (-0.7913)
    return gamma_max * (beta_ratio ** a) * np.exp(a * (1. - beta_ratio))


def calc_reaction_intensity(bed: FuelBed, dead_mois: float, live_mois: float,
                            live_mext: float) -> Tuple[float, float, float]:
    """Reaction intensity of the dead and live classes and their total.

    Returns:
        Tuple[float, float, float]: total, dead and live reaction intensity
        (Btu/ft2/min)
    """
    gamma = calc_reaction_velocity(bed.sigma, bed.beta_ratio)

    dead = (gamma * bed.class_net_load[0] * bed.class_heat[0]
            * calc_moisture_damping(dead_mois, bed.mext_dead)
            * calc_mineral_damping(bed.class_seff[0]))

    live = 0.
    if bed.has_live_fuel():
        live = (gamma * bed.class_net_load[1] * bed.class_heat[1]
                * calc_moisture_damping(live_mois, live_mext)
                * calc_mineral_damping(bed.class_seff[1]))

    return float(dead + live), float(dead), float(live)


def calc_propagating_flux(sigma: float, packing_ratio: float) -> float:
    return float(np.exp((0.792 + 0.681 * np.sqrt(sigma)) * (packing_ratio + 0.1))
                 / (192. + 0.2595 * sigma))


def calc_residence_time(sigma: float) -> float:
    return 0. if sigma < SMIDGEN else 384. / sigma


def calc_no_wind_rate(rxi: float, flux: float, heat_sink: float) -> float:
    return 0. if heat_sink < SMIDGEN else rxi * flux / heat_sink


def calc_wind_coefficients(sigma: float) -> Tuple[float, float, float]:
    """Wind factor coefficients C, B and E of the fuel bed."""
    c = 7.47 * np.exp(-0.133 * sigma ** 0.55)
    b = 0.02526 * sigma ** 0.54
    e = 0.715 * np.exp(-3.59e-4 * sigma)
    return c, b, e


def calc_wind_factor(sigma: float, beta_ratio: float, wind_speed_ft_min: float) -> float:
    if wind_speed_ft_min < SMIDGEN or beta_ratio < SMIDGEN or sigma < SMIDGEN:
        return 0.
    c, b, e = calc_wind_coefficients(sigma)
    return float(c * wind_speed_ft_min ** b * beta_ratio ** (-e))


def calc_slope_factor(packing_ratio: float, slope_fraction: float) -> float:
    if packing_ratio < SMIDGEN or slope_fraction < SMIDGEN:
        return 0.
    return float(5.275 * packing_ratio ** (-0.3) * slope_fraction ** 2)


def calc_effective_wind_speed(phi_e: float, sigma: float, beta_ratio: float) -> float:
    """Wind speed (ft/min) producing the effective wind factor phi_e alone."""
    if phi_e < SMIDGEN or sigma < SMIDGEN or beta_ratio < SMIDGEN:
        return 0.
    c, b, e = calc_wind_coefficients(sigma)
    return float((phi_e * beta_ratio ** e / c) ** (1. / b))


def calc_spread_at_head(ros0: float, rxi: float, slope_fraction: float, midflame: float,
                        wind_dir: float, sigma: float, packing_ratio: float,
                        beta_ratio: float, apply_limit: bool = True) -> HeadSpread:
    """Spread rate and direction of maximum spread from wind and slope.

    The wind and slope spread increments are added as vectors, the wind
    vector pointing wind_dir degrees clockwise from upslope.

    Args:
        ros0 (float): no-wind no-slope spread rate (ft/min)
        rxi (float): reaction intensity (Btu/ft2/min)
        slope_fraction (float): slope rise over reach
        midflame (float): midflame wind speed (mi/h)
        wind_dir (float): direction the wind pushes, clockwise from upslope
        sigma, packing_ratio, beta_ratio (float): fuel bed intermediates
        apply_limit (bool): cap the effective wind at 0.9 * rxi

    Returns:
        HeadSpread: head spread rate and its by-products
    """
    wind_fpm = mph_to_ft_min(midflame)
    phi_w = calc_wind_factor(sigma, beta_ratio, wind_fpm)
    phi_s = calc_slope_factor(packing_ratio, slope_fraction)

    limit_fpm = 0.9 * rxi
    limit_mph = ft_min_to_mph(limit_fpm)

    if ros0 < SMIDGEN:
        return HeadSpread(0., 0., 0., limit_mph, False, phi_w, phi_s)

    slp_rate = ros0 * phi_s
    wnd_rate = ros0 * phi_w
    angle = np.deg2rad(wind_dir)

    x = slp_rate + wnd_rate * np.cos(angle)
    y = wnd_rate * np.sin(angle)
    vec_mag = float(np.hypot(x, y))

    if vec_mag < SMIDGEN:
        dir_max = 0.
    else:
        dir_max = wrap_degrees(float(np.rad2deg(np.arctan2(y, x))))

    ros = ros0 + vec_mag
    phi_e = ros / ros0 - 1.
    eff_fpm = calc_effective_wind_speed(phi_e, sigma, beta_ratio)

    flag = eff_fpm > limit_fpm
    if flag and apply_limit:
        eff_fpm = limit_fpm
        phi_e = calc_wind_factor(sigma, beta_ratio, eff_fpm)
        ros = ros0 * (1. + phi_e)

    return HeadSpread(ros, dir_max, ft_min_to_mph(eff_fpm), limit_mph, flag, phi_w, phi_s)


def calc_eff_wind_at_vector(ros0: float, ros_vector: float, sigma: float,
                            beta_ratio: float) -> float:
    """Effective wind speed (mi/h) implied by the spread rate at a vector."""
    if ros0 < SMIDGEN or ros_vector <= ros0:
        return 0.
    phi_e = ros_vector / ros0 - 1.
    return ft_min_to_mph(calc_effective_wind_speed(phi_e, sigma, beta_ratio))


def calc_length_to_width(eff_wind: float) -> float:
    return 1. + 0.25 * eff_wind


def calc_eccentricity(lw_ratio: float) -> float:
    if lw_ratio <= 1.:
        return 0.
    return float(np.sqrt(lw_ratio * lw_ratio - 1.) / lw_ratio)


def calc_vector_beta(dir_max: float, dir_vector: float) -> float:
    beta = abs(dir_max - dir_vector)
    if beta > 180.:
        beta = 360. - beta
    return beta


def calc_spread_at_beta(ros_head: float, eccentricity: float, beta: float) -> float:
    if ros_head < SMIDGEN:
        return 0.
    denom = 1. - eccentricity * np.cos(np.deg2rad(beta))
    if denom < SMIDGEN:
        return ros_head
    return float(ros_head * (1. - eccentricity) / denom)


def calc_spread_at_back(ros_head: float, eccentricity: float) -> float:
    return calc_spread_at_beta(ros_head, eccentricity, 180.)


def calc_fireline_intensity(ros: float, rxi: float, residence_time: float) -> float:
    """Byram's fireline intensity (Btu/ft/s)."""
    return ros * rxi * residence_time / 60.


def calc_flame_length(fli: float) -> float:
    """Byram's flame length (ft) from fireline intensity (Btu/ft/s)."""
    return 0. if fli < SMIDGEN else 0.45 * fli ** 0.46


def calc_fireline_intensity_from_flame_length(flame_length: float) -> float:
    return 0. if flame_length < SMIDGEN else (flame_length / 0.45) ** (1. / 0.46)


def calc_flame_height(flame_length: float, flame_angle: float) -> float:
    return flame_length * np.sin(np.deg2rad(flame_angle))


def calc_heat_per_unit_area(rxi: float, residence_time: float) -> float:
    return rxi * residence_time


def calc_heat_source(ros: float, heat_sink: float) -> float:
    return ros * heat_sink


def calc_scorch_height(fli: float, wind_speed: float, air_temp: float) -> float:
    """Van Wagner (1973) crown scorch height (ft).

    Args:
        fli (float): fireline intensity (Btu/ft/s)
        wind_speed (float): midflame wind speed (mi/h)
        air_temp (float): air temperature (oF)
    """
    if fli < SMIDGEN or air_temp >= 140.:
        return 0.
    return float((63. / (140. - air_temp)) * fli ** 1.166667
                 / np.sqrt(fli + wind_speed ** 3))


def calc_fire_width(length: float, lw_ratio: float) -> float:
    return 0. if lw_ratio < SMIDGEN else length / lw_ratio


def calc_fire_area(length: float, width: float) -> float:
    """Elliptical fire area in the square of the length unit."""
    return np.pi * length * width / 4.


def calc_fire_perimeter(length: float, width: float) -> float:
    """Elliptical fire perimeter using Ramanujan's series."""
    a = 0.5 * length
    b = 0.5 * width
    xm = 0. if (a + b) <= 0. else (a - b) / (a + b)
    xk = 1. + xm * xm / 4. + xm * xm * xm * xm / 64.
    return float(np.pi * (a + b) * xk)
