"""Fire behavior models behind the worksheet functions.

Modules:
    - rothermel: Rothermel (1972) surface fire spread and fire shape.
    - fuel_models: Standard fuel model and moisture scenario dictionaries.
    - palmetto: Palmetto-gallberry dynamic fuel (Hough and Albini 1978).
    - aspen: Western aspen dynamic fuels and aspen mortality.
    - wind: Wind adjustment factor and wind speed height conversion.
    - crown_model: Crown fire spread, transition and fire type.
    - spotting: Albini maximum spotting distance.
    - tree_mortality: Crown scorch, bark thickness and tree mortality.
    - ignition: Firebrand and lightning ignition probability.
    - weather: Humidity and comfort indices.
    - safety: Safety zone separation distance and size.
    - site: Map, slope, direction and calendar helpers.
    - expected_spread: Two-dimensional expected spread sampler.
    - contain: Initial attack containment simulation.
"""
