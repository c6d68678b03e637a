"""Shared utilities for firecalc.

Modules:
    - config: Configuration property map and .cfg loading.
    - fire_util: Constants and enumerations.
    - unit_conversions: Native and display unit conversions.
    - data_classes: Dataclasses for the containment simulation.
    - logger: Trace sinks writing parquet or keeping entries in memory.
    - logger_schemas: Trace entry schemas.
    - parquet_writer: Parquet file writing utilities.
"""
