"""
Data API layer: parameter specs and the API registry.
"""

from storekit.api.params import Named, ParamSpec, Positional
from storekit.api.registry import APIRegistry, DataAPI, DataAPIContext, create_data_api

__all__ = [
    "APIRegistry",
    "DataAPI",
    "DataAPIContext",
    "Named",
    "ParamSpec",
    "Positional",
    "create_data_api",
]
