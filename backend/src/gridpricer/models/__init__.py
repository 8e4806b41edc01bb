"""Models for backward induction: Slices, Brownian grids, Black and Hull-White."""

from gridpricer.models.base import Model
from gridpricer.models.slice import (
    Slice,
    absolute,
    at_origin,
    exp,
    indicator,
    interpolate,
    log,
    maximum,
    minimum,
    power,
    rollback,
    sqrt,
)
from gridpricer.models.brownian import BrownianModel, brownian, brownian_with
from gridpricer.models.similar import SimilarModel, similar
from gridpricer.models.handle import ModelHandle
from gridpricer.models.asset_model import AssetModel
from gridpricer.models.interest_rate_model import InterestRateModel
from gridpricer.models.black import BlackData, BlackModel, black_model
from gridpricer.models.hull_white import HullWhiteData, HullWhiteModel, hull_white_model

__all__ = [
    "Model",
    "Slice",
    "absolute",
    "at_origin",
    "exp",
    "indicator",
    "interpolate",
    "log",
    "maximum",
    "minimum",
    "power",
    "rollback",
    "sqrt",
    "BrownianModel",
    "brownian",
    "brownian_with",
    "SimilarModel",
    "similar",
    "ModelHandle",
    "AssetModel",
    "InterestRateModel",
    # Black
    "BlackData",
    "BlackModel",
    "black_model",
    # Hull-White
    "HullWhiteData",
    "HullWhiteModel",
    "hull_white_model",
]
