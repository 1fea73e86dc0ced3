from .atr import AtrResolution
from .base import PriceLevelResolution, ResolutionStrategy
from .composite import CompositeResolution, pmarp_or_bbwp_vs_percentage
from .fixed import FixedValuesResolution
from .percentage import PercentageResolution
from .percentile import PercentileResolution
from .pivot import DynamicPivotResolution

__all__ = [
    "AtrResolution",
    "CompositeResolution",
    "DynamicPivotResolution",
    "FixedValuesResolution",
    "PercentageResolution",
    "PercentileResolution",
    "PriceLevelResolution",
    "ResolutionStrategy",
    "pmarp_or_bbwp_vs_percentage",
]
