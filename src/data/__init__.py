# Data module exports
from .series import (
    TimeSeries,
    TimeSeriesPoint,
    serie_desde_dataframe,
    serie_desde_stock
)
