"""
Módulo de Forecasting para Forecast WMA
=======================================
Promedio movil ponderado con backtesting y metricas de precision
"""
from .wma import (
    ForecastConfig,
    ForecastOutput,
    ForecastPoint,
    ForecastSummary,
    NextPeriodForecast,
    backtest,
    forecast,
    project_next,
    summarize,
    validate,
    weighted_average,
)

__all__ = [
    'ForecastConfig',
    'ForecastOutput',
    'ForecastPoint',
    'ForecastSummary',
    'NextPeriodForecast',
    'backtest',
    'forecast',
    'project_next',
    'summarize',
    'validate',
    'weighted_average',
]
