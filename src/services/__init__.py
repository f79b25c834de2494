"""
Capa de Servicios para Forecast WMA

Orquesta el flujo completo de prediccion de stock separando
la lógica de negocio de la capa de presentación.
"""

from .forecast_service import ForecastService, ForecastResult

__all__ = ['ForecastService', 'ForecastResult']
