"""
Promedio Movil Ponderado (WMA) para Forecast WMA

Reconstruye el forecast de cada periodo historico con suficiente
historia (backtesting), calcula las metricas de precision MAD, MSE y
MAPE, y proyecta el periodo siguiente al ultimo conocido.

Ponderacion: en una ventana de n periodos, el periodo mas reciente
recibe el coeficiente n y el mas antiguo el coeficiente 1. El peso
configurado multiplica todos los coeficientes por igual, por lo que se
cancela en el cociente y no altera el resultado. Los calculos se hacen
con racionales exactos para que esa invarianza sea exacta y no solo
aproximada.

Todas las funciones son puras: no modifican la serie ni guardan estado
entre llamadas.

Author: Manuel Remón
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Union
import math
import numpy as np
import pandas as pd
from loguru import logger

from src.data.series import TimeSeries
from src.utils.constants import (
    COLUMNAS_BACKTEST,
    PERIODOS_DEFAULT,
    PESO_DEFAULT,
    obtener_nombre_metrica,
)
from src.utils.exceptions import (
    InsufficientHistoryError,
    InvalidConfigError,
    UndefinedPercentageError,
)
from src.utils.formatters import formato_numero, formato_periodo, formato_porcentaje
from src.utils.logger import log_execution_time
from src.utils.validators import validate_integer, validate_not_empty, validate_positive

Numero = Union[int, float]


@dataclass(frozen=True)
class ForecastConfig:
    """Parametros del promedio movil ponderado"""
    weight: float = PESO_DEFAULT
    period_count: int = PERIODOS_DEFAULT

    @classmethod
    def desde_formulario(cls, peso: Any, periodos: Any) -> "ForecastConfig":
        """
        Interpreta los valores ingresados en el formulario ("3", "3").

        Raises:
            InvalidConfigError: Si falta un valor, no es numerico o no es positivo
        """
        validate_not_empty(peso, "weight", error_class=InvalidConfigError)
        validate_not_empty(periodos, "period_count", error_class=InvalidConfigError)
        return cls(
            weight=validate_positive(peso, "weight", allow_zero=False, error_class=InvalidConfigError),
            period_count=validate_integer(periodos, "period_count", min_value=1, error_class=InvalidConfigError)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'weight': self.weight,
            'period_count': self.period_count
        }


@dataclass(frozen=True)
class ForecastPoint:
    """Resultado del backtest para un periodo historico"""
    period: pd.Period
    actual: Numero
    forecast: int
    error: Numero
    abs_error: Numero
    squared_error: Numero
    ape: Optional[float]

    @property
    def period_label(self) -> str:
        return formato_periodo(self.period)

    @property
    def ape_indefinido(self) -> bool:
        """APE no definido (real cero con error distinto de cero)"""
        return self.ape is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'periodo': self.period_label,
            'actual': self.actual,
            'forecast': self.forecast,
            'error': self.error,
            'abs_error': self.abs_error,
            'squared_error': self.squared_error,
            'ape': round(self.ape, 2) if self.ape is not None else None
        }


@dataclass(frozen=True)
class ForecastSummary:
    """
    Metricas agregadas del backtest.

    Con cero puntos todas las metricas valen 0; ``n_puntos`` indica si
    el resumen es significativo. MAPE se promedia solo sobre los puntos
    con APE definido (``n_puntos_mape``).
    """
    mad: float = 0.0
    mse: float = 0.0
    mape: float = 0.0
    n_puntos: int = 0
    n_puntos_mape: int = 0

    @property
    def es_significativo(self) -> bool:
        return self.n_puntos > 0

    def describir(self) -> str:
        """Texto de una linea con las tres metricas"""
        if not self.es_significativo:
            return "Sin puntos de backtest: no hay metricas de precision disponibles."
        partes = [
            f"{obtener_nombre_metrica('mad')}: {formato_numero(self.mad, 2)}",
            f"{obtener_nombre_metrica('mse')}: {formato_numero(self.mse, 2)}",
            f"{obtener_nombre_metrica('mape')}: {formato_porcentaje(self.mape, 2)}",
        ]
        if self.n_puntos_mape < self.n_puntos:
            partes.append(f"(MAPE sobre {self.n_puntos_mape} de {self.n_puntos} periodos)")
        return " | ".join(partes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'mad': round(self.mad, 4),
            'mse': round(self.mse, 4),
            'mape': round(self.mape, 4),
            'n_puntos': self.n_puntos,
            'n_puntos_mape': self.n_puntos_mape
        }


@dataclass(frozen=True)
class NextPeriodForecast:
    """Proyeccion para el mes siguiente al ultimo de la serie"""
    period: pd.Period
    value: int

    @property
    def period_label(self) -> str:
        return formato_periodo(self.period)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'periodo': self.period_label,
            'value': self.value
        }


class ForecastOutput(NamedTuple):
    """Backtest, resumen y proyeccion de una ejecucion"""
    points: List[ForecastPoint]
    summary: ForecastSummary
    next_period: NextPeriodForecast

    def to_dataframe(self) -> pd.DataFrame:
        """Tabla de backtest (una fila por periodo)"""
        return pd.DataFrame([p.to_dict() for p in self.points], columns=COLUMNAS_BACKTEST)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'points': [p.to_dict() for p in self.points],
            'summary': self.summary.to_dict(),
            'next_period': self.next_period.to_dict()
        }


# ============================================================================
# Operaciones
# ============================================================================

def validate(series: TimeSeries, config: ForecastConfig) -> None:
    """
    Valida configuracion e historia disponible.

    Una serie con exactamente ``period_count`` puntos es valida: no
    produce backtest pero si proyeccion.

    Raises:
        InvalidConfigError: period_count < 1 o weight <= 0
        InsufficientHistoryError: len(series) < period_count
    """
    validate_positive(config.weight, "weight", allow_zero=False, error_class=InvalidConfigError)
    validate_integer(config.period_count, "period_count", min_value=1, error_class=InvalidConfigError)

    if len(series) < config.period_count:
        raise InsufficientHistoryError(
            f"Datos de stock insuficientes. Minimo se requieren {config.period_count} periodos",
            required=config.period_count,
            available=len(series)
        )


def coefficients(period_count: int) -> List[int]:
    """Coeficientes crudos, del mas reciente (period_count) al mas antiguo (1)"""
    return [period_count - j + 1 for j in range(1, period_count + 1)]


def _redondear(valor: Fraction) -> int:
    """Redondeo al entero mas cercano, mitades hacia arriba"""
    return math.floor(valor + Fraction(1, 2))


def weighted_average(window: Sequence[Numero], weight: Numero) -> int:
    """
    Promedio ponderado de una ventana ordenada del mas reciente al mas antiguo.

    Args:
        window: Cantidades, window[0] es el periodo mas reciente
        weight: Peso configurado (positivo)

    Returns:
        Forecast redondeado al entero mas cercano
    """
    n = len(window)
    if n < 1:
        raise InsufficientHistoryError("Ventana vacia", required=1, available=0)
    validate_positive(weight, "weight", allow_zero=False, error_class=InvalidConfigError)

    total = Fraction(n * (n + 1), 2)
    peso = Fraction(weight)

    suma_ponderada = Fraction(0)
    suma_pesos = Fraction(0)
    for cantidad, coef in zip(window, coefficients(n)):
        peso_periodo = peso * coef / total
        suma_ponderada += Fraction(cantidad) * peso_periodo
        suma_pesos += peso_periodo

    return _redondear(suma_ponderada / suma_pesos)


def _ventana(series: TimeSeries, fin: int, period_count: int) -> List[Numero]:
    """Los period_count puntos anteriores a ``fin``, del mas reciente al mas antiguo"""
    return [series[fin - j].quantity for j in range(1, period_count + 1)]


def absolute_percentage_error(actual: Numero, abs_error: Numero, period=None) -> float:
    """
    APE = |error| / real * 100.

    Raises:
        UndefinedPercentageError: Real cero con error distinto de cero
    """
    if actual == 0:
        if abs_error == 0:
            return 0.0
        raise UndefinedPercentageError(
            "APE indefinido: valor real cero",
            period=period,
            actual=actual,
            forecast=actual + abs_error
        )
    return abs_error / actual * 100


def backtest(series: TimeSeries, config: ForecastConfig) -> List[ForecastPoint]:
    """
    Reconstruye el forecast de cada periodo con period_count periodos previos.

    Produce exactamente ``len(series) - period_count`` puntos, en el orden
    de la serie. Los puntos con APE indefinido quedan con ``ape=None``.

    Raises:
        InvalidConfigError, InsufficientHistoryError: ver ``validate``
    """
    validate(series, config)
    n = int(config.period_count)

    puntos = []
    for i in range(n, len(series)):
        actual = series[i].quantity
        pronostico = weighted_average(_ventana(series, i, n), config.weight)

        error = actual - pronostico
        abs_error = abs(error)

        try:
            ape = absolute_percentage_error(actual, abs_error, series[i].period)
        except UndefinedPercentageError as e:
            logger.warning(f"Periodo {series[i].period} excluido de MAPE: {e}")
            ape = None

        punto = ForecastPoint(
            period=series[i].period,
            actual=actual,
            forecast=pronostico,
            error=error,
            abs_error=abs_error,
            squared_error=error * error,
            ape=ape
        )
        logger.debug(f"{punto.period_label}: real={actual} forecast={pronostico} error={error}")
        puntos.append(punto)

    return puntos


def summarize(points: Sequence[ForecastPoint]) -> ForecastSummary:
    """
    Calcula MAD, MSE y MAPE sobre los puntos del backtest.

    Sin puntos devuelve un resumen en cero con ``n_puntos=0``.
    """
    if not points:
        return ForecastSummary()

    apes = [p.ape for p in points if p.ape is not None]

    return ForecastSummary(
        mad=float(np.mean([p.abs_error for p in points])),
        mse=float(np.mean([p.squared_error for p in points])),
        mape=float(np.mean(apes)) if apes else 0.0,
        n_puntos=len(points),
        n_puntos_mape=len(apes)
    )


def project_next(series: TimeSeries, config: ForecastConfig) -> NextPeriodForecast:
    """
    Proyecta el mes siguiente al ultimo de la serie.

    Raises:
        InvalidConfigError, InsufficientHistoryError: ver ``validate``
    """
    validate(series, config)

    ventana = _ventana(series, len(series), int(config.period_count))
    return NextPeriodForecast(
        period=series.last_period + 1,
        value=weighted_average(ventana, config.weight)
    )


@log_execution_time
def forecast(series: TimeSeries, config: ForecastConfig) -> ForecastOutput:
    """
    Ejecuta validacion, backtest, resumen y proyeccion.

    Ejemplo de uso:
        serie = TimeSeries.from_records([
            ("2024-01", 100), ("2024-02", 110), ("2024-03", 105), ("2024-04", 120)
        ])
        puntos, resumen, proximo = forecast(serie, ForecastConfig(weight=3, period_count=3))
        print(proximo.period_label, proximo.value)  # May 2024 113
    """
    validate(series, config)

    logger.info(
        f"WMA: {len(series)} periodos, ventana={config.period_count}, peso={config.weight}"
    )

    puntos = backtest(series, config)
    resumen = summarize(puntos)
    proximo = project_next(series, config)

    if not resumen.es_significativo:
        logger.info("Historia justa para la ventana: sin puntos de backtest")

    logger.info(
        f"WMA completado: {resumen.n_puntos} puntos, MAD={resumen.mad:.2f}, "
        f"proximo {proximo.period_label}={proximo.value}"
    )

    return ForecastOutput(points=puntos, summary=resumen, next_period=proximo)
