"""
Series temporales mensuales para Forecast WMA

Define los puntos de una serie (periodo mensual + cantidad) y los
constructores a partir de registros de stock o DataFrames genericos.

Una serie es inmutable: el motor nunca modifica los datos de entrada.

Author: Manuel Remón
"""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union
import numpy as np
import pandas as pd
from loguru import logger

from src.utils.constants import COLUMNAS_STOCK
from src.utils.exceptions import DataValidationError
from src.utils.formatters import formato_periodo
from src.utils.validators import validate_dataframe, validate_positive

FRECUENCIA = "M"


def a_periodo(valor: Any) -> pd.Period:
    """
    Normaliza fechas, strings o periodos a un periodo mensual.

    Raises:
        DataValidationError: Si el valor no se puede interpretar como fecha
    """
    if isinstance(valor, pd.Period):
        return valor.asfreq(FRECUENCIA)
    try:
        fecha = pd.Timestamp(valor)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"Periodo invalido: {e}", field="period", value=valor)
    if pd.isna(fecha):
        raise DataValidationError("Periodo vacio", field="period", value=valor)
    # El mes es el de la hora local del registro
    if fecha.tzinfo is not None:
        fecha = fecha.tz_localize(None)
    return fecha.to_period(FRECUENCIA)


def _mes_o_nat(valor: Any):
    """Mes del valor, o NaT si no es interpretable"""
    try:
        return a_periodo(valor)
    except DataValidationError:
        return pd.NaT


def columna_a_meses(columna: pd.Series) -> pd.Series:
    """
    Lleva una columna de fechas a periodos mensuales.

    Acepta periodos, fechas (con o sin zona horaria, incluso zonas
    mezcladas) y strings. Los valores no interpretables quedan en NaT.
    """
    if isinstance(columna.dtype, pd.PeriodDtype):
        return columna.dt.asfreq(FRECUENCIA)
    if pd.api.types.is_datetime64_any_dtype(columna):
        if columna.dt.tz is not None:
            columna = columna.dt.tz_localize(None)
        return columna.dt.to_period(FRECUENCIA)
    return columna.map(_mes_o_nat)


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Cantidad observada en un mes"""
    period: pd.Period
    quantity: Union[int, float]

    def __post_init__(self):
        if isinstance(self.quantity, (int, np.integer)) and not isinstance(self.quantity, bool):
            # Enteros grandes no pasan por float
            cantidad = int(self.quantity)
            if cantidad < 0:
                raise DataValidationError("quantity debe ser >= 0", field="quantity", value=cantidad)
        else:
            cantidad = validate_positive(self.quantity, "quantity", allow_zero=True)
            if cantidad.is_integer():
                cantidad = int(cantidad)
        object.__setattr__(self, 'period', a_periodo(self.period))
        object.__setattr__(self, 'quantity', cantidad)

    @property
    def label(self) -> str:
        return formato_periodo(self.period)


class TimeSeries:
    """
    Serie mensual ordenada de un material.

    Invariantes: periodos estrictamente crecientes, sin duplicados,
    cantidades no negativas.

    Ejemplo de uso:
        serie = TimeSeries.from_records([
            ("2024-01", 100), ("2024-02", 110), ("2024-03", 105)
        ])
        print(serie.last_period)  # 2024-03
    """

    def __init__(self, points: Iterable[TimeSeriesPoint]):
        self._points: Tuple[TimeSeriesPoint, ...] = tuple(points)

        for anterior, actual in zip(self._points, self._points[1:]):
            if actual.period <= anterior.period:
                raise DataValidationError(
                    "La serie debe estar ordenada por periodo y sin duplicados",
                    field="period",
                    value=f"{anterior.period} -> {actual.period}"
                )

    @classmethod
    def from_records(cls, records: Iterable[Tuple[Any, Any]]) -> "TimeSeries":
        """Construye la serie desde pares (periodo, cantidad)"""
        return cls(TimeSeriesPoint(periodo, cantidad) for periodo, cantidad in records)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TimeSeriesPoint]:
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __repr__(self) -> str:
        if not self._points:
            return "TimeSeries([])"
        return f"TimeSeries({len(self)} puntos, {self._points[0].period}..{self._points[-1].period})"

    @property
    def quantities(self) -> List[Union[int, float]]:
        return [p.quantity for p in self._points]

    @property
    def periods(self) -> List[pd.Period]:
        return [p.period for p in self._points]

    @property
    def last_period(self) -> Optional[pd.Period]:
        return self._points[-1].period if self._points else None


def serie_desde_dataframe(
    df: pd.DataFrame,
    columna_fecha: str = 'periodo',
    columna_cantidad: str = 'cantidad'
) -> TimeSeries:
    """
    Construye una serie mensual desde un DataFrame.

    Las fechas se llevan a mes, las cantidades de un mismo mes se suman
    y el resultado se ordena cronologicamente. Filas con fecha o cantidad
    no interpretables se descartan.

    Args:
        df: DataFrame con datos historicos
        columna_fecha: Nombre de columna de fechas
        columna_cantidad: Nombre de columna de cantidades

    Returns:
        TimeSeries ordenada
    """
    validate_dataframe(df, [columna_fecha, columna_cantidad])

    df_prep = df[[columna_fecha, columna_cantidad]].copy()

    # Asegurar tipos correctos
    df_prep["_mes"] = columna_a_meses(df_prep[columna_fecha])
    df_prep[columna_cantidad] = pd.to_numeric(df_prep[columna_cantidad], errors='coerce')

    # Eliminar nulos
    n_inicial = len(df_prep)
    df_prep = df_prep.dropna(subset=["_mes", columna_cantidad])
    if len(df_prep) < n_inicial:
        logger.warning(f"Descartados {n_inicial - len(df_prep)} registros con fecha o cantidad invalida")

    # Agregar por mes
    mensual = df_prep.groupby('_mes')[columna_cantidad].sum().sort_index()

    if len(mensual) < len(df_prep):
        logger.debug(f"Agregados {len(df_prep)} registros en {len(mensual)} meses")

    return TimeSeries.from_records(zip(mensual.index, mensual.values))


def serie_desde_stock(
    df_stock: pd.DataFrame,
    material_id: str,
    columna_material: str = COLUMNAS_STOCK[0],
    columna_fecha: str = COLUMNAS_STOCK[1],
    columna_cantidad: str = COLUMNAS_STOCK[2]
) -> TimeSeries:
    """
    Filtra los registros de stock de un material y arma su serie mensual.

    Args:
        df_stock: Registros de stock de todos los materiales
        material_id: Material a filtrar
        columna_material: Columna con el id de material
        columna_fecha: Columna de periodo
        columna_cantidad: Columna de cantidad

    Returns:
        TimeSeries del material (vacia si no tiene registros)
    """
    validate_dataframe(df_stock, [columna_material, columna_fecha, columna_cantidad])

    filtro = df_stock[columna_material].astype(str) == str(material_id)
    df_material = df_stock.loc[filtro]

    logger.debug(f"Material {material_id}: {len(df_material)} registros de stock")

    return serie_desde_dataframe(df_material, columna_fecha, columna_cantidad)
