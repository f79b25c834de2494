"""
Datos de demostracion para Forecast WMA

Genera un catalogo de materiales y 12 meses de registros de stock por
material con una variacion aleatoria multiplicativa entre 0.9 y 1.1.
Es solo una fuente de datos: el motor WMA no depende de este modulo.
"""
from datetime import date
from typing import Optional
import numpy as np
import pandas as pd

from src.utils.constants import COLUMNAS_MATERIALES, COLUMNAS_STOCK

# id, nombre, unidad, cantidad base
MATERIALES_DEMO = [
    ("1", "Terigu", "kg", 200),
    ("2", "Gula", "kg", 150),
    ("3", "Telur", "kg", 100),
    ("4", "Ragi", "kg", 50),
    ("5", "Keju", "kg", 120),
]

MESES_HISTORIA = 12


def catalogo_materiales_demo() -> pd.DataFrame:
    """Catalogo de materiales (id, nombre, unidad)"""
    return pd.DataFrame(
        [m[:3] for m in MATERIALES_DEMO],
        columns=COLUMNAS_MATERIALES
    )


def generar_stock_demo(
    hasta: Optional[date] = None,
    meses: int = MESES_HISTORIA,
    seed: Optional[int] = None
) -> pd.DataFrame:
    """
    Genera registros de stock mensuales para los materiales demo.

    Args:
        hasta: Mes mas reciente (default: mes actual)
        meses: Cantidad de meses por material
        seed: Semilla del generador aleatorio

    Returns:
        DataFrame con columnas material_id, periodo, cantidad
    """
    rng = np.random.default_rng(seed)
    ultimo = pd.Period(hasta or date.today(), freq="M")
    periodos = pd.period_range(end=ultimo, periods=meses, freq="M")

    rows = []
    for material_id, _, _, base in MATERIALES_DEMO:
        factores = 0.9 + rng.random(meses) * 0.2
        for periodo, factor in zip(periodos, factores):
            rows.append({
                COLUMNAS_STOCK[0]: material_id,
                COLUMNAS_STOCK[1]: periodo.to_timestamp(),
                COLUMNAS_STOCK[2]: int(round(base * factor)),
            })

    return pd.DataFrame(rows, columns=COLUMNAS_STOCK)
