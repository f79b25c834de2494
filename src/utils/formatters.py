"""
Funciones de formateo para Forecast WMA
"""
from typing import Union
import pandas as pd

from src.utils.constants import MESES_ABREV


def formato_numero(valor: Union[float, int], decimales: int = 0) -> str:
    """
    Formatea un número con separadores de miles
    """
    if valor is None:
        return "0"

    try:
        if decimales == 0:
            valor_formateado = f"{int(valor):,}"
        else:
            valor_formateado = f"{valor:,.{decimales}f}"
        # Cambiar separadores para formato español
        valor_formateado = valor_formateado.replace(",", "X").replace(".", ",").replace("X", ".")
        return valor_formateado
    except (TypeError, ValueError):
        return str(valor)


def formato_porcentaje(valor: Union[float, int], decimales: int = 1) -> str:
    """
    Formatea un valor como porcentaje
    """
    if valor is None:
        return "0%"

    try:
        return f"{formato_numero(valor, decimales)}%"
    except (TypeError, ValueError):
        return f"{valor}%"


def formato_periodo(periodo: pd.Period) -> str:
    """
    Formatea un periodo mensual como "MMM yyyy" (ej: "Apr 2024").

    No depende del locale del proceso.
    """
    return f"{MESES_ABREV[periodo.month - 1]} {periodo.year}"
