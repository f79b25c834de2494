"""
Validadores de Entrada para Forecast WMA
Funciones para validar y sanitizar datos de entrada.
"""
import re
from typing import Any, List, Type
import pandas as pd
import numpy as np

from src.utils.exceptions import DataValidationError


# ============================================================================
# Validadores de Tipos Basicos
# ============================================================================

def validate_not_empty(
    value: Any,
    field_name: str,
    error_class: Type[DataValidationError] = DataValidationError
) -> Any:
    """
    Valida que el valor no este vacio.

    Args:
        value: Valor a validar
        field_name: Nombre del campo
        error_class: Excepcion a lanzar (subclase de DataValidationError)

    Returns:
        El valor si es valido

    Raises:
        DataValidationError: Si el valor es None o vacio
    """
    if value is None:
        raise error_class(f"{field_name} no puede ser None", field=field_name, value=value)

    if isinstance(value, str) and not value.strip():
        raise error_class(f"{field_name} no puede estar vacio", field=field_name, value=value)

    return value


def validate_numeric(
    value: Any,
    field_name: str,
    min_value: float = None,
    allow_nan: bool = False,
    allow_inf: bool = False,
    error_class: Type[DataValidationError] = DataValidationError
) -> float:
    """
    Valida y convierte un valor a numerico.

    Args:
        value: Valor a validar
        field_name: Nombre del campo
        min_value: Valor minimo permitido (opcional)
        allow_nan: Permitir NaN (default: False)
        allow_inf: Permitir infinito (default: False)
        error_class: Excepcion a lanzar (subclase de DataValidationError)

    Returns:
        Valor como float

    Raises:
        DataValidationError: Si la validacion falla
    """
    if isinstance(value, bool):
        raise error_class(f"{field_name} debe ser numerico", field=field_name, value=value)

    try:
        num = float(value)
    except (TypeError, ValueError):
        raise error_class(
            f"{field_name} debe ser numerico",
            field=field_name,
            value=value
        )

    if not allow_nan and np.isnan(num):
        raise error_class(
            f"{field_name} no puede ser NaN",
            field=field_name,
            value=value
        )

    if not allow_inf and np.isinf(num):
        raise error_class(
            f"{field_name} no puede ser infinito",
            field=field_name,
            value=value
        )

    if min_value is not None and num < min_value:
        raise error_class(
            f"{field_name} debe ser >= {min_value}",
            field=field_name,
            value=value
        )

    return num


def validate_positive(
    value: Any,
    field_name: str,
    allow_zero: bool = True,
    error_class: Type[DataValidationError] = DataValidationError
) -> float:
    """
    Valida que el valor sea positivo.

    Args:
        value: Valor a validar
        field_name: Nombre del campo
        allow_zero: Permitir cero (default: True)
        error_class: Excepcion a lanzar

    Returns:
        Valor como float positivo
    """
    num = validate_numeric(value, field_name, error_class=error_class)
    if num < 0 or (num == 0 and not allow_zero):
        cota = ">= 0" if allow_zero else "> 0"
        raise error_class(f"{field_name} debe ser {cota}", field=field_name, value=value)
    return num


def validate_integer(
    value: Any,
    field_name: str,
    min_value: int = None,
    error_class: Type[DataValidationError] = DataValidationError
) -> int:
    """
    Valida y convierte un valor a entero.

    A diferencia de un int() directo, rechaza valores con parte decimal
    ("2.5" no se trunca a 2).

    Args:
        value: Valor a validar
        field_name: Nombre del campo
        min_value: Valor minimo permitido
        error_class: Excepcion a lanzar

    Returns:
        Valor como int
    """
    num = validate_numeric(value, field_name, error_class=error_class)
    if not num.is_integer():
        raise error_class(f"{field_name} debe ser entero", field=field_name, value=value)
    entero = int(num)
    if min_value is not None and entero < min_value:
        raise error_class(f"{field_name} debe ser >= {min_value}", field=field_name, value=value)
    return entero


# ============================================================================
# Validadores de Strings
# ============================================================================

def sanitize_string(
    value: Any,
    max_length: int = 255,
    strip: bool = True,
    remove_control_chars: bool = True
) -> str:
    """
    Sanitiza una cadena de texto.

    Args:
        value: Valor a sanitizar
        max_length: Longitud maxima permitida
        strip: Eliminar espacios al inicio/fin
        remove_control_chars: Eliminar caracteres de control

    Returns:
        String sanitizado
    """
    if value is None:
        return ""

    result = str(value)

    if strip:
        result = result.strip()

    if remove_control_chars:
        # Eliminar caracteres de control ASCII (0x00-0x1F y 0x7F-0x9F)
        result = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', result)

    if len(result) > max_length:
        result = result[:max_length]

    return result


def validate_material_code(code: Any) -> str:
    """
    Valida y sanitiza un codigo de material.

    Args:
        code: Codigo de material

    Returns:
        Codigo sanitizado

    Raises:
        DataValidationError: Si el codigo es invalido
    """
    code = sanitize_string(code, max_length=50)

    if not code:
        raise DataValidationError("Codigo de material vacio", field="material_id")

    # Solo alfanumericos, guiones y guiones bajos
    if not re.match(r'^[A-Za-z0-9\-_]+$', code):
        raise DataValidationError(
            "Codigo de material invalido. Solo se permiten letras, numeros, guiones y guiones bajos",
            field="material_id",
            value=code
        )

    return code


# ============================================================================
# Validadores de DataFrames
# ============================================================================

def validate_dataframe(
    df: pd.DataFrame,
    required_columns: List[str],
    min_rows: int = 0
) -> pd.DataFrame:
    """
    Valida estructura de un DataFrame.

    Args:
        df: DataFrame a validar
        required_columns: Columnas requeridas
        min_rows: Numero minimo de filas

    Returns:
        DataFrame validado

    Raises:
        DataValidationError: Si la validacion falla
    """
    if df is None:
        raise DataValidationError("DataFrame es None")

    if not isinstance(df, pd.DataFrame):
        raise DataValidationError(f"Se esperaba DataFrame, recibido {type(df)}")

    if len(df) < min_rows:
        raise DataValidationError(
            f"DataFrame debe tener al menos {min_rows} filas, tiene {len(df)}"
        )

    # Verificar columnas requeridas
    missing = set(required_columns) - set(df.columns)
    if missing:
        raise DataValidationError(f"Columnas faltantes: {sorted(missing)}")

    return df
