"""
Constantes centralizadas del proyecto Forecast WMA
==================================================
Evita duplicacion de valores en multiples archivos.
"""

# ============================================================================
# Parametros del promedio movil ponderado
# ============================================================================

# Valores iniciales del formulario de prediccion
PESO_DEFAULT = 3
PERIODOS_DEFAULT = 3


# ============================================================================
# Metricas de precision
# ============================================================================

METRICAS_PRECISION = {
    'mad': {
        'nombre': 'MAD (Mean Absolute Deviation)',
        'sufijo': ''
    },
    'mse': {
        'nombre': 'MSE (Mean Squared Error)',
        'sufijo': ''
    },
    'mape': {
        'nombre': 'MAPE (Mean Absolute Percentage Error)',
        'sufijo': '%'
    },
}


def obtener_nombre_metrica(codigo: str) -> str:
    """Obtiene el nombre legible de una metrica por su codigo"""
    metrica = METRICAS_PRECISION.get(codigo)
    return metrica['nombre'] if metrica else codigo


# ============================================================================
# Configuracion de datos
# ============================================================================

# Columnas de la tabla de backtesting
COLUMNAS_BACKTEST = [
    'periodo', 'actual', 'forecast', 'error', 'abs_error', 'squared_error', 'ape'
]

# Columnas esperadas en los registros de stock y en el catalogo de materiales
COLUMNAS_STOCK = ['material_id', 'periodo', 'cantidad']
COLUMNAS_MATERIALES = ['id', 'nombre', 'unidad']

# Abreviaturas de mes para etiquetas "MMM yyyy" (independientes del locale)
MESES_ABREV = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'
)


# ============================================================================
# Logging
# ============================================================================

LOG_LEVEL_DEFAULT = "INFO"
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
