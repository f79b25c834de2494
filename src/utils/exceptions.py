"""
Excepciones Personalizadas para Forecast WMA
Define excepciones especificas para mejorar el manejo de errores.
"""


class ForecastError(Exception):
    """
    Excepcion base para el motor de forecast.
    Todas las excepciones personalizadas heredan de esta.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Detalles: {self.details}"
        return self.message


# ============================================================================
# Excepciones de Validacion
# ============================================================================

class ValidationError(ForecastError):
    """Excepcion base para errores de validacion"""
    pass


class DataValidationError(ValidationError):
    """Error al validar datos de entrada"""

    def __init__(self, message: str, field: str = None, value=None):
        details = {}
        if field:
            details['field'] = field
        if value is not None:
            details['value'] = str(value)[:100]  # Truncar
        super().__init__(message, details)


class InvalidConfigError(DataValidationError):
    """Peso o cantidad de periodos no validos"""
    pass


# ============================================================================
# Excepciones de Procesamiento
# ============================================================================

class ProcessingError(ForecastError):
    """Excepcion base para errores de procesamiento"""
    pass


class InsufficientHistoryError(ProcessingError):
    """La serie no alcanza para una ventana completa"""

    def __init__(self, message: str, required: int = None, available: int = None):
        details = {}
        if required is not None:
            details['required'] = required
        if available is not None:
            details['available'] = available
        super().__init__(message, details)


class UndefinedPercentageError(ProcessingError):
    """APE indefinido: valor real cero con error distinto de cero"""

    def __init__(self, message: str, period=None, actual=None, forecast=None):
        details = {}
        if period is not None:
            details['period'] = str(period)
        if actual is not None:
            details['actual'] = actual
        if forecast is not None:
            details['forecast'] = forecast
        self.period = period
        super().__init__(message, details)
