"""
Configuracion de Logging para Forecast WMA
Centraliza los sinks de loguru (consola y archivos con rotacion).

Los modulos usan ``from loguru import logger`` directamente; importar la
libreria no instala sinks, la aplicacion que la embebe llama a
``configurar_logging`` una vez al arrancar.
"""
import functools
import os
import sys
import time
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from src.utils.constants import LOG_FORMAT, LOG_LEVEL_DEFAULT


def configurar_logging(
    nivel: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    colorize: bool = True
) -> None:
    """
    Configura los sinks de loguru.

    Args:
        nivel: Nivel de consola (default: FORECAST_LOG_LEVEL o INFO)
        log_dir: Directorio para archivos de log (default: FORECAST_LOG_DIR;
            sin valor no se escriben archivos)
        colorize: Colorear salida de consola

    Example:
        >>> from src.utils.logger import configurar_logging
        >>> configurar_logging("DEBUG", "logs")
    """
    nivel = (nivel or os.getenv("FORECAST_LOG_LEVEL", LOG_LEVEL_DEFAULT)).upper()
    log_dir = log_dir or os.getenv("FORECAST_LOG_DIR")

    logger.remove()
    logger.add(sys.stdout, format=LOG_FORMAT, level=nivel, colorize=colorize)

    if log_dir:
        directorio = Path(log_dir)
        directorio.mkdir(parents=True, exist_ok=True)

        # Archivo general (DEBUG y superiores)
        logger.add(
            directorio / "forecast_wma.log",
            format=LOG_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention=5,
            encoding="utf-8"
        )

        # Archivo separado para errores
        logger.add(
            directorio / "forecast_wma_errors.log",
            format=LOG_FORMAT,
            level="ERROR",
            rotation="5 MB",
            retention=3,
            encoding="utf-8"
        )


def log_execution_time(func):
    """
    Decorador para loggear tiempo de ejecucion de funciones.

    Example:
        >>> @log_execution_time
        ... def funcion_lenta():
        ...     time.sleep(1)
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = func(*args, **kwargs)
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__name__} ejecutado en {elapsed:.3f}s")
            return result
        except Exception as e:
            elapsed = time.perf_counter() - start
            logger.error(f"{func.__name__} fallo despues de {elapsed:.3f}s: {e}")
            raise

    return wrapper
