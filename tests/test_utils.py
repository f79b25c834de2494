"""
tests/test_utils.py

Pruebas de validadores, formateo, excepciones y logging.
"""
import sys

import pandas as pd
import pytest
from loguru import logger

from src.utils.exceptions import (
    DataValidationError,
    ForecastError,
    InsufficientHistoryError,
    InvalidConfigError,
    ValidationError,
)
from src.utils.formatters import formato_numero, formato_periodo, formato_porcentaje
from src.utils.logger import configurar_logging, log_execution_time
from src.utils.validators import (
    validate_integer,
    validate_material_code,
    validate_numeric,
    validate_positive,
)


class TestValidators:
    def test_numeric(self):
        assert validate_numeric("2.5", "x") == 2.5
        with pytest.raises(DataValidationError):
            validate_numeric(True, "x")
        with pytest.raises(DataValidationError):
            validate_numeric(float("inf"), "x")

    def test_positive(self):
        assert validate_positive(0, "x") == 0.0
        with pytest.raises(InvalidConfigError):
            validate_positive(0, "x", allow_zero=False, error_class=InvalidConfigError)

    def test_integer(self):
        assert validate_integer("4", "n") == 4
        assert validate_integer(4.0, "n") == 4
        with pytest.raises(DataValidationError):
            validate_integer("4.2", "n")

    def test_material_code(self):
        assert validate_material_code("  MAT-001 ") == "MAT-001"
        assert validate_material_code(7) == "7"
        with pytest.raises(DataValidationError):
            validate_material_code("MAT 001")


class TestExceptions:
    def test_jerarquia(self):
        assert issubclass(InvalidConfigError, ValidationError)
        assert issubclass(InsufficientHistoryError, ForecastError)

    def test_str_con_detalles(self):
        error = InsufficientHistoryError("Datos insuficientes", required=3, available=1)
        assert str(error) == "Datos insuficientes | Detalles: {'required': 3, 'available': 1}"
        assert str(ForecastError("simple")) == "simple"


class TestFormatters:
    def test_periodo(self):
        assert formato_periodo(pd.Period("2024-04", freq="M")) == "Apr 2024"
        assert formato_periodo(pd.Period("1999-12", freq="M")) == "Dec 1999"

    def test_numero(self):
        assert formato_numero(1234.5, 2) == "1.234,50"
        assert formato_numero(1234567) == "1.234.567"

    def test_porcentaje(self):
        assert formato_porcentaje(12.5) == "12,5%"


class TestLogging:
    @pytest.fixture(autouse=True)
    def restaurar_logger(self):
        yield
        logger.remove()
        logger.add(sys.stderr)

    def test_archivos_de_log(self, tmp_path):
        configurar_logging("WARNING", tmp_path, colorize=False)
        logger.error("fallo de prueba")
        logger.complete()

        assert "fallo de prueba" in (tmp_path / "forecast_wma.log").read_text(encoding="utf-8")
        assert "fallo de prueba" in (tmp_path / "forecast_wma_errors.log").read_text(encoding="utf-8")

    def test_nivel_desde_entorno(self, monkeypatch, capsys):
        monkeypatch.setenv("FORECAST_LOG_LEVEL", "error")
        monkeypatch.delenv("FORECAST_LOG_DIR", raising=False)
        configurar_logging(colorize=False)
        logger.info("oculto")
        logger.error("visible")

        salida = capsys.readouterr().out
        assert "visible" in salida
        assert "oculto" not in salida

    def test_log_execution_time(self):
        @log_execution_time
        def sumar(a, b):
            return a + b

        @log_execution_time
        def fallar():
            raise ValueError("boom")

        assert sumar(2, 3) == 5
        with pytest.raises(ValueError):
            fallar()
