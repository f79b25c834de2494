"""
Fixtures compartidas: series y registros de stock literales.
"""
import pandas as pd
import pytest

from src.data.series import TimeSeries


def _serie_mensual(cantidades, inicio="2024-01"):
    periodos = pd.period_range(start=inicio, periods=len(cantidades), freq="M")
    return TimeSeries.from_records(zip(periodos, cantidades))


@pytest.fixture()
def serie_mensual():
    """Fabrica de series con meses consecutivos desde ``inicio``"""
    return _serie_mensual


@pytest.fixture()
def serie_basica() -> TimeSeries:
    """[100, 110, 105, 120] de enero a abril 2024"""
    return _serie_mensual([100, 110, 105, 120])


@pytest.fixture()
def serie_larga() -> TimeSeries:
    return _serie_mensual([200, 187, 213, 195, 204, 178, 221, 199, 190, 216])


@pytest.fixture()
def df_stock() -> pd.DataFrame:
    """Registros de stock de dos materiales, desordenados"""
    return pd.DataFrame([
        {"material_id": "1", "periodo": "2024-03-01", "cantidad": 105},
        {"material_id": "2", "periodo": "2024-01-01", "cantidad": 50},
        {"material_id": "1", "periodo": "2024-01-01", "cantidad": 100},
        {"material_id": "1", "periodo": "2024-04-01", "cantidad": 120},
        {"material_id": "2", "periodo": "2024-02-01", "cantidad": 55},
        {"material_id": "1", "periodo": "2024-02-01", "cantidad": 110},
    ])


@pytest.fixture()
def df_materiales() -> pd.DataFrame:
    return pd.DataFrame([
        {"id": "1", "nombre": "Terigu", "unidad": "kg"},
        {"id": "2", "nombre": "Gula", "unidad": "kg"},
    ])
