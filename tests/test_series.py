"""
tests/test_series.py

Pruebas de construccion de series mensuales.
"""
from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from src.data.series import (
    TimeSeries,
    TimeSeriesPoint,
    serie_desde_dataframe,
    serie_desde_stock,
)
from src.utils.exceptions import DataValidationError


class TestTimeSeriesPoint:
    @pytest.mark.parametrize("periodo", [
        "2024-03",
        "2024-03-17",
        date(2024, 3, 1),
        datetime(2024, 3, 31, 23, 59),
        pd.Timestamp("2024-03-05"),
        pd.Period("2024-03-12", freq="D"),
    ])
    def test_normaliza_a_mes(self, periodo):
        punto = TimeSeriesPoint(periodo, 10)
        assert punto.period == pd.Period("2024-03", freq="M")
        assert punto.label == "Mar 2024"

    def test_cantidad_entera(self):
        assert TimeSeriesPoint("2024-01", 12.0).quantity == 12
        assert isinstance(TimeSeriesPoint("2024-01", 12.0).quantity, int)
        assert TimeSeriesPoint("2024-01", 12.5).quantity == 12.5

    @pytest.mark.parametrize("cantidad", [-1, float("nan"), "mucho", None])
    def test_cantidad_invalida(self, cantidad):
        with pytest.raises(DataValidationError):
            TimeSeriesPoint("2024-01", cantidad)

    def test_periodo_invalido(self):
        with pytest.raises(DataValidationError):
            TimeSeriesPoint("no es fecha", 1)

    @pytest.mark.parametrize("cantidad", [2**53 + 1, np.int64(2**53 + 1)])
    def test_entero_grande_exacto(self, cantidad):
        punto = TimeSeriesPoint("2024-01", cantidad)

        assert punto.quantity == 9007199254740993
        assert type(punto.quantity) is int

    def test_fecha_con_zona_horaria_usa_hora_local(self):
        punto = TimeSeriesPoint("2024-01-31T23:30-05:00", 1)
        assert punto.period == pd.Period("2024-01", freq="M")


class TestTimeSeries:
    def test_from_records(self):
        serie = TimeSeries.from_records([("2024-01", 1), ("2024-02", 2), ("2024-04", 4)])

        assert len(serie) == 3
        assert serie.quantities == [1, 2, 4]
        assert serie.last_period == pd.Period("2024-04", freq="M")
        assert serie[0].label == "Jan 2024"

    def test_desordenada(self):
        with pytest.raises(DataValidationError):
            TimeSeries.from_records([("2024-02", 1), ("2024-01", 2)])

    def test_mes_duplicado(self):
        with pytest.raises(DataValidationError):
            TimeSeries.from_records([("2024-01-05", 1), ("2024-01-20", 2)])

    def test_vacia(self):
        serie = TimeSeries([])
        assert len(serie) == 0
        assert serie.last_period is None


class TestSerieDesdeStock:
    def test_filtra_y_ordena(self, df_stock):
        serie = serie_desde_stock(df_stock, "1")

        assert serie.quantities == [100, 110, 105, 120]
        assert [str(p) for p in serie.periods] == ["2024-01", "2024-02", "2024-03", "2024-04"]

    def test_id_numerico(self, df_stock):
        df_stock["material_id"] = df_stock["material_id"].astype(int)
        assert serie_desde_stock(df_stock, "2").quantities == [50, 55]

    def test_material_sin_registros(self, df_stock):
        assert len(serie_desde_stock(df_stock, "99")) == 0

    def test_no_modifica_el_dataframe(self, df_stock):
        copia = df_stock.copy()
        serie_desde_stock(df_stock, "1")
        pd.testing.assert_frame_equal(df_stock, copia)

    def test_columnas_faltantes(self, df_stock):
        with pytest.raises(DataValidationError):
            serie_desde_stock(df_stock.drop(columns=["cantidad"]), "1")


class TestSerieDesdeDataFrame:
    def test_suma_registros_del_mismo_mes(self):
        df = pd.DataFrame({
            "fecha": ["2024-01-03", "2024-01-28", "2024-02-10"],
            "cantidad": [40, 60, 90],
        })
        serie = serie_desde_dataframe(df, "fecha", "cantidad")

        assert serie.quantities == [100, 90]

    def test_descarta_registros_invalidos(self):
        df = pd.DataFrame({
            "periodo": ["2024-01-01", "invalida", "2024-02-01", "2024-03-01"],
            "cantidad": [10, 20, "x", 30],
        })
        serie = serie_desde_dataframe(df)

        assert serie.quantities == [10, 30]
        assert [str(p) for p in serie.periods] == ["2024-01", "2024-03"]

    def test_dataframe_none(self):
        with pytest.raises(DataValidationError):
            serie_desde_dataframe(None)

    def test_columna_de_periodos(self):
        df = pd.DataFrame({
            "periodo": pd.period_range("2024-01", periods=3, freq="M"),
            "cantidad": [10, 20, 30],
        })
        serie = serie_desde_dataframe(df)

        assert serie.quantities == [10, 20, 30]
        assert serie.last_period == pd.Period("2024-03", freq="M")

    def test_columna_de_periodos_como_objetos(self):
        df = pd.DataFrame({
            "periodo": pd.Series(
                [pd.Period("2024-02", freq="M"), pd.Period("2024-01-15", freq="D")],
                dtype=object
            ),
            "cantidad": [5, 7],
        })
        serie = serie_desde_dataframe(df)

        assert [str(p) for p in serie.periods] == ["2024-01", "2024-02"]
        assert serie.quantities == [7, 5]

    def test_zonas_horarias_mezcladas(self):
        df = pd.DataFrame({
            "periodo": ["2024-01-15T10:00+02:00", "2024-02-15T10:00-05:00", "2024-01-31T23:30-05:00"],
            "cantidad": [10, 20, 5],
        })
        serie = serie_desde_dataframe(df)

        assert [str(p) for p in serie.periods] == ["2024-01", "2024-02"]
        assert serie.quantities == [15, 20]

    def test_columna_datetime_con_zona_horaria(self):
        df = pd.DataFrame({
            "periodo": pd.date_range("2024-01-31 22:00", periods=2, freq="D", tz="America/Argentina/Buenos_Aires"),
            "cantidad": [3, 4],
        })
        serie = serie_desde_dataframe(df)

        assert [str(p) for p in serie.periods] == ["2024-01", "2024-02"]
