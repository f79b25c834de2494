"""
Servicio de Prediccion de Stock para Forecast WMA

Orquesta el flujo completo de prediccion para un material:
1. Validación de parametros
2. Armado de la serie mensual del material
3. Backtesting y metricas de precision
4. Proyeccion del mes siguiente

Separa la lógica de negocio de la capa de presentación.

Author: Manuel Remón
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import time
import pandas as pd
from loguru import logger

from src.data.series import TimeSeries, serie_desde_stock
from src.ml.wma import (
    ForecastConfig,
    ForecastPoint,
    ForecastSummary,
    NextPeriodForecast,
    forecast,
)
from src.utils.constants import (
    COLUMNAS_BACKTEST,
    COLUMNAS_MATERIALES,
    PERIODOS_DEFAULT,
    PESO_DEFAULT,
)
from src.utils.exceptions import ForecastError
from src.utils.validators import validate_dataframe, validate_material_code


@dataclass
class ForecastResult:
    """Resultado completo de una prediccion"""
    exito: bool
    material_id: str
    config: Optional[ForecastConfig]
    tiempo_ejecucion: float
    puntos: List[ForecastPoint] = field(default_factory=list)
    resumen: Optional[ForecastSummary] = None
    proximo: Optional[NextPeriodForecast] = None
    material_nombre: str = "Unknown"
    unidad: str = ""
    mensaje: str = ""
    warnings: List[str] = field(default_factory=list)

    @property
    def tiene_metricas(self) -> bool:
        """Hay al menos un punto de backtest"""
        return self.resumen is not None and self.resumen.es_significativo

    def to_dataframe(self) -> pd.DataFrame:
        """Tabla de backtest para vistas y reportes"""
        return pd.DataFrame([p.to_dict() for p in self.puntos], columns=COLUMNAS_BACKTEST)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'exito': self.exito,
            'mensaje': self.mensaje,
            'warnings': self.warnings,
            'material_id': self.material_id,
            'material_nombre': self.material_nombre,
            'unidad': self.unidad,
            'config': self.config.to_dict() if self.config else None,
            'puntos': [p.to_dict() for p in self.puntos],
            'resumen': self.resumen.to_dict() if self.resumen else None,
            'proximo': self.proximo.to_dict() if self.proximo else None,
            'tiempo_ejecucion': round(self.tiempo_ejecucion, 4)
        }


class ForecastService:
    """
    Servicio principal para predecir el stock de un material.

    Ejemplo de uso:
        service = ForecastService(catalogo=df_materiales)

        result = service.ejecutar_desde_formulario(df_stock, "1", peso="3", periodos="3")

        if result.exito:
            print(result.resumen.describir())
            print(f"{result.proximo.period_label}: {result.proximo.value} {result.unidad}")
        else:
            print(f"Error: {result.mensaje}")
    """

    def __init__(self, catalogo: Optional[pd.DataFrame] = None):
        """
        Inicializa el servicio.

        Args:
            catalogo: DataFrame de materiales con columnas id, nombre, unidad
        """
        if catalogo is not None:
            validate_dataframe(catalogo, COLUMNAS_MATERIALES)
        self.catalogo = catalogo

    def ejecutar_desde_formulario(
        self,
        df_stock: pd.DataFrame,
        material_id: Any,
        peso: Any,
        periodos: Any
    ) -> ForecastResult:
        """
        Ejecuta la prediccion con los valores crudos del formulario.

        Args:
            df_stock: Registros de stock (material_id, periodo, cantidad)
            material_id: Material seleccionado
            peso: Valor de peso ingresado
            periodos: Cantidad de periodos a analizar

        Returns:
            ForecastResult
        """
        inicio = time.time()
        try:
            config = ForecastConfig.desde_formulario(peso, periodos)
        except ForecastError as e:
            logger.warning(f"Parametros invalidos: {e}")
            return ForecastResult(
                exito=False,
                material_id=str(material_id or ""),
                config=None,
                tiempo_ejecucion=time.time() - inicio,
                mensaje="Seleccione un material e ingrese valores de peso y periodos mayores a 0"
            )

        return self.ejecutar_forecast(df_stock, material_id, config)

    def ejecutar_forecast(
        self,
        df_stock: pd.DataFrame,
        material_id: Any,
        config: ForecastConfig
    ) -> ForecastResult:
        """
        Ejecuta backtest, metricas y proyeccion para un material.

        Args:
            df_stock: Registros de stock de todos los materiales
            material_id: Material a predecir
            config: Peso y cantidad de periodos

        Returns:
            ForecastResult con resultados completos
        """
        inicio = time.time()
        warnings_list = []
        material = str(material_id or "")

        logger.info(f"Iniciando prediccion WMA para material {material or '-'}")

        try:
            material = validate_material_code(material_id)
            serie = serie_desde_stock(df_stock, material)
            puntos, resumen, proximo = forecast(serie, config)
        except ForecastError as e:
            logger.warning(f"Prediccion no realizada para {material or '-'}: {e}")
            return ForecastResult(
                exito=False,
                material_id=material,
                config=config,
                tiempo_ejecucion=time.time() - inicio,
                mensaje=e.message,
                **self._datos_material(material)
            )

        if not resumen.es_significativo:
            warnings_list.append(
                f"Solo {len(serie)} periodos: no hay periodos para evaluar la precision"
            )

        excluidos = [p.period_label for p in puntos if p.ape_indefinido]
        if excluidos:
            warnings_list.append(f"Periodos excluidos del MAPE (stock real cero): {', '.join(excluidos)}")

        tiempo_total = time.time() - inicio
        logger.info(f"Prediccion completada en {tiempo_total:.3f}s: {proximo.period_label}={proximo.value}")

        return ForecastResult(
            exito=True,
            material_id=material,
            config=config,
            tiempo_ejecucion=tiempo_total,
            puntos=puntos,
            resumen=resumen,
            proximo=proximo,
            mensaje="Prediccion calculada exitosamente",
            warnings=warnings_list,
            **self._datos_material(material)
        )

    def _datos_material(self, material_id: str) -> Dict[str, str]:
        """Nombre y unidad del material segun el catalogo"""
        if self.catalogo is None or not material_id:
            return {}

        fila = self.catalogo[self.catalogo['id'].astype(str) == material_id]
        if fila.empty:
            return {}

        return {
            'material_nombre': str(fila.iloc[0]['nombre']),
            'unidad': str(fila.iloc[0]['unidad'])
        }


# Función de conveniencia
def predecir_serie(
    serie: TimeSeries,
    peso: float = PESO_DEFAULT,
    periodos: int = PERIODOS_DEFAULT
):
    """
    Ejecuta el WMA sobre una serie ya armada.

    Args:
        serie: Serie mensual del material
        peso: Valor de peso
        periodos: Cantidad de periodos de la ventana

    Returns:
        ForecastOutput (puntos, resumen, proximo)
    """
    return forecast(serie, ForecastConfig(weight=peso, period_count=periodos))
