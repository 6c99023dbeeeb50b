from __future__ import annotations


class InvalidInput(ValueError):
    """
    Entrada inválida para el motor de indicadores:
      - serie de precios vacía
      - periodo < 1
      - series MACD/señal demasiado cortas o de distinta longitud
      - precio no finito
      - configuración inconsistente (fast >= slow, capacidad insuficiente, ...)
    Se propaga siempre al llamador; el motor nunca aborta el proceso.
    """
