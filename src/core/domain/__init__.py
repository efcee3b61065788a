"""Modelos y entidades del dominio.

Por qué:
- Aquí viven la config inmutable del cliente, el vocabulario de la API y la
  tabla de operaciones GeoNames.
- El dominio no conoce HTTP ni CLI: solo qué parámetros viajan y qué campo se
  extrae de cada respuesta.
"""
