"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los colaboradores externos.
- Permite sustituir el transporte HTTP en tests sin tocar el cliente.
"""
