"""Modelos y entidades del dominio.

Aquí viven las estructuras de datos puras: operaciones y modelos Pydantic.
El dominio no conoce HTTP, CLI ni el sistema de archivos.
"""
