# app/presentation/__init__.py

"""
Слой presentation: входная точка системы.
Здесь доступны HTTP-роуты и сборка FastAPI-приложения.
"""

__all__ = [
    "http",
]
