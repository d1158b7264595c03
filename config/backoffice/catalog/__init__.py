"""
Módulo de catálogo: planes y promociones
"""
