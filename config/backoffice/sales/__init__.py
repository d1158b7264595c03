"""
Módulo de ventas y su historial de estados
"""
