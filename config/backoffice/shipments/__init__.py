"""
Módulo de correos y su historial de estados
"""
