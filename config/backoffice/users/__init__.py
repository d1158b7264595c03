"""
Módulo de usuarios y roles
"""
