"""
Utilitários do core.

Localização: core/utils/
"""
