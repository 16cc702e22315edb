"""
Errores del dominio.

- IntakeValidationError: datos del usuario inválidos (el matching no se intenta).
- StoreError: el store (albergues o formularios) no respondió.

Los registros de albergue malformados no son errores: el matcher los descarta.
"""


class IntakeValidationError(ValueError):
    """El formulario de intake no tiene los datos mínimos para matchear."""


class StoreError(RuntimeError):
    """Falla del store (Supabase caído, timeout, etc.)."""
