"""
Integration tests package.

Tests de integración que verifican el funcionamiento correcto de:
- Pipeline completo de creación (in-memory), con concurrencia y colisiones de número
- Lookup, cancelación con reembolso y cambios de estado de staff
- Repositorios SQL sobre SQLite (aiosqlite) y la restricción de noches
- Deadlock retry y traducción de errores del driver
- Health checks

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
