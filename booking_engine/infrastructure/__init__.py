"""
Capa de Infraestructura - Motor de Reservaciones.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: Tablas, engine, transacciones y repositorios SQL
- in_memory/: Implementaciones in-memory para testing y modo demo
- notifications/: Notificador basado en logging
- seed.py: Unidades de demostración
"""
