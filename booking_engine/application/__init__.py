"""
Capa de Aplicación - Motor de Reservaciones.

Esta capa contiene los casos de uso, servicios del pipeline, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso (crear, consultar, cancelar, avanzar estado)
- services/: Componentes del pipeline (precio, disponibilidad, integridad, ...)
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
- result.py: Resultados explícitos Ok/Err
"""
