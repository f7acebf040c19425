"""
Rate limiter de ventana fija, en memoria del proceso.

Con varias instancias detrás de un balanceador cada proceso cuenta por
separado; el límite efectivo se multiplica por el número de instancias.
"""

import logging
import math
import threading
from collections.abc import Mapping
from dataclasses import dataclass

from booking_engine.application.interfaces.clock import Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitRule:
    max_requests: int
    window_seconds: int

    def __post_init__(self) -> None:
        if self.max_requests < 1 or self.window_seconds < 1:
            raise ValueError("max_requests y window_seconds deben ser positivos")


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    remaining: int = 0
    retry_after_seconds: int = 0


@dataclass
class _Window:
    count: int
    reset_at: float


DEFAULT_RULE = RateLimitRule(max_requests=10, window_seconds=60)


class RateLimiter:
    """
    Cuenta requests por (dirección del cliente, endpoint).

    El primer request abre una ventana de `window_seconds`; mientras dure se
    incrementa el contador y se rechaza cuando supera `max_requests`. Las
    ventanas vencidas se purgan con `sweep()`, que además corre solo cada
    `sweep_interval_seconds` dentro de `check()`.
    """

    def __init__(
        self,
        rules: Mapping[str, RateLimitRule],
        clock: Clock,
        default_rule: RateLimitRule = DEFAULT_RULE,
        sweep_interval_seconds: float = 60,
    ) -> None:
        self._rules = dict(rules)
        self._clock = clock
        self._default_rule = default_rule
        self._sweep_interval = sweep_interval_seconds
        self._windows: dict[tuple[str, str], _Window] = {}
        self._lock = threading.Lock()
        self._next_sweep_at = clock.timestamp() + sweep_interval_seconds

    def rule_for(self, rule_name: str) -> RateLimitRule:
        return self._rules.get(rule_name, self._default_rule)

    def check(
        self, client_address: str, endpoint: str, rule_name: str | None = None
    ) -> RateLimitDecision:
        """
        Registra un request y decide si se permite.

        Args:
            client_address: IP del cliente (o "unknown").
            endpoint: Ruta usada como parte de la llave.
            rule_name: Regla a aplicar; por defecto la del propio endpoint.
        """
        rule = self.rule_for(rule_name or endpoint)
        key = (client_address, endpoint)
        now = self._clock.timestamp()

        with self._lock:
            if now >= self._next_sweep_at:
                self._sweep_expired(now)
                self._next_sweep_at = now + self._sweep_interval

            window = self._windows.get(key)
            if window is None or now >= window.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + rule.window_seconds)
                return RateLimitDecision(allowed=True, remaining=rule.max_requests - 1)

            window.count += 1
            if window.count > rule.max_requests:
                retry_after = max(1, math.ceil(window.reset_at - now))
                return RateLimitDecision(allowed=False, retry_after_seconds=retry_after)

            return RateLimitDecision(allowed=True, remaining=rule.max_requests - window.count)

    def sweep(self) -> int:
        """Elimina ventanas vencidas. Retorna cuántas se eliminaron."""
        with self._lock:
            return self._sweep_expired(self._clock.timestamp())

    def _sweep_expired(self, now: float) -> int:
        expired = [key for key, window in self._windows.items() if now >= window.reset_at]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug("Rate limit windows swept", extra={"removed": len(expired)})
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
