"""Circuit breaker compartilhado para chamadas ao upstream.

Estados:
- CLOSED: chamadas admitidas, resultados contabilizados
- OPEN: todas as chamadas rejeitadas imediatamente
- HALF_OPEN: número limitado de chamadas de prova (probes)

Protocolo em duas fases:
    done = breaker.allow()          # levanta CircuitBreakerOpenError se rejeitar
    ...executa a chamada...
    done(response.status_code < 500)

Todo acesso a estado/contadores é serializado por um único lock, então a
mesma instância pode ser usada por várias tasks asyncio ou threads.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class BreakerState(Enum):
    """Estados do circuit breaker."""

    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpenError(Exception):
    """Chamada rejeitada pelo breaker (aberto ou sem orçamento de probes)."""

    def __init__(self, breaker_name: str, state: BreakerState) -> None:
        if state is BreakerState.HALF_OPEN:
            reason = "too many requests"
        else:
            reason = "circuit breaker is open"
        super().__init__(f"{breaker_name}: {reason}")
        self.breaker_name = breaker_name
        self.state = state


@dataclass(frozen=True, slots=True)
class CircuitBreakerConfig:
    """Configuração do breaker.

    Attributes:
        name: Nome usado em logs
        consecutive_failure_threshold: Falhas consecutivas que abrem o circuito
        half_open_max_requests: Probes admitidos por geração em HALF_OPEN
        open_timeout_seconds: Tempo em OPEN antes de aceitar probes
        closed_interval_seconds: Período de limpeza dos contadores em CLOSED (0 = nunca)
        failure_ratio_threshold: Razão falhas/requests que abre o circuito
        min_requests: Mínimo de requests na geração para poder abrir
    """

    name: str = "green-api"
    consecutive_failure_threshold: int = 5
    half_open_max_requests: int = 1
    open_timeout_seconds: float = 30.0
    closed_interval_seconds: float = 60.0
    failure_ratio_threshold: float = 0.6
    min_requests: int = 10


@dataclass(frozen=True, slots=True)
class BreakerCounts:
    """Snapshot imutável dos contadores de uma geração."""

    requests: int = 0
    total_successes: int = 0
    total_failures: int = 0
    consecutive_successes: int = 0
    consecutive_failures: int = 0

    def on_request(self) -> BreakerCounts:
        return replace(self, requests=self.requests + 1)

    def on_success(self) -> BreakerCounts:
        return replace(
            self,
            total_successes=self.total_successes + 1,
            consecutive_successes=self.consecutive_successes + 1,
            consecutive_failures=0,
        )

    def on_failure(self) -> BreakerCounts:
        return replace(
            self,
            total_failures=self.total_failures + 1,
            consecutive_failures=self.consecutive_failures + 1,
            consecutive_successes=0,
        )


class CompletionHandle:
    """Handle devolvido por `allow()`; deve ser chamado exatamente uma vez."""

    __slots__ = ("_breaker", "_generation", "_lock", "_used")

    def __init__(self, breaker: CircuitBreaker, generation: int) -> None:
        self._breaker = breaker
        self._generation = generation
        self._lock = threading.Lock()
        self._used = False

    def __call__(self, success: bool) -> None:
        with self._lock:
            if self._used:
                raise RuntimeError("completion handle already used")
            self._used = True
        self._breaker._after_request(self._generation, success)


class CircuitBreaker:
    """Máquina de estados CLOSED/OPEN/HALF_OPEN protegida por lock."""

    def __init__(
        self,
        config: CircuitBreakerConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_state_change: Callable[[str, BreakerState, BreakerState], None] | None = None,
    ) -> None:
        self._config = config or CircuitBreakerConfig()
        self._clock = clock
        self._on_state_change = on_state_change
        self._lock = threading.Lock()
        self._state = BreakerState.CLOSED
        self._generation = 0
        self._counts = BreakerCounts()
        self._expiry = 0.0
        self._pending: list[tuple[BreakerState, BreakerState]] = []
        self._new_generation(self._clock())

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def state(self) -> BreakerState:
        """Estado atual (aplica transições temporais pendentes)."""
        with self._lock:
            state, _ = self._current_state(self._clock())
            transitions = self._drain_transitions()
        self._notify(transitions)
        return state

    @property
    def counts(self) -> BreakerCounts:
        with self._lock:
            self._current_state(self._clock())
            transitions = self._drain_transitions()
            counts = self._counts
        self._notify(transitions)
        return counts

    def allow(self) -> CompletionHandle:
        """Admite a chamada ou levanta CircuitBreakerOpenError.

        Returns:
            Handle que recebe o resultado (True = sucesso).

        Raises:
            CircuitBreakerOpenError: Se OPEN, ou HALF_OPEN sem orçamento de probes.
        """
        with self._lock:
            state, generation = self._current_state(self._clock())
            transitions = self._drain_transitions()
            rejected = state is BreakerState.OPEN or (
                state is BreakerState.HALF_OPEN
                and self._counts.requests >= self._config.half_open_max_requests
            )
            if not rejected:
                self._counts = self._counts.on_request()
        self._notify(transitions)
        if rejected:
            raise CircuitBreakerOpenError(self._config.name, state)
        return CompletionHandle(self, generation)

    def _after_request(self, before_generation: int, success: bool) -> None:
        with self._lock:
            now = self._clock()
            state, generation = self._current_state(now)
            # Resultado de geração anterior não conta para a atual
            if generation == before_generation:
                if success:
                    self._on_success(state, now)
                else:
                    self._on_failure(state, now)
            transitions = self._drain_transitions()
        self._notify(transitions)

    def _on_success(self, state: BreakerState, now: float) -> None:
        self._counts = self._counts.on_success()
        if state is BreakerState.HALF_OPEN:
            self._set_state(BreakerState.CLOSED, now)

    def _on_failure(self, state: BreakerState, now: float) -> None:
        if state is BreakerState.CLOSED:
            self._counts = self._counts.on_failure()
            if self._ready_to_trip(self._counts):
                self._set_state(BreakerState.OPEN, now)
        elif state is BreakerState.HALF_OPEN:
            self._set_state(BreakerState.OPEN, now)

    def _ready_to_trip(self, counts: BreakerCounts) -> bool:
        cfg = self._config
        if counts.requests < cfg.min_requests or counts.requests == 0:
            return False
        if counts.consecutive_failures >= cfg.consecutive_failure_threshold:
            return True
        return counts.total_failures / counts.requests >= cfg.failure_ratio_threshold

    def _current_state(self, now: float) -> tuple[BreakerState, int]:
        if self._state is BreakerState.CLOSED:
            if self._expiry and self._expiry <= now:
                self._new_generation(now)
        elif self._state is BreakerState.OPEN and self._expiry <= now:
            self._set_state(BreakerState.HALF_OPEN, now)
        return self._state, self._generation

    def _set_state(self, state: BreakerState, now: float) -> None:
        if self._state is state:
            return
        previous = self._state
        self._state = state
        self._new_generation(now)
        self._pending.append((previous, state))

    def _new_generation(self, now: float) -> None:
        self._generation += 1
        self._counts = BreakerCounts()
        if self._state is BreakerState.CLOSED:
            interval = self._config.closed_interval_seconds
            self._expiry = now + interval if interval > 0 else 0.0
        elif self._state is BreakerState.OPEN:
            self._expiry = now + self._config.open_timeout_seconds
        else:
            self._expiry = 0.0

    def _drain_transitions(self) -> list[tuple[BreakerState, BreakerState]]:
        transitions = list(self._pending)
        self._pending.clear()
        return transitions

    def _notify(self, transitions: list[tuple[BreakerState, BreakerState]]) -> None:
        # Executado fora do lock: callbacks não podem bloquear outras chamadas
        for previous, current in transitions:
            logger.warning(
                "circuit_breaker_state_changed",
                extra={
                    "breaker": self._config.name,
                    "from_state": previous.value,
                    "to_state": current.value,
                },
            )
            if self._on_state_change is not None:
                self._on_state_change(self._config.name, previous, current)
