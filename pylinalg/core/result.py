"""
Result envelope returned by every backend.

A backend fills in its payload (EigenParams for the eigen solvers) and
reports how it got there: which method ran, whether it converged, how
many iterations it took, where the time went and what it warned about.
Solution classes wrap a Result and expose the payload in user terms.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen backend output.

    Attributes:
        params: Payload, e.g. EigenParams
        info: Method-specific metadata. Iterative backends set 'method',
            'converged' and 'iterations'; direct ones may set only 'method'.
        timing: Timer.result() of the run, or None when not measured
        backend_name: Backend.name of the producer ('cpu_qr', ...)
        warnings: Messages of the warnings raised during the run
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def method(self) -> str | None:
        return self.info.get('method')

    @property
    def converged(self) -> bool:
        """Direct methods have nothing to converge and count as converged."""
        return bool(self.info.get('converged', True))

    @property
    def iterations(self) -> int:
        return int(self.info.get('iterations', 0))

    def has_warning(self, substring: str) -> bool:
        return any(substring in message for message in self.warnings)
