from dataclasses import dataclass, field


@dataclass
class InterfaceSample:
    name: str = ""
    rx_bytes: int = 0
    tx_bytes: int = 0


@dataclass
class AggregateCounters:
    rx_total: int = 0
    tx_total: int = 0
    interfaces: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RateSample:
    down: float = 0.0
    up: float = 0.0


@dataclass
class NetSpeed:
    success: bool = False
    error: str | None = None
    down: float = 0.0
    up: float = 0.0
    label: str = ""
    interfaces: list[str] = field(default_factory=list)
    updated: str | None = None
