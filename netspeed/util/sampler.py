import logging
import threading
from typing import Callable, Iterable

from netspeed.constants import EXCLUDED_PREFIXES, REFRESH_INTERVAL
from netspeed.data.net_speed import (
    AggregateCounters,
    InterfaceSample,
    NetSpeed,
    RateSample,
)
from netspeed.util import conversion, netdev, wtime
from netspeed.util.netdev import Reader

logger = logging.getLogger(__name__)


def is_virtual(name: str, prefixes: Iterable[str] = EXCLUDED_PREFIXES) -> bool:
    return name.startswith(tuple(prefixes))


def aggregate(
    samples: Iterable[InterfaceSample], prefixes: Iterable[str] = EXCLUDED_PREFIXES
) -> AggregateCounters:
    """
    Sum the byte counters of every interface that is not virtual.
    """
    prefixes = tuple(prefixes)
    counters = AggregateCounters()
    for sample in samples:
        if is_virtual(sample.name, prefixes):
            continue
        counters.rx_total += sample.rx_bytes
        counters.tx_total += sample.tx_bytes
        counters.interfaces.append(sample.name)

    return counters


def read_aggregate(
    reader: Reader, prefixes: Iterable[str] = EXCLUDED_PREFIXES
) -> AggregateCounters | None:
    """
    Read the counters and aggregate them, or return None if they can't be read.
    """
    try:
        samples = reader()
    except (OSError, ValueError) as e:
        logger.error(f"[read_aggregate] - failed to read interface counters: {e}")
        return None

    return aggregate(samples, prefixes)


def compute_rate(
    previous: AggregateCounters, current: AggregateCounters, interval: float
) -> RateSample:
    """
    Turn two aggregates taken `interval` seconds apart into bytes/second.

    A zero field in `previous` means there is no baseline yet; the current
    value is adopted so the first tick reports 0 instead of the whole counter.
    Counters that went backwards (interface reset) are not special-cased and
    give one negative sample.
    """
    previous_rx = previous.rx_total or current.rx_total
    previous_tx = previous.tx_total or current.tx_total

    return RateSample(
        down=(current.rx_total - previous_rx) / interval,
        up=(current.tx_total - previous_tx) / interval,
    )


def sample(
    previous: AggregateCounters,
    interval: float = REFRESH_INTERVAL,
    reader: Reader = netdev.read_counters,
    prefixes: Iterable[str] = EXCLUDED_PREFIXES,
) -> tuple[RateSample, AggregateCounters]:
    """
    Run one sampling step and return the rate plus the aggregate to pass as
    `previous` next time. When the counters can't be read the rate is zero
    and `previous` is returned unchanged.
    """
    current = read_aggregate(reader, prefixes)
    if current is None:
        return RateSample(), previous

    return compute_rate(previous, current, interval), current


class Sampler:
    """
    Owns the previous aggregate and the periodic timer that feeds it.

    Each instance has its own state; tick() may be called from any thread.
    """

    def __init__(
        self,
        reader: Reader | None = None,
        interval: float = REFRESH_INTERVAL,
        excluded_prefixes: Iterable[str] = EXCLUDED_PREFIXES,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.reader: Reader = reader or netdev.read_counters
        self.interval = interval
        self.excluded_prefixes = tuple(excluded_prefixes)

        self._lock = threading.Lock()
        self._previous = AggregateCounters()
        self._callback: Callable[[NetSpeed], None] | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def reset(self):
        with self._lock:
            self._previous = AggregateCounters()

    def tick(self) -> NetSpeed:
        with self._lock:
            current = read_aggregate(self.reader, self.excluded_prefixes)
            if current is None:
                return NetSpeed(
                    success=False,
                    error="failed to read interface counters",
                    label=conversion.speed_label(RateSample()),
                    updated=wtime.get_human_timestamp(),
                )

            rate = compute_rate(self._previous, current, self.interval)
            self._previous = current

        logger.debug(
            f"[tick] - rx={current.rx_total} tx={current.tx_total} down={rate.down} up={rate.up}"
        )
        return NetSpeed(
            success=True,
            down=rate.down,
            up=rate.up,
            label=conversion.speed_label(rate),
            interfaces=current.interfaces,
            updated=wtime.get_human_timestamp(),
        )

    def start(self, callback: Callable[[NetSpeed], None]):
        """
        Reset the baseline and tick now and then every `interval` seconds,
        handing each result to `callback`, until stop() is called.
        """
        if self.running:
            raise RuntimeError("sampler is already running")

        self.reset()
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), daemon=True
        )
        logger.info(f"[start] - sampling every {self.interval}s")
        self._thread.start()

    def stop(self):
        thread = self._thread
        if thread is None:
            return

        self._stop_event.set()
        if thread is not threading.current_thread():
            thread.join()
        self._thread = None
        logger.info("[stop] - sampler stopped")

    def restart(self):
        callback = self._callback
        if callback is None:
            raise RuntimeError("sampler was never started")

        self.stop()
        self.start(callback=callback)

    def _run(self, stop_event: threading.Event):
        while not stop_event.is_set():
            speed = self.tick()
            if stop_event.is_set():
                break
            if self._callback is not None:
                try:
                    self._callback(speed)
                except Exception:
                    logger.exception("[_run] - callback failed")
            if stop_event.wait(self.interval):
                break
