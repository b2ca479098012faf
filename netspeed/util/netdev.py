import logging
import re
from typing import Callable

import psutil
from dacite import Config, from_dict
from netspeed.constants import COUNTER_FILE, RX_BYTES_COLUMN, TX_BYTES_COLUMN
from netspeed.data.net_speed import InterfaceSample

logger = logging.getLogger(__name__)

Reader = Callable[[], list[InterfaceSample]]

COUNTER_PATTERN = re.compile(r"[0-9]+")


class CounterParseError(ValueError):
    pass


def parse_line(line: str) -> InterfaceSample | None:
    """
    Parse a single /proc/net/dev line.

    Returns None for lines that cannot be an interface line (two tokens or
    fewer) and raises CounterParseError when the byte columns are missing or
    are not non-negative integers.
    """
    fields = re.split(r"\W+", line.strip())
    if len(fields) <= 2:
        return None

    if len(fields) <= TX_BYTES_COLUMN:
        raise CounterParseError(f"too few columns for {fields[0]!r}")

    rx_bytes = fields[RX_BYTES_COLUMN]
    tx_bytes = fields[TX_BYTES_COLUMN]
    for value in (rx_bytes, tx_bytes):
        if not COUNTER_PATTERN.fullmatch(value):
            raise CounterParseError(f"bad counter {value!r} for {fields[0]!r}")

    return from_dict(
        data_class=InterfaceSample,
        data={"name": fields[0], "rx_bytes": rx_bytes, "tx_bytes": tx_bytes},
        config=Config(cast=[int]),
    )


def parse_counters(content: str) -> list[InterfaceSample]:
    samples: list[InterfaceSample] = []
    for line in content.splitlines():
        try:
            sample = parse_line(line)
        except CounterParseError as e:
            logger.debug(f"[parse_counters] - skipping line: {e}")
            continue

        if sample is not None:
            samples.append(sample)

    return samples


def read_counters(path: str = COUNTER_FILE) -> list[InterfaceSample]:
    """
    Read the whole counter table and return one sample per interface line.
    Raises OSError if the file cannot be read.
    """
    # Interface names are arbitrary bytes; undecodable ones fail to parse
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        contents = fh.read()

    return parse_counters(contents)


def read_psutil_counters() -> list[InterfaceSample]:
    """
    Same as read_counters() but sourced from psutil, for hosts where the
    counter table is not readable directly.
    """
    samples: list[InterfaceSample] = []
    counters = psutil.net_io_counters(pernic=True)
    for name, counter in counters.items():
        samples.append(
            InterfaceSample(
                name=name,
                rx_bytes=counter.bytes_recv,
                tx_bytes=counter.bytes_sent,
            )
        )

    return samples
