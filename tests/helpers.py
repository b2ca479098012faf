from __future__ import annotations

from netspeed.data.net_speed import InterfaceSample

NET_DEV = """\
Inter-|   Receive                                                |  Transmit
 face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed
    lo: 1234567    1000    0    0    0     0          0         0  1234567    1000    0    0    0     0       0          0
  eth0: 1000000    2000    0    0    0     0          0         0   500000    1500    0    0    0     0       0          0
 wlan0:  200000     300    0    0    0     0          0         0   100000     200    0    0    0     0       0          0
docker0:  999999      10    0    0    0     0          0         0   999999      10    0    0    0     0       0          0
"""


class FakeReader:
    """Replays canned snapshots; an exception instance in the list is raised instead."""

    def __init__(self, snapshots: list[list[InterfaceSample] | Exception]) -> None:
        self.snapshots = list(snapshots)
        self.calls = 0

    def __call__(self) -> list[InterfaceSample]:
        snapshot = self.snapshots[min(self.calls, len(self.snapshots) - 1)]
        self.calls += 1
        if isinstance(snapshot, Exception):
            raise snapshot
        return snapshot


def snapshot(rx: int, tx: int, name: str = "eth0") -> list[InterfaceSample]:
    return [
        InterfaceSample(name=name, rx_bytes=rx, tx_bytes=tx),
        InterfaceSample(name="lo", rx_bytes=rx * 7, tx_bytes=tx * 7),
    ]
