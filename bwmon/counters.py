"""System counter providers — cumulative rx/tx bytes per interface.

A provider is any zero-argument callable returning list[InterfaceSnapshot].
An empty list is a valid answer; read failures raise SamplingTickError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import psutil

from bwmon.errors import SamplingTickError

log = logging.getLogger(__name__)

PROC_NET_DEV = "/proc/net/dev"


@dataclass(frozen=True)
class InterfaceSnapshot:
    name: str
    rx_bytes: int
    tx_bytes: int

    @property
    def total_bytes(self) -> int:
        return self.rx_bytes + self.tx_bytes


Provider = Callable[[], list[InterfaceSnapshot]]


def read_psutil() -> list[InterfaceSnapshot]:
    """Per-NIC counters via psutil, in the order psutil enumerates them."""
    try:
        counters = psutil.net_io_counters(pernic=True)
    except OSError as e:
        raise SamplingTickError(f"Failed to read interface counters: {e}") from e
    return [
        InterfaceSnapshot(name=name, rx_bytes=c.bytes_recv, tx_bytes=c.bytes_sent)
        for name, c in counters.items()
    ]


def read_proc_net_dev(path: str = PROC_NET_DEV) -> list[InterfaceSnapshot]:
    """Parse /proc/net/dev → one snapshot per interface, file order."""
    snapshots = []
    try:
        with open(path) as f:
            for line in f:
                if ":" not in line:
                    continue
                iface, data = line.split(":", 1)
                parts = data.split()
                if len(parts) < 9:
                    log.debug("skipping short /proc/net/dev line for %s", iface.strip())
                    continue
                snapshots.append(InterfaceSnapshot(
                    name=iface.strip(),
                    rx_bytes=int(parts[0]),   # receive bytes
                    tx_bytes=int(parts[8]),   # transmit bytes
                ))
    except (OSError, ValueError) as e:
        raise SamplingTickError(f"Failed to read {path}: {e}") from e
    return snapshots


PROVIDERS: dict[str, Provider] = {
    "psutil": read_psutil,
    "proc": read_proc_net_dev,
}


def get_provider(name: str) -> Provider:
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ValueError(f"Unknown counter source: {name}") from None


def find(snapshots: list[InterfaceSnapshot], name: str) -> InterfaceSnapshot | None:
    for snap in snapshots:
        if snap.name == name:
            return snap
    return None
