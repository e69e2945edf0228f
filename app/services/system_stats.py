"""
Host and process introspection backed by psutil

Every collector returns None instead of raising when the underlying
statistic cannot be read; callers decide how to fill the gap.
"""
import logging
import os
from typing import NamedTuple, Optional

import psutil

logger = logging.getLogger(__name__)

# Sampling window for CPU utilisation, in seconds
CPU_SAMPLE_INTERVAL = 0.1


class ProcessMemory(NamedTuple):
    rss: int
    vms: int


class HostMemory(NamedTuple):
    total: int
    available: int
    used: int


def process_memory(pid: Optional[int] = None) -> Optional[ProcessMemory]:
    """Resident and virtual memory of a process (defaults to the current one)"""
    try:
        info = psutil.Process(pid or os.getpid()).memory_info()
    except (psutil.Error, OSError) as e:
        logger.debug(f"Process memory unavailable: {e}")
        return None
    return ProcessMemory(rss=info.rss, vms=info.vms)


def host_memory() -> Optional[HostMemory]:
    """Total, available and used virtual memory of the host"""
    try:
        vm = psutil.virtual_memory()
    except (psutil.Error, OSError) as e:
        logger.debug(f"Host memory unavailable: {e}")
        return None
    return HostMemory(total=vm.total, available=vm.available, used=vm.used)


def cpu_count() -> Optional[int]:
    """Logical CPU count"""
    try:
        return psutil.cpu_count(logical=True)
    except (psutil.Error, OSError) as e:
        logger.debug(f"CPU count unavailable: {e}")
        return None


def cpu_percent(interval: float = CPU_SAMPLE_INTERVAL) -> Optional[float]:
    """
    System-wide CPU utilisation sampled over ``interval`` seconds

    Blocks the calling thread for the whole sampling window.
    """
    try:
        return psutil.cpu_percent(interval=interval)
    except (psutil.Error, OSError) as e:
        logger.debug(f"CPU percent unavailable: {e}")
        return None


def memory_percent(rss: Optional[int], total: Optional[int]) -> float:
    """Share of host memory held by ``rss``; 0 when either side is unknown"""
    if not rss or not total:
        return 0.0
    return round(rss * 100 / total, 2)
