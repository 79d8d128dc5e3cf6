"""Resource usage sampling for a single host process."""

import sys
import time
from collections import namedtuple

import psutil

from .errors import ProcessNotFound, ProcessSamplingError

# Largest PID accepted by the Docker API (signed 32-bit)
MAX_PID = 2**31 - 1

UsageSample = namedtuple(
    "UsageSample",
    [
        "pid",
        "cpu_percent",
        "rss_bytes",
        "vms_bytes",
        "memory_percent",
        "num_threads",
        "create_time_ms",
    ],
)


def bytes_to_mib(num_bytes):
    """Convert a byte count to mebibytes (1024-based)."""
    return num_bytes / 1024 / 1024


def format_uptime(milliseconds):
    """Format a duration as HH:MM:SS.

    Hours are not wrapped at 24, so a 26 hour old process shows ``26:03:07``.
    Fractions of a second are dropped and negative durations clamp to zero.

    Args:
        milliseconds: Duration in milliseconds

    Returns:
        str: Zero-padded ``HH:MM:SS`` string
    """
    total_seconds = max(int(milliseconds) // 1000, 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _now_ms():
    return int(time.time() * 1000)


def format_usage(sample, now_ms=None):
    """Render a usage sample as the fixed usage block.

    Args:
        sample: UsageSample to render
        now_ms: Current time in milliseconds since the epoch, used for uptime

    Returns:
        list: Output lines, starting with the ``Usage:`` header
    """
    if now_ms is None:
        now_ms = _now_ms()
    return [
        "Usage:",
        f"PID: {sample.pid}",
        f"CPU Usage: {sample.cpu_percent:.2f}%",
        f"Memory Usage: {bytes_to_mib(sample.rss_bytes):.2f} MiB",
        f"Virtual Memory Usage: {bytes_to_mib(sample.vms_bytes):.2f} MiB",
        f"Memory Percentage: {sample.memory_percent:.2f}%",
        f"Number of Threads: {sample.num_threads}",
        f"Process Uptime: {format_uptime(now_ms - sample.create_time_ms)}",
    ]


class ProcessUsageSampler:
    """Samples CPU, memory, thread and uptime counters with psutil.

    CPU usage is measured over ``cpu_interval`` seconds. psutil reports 0.0
    for the first non-blocking call on a process, so an interval of 0 yields
    0.0 for a freshly resolved process.
    """

    def __init__(self, cpu_interval=0.1, verbose=False):
        """Initialize the sampler.

        Args:
            cpu_interval: Seconds to block while measuring CPU usage
            verbose: Enable verbose logging
        """
        if cpu_interval < 0:
            raise ValueError("cpu_interval must not be negative")
        self.cpu_interval = cpu_interval
        self.verbose = verbose

    def _log(self, message):
        """Log a message if verbose mode is enabled."""
        if self.verbose:
            print(f"[INFO] {message}", file=sys.stderr)

    def sample(self, pid):
        """Take one usage sample of a process.

        Args:
            pid: Host process ID

        Returns:
            UsageSample for the process

        Raises:
            ProcessNotFound: No process with this PID exists
            ProcessSamplingError: The PID is invalid or a query failed
        """
        if isinstance(pid, bool) or not isinstance(pid, int) or not 0 < pid <= MAX_PID:
            raise ProcessSamplingError(f"invalid process ID: {pid!r}")

        try:
            process = psutil.Process(pid)
        except psutil.NoSuchProcess as e:
            raise ProcessNotFound(f"failed to create process: {e}") from e
        except psutil.Error as e:
            raise ProcessSamplingError(f"failed to create process: {e}") from e

        self._log(f"Sampling CPU usage of PID {pid} over {self.cpu_interval}s")
        cpu_percent = self._query(
            "CPU usage", process.cpu_percent, interval=self.cpu_interval
        )

        with process.oneshot():
            memory = self._query("memory usage", process.memory_info)
            memory_percent = self._query("memory percent", process.memory_percent)
            num_threads = self._query("number of threads", process.num_threads)
            create_time = self._query("process create time", process.create_time)

        return UsageSample(
            pid=pid,
            cpu_percent=cpu_percent,
            rss_bytes=memory.rss,
            vms_bytes=memory.vms,
            memory_percent=memory_percent,
            num_threads=num_threads,
            create_time_ms=int(create_time * 1000),
        )

    def _query(self, what, func, **kwargs):
        """Call a psutil accessor, translating its errors."""
        try:
            return func(**kwargs)
        except psutil.NoSuchProcess as e:
            raise ProcessNotFound(f"failed to get {what}: {e}") from e
        except psutil.Error as e:
            raise ProcessSamplingError(f"failed to get {what}: {e}") from e
