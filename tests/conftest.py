"""Shared fixtures and fakes for docker-container-inspector tests."""

import copy

import pytest

from docker_container_inspector.process_usage import UsageSample

BASE_RECORD = {
    "Id": "4fa6e0f0c678",
    "Created": "2024-05-01T10:00:00.000000000Z",
    "Path": "nginx",
    "Args": ["-g", "daemon off;"],
    "State": {
        "Status": "running",
        "Running": True,
        "Paused": False,
        "Restarting": False,
        "OOMKilled": False,
        "Dead": False,
        "Pid": 4242,
        "ExitCode": 0,
        "Error": "",
        "StartedAt": "2024-05-01T10:00:01.000000000Z",
        "FinishedAt": "0001-01-01T00:00:00Z",
    },
    "Image": "sha256:a8758716bb6a",
    "ResolvConfPath": "/var/lib/docker/containers/4fa6e0f0c678/resolv.conf",
    "HostnamePath": "/var/lib/docker/containers/4fa6e0f0c678/hostname",
    "HostsPath": "/var/lib/docker/containers/4fa6e0f0c678/hosts",
    "LogPath": "/var/lib/docker/containers/4fa6e0f0c678/4fa6e0f0c678-json.log",
    "Name": "/web",
    "RestartCount": 2,
    "Driver": "overlay2",
    "Platform": "linux",
    "MountLabel": "",
    "ProcessLabel": "",
    "AppArmorProfile": "docker-default",
    "ExecIDs": None,
    "HostConfig": {"NetworkMode": "bridge", "Privileged": False},
    "GraphDriver": {"Name": "overlay2", "Data": {"MergedDir": "/merged"}},
}


def make_record(**overrides):
    """Return a copy of the base inspect record with top-level overrides.

    Passing a value of None removes the key entirely.
    """
    record = copy.deepcopy(BASE_RECORD)
    for key, value in overrides.items():
        if value is None:
            record.pop(key, None)
        else:
            record[key] = value
    return record


class FakeInspector:
    """Stand-in for DockerContainerInspector that records its use."""

    def __init__(self, record=None, raw=b"{}", error=None, connect_error=None):
        self.record = make_record() if record is None else record
        self.raw = raw
        self.error = error
        self.connect_error = connect_error
        self.calls = []
        self.opened = 0
        self.closed = 0
        self.verbose = None

    def __call__(self, verbose=False):
        self.verbose = verbose
        return self

    def __enter__(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.opened += 1
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.closed += 1
        return False

    def inspect(self, container_id, size=False):
        self.calls.append((container_id, size))
        if self.error is not None:
            raise self.error
        return self.record, self.raw


class FakeSampler:
    """Stand-in for ProcessUsageSampler."""

    def __init__(self, sample=None, error=None):
        self.result = sample
        self.error = error
        self.pids = []
        self.cpu_interval = None

    def __call__(self, cpu_interval=0.1, verbose=False):
        self.cpu_interval = cpu_interval
        return self

    def sample(self, pid):
        self.pids.append(pid)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def record():
    return make_record()


@pytest.fixture
def usage_sample():
    return UsageSample(
        pid=4242,
        cpu_percent=12.5,
        rss_bytes=50 * 1024 * 1024,
        vms_bytes=1048576000,
        memory_percent=1.234,
        num_threads=7,
        create_time_ms=1_700_000_000_000,
    )
