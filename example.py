#!/usr/bin/env python3
"""Example usage of docker-container-inspector."""

import sys

from docker_container_inspector.formatter import format_container_details
from docker_container_inspector.inspector import DockerContainerInspector, container_pid
from docker_container_inspector.process_usage import ProcessUsageSampler, format_usage


def main():
    """Example: Inspect a running container programmatically."""

    container_id = sys.argv[1] if len(sys.argv) > 1 else "web"
    print(f"Inspecting container: {container_id}")

    # The connection is closed when the block exits
    with DockerContainerInspector(verbose=True) as inspector:
        record, raw = inspector.inspect(container_id, size=True)

    print("\n" + "=" * 60)
    for line in format_container_details(record, full_details=True):
        print(line)
    print("=" * 60)
    print(f"Raw response size: {len(raw)} bytes")

    # Resource usage is only available while the container is running
    pid = container_pid(record)
    if pid:
        sample = ProcessUsageSampler(cpu_interval=0.5).sample(pid)
        print("\n".join(format_usage(sample)))
    else:
        print("Container is not running; no usage data.")


if __name__ == "__main__":
    main()
