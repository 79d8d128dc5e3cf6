"""Human-readable rendering of container inspect records."""

import json
import sys

# (label, key) pairs printed for every container, before the State block
IDENTITY_FIELDS = [
    ("Container ID", "Id"),
    ("Name", "Name"),
    ("Image", "Image"),
    ("Created", "Created"),
    ("Path", "Path"),
    ("Args", "Args"),
    ("Driver", "Driver"),
    ("Platform", "Platform"),
    ("MountLabel", "MountLabel"),
    ("ProcessLabel", "ProcessLabel"),
    ("AppArmorProfile", "AppArmorProfile"),
    ("ExecIDs", "ExecIDs"),
]

STATE_FIELDS = [
    ("Status", "Status"),
    ("Running", "Running"),
    ("Paused", "Paused"),
    ("Restarting", "Restarting"),
    ("OOMKilled", "OOMKilled"),
    ("Dead", "Dead"),
    ("PID", "Pid"),
    ("ExitCode", "ExitCode"),
    ("Error", "Error"),
    ("StartedAt", "StartedAt"),
    ("FinishedAt", "FinishedAt"),
]

PATH_FIELDS = [
    ("ResolvConfPath", "ResolvConfPath"),
    ("HostnamePath", "HostnamePath"),
    ("HostsPath", "HostsPath"),
    ("LogPath", "LogPath"),
]

# Keys whose missing value should render as 0 rather than an empty string
_NUMERIC_KEYS = {"Pid", "ExitCode", "RestartCount", "SizeRw", "SizeRootFs"}
_LIST_KEYS = {"Args", "ExecIDs"}
_BOOL_KEYS = {"Running", "Paused", "Restarting", "OOMKilled", "Dead"}


def format_value(key, value):
    """Render a single field value.

    Args:
        key: Inspect record key the value was read from
        value: Raw value from the decoded record (may be None)

    Returns:
        str: Text to print after the label
    """
    if key in _LIST_KEYS:
        return "[" + " ".join(str(item) for item in (value or [])) + "]"
    if key in _BOOL_KEYS or isinstance(value, bool):
        return "true" if value else "false"
    if key in _NUMERIC_KEYS:
        return str(value or 0)
    if isinstance(value, (dict, list)):
        return _compact_json(value)
    if value is None:
        return ""
    return str(value)


def _compact_json(value):
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def _field_lines(source, fields):
    return [f"{label}: {format_value(key, source.get(key))}" for label, key in fields]


def format_container_details(record, full_details=False):
    """Render a container record as ``Label: value`` lines in a fixed order.

    Extended fields (HostConfig, SizeRw, SizeRootFs, Node, GraphDriver) are
    only rendered when ``full_details`` is set, and HostConfig, SizeRw,
    SizeRootFs and Node additionally need to be reported by the engine.

    Args:
        record: Decoded container inspect dictionary
        full_details: Include the extended fields

    Returns:
        list: Output lines without trailing newlines
    """
    lines = _field_lines(record, IDENTITY_FIELDS)

    state = record.get("State")
    if state is not None:
        lines.extend(_field_lines(state, STATE_FIELDS))
        health = state.get("Health")
        if health is not None:
            lines.append(f"Health: {format_value('Status', health.get('Status'))}")

    lines.extend(_field_lines(record, PATH_FIELDS))
    restart_count = record.get("RestartCount")
    lines.append(f"RestartCount: {format_value('RestartCount', restart_count)}")

    if not full_details:
        return lines

    host_config = record.get("HostConfig")
    if host_config is not None:
        lines.append(f"HostConfig: {_compact_json(host_config)}")

    # SizeRw/SizeRootFs are absent unless the engine was asked for sizes
    for key in ("SizeRw", "SizeRootFs"):
        if record.get(key) is not None:
            lines.append(f"{key}: {format_value(key, record[key])}")

    node = record.get("Node")
    if node is not None:
        lines.append(f"Node: {_compact_json(node)}")

    lines.append(f"GraphDriver: {_compact_json(record.get('GraphDriver'))}")
    return lines


def print_container_details(record, full_details=False, file=None):
    """Print the human-readable container summary."""
    out = sys.stdout if file is None else file
    for line in format_container_details(record, full_details=full_details):
        print(line, file=out)


def write_raw(raw, file=None):
    """Write the engine's response body unmodified, followed by a newline.

    Args:
        raw: Response body bytes
        file: Binary stream (defaults to the stdout buffer)
    """
    if file is None:
        sys.stdout.flush()
        file = sys.stdout.buffer
    file.write(raw)
    file.write(b"\n")
    file.flush()
