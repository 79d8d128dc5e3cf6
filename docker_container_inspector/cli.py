"""Command-line interface for docker-container-inspector."""

import argparse
import signal
import sys
from collections import namedtuple

from . import __version__
from .errors import ProcessSamplingError, UsageError
from .formatter import print_container_details, write_raw
from .inspector import DockerContainerInspector, container_pid
from .process_usage import ProcessUsageSampler, format_usage

PROG = "docker-container-inspector"

Command = namedtuple("Command", ["name", "params", "description", "handler"])


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message, usage=_help_text())


def _signal_handler(signum, frame):
    """Handle interrupt signals gracefully by raising KeyboardInterrupt."""
    raise KeyboardInterrupt()


def _usage_line(command):
    """Return the usage line for a single command."""
    return f"USAGE: {PROG} {command.name} {command.params}".rstrip()


def _help_text():
    """Build the help listing, one line per command in registration order."""
    signatures = [f"{cmd.name} {cmd.params}".rstrip() for cmd in COMMANDS]
    width = max(len(signature) for signature in signatures)
    lines = [
        f"USAGE: {PROG} [-v] [--interval SECONDS] COMMAND [ARGS]",
        "",
        "Commands:",
    ]
    for signature, cmd in zip(signatures, COMMANDS):
        lines.append(f"  {signature.ljust(width)}  {cmd.description}")
    return "\n".join(lines)


def _parse_command_args(command, args, flags=()):
    """Split a command's arguments into its container ID and flags.

    Args:
        command: Command being run
        args: Arguments that followed the command name
        flags: Option strings the command accepts

    Returns:
        tuple: (container_id, set of flags given)
    """
    positionals = [arg for arg in args if not arg.startswith("-")]
    options = [arg for arg in args if arg.startswith("-")]

    usage = _usage_line(command)
    unknown = [opt for opt in options if opt not in flags]
    if unknown:
        raise UsageError(f"unrecognized arguments: {' '.join(unknown)}", usage=usage)
    if not positionals:
        raise UsageError(f"'{command.name}' requires a CONTAINER-ID", usage=usage)
    if len(positionals) > 1:
        raise UsageError(f"'{command.name}' takes a single CONTAINER-ID", usage=usage)
    return positionals[0], set(options)


def _cmd_inspect(command, args, settings):
    container_id, flags = _parse_command_args(command, args, flags=("--full",))
    full_details = "--full" in flags

    with settings.inspector_factory(verbose=settings.verbose) as inspector:
        record, _ = inspector.inspect(container_id, size=full_details)

    print_container_details(record, full_details=full_details)
    return 0


def _cmd_usage(command, args, settings):
    container_id, _ = _parse_command_args(command, args)

    with settings.inspector_factory(verbose=settings.verbose) as inspector:
        record, _ = inspector.inspect(container_id)

    pid = container_pid(record)
    if pid <= 0:
        status = (record.get("State") or {}).get("Status") or "unknown"
        raise ProcessSamplingError(
            f"container '{container_id}' is not running (status: {status})"
        )

    sampler = settings.sampler_factory(
        cpu_interval=settings.interval, verbose=settings.verbose
    )
    sample = sampler.sample(pid)

    # Only print once the whole sample has been collected
    print("\n".join(format_usage(sample)))
    return 0


def _cmd_json(command, args, settings):
    container_id, _ = _parse_command_args(command, args)

    with settings.inspector_factory(verbose=settings.verbose) as inspector:
        _, raw = inspector.inspect(container_id)

    write_raw(raw)
    return 0


def _cmd_help(command, args, settings):
    print(_help_text())
    return 0


COMMANDS = (
    Command(
        "inspect",
        "CONTAINER-ID [--full]",
        "Display container details",
        _cmd_inspect,
    ),
    Command(
        "usage",
        "CONTAINER-ID",
        "Display resource usage of the container's main process",
        _cmd_usage,
    ),
    Command(
        "json",
        "CONTAINER-ID",
        "Print the raw JSON returned by the engine",
        _cmd_json,
    ),
    Command("help", "", "Show this help", _cmd_help),
)


def find_command(name):
    """Look up a registered command by name, or return None."""
    for command in COMMANDS:
        if command.name == name:
            return command
    return None


def _build_parser():
    parser = _ArgumentParser(prog=PROG, add_help=False)

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--help", "-h", action="store_true", help="Show this help and exit"
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--interval",
        type=float,
        default=0.1,
        help="Seconds to measure CPU usage over in the usage command (default: 0.1)",
    )

    parser.add_argument("command", nargs="?", help="Command to run")

    return parser


def main(
    argv=None,
    inspector_factory=DockerContainerInspector,
    sampler_factory=ProcessUsageSampler,
):
    """Main entry point for the CLI.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)
        inspector_factory: Callable returning a container inspector context
            manager with an ``inspect(container_id, size=False)`` method
        sampler_factory: Callable returning a process sampler with a
            ``sample(pid)`` method

    Returns:
        int: Process exit code
    """
    # Register signal handlers for graceful shutdown
    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    verbose = False
    try:
        settings, extra_args = _build_parser().parse_known_args(argv)
        verbose = settings.verbose
        settings.inspector_factory = inspector_factory
        settings.sampler_factory = sampler_factory

        if verbose:
            print(f"{PROG} version {__version__}", file=sys.stderr)

        if settings.help:
            return _cmd_help(find_command("help"), extra_args, settings)

        if settings.interval < 0:
            raise UsageError("--interval must not be negative", usage=_help_text())

        if settings.command is None:
            print(_help_text(), file=sys.stderr)
            return 1

        command = find_command(settings.command)
        if command is None:
            raise UsageError(f"Unknown command: {settings.command}", usage=_help_text())

        return command.handler(command, extra_args, settings)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user. Exiting...", file=sys.stderr)
        return 130  # Standard exit code for SIGINT
    except UsageError as e:
        print(e, file=sys.stderr)
        if e.usage:
            print(e.usage, file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
