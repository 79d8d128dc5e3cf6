"""Docker container inspection logic."""

import json
import os
import sys

import docker
import requests
from docker.errors import APIError, DockerException, NotFound

from .errors import EngineConnectionError, InspectionError


class DockerContainerInspector:
    """Inspects Docker containers through the Engine API.

    The inspector owns a single client connection. Use it as a context
    manager so the connection is closed on every exit path::

        with DockerContainerInspector() as inspector:
            record, raw = inspector.inspect("my-container")
    """

    def __init__(self, verbose=False, environment=None):
        """Initialize the inspector.

        Args:
            verbose: Enable verbose logging
            environment: Mapping to read DOCKER_* settings from
                (defaults to ``os.environ``)
        """
        self.verbose = verbose
        self.environment = os.environ if environment is None else environment
        self.client = None

    def __enter__(self):
        self._get_docker_client()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def _log(self, message):
        """Log a message if verbose mode is enabled."""
        if self.verbose:
            print(f"[INFO] {message}", file=sys.stderr)

    def _client_options(self):
        """Build keyword arguments for ``docker.from_env``.

        DOCKER_HOST, DOCKER_TLS_VERIFY and DOCKER_CERT_PATH are handled by the
        SDK itself. The API version is negotiated unless DOCKER_API_VERSION
        pins it.
        """
        options = {
            "version": self.environment.get("DOCKER_API_VERSION") or "auto",
            "environment": self.environment,
        }
        timeout = self.environment.get("DOCKER_CLIENT_TIMEOUT")
        if timeout:
            try:
                options["timeout"] = int(timeout)
            except ValueError:
                raise EngineConnectionError(
                    f"Invalid DOCKER_CLIENT_TIMEOUT value: {timeout!r}"
                )
        return options

    def _get_docker_client(self):
        """Get or create Docker client."""
        if self.client is None:
            try:
                self.client = docker.from_env(**self._client_options())
            except DockerException as e:
                raise EngineConnectionError(
                    f"Failed to connect to Docker daemon: {e}"
                ) from e
            self._log(f"Connected to Docker daemon (API {self.client.api.api_version})")
        return self.client

    def close(self):
        """Release the client connection. Safe to call more than once."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self._log("Closed Docker client")

    def inspect(self, container_id, size=False):
        """Inspect a container.

        Args:
            container_id: Container ID or name
            size: Ask the engine to compute SizeRw and SizeRootFs

        Returns:
            Tuple of (record, raw) where record is the decoded container
            dictionary and raw is the response body exactly as received
        """
        api = self._get_docker_client().api
        self._log(f"Inspecting container: {container_id}")

        # Go through the low-level client so the raw body is kept intact
        url = api._url("/containers/{0}/json", container_id)
        params = {"size": 1} if size else None
        try:
            response = api._get(url, params=params)
            api._raise_for_status(response)
        except NotFound as e:
            raise InspectionError(
                f"Docker inspect for '{container_id}' failed: "
                f"No such container: {container_id}"
            ) from e
        except APIError as e:
            raise InspectionError(
                f"Docker inspect for '{container_id}' failed: {e}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise EngineConnectionError(
                f"Docker inspect for '{container_id}' failed: {e}"
            ) from e

        raw = response.content
        try:
            record = json.loads(raw)
        except ValueError as e:
            raise InspectionError(
                f"Docker inspect for '{container_id}' failed: "
                f"invalid JSON response: {e}"
            ) from e

        self._log(f"Received {len(raw)} bytes for container {record.get('Id', '')}")
        return record, raw


def container_pid(record):
    """Return the host PID of a container's main process, or 0.

    The PID is only meaningful while the container is running.
    """
    state = record.get("State") or {}
    if not state.get("Running"):
        return 0
    return state.get("Pid") or 0
