"""Synchronous action runner: spawns nmap/whois or performs a local query."""

from __future__ import annotations

import shlex
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import httpx
import psutil
import structlog

from ..config.settings import RunnerSettings, settings
from ..domain.catalog import ActionDescriptor, ActionKind
from .error_mapper import map_exception
from .errors import RunnerError
from .local_queries import LOCAL_QUERIES

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RunOutcome:
    """Captured output of one run and whether it succeeded."""

    text: str
    succeeded: bool


class ActionRunner:
    """Executes one action at a time and captures its output as text.

    ``invoke`` blocks until the action finishes. Callers must not invoke the
    same runner concurrently; ``terminate_active`` may be called from any
    thread to stop the subprocess currently running.
    """

    def __init__(
        self,
        *,
        runner_settings: Optional[RunnerSettings] = None,
        queries: Optional[Dict[str, Callable[[], str]]] = None,
        platform_name: Optional[str] = None,
    ) -> None:
        self._settings = runner_settings or settings.runner
        self._queries = LOCAL_QUERIES if queries is None else queries
        self._platform = platform_name or sys.platform
        self._lock = threading.Lock()
        self._active: Optional[subprocess.Popen] = None

    def _binary_for(self, program: str) -> str:
        binaries = {
            "nmap": self._settings.nmap_binary,
            "whois": self._settings.whois_binary,
        }
        return binaries.get(program, program)

    def build_command(
        self,
        action: ActionDescriptor,
        target: str = "",
        parameter: str = "",
    ) -> List[str]:
        """Assemble the argv for a subprocess action."""
        if action.kind is not ActionKind.SUBPROCESS:
            raise RunnerError(f"Action '{action.name}' is not a subprocess action")
        argv: List[str] = []
        if action.elevated and not self._platform.startswith("win"):
            argv.append(self._settings.sudo_binary)
        argv.append(self._binary_for(action.program))
        argv.extend(shlex.split(action.render_invocation(parameter)))
        if target:
            argv.append(target)
        return argv

    def invoke(
        self,
        action: ActionDescriptor,
        target: str = "",
        parameter: str = "",
    ) -> RunOutcome:
        """Run ``action`` to completion and return its captured output."""
        if action.kind is ActionKind.LOCAL_QUERY:
            return self._run_local_query(action)
        return self._run_subprocess(self.build_command(action, target, parameter))

    def terminate_active(self) -> bool:
        """Terminate the subprocess currently running, if any."""
        with self._lock:
            process = self._active
        if process is None or process.poll() is not None:
            return False
        logger.info("Terminating active process", pid=process.pid)
        try:
            process.terminate()
        except ProcessLookupError:
            return False
        return True

    def _run_local_query(self, action: ActionDescriptor) -> RunOutcome:
        query = self._queries.get(action.invocation)
        if query is None:
            raise RunnerError(f"Unknown local query '{action.invocation}'")
        try:
            return RunOutcome(text=query(), succeeded=True)
        except (httpx.HTTPError, psutil.Error, OSError) as exc:
            mapped = map_exception(exc)
            logger.warning("Local query failed", query=action.invocation, code=mapped.code)
            return RunOutcome(
                text=f"[Error] {mapped.describe()}\n{exc}\n",
                succeeded=False,
            )

    def _run_subprocess(self, argv: List[str]) -> RunOutcome:
        header = f"[Running] {' '.join(argv)}\n\n"
        timeout = self._settings.timeout or None
        logger.info("Spawning process", argv=argv, timeout=timeout)
        try:
            process = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            mapped = map_exception(exc)
            logger.warning("Process spawn failed", argv=argv, code=mapped.code)
            return RunOutcome(text=f"{header}[Error] {mapped.describe()}\n", succeeded=False)

        with self._lock:
            self._active = process
        timed_out = False
        try:
            try:
                stdout, stderr = process.communicate(timeout=timeout)
            except subprocess.TimeoutExpired:
                timed_out = True
                process.kill()
                stdout, stderr = process.communicate()
        finally:
            with self._lock:
                self._active = None

        output = header + (stdout or "")
        if stderr:
            output += "\n[Errors]\n" + stderr
        if timed_out:
            mapped = map_exception(subprocess.TimeoutExpired(argv, timeout or 0))
            output += f"\n[Error] {mapped.describe()}\n"
            return RunOutcome(text=output, succeeded=False)
        if process.returncode != 0:
            output += f"\n[Exit status {process.returncode}]\n"
        logger.info("Process finished", argv=argv, returncode=process.returncode)
        return RunOutcome(text=output, succeeded=process.returncode == 0)
