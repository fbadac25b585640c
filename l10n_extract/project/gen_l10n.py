"""Invocation of ``flutter gen-l10n`` after sources were rewritten."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from ..logging import get_logger

GEN_L10N_COMMAND: Sequence[str] = ("flutter", "gen-l10n")

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass(frozen=True)
class GeneratorOutcome:
    """Exit status and output of the generator process."""

    ok: bool
    returncode: int | None
    stdout: str = ""
    stderr: str = ""
    error: str | None = None


class GeneratorRunner:
    """Runs the Flutter localization generator; failures are advisory only."""

    def __init__(
        self,
        runner: Runner | None = None,
        *,
        command: Sequence[str] = GEN_L10N_COMMAND,
        timeout: float | None = 300.0,
    ) -> None:
        self._runner = runner or self._default_runner
        self.command = tuple(command)
        self.timeout = timeout
        self.logger = get_logger("gen_l10n")

    def run(self, root: Path) -> GeneratorOutcome:
        self.logger.info("Running %s", " ".join(self.command))
        try:
            completed = self._runner(list(self.command), cwd=root, timeout=self.timeout)
        except FileNotFoundError as exc:
            return self._failed(f"{self.command[0]} executable not found ({exc})")
        except subprocess.TimeoutExpired:
            return self._failed(f"timed out after {self.timeout:g}s")
        except OSError as exc:
            return self._failed(str(exc))

        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if completed.returncode == 0:
            self.logger.info("%s completed successfully", " ".join(self.command))
            if stdout.strip():
                self.logger.debug("%s", stdout.strip())
            return GeneratorOutcome(ok=True, returncode=0, stdout=stdout, stderr=stderr)

        self.logger.warning(
            "%s exited with code %d", " ".join(self.command), completed.returncode
        )
        if stderr.strip():
            self.logger.warning("Error output: %s", stderr.strip())
        if stdout.strip():
            self.logger.warning("Standard output: %s", stdout.strip())
        return GeneratorOutcome(
            ok=False, returncode=completed.returncode, stdout=stdout, stderr=stderr
        )

    def _failed(self, reason: str) -> GeneratorOutcome:
        self.logger.warning("Failed to run %s: %s", " ".join(self.command), reason)
        self.logger.warning(
            'Please run "%s" manually after the process completes.', " ".join(self.command)
        )
        return GeneratorOutcome(ok=False, returncode=None, error=reason)

    @staticmethod
    def _default_runner(
        args: Sequence[str],
        *,
        cwd: Path,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess:
        return subprocess.run(
            list(args),
            cwd=str(cwd),
            check=False,
            text=True,
            capture_output=True,
            timeout=timeout,
        )


__all__ = ["GEN_L10N_COMMAND", "GeneratorOutcome", "GeneratorRunner"]
