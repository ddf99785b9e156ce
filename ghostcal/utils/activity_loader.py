"""Activity sources: where the per-day hours come from.

The calendar core never does I/O. It is handed an :class:`ActivityPayload`
fetched by one of the sources here, either by running the external loader
command or by reading a JSON file.
"""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

from ghostcal.core.activity import ActivityPayload, parse_activity_payload
from ghostcal.core.errors import DataUnavailableError, InvalidActivityError
from ghostcal.utils.log import get_logger

logger = get_logger()

DEFAULT_LOADER_TIMEOUT = 30.0


class ActivitySource(Protocol):
    def fetch_activity(self) -> ActivityPayload: ...


class CommandActivitySource:
    """Run loader commands in order until one prints usable activity JSON.

    A command that cannot start, times out, exits non-zero or prints invalid
    JSON counts as a failed attempt and the next command is tried. A command
    that succeeds with an empty ``byDate`` is kept as a fallback result.
    """

    def __init__(
        self,
        commands: Sequence[Sequence[str]],
        timeout: float = DEFAULT_LOADER_TIMEOUT,
    ) -> None:
        self.commands = [list(command) for command in commands if command]
        self.timeout = timeout

    def _run(self, command: List[str]) -> ActivityPayload:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=self.timeout,
        )
        if result.returncode != 0:
            stderr = (result.stderr or "").strip().splitlines()
            detail = stderr[-1] if stderr else "no output"
            raise DataUnavailableError(f"exit code {result.returncode}: {detail}")
        return parse_activity_payload(json.loads(result.stdout))

    def fetch_activity(self) -> ActivityPayload:
        attempts: List[str] = []
        empty: Optional[ActivityPayload] = None

        for command in self.commands:
            label = " ".join(command)
            try:
                payload = self._run(command)
            except (OSError, subprocess.SubprocessError) as e:
                reason = f"{type(e).__name__}: {e}"
            except json.JSONDecodeError as e:
                reason = f"invalid JSON output: {e}"
            except (DataUnavailableError, InvalidActivityError) as e:
                reason = str(e)
            else:
                if payload.by_date:
                    logger.debug(
                        "[loader] Loaded activity",
                        extra={"command": label, "days": len(payload.by_date)},
                    )
                    return payload
                logger.debug("[loader] Loader returned no activity", extra={"command": label})
                if empty is None:
                    empty = payload
                continue

            attempts.append(f"{label}: {reason}")
            logger.debug(
                "[loader] Loader command failed",
                extra={"command": label, "reason": reason},
            )

        if empty is not None:
            return empty

        if not self.commands:
            raise DataUnavailableError("No loader commands configured")
        raise DataUnavailableError(
            "Could not load activity data from any loader command", attempts
        )


class FileActivitySource:
    """Read activity JSON from a file, or from stdin when the path is ``-``."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)

    def fetch_activity(self) -> ActivityPayload:
        try:
            if self.path == "-":
                text = sys.stdin.read()
            else:
                text = Path(self.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DataUnavailableError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DataUnavailableError(f"Invalid JSON in {self.path}: {e}") from e

        payload = parse_activity_payload(data)
        logger.debug(
            "[loader] Loaded activity file",
            extra={"path": self.path, "days": len(payload.by_date)},
        )
        return payload


__all__ = [
    "ActivitySource",
    "CommandActivitySource",
    "DEFAULT_LOADER_TIMEOUT",
    "FileActivitySource",
]
