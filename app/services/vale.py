# app/services/vale.py
import os
import json
import stat
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any

from pydantic import ValidationError

from app.core.errors import LinterExecutionFailed, LinterOutputUnparseable, LinterTimeout
from app.models.lint import Alert

log = logging.getLogger("vale")

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass
class ValeRun:
    returncode: int
    stdout: str
    stderr: str


def ensure_executable(vale_bin: str) -> None:
    """Deployments don't always keep mode bits; put +x back if it's missing."""
    if os.access(vale_bin, os.X_OK):
        return
    try:
        mode = os.stat(vale_bin).st_mode
        os.chmod(vale_bin, mode | _EXEC_BITS)
    except OSError as e:
        log.warning("Could not chmod vale binary %s: %s", vale_bin, e)


def run_vale(vale_bin: str, config_path: Path, doc_path: Path, timeout: float) -> ValeRun:
    cmd = [vale_bin, f"--config={config_path}", "--output=JSON", str(doc_path)]
    log.info("Running vale on %s", doc_path)
    try:
        p = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
            cwd=str(config_path.parent),
        )
    except subprocess.TimeoutExpired:
        log.error("vale exceeded %.1fs timeout and was killed", timeout)
        raise LinterTimeout(details=f"Linting exceeded {timeout:g} seconds")
    except OSError as e:
        log.error("Could not start vale (%s): %s", vale_bin, e)
        raise LinterExecutionFailed(details="Linter could not be started")
    return ValeRun(returncode=p.returncode, stdout=p.stdout or "", stderr=p.stderr or "")


def interpret_output(run: ValeRun, doc_path: Path) -> List[Dict[str, Any]]:
    """
    Turn a finished vale run into alerts for doc_path.

    Vale exits non-zero whenever it reports alerts, so the exit code is not
    the signal here: parseable JSON on stdout is success, anything else is not.
    """
    if not run.stdout.strip():
        log.error("vale exited %d with no output; stderr: %s", run.returncode, run.stderr[:2000])
        raise LinterExecutionFailed(details=f"Linter exited with status {run.returncode}")

    try:
        results = json.loads(run.stdout)
    except json.JSONDecodeError as e:
        log.error("vale output is not JSON (%s); exit=%d", e, run.returncode)
        raise LinterOutputUnparseable()
    if not isinstance(results, dict):
        log.error("vale output is %s, expected an object", type(results).__name__)
        raise LinterOutputUnparseable()

    raw = results.get(str(doc_path)) or []
    if not isinstance(raw, list):
        raise LinterOutputUnparseable()
    try:
        alerts = [Alert.model_validate(a) for a in raw]
    except ValidationError as e:
        log.error("vale alert failed validation: %s", e)
        raise LinterOutputUnparseable()
    return [a.model_dump(mode="json", exclude_unset=True) for a in alerts]
