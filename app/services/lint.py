from __future__ import annotations
from typing import List, Dict, Any, Optional
import logging

from app.core import config
from app.core.errors import LintError, InternalError, InvalidInput
from app.models.lint import LintRequest
from app.services.vale import ensure_executable, run_vale, interpret_output
from app.utils.sandbox import Sandbox

log = logging.getLogger("lint")


def lint_document(
    req: LintRequest,
    styles_path: Optional[str] = None,
    vale_bin: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Stage req in a fresh sandbox, run vale over it and return its alerts.

    styles_path / vale_bin default to the values in app.core.config, read at
    call time. Any failure that isn't already a LintError becomes InternalError.
    """
    styles_path = styles_path or config.STYLES_PATH
    vale_bin = vale_bin or config.VALE_BIN
    if req.style not in config.ALLOWED_STYLES:
        raise InvalidInput("Invalid style guide selected")

    try:
        with Sandbox(config.SANDBOX_DIR) as box:
            doc = box.write_document(req.text)
            staged = box.stage_styles(styles_path)
            if req.style not in staged:
                log.warning("Style pack %s is not installed in %s", req.style, styles_path)

            # Only whitelisted names and the literal Custom token reach the ini
            based_on = req.style
            if box.stage_custom_rules(req.custom_rules):
                based_on = f"{req.style}, {config.CUSTOM_STYLE}"
            ini = box.write_config(based_on)

            ensure_executable(vale_bin)
            run = run_vale(vale_bin, ini, doc, timeout=config.VALE_TIMEOUT)
            return interpret_output(run, doc)
    except LintError:
        raise
    except Exception:
        log.exception("Unexpected failure while linting")
        raise InternalError()
