import os, re, json, shutil, tempfile, posixpath
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from app.core.config import CUSTOM_STYLE, MIN_ALERT_LEVEL, RULE_EXTENSION
from app.models.lint import CustomRule

log = logging.getLogger("sandbox")

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")

CUSTOM_META = {
    "name": CUSTOM_STYLE,
    "description": "User-uploaded rules",
    "feed": "",
}


def sanitize_rule_name(name: str) -> Optional[str]:
    """Flatten a user-supplied rule name into a safe .yml file name, or None."""
    name = name.replace("\\", "/")
    if not name.endswith(RULE_EXTENSION):
        name = f"{name}{RULE_EXTENSION}"
    safe = _UNSAFE.sub("_", posixpath.basename(name))
    if safe in ("", ".", ".."):
        return None
    return safe


class Sandbox:
    """
    Per-request Vale workspace:

        <root>/doc.md
        <root>/.vale.ini
        <root>/styles/<Pack> -> <library>/<Pack>
        <root>/styles/Custom/{meta.json, *.yml}

    Use as a context manager; the tree is removed on exit no matter what.
    """

    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir
        self.root: Optional[Path] = None

    def __enter__(self) -> "Sandbox":
        if self.base_dir:
            os.makedirs(self.base_dir, exist_ok=True)
        self.root = Path(tempfile.mkdtemp(prefix="vale-", dir=self.base_dir))
        try:
            self.styles_dir.mkdir()
        except OSError:
            self.cleanup()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False

    @property
    def styles_dir(self) -> Path:
        return self.root / "styles"

    @property
    def doc_path(self) -> Path:
        return self.root / "doc.md"

    @property
    def config_path(self) -> Path:
        return self.root / ".vale.ini"

    def write_document(self, text: str) -> Path:
        self.doc_path.write_text(text, encoding="utf-8")
        return self.doc_path

    def stage_styles(self, library: str) -> List[str]:
        """Symlink every pack in the shared library; failures are logged, not raised."""
        staged: List[str] = []
        try:
            entries = sorted(os.listdir(library))
        except OSError as e:
            log.warning("Could not read style library %s: %s", library, e)
            return staged

        for pack in entries:
            if pack == CUSTOM_STYLE:
                # reserved for this request's own rules
                continue
            src = os.path.join(library, pack)
            if not os.path.isdir(src):
                continue
            try:
                os.symlink(os.path.abspath(src), self.styles_dir / pack, target_is_directory=True)
                staged.append(pack)
            except OSError as e:
                log.warning("Could not link style pack %s: %s", pack, e)
        return staged

    def stage_custom_rules(self, rules: Iterable[CustomRule]) -> List[str]:
        rules = list(rules)
        if not rules:
            return []

        custom_dir = self.styles_dir / CUSTOM_STYLE
        custom_dir.mkdir(mode=0o700)
        (custom_dir / "meta.json").write_text(json.dumps(CUSTOM_META), encoding="utf-8")

        written: List[str] = []
        for rule in rules:
            if not rule.name or not rule.content:
                continue
            safe = sanitize_rule_name(rule.name)
            if safe is None:
                log.info("Skipping custom rule with unusable name %r", rule.name)
                continue
            (custom_dir / safe).write_text(rule.content, encoding="utf-8")
            if safe not in written:
                written.append(safe)
        return written

    def write_config(self, based_on: str) -> Path:
        ini = (
            f"StylesPath = {self.styles_dir}\n"
            f"MinAlertLevel = {MIN_ALERT_LEVEL}\n"
            "[*.md]\n"
            f"BasedOnStyles = {based_on}\n"
        )
        self.config_path.write_text(ini, encoding="utf-8")
        return self.config_path

    def cleanup(self) -> None:
        if self.root is None:
            return
        try:
            shutil.rmtree(self.root)
        except FileNotFoundError:
            pass
        except OSError as e:
            log.error("Failed to remove sandbox %s: %s", self.root, e)
