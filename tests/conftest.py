# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core import config

# --------------------------------------------------------------------
# A stand-in for the vale binary. Same argv contract
# (--config=<ini> --output=JSON <file>), same output shape, and it exits 1
# when it reports alerts. Rules are "tokens:" lists, matched as whole words.
# FAKE_VALE_MODE=garbage|crash|hang switches failure modes,
# FAKE_VALE_RECORD=<file> appends the sandbox dir of each run.
# --------------------------------------------------------------------
FAKE_VALE = r'''#!__PYTHON__
import json, os, re, sys, time

args = sys.argv[1:]
config = next(a.split("=", 1)[1] for a in args if a.startswith("--config="))
doc = args[-1]

record = os.environ.get("FAKE_VALE_RECORD")
if record:
    with open(record, "a") as fh:
        fh.write(os.path.dirname(config) + "\n")

mode = os.environ.get("FAKE_VALE_MODE", "ok")
if mode == "garbage":
    print("panic: runtime error: invalid memory address")
    sys.exit(2)
if mode == "crash":
    sys.stderr.write("E100 [/srv/secret/styles] Runtime error\n")
    sys.exit(2)
if mode == "hang":
    time.sleep(30)

settings = {}
with open(config) as fh:
    for line in fh:
        if "=" in line:
            key, value = line.split("=", 1)
            settings[key.strip()] = value.strip()

with open(doc, encoding="utf-8") as fh:
    text = fh.read()

alerts = []
for style in [s.strip() for s in settings["BasedOnStyles"].split(",")]:
    style_dir = os.path.join(settings["StylesPath"], style)
    if not os.path.isdir(style_dir):
        continue
    for rule in sorted(os.listdir(style_dir)):
        if not rule.endswith(".yml"):
            continue
        with open(os.path.join(style_dir, rule), encoding="utf-8") as fh:
            tokens = re.findall(r"^\s*-\s*(\S+)\s*$", fh.read(), re.M)
        for token in tokens:
            for m in re.finditer(r"\b%s\b" % re.escape(token), text):
                line = text.count("\n", 0, m.start()) + 1
                col = m.start() - (text.rfind("\n", 0, m.start()) + 1) + 1
                alerts.append({
                    "Action": {"Name": "", "Params": None},
                    "Span": [col, col + len(m.group(0)) - 1],
                    "Check": "%s.%s" % (style, rule[:-4]),
                    "Description": "",
                    "Link": "",
                    "Message": "Avoid using '%s'" % m.group(0),
                    "Severity": "error" if style == "Custom" else "suggestion",
                    "Match": m.group(0),
                    "Line": line,
                })

print(json.dumps({doc: alerts} if alerts else {}))
sys.exit(1 if alerts else 0)
'''

GOOGLE_WEASEL = """extends: existence
message: "Avoid using '%s'."
level: suggestion
tokens:
  - very
"""

EXTREMELY_RULE = """extends: existence
message: "Avoid using '%s'"
level: error
tokens:
  - extremely"""


def write_fake_vale(path: Path, mode: int = 0o755) -> Path:
    path.write_text(FAKE_VALE.replace("__PYTHON__", sys.executable), encoding="utf-8")
    os.chmod(path, mode)
    return path


# --------------------------------------------------------------------
# Shared style library, vale binary and sandbox parent, all under tmp_path
# --------------------------------------------------------------------
@pytest.fixture
def styles_library(tmp_path) -> Path:
    lib = tmp_path / "styles"
    (lib / "Google").mkdir(parents=True)
    (lib / "Google" / "Weasel.yml").write_text(GOOGLE_WEASEL, encoding="utf-8")
    (lib / "Microsoft").mkdir()
    (lib / "RedHat").mkdir()
    (lib / "README.md").write_text("not a pack", encoding="utf-8")
    return lib

@pytest.fixture
def fake_vale(tmp_path) -> Path:
    return write_fake_vale(tmp_path / "vale")

@pytest.fixture
def sandbox_root(tmp_path) -> Path:
    return tmp_path / "sandboxes"

@pytest.fixture
def vale_record(tmp_path, monkeypatch) -> Path:
    record = tmp_path / "runs.txt"
    monkeypatch.setenv("FAKE_VALE_RECORD", str(record))
    return record

@pytest.fixture(autouse=True)
def lint_env(monkeypatch, styles_library, fake_vale, sandbox_root):
    # Point the app at the fakes for every test
    monkeypatch.setattr(config, "STYLES_PATH", str(styles_library))
    monkeypatch.setattr(config, "VALE_BIN", str(fake_vale))
    monkeypatch.setattr(config, "SANDBOX_DIR", str(sandbox_root))
    monkeypatch.setattr(config, "VALE_TIMEOUT", 10.0)
    monkeypatch.delenv("FAKE_VALE_MODE", raising=False)

# --------------------------------------------------------------------
# FastAPI test client available as fixture `client`
# --------------------------------------------------------------------
@pytest.fixture(scope="session")
def client() -> TestClient:
    return TestClient(app)

@pytest.fixture
def extremely_rule() -> dict:
    return {"name": "test-rule.yml", "content": EXTREMELY_RULE}

@pytest.fixture
def vale_factory():
    return write_fake_vale
