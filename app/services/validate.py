from __future__ import annotations
from typing import Any, List

from app.core import config
from app.core.errors import InvalidInput
from app.models.lint import CustomRule, LintRequest


def _normalize_rules(items: List[Any]) -> List[CustomRule]:
    rules: List[CustomRule] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name, content = item.get("name"), item.get("content")
        if isinstance(name, str) and isinstance(content, str) and name and content:
            rules.append(CustomRule(name=name, content=content))
    return rules


def validate_request(payload: Any) -> LintRequest:
    """
    Check a raw /api/lint payload and return a LintRequest.
    Fails fast with InvalidInput on the first violation; touches nothing on disk.
    """
    if not isinstance(payload, dict):
        payload = {}

    text = payload.get("text")
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput("No text provided")
    if len(text) > config.MAX_TEXT_LENGTH:
        raise InvalidInput(f"Text too long (max {config.MAX_TEXT_LENGTH} characters)")

    style = payload.get("style")
    if not isinstance(style, str) or style not in config.ALLOWED_STYLES:
        raise InvalidInput("Invalid style guide selected")

    custom = payload.get("customRules")
    if custom is None:
        custom = []
    if not isinstance(custom, list):
        raise InvalidInput("customRules must be an array")
    if len(custom) > config.MAX_CUSTOM_RULES:
        raise InvalidInput(f"Too many custom rules (max {config.MAX_CUSTOM_RULES})")

    for i, item in enumerate(custom):
        if not isinstance(item, dict) or item.get("content") is None:
            continue
        label = item.get("name") if isinstance(item.get("name"), str) else f"#{i + 1}"
        content = item["content"]
        if not isinstance(content, str):
            raise InvalidInput(f"Custom rule '{label}' has invalid content")
        if len(content) > config.MAX_RULE_SIZE:
            raise InvalidInput(
                f"Custom rule '{label}' is too large (max {config.MAX_RULE_SIZE} characters)"
            )

    return LintRequest(text=text, style=style, custom_rules=_normalize_rules(custom))
