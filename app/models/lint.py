from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Tuple


class CustomRule(BaseModel):
    name: str
    content: str


class LintRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    style: str
    custom_rules: List[CustomRule] = Field(default_factory=list, alias="customRules")


# Vale's own alert schema; names and casing are Vale's, not ours.
class AlertAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    Name: str = ""
    Params: Optional[List[str]] = None


class Alert(BaseModel):
    model_config = ConfigDict(extra="allow")

    Action: Optional[AlertAction] = None
    Span: Optional[Tuple[int, int]] = None
    Check: str
    Description: str = ""
    Link: str = ""
    Message: str
    Severity: str
    Match: str = ""
    Line: int = 0


class ErrorBody(BaseModel):
    error: str
    details: Optional[str] = None


class StylesInfo(BaseModel):
    styles: List[str]
    installed: List[str]
