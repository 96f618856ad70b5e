from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class ViewResult:
    """A template to render together with its context."""

    template: str
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Redirect:
    url: str
