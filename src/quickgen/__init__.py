"""quickgen - Front end helpers for an external type-generation tool."""

__version__ = "0.1.0"

from quickgen.core.regex_literal import Classification, ClassificationKind, classify
from quickgen.core.balanced import extract_enclosing_value
from quickgen.core.errors import QuickgenError, UnbalancedExpression
from quickgen.config.project import ProjectConfig

__all__ = [
    "Classification",
    "ClassificationKind",
    "classify",
    "extract_enclosing_value",
    "QuickgenError",
    "UnbalancedExpression",
    "ProjectConfig",
]
