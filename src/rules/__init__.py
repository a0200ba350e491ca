"""Options and eligibility rules for logging call rewrites."""

from rules.config import ConfigError, TransformOptions, coerce_options
from rules.directives import Directive, DirectiveScope, is_suppressed, parse_directives
from rules.eligibility import Exclusion, check_eligibility

__all__ = [
    "ConfigError",
    "Directive",
    "DirectiveScope",
    "Exclusion",
    "TransformOptions",
    "check_eligibility",
    "coerce_options",
    "is_suppressed",
    "parse_directives",
]
