"""Loading of the ``[tool.doclint]`` configuration table."""

from .loader import DEFAULT_EXCLUSIONS, LintConfig, load_config

__all__ = ["DEFAULT_EXCLUSIONS", "LintConfig", "load_config"]
