"""Top-level package for the theory-test question bank parser.

Provides subpackages:
- theory_bank.core – immutable question models and schema validation
- theory_bank.extractor – workbook and answer-markup parsing
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def _get_version() -> str:
    """Get version from installed package metadata."""
    try:
        return _pkg_version("theory-bank")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
