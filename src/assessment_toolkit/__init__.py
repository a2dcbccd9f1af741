"""Top-level package for the Assessment Toolkit.

Provides subpackages:
- assessment_toolkit.core – question part and scoring document models, schemas, JSON I/O
- assessment_toolkit.scoring – weighted scoring engine (defaults, validation, levels)
- assessment_toolkit.cli – `assessment-scoring` command line
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("assessment-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
