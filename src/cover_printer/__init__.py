"""Top-level package for Cover Printer.

Provides subpackages:
- cover_printer.layout – grid geometry for placeholders on a sheet of paper
- cover_printer.transform – fit, pan, zoom and drag for images in placeholders
- cover_printer.sheet – controller owning the placeholder collection
- cover_printer.images – decoding dropped/opened files into image references
- cover_printer.output – PDF and raster export at print resolution
- cover_printer.gui – PySide6 app
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
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import version as pkg_version, PackageNotFoundError

    try:
        return pkg_version("cover-printer")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
