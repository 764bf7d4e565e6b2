from pathlib import Path
from setuptools import find_namespace_packages, setup

HERE = Path(__file__).parent


def _read_version() -> str:
    """Read __version__ from the package without importing it."""
    init = HERE / "src" / "ghmustache" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found in src/ghmustache/__init__.py")


setup(
    name="ghmustache",
    version=_read_version(),
    description="Motor de plantillas {{mustache}} sin lógica: parser, contexto y renderizador",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["ghmustache", "ghmustache.*"]),
    install_requires=[],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["ghmustache=ghmustache.cli:main"]},
)
