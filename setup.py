import logging
from pathlib import Path

from setuptools import find_packages, setup
from setuptools.command.build_py import build_py

log = logging.getLogger(__name__)

ROOT = Path(__file__).parent


def write_version(version: str) -> None:
    """Write src/pyssr/_version.py so the installed package knows its version."""
    version_file = ROOT / "src" / "pyssr" / "_version.py"
    content = f'__version__ = "{version}"\n'
    if not version_file.exists() or version_file.read_text("utf-8") != content:
        log.info(f"Writing version file: {version}")
        version_file.write_text(content, "utf-8")


class BuildPy(build_py):
    def run(self):
        write_version(self.distribution.get_version())
        super().run()


setup(
    name="pyssr",
    version="0.1.0",
    description="Server-side rendering compiler for component templates",
    long_description=(ROOT / "DESIGN.md").read_text("utf-8") if (ROOT / "DESIGN.md").exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "rich>=13.0",
        "rich-click>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pyssr=pyssr.cli.main:cli",
        ],
    },
    cmdclass={
        "build_py": BuildPy,
    },
    zip_safe=False,
)
