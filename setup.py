# pylint: disable=missing-module-docstring
# ruff: noqa

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description() -> str:
    """Return README contents for PyPI description."""
    readme_path = Path(__file__).with_name("README.md")
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else "Hotspot Engine"


setup(
    name="hotspot-engine",
    version="0.1.0",
    description="Hot-list scoring and model-augmented content generation pipeline",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    packages=find_packages(include=["hotspot_engine*", "fetchers*", "generation_engine*"]),
    include_package_data=True,
    install_requires=[
        "pydantic>=2.0",
        "pandas>=2.0",
        "httpx>=0.26",
        "beautifulsoup4>=4.12",
        "python-dotenv>=1.0",
        "openai>=1.0",
        "anthropic>=0.25",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tophub-trends = hotspot_engine.cli_entrypoints:tophub_trends",
            "football-hotspot = hotspot_engine.cli_entrypoints:football_hotspot",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
