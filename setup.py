from __future__ import annotations

from setuptools import find_namespace_packages, setup

setup(
    name="csfdet",
    version="0.1.0",
    description="Expand GUGA configuration state functions into Slater determinants with exact coefficients.",
    python_requires=">=3.9",
    packages=find_namespace_packages(include=["csfdet", "csfdet.*"]),
    install_requires=["numpy>=1.22"],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["csf2det = csfdet.cli.csf2det:main"]},
)
