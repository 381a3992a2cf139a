"""Setup script for the itersolve iterative solvers."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text() if (this_directory / "README.md").exists() else ""

setup(
    name="itersolve",
    version="1.0.0",
    description="Jacobi and Gauss-Seidel solvers for linear systems with convergence comparison",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Tanisha Gupta",
    author_email="tanisha.gupta@research.edu",

    packages=find_packages(where="src"),
    package_dir={"": "src"},

    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "pyyaml>=6.0",
        "psutil>=5.9.0",
    ],

    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },

    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Education",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Natural Language :: English",
    ],

    keywords=[
        "jacobi", "gauss-seidel", "iterative-methods", "linear-algebra",
        "numerical-methods", "convergence-analysis"
    ],

    entry_points={
        "console_scripts": [
            "itersolve-compare=itersolve.cli:main",
        ],
    },

    zip_safe=False,
)
