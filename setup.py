#!/usr/bin/env python3
"""
Navvi - Static analysis for JavaScript/TypeScript repositories

Single install: pip install -e .
Then use: navvi analyze <path-or-git-url>

Pipeline:
- Tree-sitter parsing of .js/.jsx/.mjs/.cjs/.ts/.tsx sources
- Cyclomatic complexity and maintainability metrics
- Component grouping and dependency graph (NetworkX)
- Commit-history hotspots (GitPython)
- Insights and learning paths rendered with Rich

Configuration via environment or .env:
  NAVVI_COMPLEXITY_THRESHOLD=10
  NAVVI_MAX_WORKERS=4
  GITHUB_TOKEN=... (Optional: private GitHub clones)
  LOG_LEVEL=INFO
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_file = Path(__file__).parent / "README.md"
long_description = ""
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")

# Read requirements from requirements file
requirements_file = Path(__file__).parent / "requirements.txt"
requirements = []

if requirements_file.exists():
    with open(requirements_file, "r", encoding="utf-8") as f:
        requirements = [
            line.strip()
            for line in f.readlines()
            if line.strip() and not line.startswith("#")
        ]
else:
    requirements = [
        # Data Validation & Settings
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Git Operations
        "gitpython>=3.1.40",
        # Source Parsing
        "tree-sitter>=0.23.0",
        "tree-sitter-javascript>=0.23.0",
        "tree-sitter-typescript>=0.23.0",
        # Dependency Graph
        "networkx>=3.1",
        # Terminal UI
        "rich>=13.0.0",
        "typer>=0.9.0",
    ]

setup(
    name="navvi",
    version="0.1.0",
    description="Static analyzer for JavaScript/TypeScript repositories: complexity, components, insights and learning paths",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "navvi=navvi.cli.main:app",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Software Development :: Quality Assurance",
        "Topic :: Software Development :: Version Control :: Git",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords=[
        "static-analysis",
        "code-analysis",
        "complexity",
        "javascript",
        "typescript",
        "tree-sitter",
        "git",
    ],
    zip_safe=False,
)
