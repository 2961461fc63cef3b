"""Setup configuration for package-assignment."""
from setuptools import setup, find_packages

setup(
    name="package-assignment",
    version="0.1.0",
    description="Shipping package assignment: range validation, box selection and order decomposition",
    author="",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"package_assignment.runner": ["default_catalog.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.27.0",
        "pydantic>=2.10.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=9.0.0",
            "pytest-asyncio>=0.25.0",
            "pytest-cov>=6.0.0",
            "ruff>=0.15.0",
            "mypy>=1.19.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "package-assign=package_assignment.runner.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
