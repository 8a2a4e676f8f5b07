from setuptools import setup, find_packages
from pathlib import Path

readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Structural validation of JSON-like documents against declarative schemas, with optional coercion, defaults and filtering."

setup(
    name="docschema",
    version="0.3.0",
    description="Structural validation of JSON-like documents against declarative schemas",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "jmespath>=1.0.0",
        "fsspec>=2023.1.0",
        "typer>=0.9.0",
    ],
    entry_points={
        "console_scripts": [
            "docschema=docschema.cli:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest",
            "coverage",
            "hypothesis",
        ],
    },
)
