"""
crudgen - Admin CRUD Scaffold Generator
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="crudgen",
    version="1.0.0",
    author="Diegoproggramer",
    author_email="",
    description="⚡ Scaffold admin CRUD modules for FastAPI + SQLAlchemy apps in seconds",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Diegoproggramer/crudgen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.108.0",
        "uvicorn>=0.20.0",
        "sqlalchemy>=2.0.0",
        "pydantic>=2.0.0",
        "python-multipart>=0.0.5",
        "jinja2>=3.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "httpx>=0.24.0",
            "black>=23.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "crudgen=crudgen.cli:cli_main",
        ],
    },
    keywords="fastapi, sqlalchemy, jinja2, generator, scaffold, crud, admin, code-generator",
    project_urls={
        "Bug Reports": "https://github.com/Diegoproggramer/crudgen/issues",
        "Source": "https://github.com/Diegoproggramer/crudgen",
    },
)
