from pathlib import Path

from setuptools import find_packages, setup

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="user-accounts-service",
    version="1.0.0",
    description="User registration, authentication and profile management API.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    include_package_data=True,
    packages=find_packages(include=["core", "core.*", "middleware"]),
    py_modules=["config", "main", "dependencies", "run_server"],
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn[standard]>=0.27.0",
        "pydantic>=2.7.0",
        "pydantic-settings>=2.7.0",
        "SQLAlchemy[asyncio]>=2.0.0",
        "aiosqlite>=0.19.0",
        "passlib[bcrypt]>=1.7.4",
        "bcrypt>=4.0.1,<5.0.0",
        "python-jose[cryptography]>=3.3.0",
    ],
    extras_require={
        "dev": ["pytest", "pytest-asyncio>=0.23", "httpx"],
        "postgres": ["asyncpg>=0.29.0"],
    },
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
        "Operating System :: OS Independent",
    ],
)
