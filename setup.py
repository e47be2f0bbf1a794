# setup.py
from setuptools import find_packages, setup

setup(
    name="common-extensions",
    version="0.1.0",
    packages=find_packages(include=["commonkit", "commonkit.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "structlog>=24.1",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": ["commonkit=commonkit.cli:main"],
    },
)
