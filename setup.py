# setup.py
from setuptools import setup, find_packages

setup(
    name="linkmap",
    version="0.1.0",
    description="Concurrent, rate-limited website link mapper",
    packages=find_packages(include=["linkmap", "linkmap.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "html5lib>=1.1",
        "click>=8.2",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "linkmap=linkmap.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
