# setup.py
from setuptools import setup, find_packages

setup(
    name="newshub",
    version="0.1.0",
    description="NewsHub: headlines, search and reader-mode article extraction",
    packages=find_packages(include=["newshub", "newshub.*"]),
    package_data={"newshub": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "yarl>=1.9",
        "beautifulsoup4>=4.12",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
        "MarkupSafe>=2.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "newshub=newshub.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
