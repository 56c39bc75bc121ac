# setup.py
from setuptools import setup, find_packages

setup(
    name="thumb_scout",
    version="0.1.0",
    description="Асинхронный поиск изображения на странице по ссылке ThumbScout",
    packages=find_packages(include=["thumb_scout", "thumb_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["thumb_scout=thumb_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
