"""
Setup configuration for dexscreener-mcp package.
"""
from setuptools import setup, find_packages

setup(
    name="dexscreener-mcp",
    version="0.1.0",
    description="Rate-limited DexScreener market-data operations with a single classified error model",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="DexScreener MCP Team",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples", "scripts"]),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.8.0,<4.0",
        "pyyaml>=6.0,<7.0",
        "loguru>=0.7.0,<1.0",
        "pydantic>=2.5.0,<3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0,<9.0",
            "pytest-asyncio>=0.21.0,<1.0",
        ],
        "dev": [
            "black>=23.0.0,<24.0",
            "ruff>=0.1.0,<1.0",
            "mypy>=1.0.0,<2.0",
            "isort>=5.12.0,<6.0",
            "pytest-cov>=4.0.0,<5.0",
            "pre-commit>=3.0.0,<4.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
