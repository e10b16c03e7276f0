"""Setup configuration for SMA Swap Bot package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="sma-swap-bot",
    version="0.1.0",
    author="SMA Swap Bot Contributors",
    description="Moving-average crossover trading bot for Solana tokens via Jupiter",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sma_swap_bot", "sma_swap_bot.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.32.3",
        "pydantic>=2.7",
        "python-dotenv>=1.0.1",
        "solana>=0.34,<0.40",
        "solders>=0.21",
    ],
    extras_require={
        "dev": [
            "pytest>=8.3.3",
            "pytest-cov>=5.0.0",
            "mypy>=1.11.2",
            "black>=24.8.0",
            "ruff>=0.6.9",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Financial :: Investment",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
    ],
    entry_points={
        "console_scripts": [
            "sma-swap-bot=sma_swap_bot.cli.run_bot:main",
        ],
    },
)
