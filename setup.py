"""Setup configuration for Shop Insights package."""

from setuptools import setup, find_packages

setup(
    name="shop-insights",
    version="1.0.0",
    description="List filtering and derived statistics for shop management views",
    author="Alex",
    author_email="",
    packages=find_packages(include=["src", "src.*", "config"]),
    package_data={"config": ["presets.yaml"]},
    python_requires=">=3.11",
    install_requires=[
        "pandas>=2.1.0",
        "numpy>=1.26.0",
        "requests>=2.31.0",
        "openpyxl>=3.1.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "tenacity>=8.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
        ],
    },
)
