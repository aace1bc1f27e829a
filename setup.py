from setuptools import setup, find_packages

setup(
    name="rowing_foundation",
    version="1.0.0",
    packages=find_packages(include=["rowing_foundation", "rowing_foundation.*"]),
    install_requires=[
        "pandas>=2.0.0",
        "numpy>=1.24.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rowing-foundation=rowing_foundation.cli:main",
        ],
    },
    python_requires=">=3.8",
)
