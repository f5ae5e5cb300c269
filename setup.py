"""Setup script for paneshift"""

from setuptools import setup, find_packages

setup(
    name="paneshift",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    author="paneshift developers",
    description="Rearrange tmux panes into layouts while keeping them running",
    entry_points={
        "console_scripts": [
            "paneshift=paneshift.main:main",
        ],
    },
)
