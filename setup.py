from setuptools import setup, find_packages

setup(
    name="claudio",
    version="0.1.0",
    description="Tails the brabble voice daemon logs into conversation turns, sessions and daily stats",
    author="",
    python_requires=">=3.8",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "rich>=12.5.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "watchdog>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "claudio=claudio.main:main",
        ],
    },
)
