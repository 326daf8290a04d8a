from setuptools import setup, find_packages

setup(
    name="hexgame",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "gymnasium",  # HexEnv for reinforcement learning agents
    ],
    extras_require={
        "test": ["pytest"],
    },
)
