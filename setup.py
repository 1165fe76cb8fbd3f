from setuptools import setup, find_packages

setup(
    name="connectfour",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["run"],
    install_requires=[
        "numpy",
        "gymnasium",  # environment adapter in connectfour.game.rules
    ],
    extras_require={
        "test": ["pytest"],
    },
)
