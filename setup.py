from setuptools import setup, find_packages

setup(
    name="scorepace",
    version="0.1.0",
    description="Velocity-based live final-score prediction from basketball play-by-play",
    author="Ben Rosen",
    packages=find_packages(include=["scorepace", "scorepace.*"]),
    install_requires=[
        "numpy>=1.22.4",
        "pandas>=1.5.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "scorepace=scorepace.main:main",
        ],
    },
)
