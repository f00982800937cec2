"""
Tesserax: a 4D twisting-puzzle state machine with JAX
"""

import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="tesserax",
    version="0.1.0",
    description="State machine, move scheduler and undo history for the 3to4 3x3x3x3 puzzle, based on Jax!",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=["tesserax", "tesserax.*"]),
    include_package_data=True,
    install_requires=[
        "jax>=0.4.0",
        "chex>=0.1.0",
        "tabulate>=0.9.0",
        "termcolor>=1.1.0",
        "tqdm>=4.67.1",
        "numpy>=1.24.0",
        "click>=8.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.9",
)
