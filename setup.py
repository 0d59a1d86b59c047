# setup.py
from setuptools import setup, find_packages

setup(
    name="fbsprocessor",
    version="1.0.0",
    description="Post-processor for FlatBuffers generated Go sources: Name() accessors and a name-keyed registry",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-go>=0.23",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'fbsprocessor=fbsprocessor.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
