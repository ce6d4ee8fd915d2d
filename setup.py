# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="schemadoc",
    version="0.3.0",
    description="Generate HTML reference pages from a tree of JSON Schema documents",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["schemadoc", "schemadoc.*"]),
    package_data={
        "schemadoc.interface": ["locales/*.json"],
    },
    install_requires=[
        "Markdown>=3.4",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "schemadoc=schemadoc.interface.cli.app:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
