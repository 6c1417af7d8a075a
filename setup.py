"""
Setup configuration for the heightmap-stl package.

Converts text-grid and image heightmaps into watertight binary STL meshes.
"""

from setuptools import find_packages, setup

setup(
    name="heightmap-stl",
    version="1.0.0",
    packages=find_packages(include=["heightmap_stl", "heightmap_stl.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "pillow>=8.0.0",
        "opencv-python>=4.5.0",
        "typer>=0.9.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "heightmap-stl=heightmap_stl.cli.commands.convert:main",
            "heightmap-stl-tools=heightmap_stl.cli.commands.tools:main",
        ],
    },
    description="Convert heightmaps into watertight binary STL meshes",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.8",
)
