import os
from setuptools import setup

def get_version():
    v = "0.0.0"
    with open('treejson/__init__.py') as ifile:
        for line in ifile:
            if line[:7]=='version':
                v = line.split('=')[-1].strip()[1:-1]
                break
    return v

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
        name = "phylo-treejson",
        version = get_version(),
        author = "Pavel Sagulenko, Emma Hodcroft, and Richard Neher",
        author_email = "richard.neher@unibas.ch",
        description = ("Flatten, index and annotate phylogenetic tree json"),
        long_description = long_description,
        long_description_content_type="text/markdown",
        license = "MIT",
        keywords = "phylogenetic trees, auspice, tree json, virus evolution",
        packages=['treejson'],
        install_requires = [
            'biopython>=1.66',
            'numpy>=1.17',
            'pandas>=0.17.1',
            'scipy>=0.16.1'
        ],
        extras_require = {
            'test': ['pytest'],
        },
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Topic :: Scientific/Engineering :: Bio-Informatics",
            "License :: OSI Approved :: MIT License",
            "Programming Language :: Python :: 3",
            ],
        entry_points = {
            'console_scripts': ['treejson = treejson.__main__:main'],
        }
    )
