import re
from os.path import dirname, join, realpath
from setuptools import find_packages, setup


def _read_version():
    init_path = join(dirname(realpath(__file__)), "src", "fastaio", "__init__.py")
    with open(init_path, "r") as file:
        match = re.search(r'^__version__ = "(.+)"$', file.read(), re.MULTILINE)
    if match is None:
        raise RuntimeError("Cannot find the package version")
    return match.group(1)


setup(
    name="fastaio",
    version=_read_version(),
    description="Streaming reader and writer for FASTA files",
    long_description=open(join(dirname(realpath(__file__)), "README.rst")).read(),
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={"fastaio": ["*.pyi"]},
    install_requires=["numpy>=1.25"],
    extras_require={"test": ["pytest>=7.0"]},
    classifiers=[
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
)
