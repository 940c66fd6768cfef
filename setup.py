from setuptools import setup, find_packages


"""
To publish:
1. python setup.py bdist_wheel
2. twine upload dist/*

"""


with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="balenafin-qc",
    version="0.3.0",
    license="Apache License 2.0",
    author="balena",
    description="Manufacturing QC test station for balenaFin boards",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/balena-io/balena-fin",
    packages=find_packages(exclude=["tests", "tests.*", "test_definitions", "test_definitions.*"]),
    scripts=["fin_qc.py"],
    python_requires=">=3.8",
    install_requires=[
        "json2html",
        "tornado",
        "PyYAML",
        "coloredlogs",
        "requests",
        "fabric",
        "invoke",
        "paramiko",
        "pyfatfs",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
    ],
)
