from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pgraph",
    version="0.1.0",
    description="Enumerate entry-to-terminal paths of directed, possibly cyclic graphs.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    package_data={"pgraph.schemas": ["*.json"]},
    python_requires=">=3.10",
    install_requires=["networkx", "pyyaml", "jsonschema"],
    extras_require={"test": ["pytest"]},
    tests_require=["pytest"],
    entry_points={"console_scripts": ["pgraph=pgraph.cli:main"]},
)
