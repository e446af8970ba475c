from setuptools import setup, find_packages

with open("README.md") as f:
    readme = f.read()

with open("endorser/__init__.py") as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split('"')[1]

setup(
    name="endorser",
    version=version,
    description="Endorser - Picking Peers for Hyperledger Fabric Endorsement Policies",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("*.tests", "*.tests.*")),
    include_package_data=True,
    keywords=["endorser", "endorsement", "policy", "hyperledger", "fabric", "blockchain"],
    license="Apache License v2.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Other Environment",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Topic :: Utilities",
        "License :: OSI Approved :: Apache Software License",
    ],
    scripts=[
        "endorser/cli/endorser-select",
    ],
    install_requires=[
        "PyYAML>=5.3.1",
        "colorlog>=4.1.0",
        "prompt_toolkit>=3.0.6",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    setup_requires=["setuptools>=41.1.0"],
)
