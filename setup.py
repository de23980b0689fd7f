from setuptools import find_packages, setup

setup(
    name="linear-state",
    version="0.1.0",
    description="Persistent type-indexed state trees and level-synchronous search",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=["numpy", "networkx", "tabulate", "tqdm"],
    extras_require={"test": ["pytest"]},
)
