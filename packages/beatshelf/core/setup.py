from setuptools import find_namespace_packages, setup

# Physical structure matches import path: packages/beatshelf/core -> beatshelf.core
packages = find_namespace_packages(where="../..", include=["beatshelf.core", "beatshelf.core.*"])

setup(
    name="beatshelf-core",
    packages=packages,
    package_dir={"": "../.."},
)
