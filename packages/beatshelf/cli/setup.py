from setuptools import find_namespace_packages, setup

# Physical structure matches import path: packages/beatshelf/cli -> beatshelf.cli
packages = find_namespace_packages(where="../..", include=["beatshelf.cli", "beatshelf.cli.*"])

setup(
    name="beatshelf-cli",
    packages=packages,
    package_dir={"": "../.."},
)
