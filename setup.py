"""Set-up file for EosVolume for installations using ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()


setup(
    name="eosvolume",
    version="0.3.0",
    license="GPL",
    keywords=["equation of state volume root phase selection"],
    install_requires=required,
    extras_require={"test": ["pytest"]},
    description="Volume roots and phase selection for equations of state",
    platforms=["Linux", "Windows", "Mac OS-X"],
    package_data={
        "eosvolume": ["py.typed"],
    },
    packages=find_packages("src"),
    package_dir={"": "src"},
    zip_safe=False,
)
