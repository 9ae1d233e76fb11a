import os

from setuptools import setup


def get_version():
    ns = {}
    with open(os.path.join("geomspec", "_version.py")) as f:
        exec(f.read(), ns)
    return ns["__version__"]


setup(
    name="geomspec",
    version=get_version(),
    description="GeoJSON geometry support for msgspec, backed by shapely",
    license="BSD",
    packages=["geomspec"],
    package_data={"geomspec": ["py.typed"]},
    python_requires=">=3.9",
    install_requires=["msgspec>=0.18", "shapely>=2.0"],
    extras_require={"test": ["pytest"]},
)
