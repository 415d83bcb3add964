import os
import pathlib
from setuptools import setup, find_packages


__version__ = "0.3.0"

here = pathlib.Path(__file__).parent.resolve()
long_description = (here / "README.md").read_text(encoding="utf-8")


def load_requirements(path_dir=here, comment_char="#"):
    with open(os.path.join(path_dir, "requirements.txt"), "r") as file:
        lines = [line.strip() for line in file.readlines()]
    requirements = []
    for line in lines:
        # filer all comments
        if comment_char in line:
            line = line[: line.index(comment_char)]
        if line:  # if requirement is not empty
            requirements.append(line)
    return requirements


setup(
    name="dpgfem",
    version=__version__,
    description="DPGFEM: integrators of the discontinuous Petrov-Galerkin method in Python",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["dpgfem", "dpgfem.*"]),
    install_requires=load_requirements(),
    zip_safe=False,
    extras_require={
        "test": ["pytest"],
        "dev": ["pytest", "pytest-cov"],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
