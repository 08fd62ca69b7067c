import setuptools

with open("README.md", "r") as descr:
    long_description = descr.read()

setuptools.setup(
    name="arnoldi-toolbox",
    version="1.0",
    author="Benjamin Carrel",
    author_email="benjamin.carrel@unige.ch",
    description="Arnoldi, incomplete orthogonalization (IOP) and Lanczos iterations for building Krylov subspaces.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*", "experiments", "experiments.*"]),
    install_requires=[
        "numpy",
        "scipy",
        "matplotlib",
        "tqdm"
    ],
    extras_require={
        "test": ["pytest"]
    }
)
