from setuptools import setup, find_packages

version = {}
with open("goldensplit/version.py") as fp:
    exec(fp.read(), version)

setup(
    name="goldensplit",
    version=version["__version__"],
    author="Zulko",
    description="Split DNA sequences into fragments with high-fidelity "
                "Golden Gate overhangs.",
    long_description=open("README.rst").read(),
    license="MIT",
    keywords="DNA assembly overhangs ligation-fidelity synthetic-biology",
    packages=find_packages(exclude=["docs", "tests", "examples"]),
    install_requires=[
        "numpy",
        "Biopython",
        "proglog",
        "dna_features_viewer",
        "dnachisel",
        "flametree",
        "matplotlib",
    ],
    extras_require={
        "tests": ["pytest"],
    },
)
