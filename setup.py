from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="codon-redundancy",
    version="0.1",
    author="",
    author_email="",
    description="Codon site degeneracy tables (Comeron 1995 L-values) for any NCBI genetic code",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["codon_redundancy", "codon_redundancy.*"]),
    entry_points={
        "console_scripts": [
            "codon-redundancy=codon_redundancy.cli:main",
        ]
    },
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
)
