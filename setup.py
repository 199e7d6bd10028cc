from setuptools import setup, find_packages

setup(
    name="stdscore",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "stdscore": ["data/*.json"],
    },
    install_requires=[
        # CLI interface
        "click",
        # HTML roster parsing
        "beautifulsoup4",
        # Progress bars
        "tqdm",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "stdscore=stdscore.cli:main",
        ],
    },
    python_requires=">=3.8",
    description="Standardized scores across HTML score rosters",
    keywords="scores, rankings, rosters",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
    ],
)
