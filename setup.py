# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="filecombiner",
    version="0.1.0",
    description="Combine source files in dependency order using embedded /*requires */ directives",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["filecombiner", "filecombiner.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'filecombiner=filecombiner.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
