# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="dirscope",
    version="0.1.0",
    description="Renders directory trees and aggregate statistics from filesystem metadata",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dirscope", "dirscope.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'dirscope=dirscope.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
