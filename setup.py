import os
from setuptools import setup, find_packages

# Import version from the package without importing the whole package
with open(os.path.join('yat', '__init__.py'), 'r') as f:
    for line in f:
        if line.startswith('__version__'):
            version = line.split('=')[1].strip().strip('"').strip("'")
            break

setup(
    name="yat-tui",
    version=version,
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "pyyaml>=6.0,<7.0",
        "wcwidth>=0.2",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "yat=yat:main",
        ],
    },
    author="",
    author_email="",
    description="Terminal todo list manager with nested sub-tasks",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Environment :: Console :: Curses",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    include_package_data=True,
)
