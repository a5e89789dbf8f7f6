#!/usr/bin/env python
import logging
from pathlib import Path
import subprocess
import sys

from setuptools import find_packages, setup

DEPENDENCIES = {
    'humanize': [],
    'lxml': [],
    'numpy': [],
    'pyyaml': [],
    'typepigeon<2': [],
    'typer': ['click'],
}

try:
    try:
        from dunamai import Version
    except ImportError:
        subprocess.run(
            f'{sys.executable} -m pip install dunamai',
            shell=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        from dunamai import Version

    version = Version.from_any_vcs().serialize()
except (ImportError, RuntimeError) as error:
    logging.exception(error)
    version = '0.0.0'

logging.info(f'using version {version}')

README = Path(__file__).parent / 'README.md'

setup(
    name='bppcell',
    version=version,
    author='University of Maryland Balloon Payload Program',
    description='convert BPPCELL cell module GPS logs into KML files for Google Earth',
    long_description=README.read_text() if README.exists() else '',
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    setup_requires=['dunamai', 'setuptools>=41.2'],
    install_requires=list(DEPENDENCIES),
    extras_require={
        'testing': ['pytest', 'pytest-cov', 'pytest-xdist'],
        'development': ['dunamai', 'flake8', 'isort', 'oitnb', 'wheel'],
    },
    entry_points={'console_scripts': ['bppcell=bppcell.__main__:main']},
)
