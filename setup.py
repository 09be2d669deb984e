#!/usr/bin/env python

"""Setup file and install script for Picard metrics collation"""

import os
import subprocess

import setuptools

VERSION = '0.3.0'

# add version number and git commit hash of the current revision to version.py
try:
    git_run = subprocess.run(['git', 'rev-parse', '--short', 'HEAD'], stdout=subprocess.PIPE,
                             stderr=subprocess.DEVNULL)
    git_run.check_returncode()
except (OSError, subprocess.SubprocessError):
    commit_hash = ''
else:
    commit_hash = git_run.stdout.strip().decode()

here = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(here, 'picardqc', 'pipeline', 'version.py'), 'w') as version_file:
    version_file.writelines([f'__version__ = "{VERSION}"\n',
                             f'__git_revision__ = "{commit_hash}"\n'])

# Picard and gtfToGenePred are external tools, installed separately via Conda
setuptools.setup(name='picardqc',
                 version=VERSION,
                 description='Run Picard quality control metrics and collate them across samples',
                 packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
                 scripts=['scripts/picardqc_run.py'],
                 python_requires='>=3.6',
                 install_requires=['logbook', 'pandas', 'pysam', 'PyYAML', 'toolz'],
                 extras_require={'test': ['pytest', 'pytest-mock', 'mock']})
