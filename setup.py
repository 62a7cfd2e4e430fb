import os
import re

from setuptools import find_packages, setup


def get_version():
    with open(os.path.join(os.path.dirname(__file__), 'juncture', '__init__.py')) as fh:
        return re.search(r"^__version__ = '([^']+)'", fh.read(), re.MULTILINE).group(1)


VERSION = get_version()


def parse_md_readme():
    """
    pypi won't render markdown. After conversion to rst it will still not render unless raw directives are removed
    """
    try:
        from m2r import parse_from_file

        rst_lines = parse_from_file('README.md').split('\n')
        long_description = []
        i = 0
        while i < len(rst_lines):
            if re.match(r'^..\s+raw::.*', rst_lines[i]):
                i += 1
                while re.match(r'^(\s\s+|\t|$).*', rst_lines[i]):
                    i += 1
            else:
                long_description.append(re.sub('>`_ ', '>`__ ', rst_lines[i]))  # anonymous links
                i += 1
        long_description = '\n'.join(long_description)
    except (ImportError, OSError):
        long_description = ''
    return long_description


TEST_REQS = [
    'coverage>=4.2',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'biopython>=1.79',
    'braceexpand==0.1.2',
    'numpy>=1.13.1',
    'pandas>=1.1',
    'scipy>=1.5',
    'shortuuid>=0.5.0',
]

DEPLOY_REQS = ['twine', 'm2r', 'wheel']


setup(
    name='juncture',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    description='Clustering of split read junctions into structural variant calls',
    long_description=parse_md_readme(),
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS + DEPLOY_REQS,
        'deploy': DEPLOY_REQS,
    },
    tests_require=TEST_REQS,
    setup_requires=['pip>=9.0.0', 'setuptools>=36.0.0'],
    python_requires='>=3.9',
    test_suite='tests',
    entry_points={
        'console_scripts': [
            'juncture = juncture.main:main',
        ]
    },
)
