from setuptools import setup, find_packages
import re

# Read version from practicecomp/__init__.py
with open('practicecomp/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='practice-comp',
    version=version,
    packages=find_packages(include=['practicecomp', 'practicecomp.*']),
    package_data={
        'practicecomp': ['rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'practice-comp=practicecomp.cli.__main__:main',
        ],
    },
    author='Practice Finance',
    description='Physician compensation and multi-year practice projection engine.',
    python_requires='>=3.10',
)
