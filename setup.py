#!/usr/bin/env python
from setuptools import setup, find_packages


with open('README.rst') as readme_file:
    README = readme_file.read()


setup(
    name='commitlog',
    version='0.1.0',
    description="Generate changelogs from Conventional Commits.",
    long_description=README,
    packages=find_packages('src'),
    package_dir={'': 'src'},
    python_requires='>=3.9',
    install_requires=[
        'jinja2',
        'packaging',
    ],
    extras_require={
        'test': ['pytest'],
    },
    license="Apache License 2.0",
    zip_safe=True,
    keywords='changelog conventional-commits git',
    entry_points={
        'console_scripts': [
            'commitlog = commitlog.cli:main',
        ]
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3.9',
    ],
)
