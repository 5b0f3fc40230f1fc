#!/usr/bin/env python3

import os
from setuptools import setup, find_namespace_packages


here = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(here, 'README.md')) as f:
    README = f.read()


if __name__ == "__main__":
    setup(
        name = 'imagescan-client',
        version = '0.1.0',
        description = 'Client for submitting container images to a Trivy scanning service and fetching the results.',
        long_description = README,
        long_description_content_type = 'text/markdown',
        classifiers = [
            "Programming Language :: Python",
        ],
        keywords = 'container image scan security vulnerability trivy client',
        packages = find_namespace_packages(include = ['imagescan.*']),
        include_package_data = True,
        zip_safe = False,
        python_requires = '>=3.8',
        install_requires = [
            'django-flexi-settings',
            'httpx',
            'pydantic>=2',
        ],
        extras_require = {
            'test': [
                'pytest',
                'pytest-asyncio',
            ],
        }
    )
