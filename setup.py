#!/usr/bin/env python
# -*- coding: utf-8 -*-


from setuptools import setup


requirements = [
    'pan-python',
]

test_requirements = [
    'pan-python',
    'pytest',
]

setup_kwargs = dict(
    name='panosc',
    version='0.1.0',
    description='Panorama device manager for security orchestration controllers',
    long_description='Manages one Panorama device-group per orchestrated virtual system, and builds the bootstrap package (init-cfg.txt, bootstrap.xml, license auth code) that lets a new VM-Series firewall register itself with that device-group.',
    author='Palo Alto Networks',
    author_email='techpartners@paloaltonetworks.com',
    url='https://github.com/PaloAltoNetworks/panosc',
    packages=[
        'panosc',
    ],
    package_dir={'panosc':
                 'panosc'},
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    python_requires='>=3.6',
    license="ISC",
    zip_safe=False,
    keywords='panosc',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: ISC License (ISCL)',
        'Natural Language :: English',
        "Programming Language :: Python :: 3",
    ],
)


setup(**setup_kwargs)
