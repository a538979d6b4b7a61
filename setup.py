from setuptools import setup, find_packages

__version__ = '1.0.0'

requirements = [
    'pymongo>=4.0',
    'coloredlogs',
    'iso8601'
]

setup(
    name='nftcontracting',
    version=__version__,
    description='Ownership, approval and supply state machine for non-fungible tokens.',
    packages=find_packages(include=['nftcontracting', 'nftcontracting.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest']
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
