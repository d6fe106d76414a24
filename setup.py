from setuptools import setup

setup(
    name='qahlvm',
    version='0.1.0',
    description='Embeddable tree-walking statement executor',
    package_dir={'': 'src'},
    packages=['qahlvm', 'qahlvm.executor', 'qahlvm.cli'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'click>=7.0',
        'rich>=9.0'
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'qahl = qahlvm.cli.main:cli'
        ]
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
)
