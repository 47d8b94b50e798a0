from setuptools import setup, find_packages

setup(
    name='kubeboot',
    version='0.1.0',
    packages=find_packages(exclude=['kubeboot.tests']),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'kubernetes',
        'python-dotenv',
        'requests',
        'PyYAML',
        'jsonschema'
    ],
    extras_require={
        'test': [
            'pytest'
        ]
    },
    entry_points={
        'console_scripts': [
            'kubeboot=kubeboot.cli:app'
        ]
    },
    description='Install kubectl, fetch cluster certificates and write a kubeconfig for a Kubernetes master',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: POSIX :: Linux',
        'Operating System :: MacOS',
    ],
    python_requires='>=3.8',
)
