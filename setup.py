import os.path

from setuptools import find_packages, setup

with open(os.path.join(os.path.dirname(__file__), 'README.md')) as f:
    LONG_DESCRIPTION = f.read()
    DESCRIPTION = LONG_DESCRIPTION.splitlines()[0].lstrip('#').strip()

setup(
    name='kubexample',
    use_scm_version={'fallback_version': '0.0.0'},

    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    keywords=['kubernetes', 'kubectl', 'plugin', 'cli', 'k8s'],
    license='MIT',
    classifiers = [
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Utilities',
    ],

    zip_safe=True,
    packages=find_packages(include=['kubexample', 'kubexample.*']),
    include_package_data=True,
    entry_points={
        'console_scripts': [
            'kubectl-example = kubexample.cli:main',
        ],
    },

    python_requires='>=3.10',
    setup_requires=[
        'setuptools_scm',
    ],
    install_requires=[
        'typing_extensions',    # 0.20 MB
        'python-json-logger',   # 0.05 MB
        'click>=8.2,<8.4.2',    # 0.60 MB
        'aiohttp',              # 7.80 MB
        'pyyaml',               # 0.90 MB
        'rich',                 # 1.70 MB
    ],
    extras_require={
        'full-auth': [
            'pykube-ng',        # 4.90 MB
            'kubernetes',       # 40.0 MB (!)
        ],
        'test': [
            'pytest',
            'pytest-asyncio',
            'pytest-mock',
        ],
    },
    package_data={"kubexample": ["py.typed"]},
)
